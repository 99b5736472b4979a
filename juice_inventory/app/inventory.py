import json
from typing import List

from sqlalchemy.orm import Session

from .config import LIST_LIMIT
from .models import Juice
from .schemas import StockUnit


def list_stock(db: Session, limit: int = LIST_LIMIT) -> List[StockUnit]:
    """
    Fetch up to `limit` juice rows in the backend's natural order.

    A row that fails validation (e.g. a NULL name or expiration) raises
    pydantic.ValidationError; no partial list is returned.
    """
    rows = db.query(Juice).limit(limit).all()
    return [StockUnit.model_validate(row) for row in rows]


def render_stock(units: List[StockUnit]) -> str:
    """Serialize stock units as a 4-space indented JSON array with ISO dates."""
    payload = [unit.model_dump(mode="json") for unit in units]
    return json.dumps(payload, indent=4) + "\n"

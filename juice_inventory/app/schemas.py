from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class StockUnit(BaseModel):
    """Pydantic model for one juice row as exposed by GET /products."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str = Field(min_length=1)
    expiration: date

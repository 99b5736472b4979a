import logging
import random
from datetime import date, datetime, timedelta
from typing import Callable, Iterable

from sqlalchemy import func, insert, select
from sqlalchemy.orm import Session

from .exceptions import SeedSourceError
from .models import Juice

logger = logging.getLogger(__name__)

# One Julian year.
SEED_WINDOW_SECONDS = 31_557_600


def random_expiration(now: datetime) -> date:
    """Pick a date uniformly between now and one year from now."""
    offset = random.randrange(SEED_WINDOW_SECONDS)
    return (now + timedelta(seconds=offset)).date()


def iter_seed_names(path) -> Iterable[str]:
    """
    Yield one product name per non-blank line of the seed file.

    The file is only opened once iteration starts, so an already populated
    table never touches it.
    """
    try:
        with open(path, encoding="utf-8") as handle:
            for line in handle:
                name = line.strip()
                if name:
                    yield name
    except OSError as exc:
        raise SeedSourceError(f"Cannot read seed file {path}: {exc}") from exc


def seed_if_empty(
    db: Session,
    names: Iterable[str],
    sample_expiration: Callable[[datetime], date] = random_expiration,
) -> int:
    """
    Populate the juice table from names, but only when it holds no rows.

    Returns the number of rows inserted.
    """
    count = db.scalar(select(func.count()).select_from(Juice))
    if count:
        logger.info("Juice table already has %d rows, skipping seed", count)
        return 0

    now = datetime.now()
    rows = [{"name": name, "expiration": sample_expiration(now)} for name in names]
    if not rows:
        logger.warning("Seed source is empty, nothing to insert")
        return 0

    db.execute(insert(Juice), rows)
    db.commit()
    logger.info("Successfully inserted %d rows into the juice table", len(rows))
    return len(rows)

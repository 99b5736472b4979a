import logging
import time

from .database import Database
from .schema import ensure_schema
from .seed import iter_seed_names, random_expiration, seed_if_empty

logger = logging.getLogger(__name__)


def bootstrap(database: Database, settings, sleep=time.sleep, sample_expiration=random_expiration):
    """
    Bring the store up before the server takes traffic.

    Steps run in order and any failure propagates, which aborts startup:
    connect, liveness probe (one retry), schema, seed.
    """
    logger.info("Starting up!")
    engine = database.acquire()
    database.wait_until_ready(settings.startup_retry_delay, sleep=sleep)

    ensure_schema(engine)

    db = database.session()
    try:
        seed_if_empty(db, iter_seed_names(settings.seed_file), sample_expiration)
    finally:
        db.close()

    logger.info("Successfully set up database")

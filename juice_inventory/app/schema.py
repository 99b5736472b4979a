import logging

from sqlalchemy.schema import CreateSchema, CreateTable

from .models import INVENTORY_SCHEMA, Juice

logger = logging.getLogger(__name__)

# Backends with no CREATE SCHEMA statement.
_NO_NAMESPACE_DIALECTS = {"sqlite"}


def ensure_schema(engine):
    """Create the inventory namespace and the juice table unless they already exist."""
    with engine.begin() as conn:
        if conn.dialect.name in _NO_NAMESPACE_DIALECTS:
            logger.debug("Dialect %s has no namespaces, skipping %s", conn.dialect.name, INVENTORY_SCHEMA)
        else:
            conn.execute(CreateSchema(INVENTORY_SCHEMA, if_not_exists=True))
        conn.execute(CreateTable(Juice.__table__, if_not_exists=True))

    logger.info("Schema ready")

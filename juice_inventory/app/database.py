import logging
import threading
import time

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from .exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)

# Base class for declarative models.
Base = declarative_base()


class Database:
    """
    Owns the one engine shared by every request handler.

    The engine is built on the first call to acquire() and reused afterwards.
    Building it does not touch the network; wait_until_ready() is the
    explicit liveness check the startup sequence runs before serving.
    """

    def __init__(self, url, **engine_kwargs):
        self.url = url
        self.engine_kwargs = engine_kwargs
        self._engine = None
        self._session_factory = None
        self._lock = threading.Lock()

    def acquire(self):
        """Return the shared engine, creating it on first use."""
        if self._engine is None:
            with self._lock:
                if self._engine is None:
                    logger.info(
                        "Creating database engine for %s",
                        make_url(self.url).render_as_string(hide_password=True),
                    )
                    engine = create_engine(self.url, **self.engine_kwargs)
                    self._session_factory = sessionmaker(
                        autocommit=False, autoflush=False, bind=engine
                    )
                    self._engine = engine
        return self._engine

    def ping(self):
        """Run a trivial round trip; raises SQLAlchemyError if the store is down."""
        with self.acquire().connect() as conn:
            conn.execute(text("SELECT 1"))

    def wait_until_ready(self, retry_delay=2.0, sleep=time.sleep):
        """
        Probe the database, waiting once and probing again if it is not up yet.

        Raises StoreUnavailableError when the second probe fails too.
        """
        try:
            self.ping()
            return
        except SQLAlchemyError as exc:
            logger.warning("Waiting for DB to come online... (%s)", exc.__class__.__name__)

        sleep(retry_delay)
        try:
            self.ping()
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"Database is not reachable: {exc}") from exc

    def session(self):
        """Open a new Session bound to the shared engine."""
        self.acquire()
        return self._session_factory()

    def dispose(self):
        if self._engine is not None:
            self._engine.dispose()


def get_db(request: Request):
    """Dependency to get a DB session for a request."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        # Ensure the session is closed after use.
        db.close()

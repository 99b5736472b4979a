import logging
import os
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy.engine import URL

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_POSTGRES_PORT = 5432
DEFAULT_SEED_FILE = Path(__file__).resolve().parent / "data" / "juices.txt"

# Fixed cap on the /products listing.
LIST_LIMIT = 200


def _parse_port(raw):
    """Parse POSTGRES_PORT, falling back to the default on missing or bad input."""
    try:
        return int(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid port %r, using %d instead", raw, DEFAULT_POSTGRES_PORT)
        return DEFAULT_POSTGRES_PORT


def _parse_number(env, name, default, cast):
    """Read a numeric variable, raising ConfigError that names it on bad input."""
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid value for {name}: {raw!r}") from exc


@dataclass
class Settings:
    """Runtime configuration gathered from environment variables."""

    database_url: str
    seed_file: Path = DEFAULT_SEED_FILE
    startup_retry_delay: float = 2.0
    host: str = "0.0.0.0"
    port: int = 8090
    log_level: str = "info"

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        env = os.environ if environ is None else environ

        # A full DATABASE_URL wins over the individual POSTGRES_* variables.
        database_url = env.get("DATABASE_URL") or cls._postgres_url(env)

        return cls(
            database_url=database_url,
            seed_file=Path(env.get("SEED_FILE") or DEFAULT_SEED_FILE),
            startup_retry_delay=_parse_number(env, "DB_STARTUP_RETRY_DELAY", 2.0, float),
            host=env.get("HOST", "0.0.0.0"),
            port=_parse_number(env, "PORT", 8090, int),
            log_level=env.get("LOG_LEVEL", "info"),
        )

    @staticmethod
    def _postgres_url(env) -> str:
        required = ("POSTGRES_HOST", "POSTGRES_USER", "POSTGRES_PASSWORD", "POSTGRES_DB")
        missing = [name for name in required if not env.get(name)]
        if missing:
            raise ConfigError(
                "Missing database configuration: " + ", ".join(missing)
                + " (or set DATABASE_URL)"
            )

        url = URL.create(
            "postgresql+psycopg2",
            username=env["POSTGRES_USER"],
            password=env["POSTGRES_PASSWORD"],
            host=env["POSTGRES_HOST"],
            port=_parse_port(env.get("POSTGRES_PORT")),
            database=env["POSTGRES_DB"],
            query={"sslmode": "disable"},
        )
        return url.render_as_string(hide_password=False)

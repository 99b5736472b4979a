import pytest
from sqlalchemy.engine import make_url

from juice_inventory.app.config import DEFAULT_SEED_FILE, Settings
from juice_inventory.app.exceptions import ConfigError


def _postgres_env(**overrides):
    env = {
        "POSTGRES_HOST": "db",
        "POSTGRES_USER": "juice",
        "POSTGRES_PASSWORD": "s3cret",
        "POSTGRES_DB": "inventory",
    }
    env.update(overrides)
    return env


def test_builds_postgres_url_from_parts():
    settings = Settings.from_env(_postgres_env(POSTGRES_PORT="6543"))
    url = make_url(settings.database_url)

    assert url.drivername == "postgresql+psycopg2"
    assert url.host == "db"
    assert url.port == 6543
    assert url.username == "juice"
    assert url.password == "s3cret"
    assert url.database == "inventory"


@pytest.mark.parametrize("raw_port", [None, "", "not-a-port"])
def test_invalid_or_missing_port_falls_back_to_default(raw_port):
    env = _postgres_env()
    if raw_port is not None:
        env["POSTGRES_PORT"] = raw_port

    settings = Settings.from_env(env)

    assert make_url(settings.database_url).port == 5432


def test_missing_required_variable_raises_config_error():
    env = _postgres_env()
    del env["POSTGRES_HOST"]

    with pytest.raises(ConfigError) as excinfo:
        Settings.from_env(env)

    assert "POSTGRES_HOST" in str(excinfo.value)


def test_database_url_overrides_postgres_parts():
    settings = Settings.from_env({"DATABASE_URL": "sqlite+pysqlite://"})
    assert settings.database_url == "sqlite+pysqlite://"


def test_defaults():
    settings = Settings.from_env(_postgres_env())

    assert settings.seed_file == DEFAULT_SEED_FILE
    assert settings.startup_retry_delay == 2.0
    assert settings.port == 8090
    assert DEFAULT_SEED_FILE.exists()


@pytest.mark.parametrize(
    "name, raw",
    [("PORT", "abc"), ("PORT", "80.5"), ("DB_STARTUP_RETRY_DELAY", "x")],
)
def test_invalid_numeric_setting_raises_config_error(name, raw):
    env = {"DATABASE_URL": "sqlite+pysqlite://", name: raw}

    with pytest.raises(ConfigError) as excinfo:
        Settings.from_env(env)

    assert name in str(excinfo.value)


def test_numeric_settings_are_parsed():
    settings = Settings.from_env(
        {"DATABASE_URL": "sqlite+pysqlite://", "PORT": "9000", "DB_STARTUP_RETRY_DELAY": "0.5"}
    )

    assert settings.port == 9000
    assert settings.startup_retry_delay == 0.5

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from juice_inventory.app.config import Settings
from juice_inventory.app.database import Database
from juice_inventory.app.main import create_app
from juice_inventory.app.schema import ensure_schema

SQLITE_URL = "sqlite+pysqlite://"


@pytest.fixture()
def database():
    # One shared in-memory connection so every session sees the same tables.
    db = Database(
        SQLITE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    try:
        yield db
    finally:
        db.dispose()


@pytest.fixture()
def db_session(database):
    ensure_schema(database.acquire())
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def seed_file(tmp_path: Path) -> Path:
    path = tmp_path / "juices.txt"
    path.write_text("Apple Juice\nMango Juice\n", encoding="utf-8")
    return path


@pytest.fixture()
def settings(seed_file: Path) -> Settings:
    return Settings(database_url=SQLITE_URL, seed_file=seed_file, startup_retry_delay=0)


@pytest.fixture()
def client(settings, database):
    app = create_app(settings=settings, database=database)
    with TestClient(app) as test_client:
        yield test_client

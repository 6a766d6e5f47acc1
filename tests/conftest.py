import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from editor_plus import database
from editor_plus.store import RecordStore

ADMIN_TOKEN = "test-token"


@pytest.fixture
def db(tmp_path):
    """Session on a temporary SQLite option store."""
    database.init_db(f"sqlite:///{tmp_path / 'test.db'}")
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db):
    return RecordStore(db)


@pytest.fixture
def client(tmp_path, monkeypatch):
    """Authenticated TestClient on a temporary database."""
    from fastapi.testclient import TestClient

    monkeypatch.setenv("ADMIN_TOKEN", ADMIN_TOKEN)
    monkeypatch.delenv("NONCE_SECRET", raising=False)
    database.init_db(f"sqlite:///{tmp_path / 'api.db'}")

    from editor_plus.api.main import app
    with TestClient(app) as c:
        c.headers.update({"X-Admin-Token": ADMIN_TOKEN})
        yield c

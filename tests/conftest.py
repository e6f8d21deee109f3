import os
import tempfile

# Point the app at a throwaway SQLite file before anything imports chips.db.
_fd, _DB_PATH = tempfile.mkstemp(suffix=".db")
os.close(_fd)
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_PATH}"
os.environ["SESSION_SECRET"] = "test-secret"

import pytest
from fastapi.testclient import TestClient

from chips.app import app
from chips.db import Base, SessionLocal, engine
from chips.store import AccountStore


@pytest.fixture(scope="session", autouse=True)
def _database_file():
    yield
    engine.dispose()
    os.unlink(_DB_PATH)


@pytest.fixture(autouse=True)
def _fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    sess = SessionLocal()
    yield sess
    sess.close()


@pytest.fixture
def store(db):
    return AccountStore(db)


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def alice(client):
    """A client that has signed up (and is logged in) as alice."""
    resp = client.post("/signup", data={"name": "alice", "password": "hunter2"})
    assert resp.status_code == 200
    return client

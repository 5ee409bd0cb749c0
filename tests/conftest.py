import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from cloudpad.core.config import Settings
from cloudpad.db.repositories.sessions import SessionRepository
from cloudpad.db.repositories.users import UserRepository
from cloudpad.db.session import build_engine, init_db
from cloudpad.main import create_app
from cloudpad.security.password import hash_password
from cloudpad.security.sessions import SessionManager


@pytest.fixture
def settings():
    return Settings(
        ENV="test",
        DATABASE_URL="sqlite://",
        SESSION_SECRET="test-secret",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(settings):
    engine = build_engine(settings.DATABASE_URL)
    init_db(engine)
    with Session(engine) as session:
        yield session
    engine.dispose()


@pytest.fixture
def sessions(db, settings):
    return SessionManager(repo=SessionRepository(db), settings=settings.session_settings)


@pytest.fixture
def make_user(db):
    def _make(username="alice", password="pw1", admin=False):
        return UserRepository(db).create(
            username=username,
            hashed_password=hash_password(password),
            admin=admin,
        )
    return _make


def register(client, username="alice", password="pw1"):
    r = client.post("/register", json={"username": username, "password": password})
    assert r.status_code == 200, r.text
    return r

import pytest

from cloudpad.core.errors import DuplicateUser, InvalidUser, WrongPassword
from cloudpad.db.repositories.sessions import SessionRepository
from cloudpad.db.repositories.users import UserRepository
from cloudpad.features.authentication.services import AuthService

from conftest import register


# ---------- Service ----------

@pytest.fixture
def auth(db, sessions):
    return AuthService(user_repo=UserRepository(db), sessions=sessions)


def test_register_twice_is_duplicate(auth, db):
    auth.register("alice", "pw1")
    with pytest.raises(DuplicateUser):
        auth.register("alice", "other")
    assert UserRepository(db).count() == 1


def test_password_is_hashed(auth, db):
    auth.register("alice", "pw1")
    user = UserRepository(db).get_by_username("alice")
    assert user.hashed_password != "pw1"
    assert user.hashed_password.startswith("$argon2")


def test_login_session_carries_admin_flag(auth, make_user):
    make_user("root", "pw", admin=True)
    session, token = auth.login("root", "pw")
    assert session.is_admin is True
    assert auth.current(token).username == "root"


def test_login_unknown_user(auth):
    with pytest.raises(InvalidUser):
        auth.login("ghost", "pw")


def test_wrong_password_creates_no_session(auth, db, make_user):
    make_user("alice", "pw1")
    before = SessionRepository(db).count()
    with pytest.raises(WrongPassword):
        auth.login("alice", "bad")
    assert SessionRepository(db).count() == before


def test_wrong_password_keeps_existing_session(auth, make_user):
    make_user("alice", "pw1")
    _, token = auth.login("alice", "pw1")
    with pytest.raises(WrongPassword):
        auth.login("alice", "bad", current_token=token)
    assert auth.current(token).username == "alice"


def test_login_regenerates_presented_session(auth, make_user):
    make_user("alice", "pw1")
    _, first = auth.login("alice", "pw1")
    _, second = auth.login("alice", "pw1", current_token=first)
    assert auth.sessions.validate(first) is None
    assert auth.sessions.validate(second) is not None


# ---------- HTTP ----------

def test_register_sets_session_cookie(client):
    r = register(client)
    assert r.json() == {"success": True}
    cookie = r.headers["set-cookie"]
    assert "cloudpad.sid=" in cookie
    assert "HttpOnly" in cookie
    assert "samesite=lax" in cookie.lower()
    assert "Max-Age=86400" in cookie
    assert client.get("/me").json() == {"username": "alice"}


def test_register_duplicate_is_409(client):
    register(client)
    r = client.post("/register", json={"username": "alice", "password": "x"})
    assert r.status_code == 409
    assert r.json() == {"detail": "User already exists"}


def test_login_errors(client):
    register(client)
    client.cookies.clear()

    r = client.post("/login", json={"username": "ghost", "password": "pw1"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid user"

    r = client.post("/login", json={"username": "alice", "password": "nope"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Wrong password"
    assert "set-cookie" not in r.headers


def test_login_returns_admin_flag(client):
    register(client)
    client.cookies.clear()
    r = client.post("/login", json={"username": "alice", "password": "pw1"})
    assert r.status_code == 200
    assert r.json() == {"success": True, "isAdmin": False}


def test_me_requires_session(client):
    r = client.get("/me")
    assert r.status_code == 401
    assert r.json() == {"detail": "Not logged in"}


def test_logout_redirects_and_kills_old_cookie(client):
    register(client)
    old = client.cookies.get("cloudpad.sid")
    assert client.get("/notes").status_code == 200

    r = client.get("/logout", follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/login.html"

    r = client.get("/notes", headers={"Cookie": f"cloudpad.sid={old}"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Not logged in"


def test_logout_without_session_still_redirects(client):
    r = client.get("/logout", follow_redirects=False)
    assert r.status_code == 303


def test_root(client):
    assert client.get("/").json() == {"message": "CloudPad backend is LIVE"}


def test_concurrent_register_is_duplicate_not_storage_error(auth, db, monkeypatch):
    auth.register("alice", "pw1")
    # l'autre requête a passé le contrôle avant notre insertion
    monkeypatch.setattr(auth.user_repo, "get_by_username", lambda username: None)

    with pytest.raises(DuplicateUser):
        auth.register("alice", "pw2")

    monkeypatch.undo()
    assert UserRepository(db).count() == 1
    assert auth.login("alice", "pw1")[0].username == "alice"

import time
from datetime import timedelta

import pytest
from jose import jwt

from cloudpad.core.errors import NotLoggedIn
from cloudpad.db.models.base import utcnow
from cloudpad.db.repositories.sessions import SessionRepository
from cloudpad.security.sessions import SessionManager, encode_cookie


def test_create_then_validate_returns_payload(sessions, make_user):
    user = make_user(admin=True)
    token = sessions.create(user)

    data = sessions.validate(token)
    assert data is not None
    assert data.user_id == user.id
    assert data.username == "alice"
    assert data.is_admin is True


def test_tokens_are_unique(sessions, make_user):
    user = make_user()
    assert sessions.create(user) != sessions.create(user)


def test_validate_rejects_missing_and_garbage(sessions):
    assert sessions.validate(None) is None
    assert sessions.validate("") is None
    assert sessions.validate("not-a-token") is None


def test_validate_rejects_cookie_signed_with_other_secret(sessions, make_user, settings):
    user = make_user()
    token = sessions.create(user)
    sid = jwt.get_unverified_claims(token)["sid"]

    forged = jwt.encode({"sid": sid, "exp": int(time.time()) + 3600}, "other", algorithm="HS256")
    assert sessions.validate(forged) is None


def test_validate_rejects_unknown_sid(sessions, settings):
    now = utcnow()
    token = encode_cookie("nope", expires_at=now + timedelta(hours=1), issued_at=now, settings=settings.session_settings)
    assert sessions.validate(token) is None


def test_session_expires_after_ttl(db, sessions, make_user, settings):
    user = make_user()
    token = sessions.create(user)

    later = SessionManager(
        repo=SessionRepository(db),
        settings=settings.session_settings,
        now_fn=lambda: utcnow() + timedelta(hours=24, minutes=1),
    )
    assert later.validate(token) is None
    assert sessions.validate(token) is not None


def test_regenerate_invalidates_old_token_and_keeps_payload(sessions, make_user):
    user = make_user(admin=True)
    old = sessions.create(user)

    new = sessions.regenerate(old)

    assert new != old
    assert sessions.validate(old) is None
    data = sessions.validate(new)
    assert (data.user_id, data.username, data.is_admin) == (user.id, "alice", True)


def test_regenerate_with_user_rebinds(sessions, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    old = sessions.create(alice)

    new = sessions.regenerate(old, user=bob)

    assert sessions.validate(old) is None
    assert sessions.validate(new).username == "bob"


def test_regenerate_without_session_or_user_fails(sessions):
    with pytest.raises(NotLoggedIn):
        sessions.regenerate(None)


def test_destroy_is_idempotent(sessions, make_user):
    token = sessions.create(make_user())
    sessions.destroy(token)
    sessions.destroy(token)
    sessions.destroy("garbage")
    sessions.destroy(None)
    assert sessions.validate(token) is None


def test_prune_expired(db, sessions, make_user, settings):
    sessions.create(make_user())
    later = SessionManager(
        repo=SessionRepository(db),
        settings=settings.session_settings,
        now_fn=lambda: utcnow() + timedelta(days=2),
    )
    assert later.prune_expired() == 1
    assert SessionRepository(db).count() == 0

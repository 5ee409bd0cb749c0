from datetime import datetime, timedelta

import pytest

from cloudpad.core.errors import Forbidden, MissingNoteId, NotFound
from cloudpad.db.repositories.notes import NoteRepository
from cloudpad.features.notes.services import NoteService

from conftest import register


# ---------- Service ----------

class FakeClock:
    def __init__(self):
        self.now = datetime(2025, 1, 1, 12, 0, 0)

    def __call__(self):
        return self.now

    def tick(self, seconds=1):
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def notes(db, clock):
    return NoteService(NoteRepository(db), now_fn=clock)


def test_create_new_is_empty_untitled(notes, make_user):
    alice = make_user()
    note = notes.create_new(alice.id)
    assert note.id is not None
    assert (note.owner_id, note.title, note.content) == (alice.id, "Untitled", "")


def test_list_is_scoped_and_sorted(notes, make_user, clock):
    alice, bob = make_user("alice"), make_user("bob")
    first = notes.create_new(alice.id)
    clock.tick()
    second = notes.create_new(alice.id)
    clock.tick()
    notes.create_new(bob.id)
    clock.tick()
    notes.save(alice.id, first.id, "edited")

    listed = notes.list(alice.id)
    assert [n.id for n in listed] == [first.id, second.id]
    assert all(n.owner_id == alice.id for n in listed)
    assert len(notes.list(bob.id)) == 1


def test_save_updates_content_and_timestamp(notes, make_user, clock):
    alice = make_user()
    note = notes.create_new(alice.id)
    created = note.updated_at
    clock.tick()

    notes.save(alice.id, note.id, "hello")

    [saved] = notes.list(alice.id)
    assert saved.content == "hello"
    assert saved.updated_at > created


def test_save_timestamp_advances_even_with_frozen_clock(notes, make_user):
    alice = make_user()
    note = notes.create_new(alice.id)
    before = note.updated_at
    saved = notes.save(alice.id, note.id, "x")
    assert saved.updated_at > before


def test_sequential_saves_last_wins(notes, make_user):
    alice = make_user()
    note = notes.create_new(alice.id)
    notes.save(alice.id, note.id, "A")
    notes.save(alice.id, note.id, "B")
    assert notes.list(alice.id)[0].content == "B"


def test_save_requires_note_id(notes, make_user):
    with pytest.raises(MissingNoteId):
        notes.save(make_user().id, None, "x")


def test_save_unknown_note(notes, make_user):
    with pytest.raises(NotFound):
        notes.save(make_user().id, 999, "x")


def test_save_on_foreign_note_is_forbidden_and_unchanged(notes, make_user):
    alice, bob = make_user("alice"), make_user("bob")
    note = notes.create_new(alice.id)
    notes.save(alice.id, note.id, "mine")

    with pytest.raises(Forbidden):
        notes.save(bob.id, note.id, "pwned")
    assert notes.list(alice.id)[0].content == "mine"


# ---------- HTTP ----------

def test_notes_require_session(client):
    assert client.get("/notes").status_code == 401
    assert client.post("/notes/new").status_code == 401
    assert client.post("/save", json={"noteId": 1, "content": "x"}).status_code == 401


def test_alice_draft_scenario(client):
    register(client, "alice", "pw1")
    note = client.post("/notes/new").json()
    assert note["title"] == "Untitled"
    assert note["content"] == ""
    assert {"id", "ownerId", "createdAt", "updatedAt"} <= note.keys()

    r = client.post("/save", json={"noteId": note["id"], "content": "draft"})
    assert r.status_code == 200
    assert r.text == "saved"

    listed = client.get("/notes").json()
    assert len(listed) == 1
    assert listed[0]["content"] == "draft"
    assert datetime.fromisoformat(listed[0]["updatedAt"]) > datetime.fromisoformat(note["updatedAt"])


def test_save_without_note_id_is_400(client):
    register(client)
    r = client.post("/save", json={"content": "x"})
    assert r.status_code == 400
    assert r.json() == {"detail": "noteId missing"}


def test_save_missing_note_is_404(client):
    register(client)
    assert client.post("/save", json={"noteId": 42, "content": "x"}).status_code == 404


def test_cross_user_save_is_403(client):
    register(client, "alice", "pw1")
    note = client.post("/notes/new").json()
    client.post("/save", json={"noteId": note["id"], "content": "secret"})

    client.cookies.clear()
    register(client, "bob", "pw2")
    r = client.post("/save", json={"noteId": note["id"], "content": "overwritten"})
    assert r.status_code == 403
    assert client.get("/notes").json() == []

    client.cookies.clear()
    client.post("/login", json={"username": "alice", "password": "pw1"})
    assert client.get("/notes").json()[0]["content"] == "secret"


@pytest.mark.parametrize("bad_id", [0, -3])
def test_save_with_non_positive_note_id_is_missing(notes, make_user, bad_id):
    with pytest.raises(MissingNoteId):
        notes.save(make_user().id, bad_id, "x")


def test_save_with_zero_note_id_is_400(client):
    register(client)
    r = client.post("/save", json={"noteId": 0, "content": "x"})
    assert r.status_code == 400
    assert r.json() == {"detail": "noteId missing"}

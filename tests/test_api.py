"""API tests against the in-memory and SQLite backends (no external services)."""

import pytest
from fastapi.testclient import TestClient

from api.main import app
from contactbook.application import ContactService, StorageError
from contactbook.infrastructure import InMemoryContactRepository


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("CONTACTS_BACKEND", "memory")
    with TestClient(app) as c:
        yield c


@pytest.fixture
def sqlite_client(monkeypatch, tmp_path):
    monkeypatch.setenv("CONTACTS_BACKEND", "sqlite")
    monkeypatch.setenv("SQLITE_PATH", str(tmp_path / "contacts.db"))
    with TestClient(app) as c:
        yield c


class BrokenRepository(InMemoryContactRepository):
    def list_all(self):
        raise StorageError("Failed listing contacts")


def _create(client, name, email):
    return client.post("/contacts", json={"name": name, "email": email})


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_create_contact_returns_201(client):
    r = _create(client, "John Doe", "john@example.com")
    assert r.status_code == 201
    body = r.json()
    assert body["id"] == "1"
    assert body["name"] == "John Doe"
    assert body["email"] == "john@example.com"
    assert body["createdAt"]


def test_create_invalid_returns_400_with_errors(client):
    r = _create(client, "John3", "nope")
    assert r.status_code == 400
    assert r.json()["detail"] == [
        "Name must only contain letters and spaces",
        "Please provide a valid email address",
    ]


def test_create_missing_fields_is_validation_error(client):
    r = client.post("/contacts", json={})
    assert r.status_code == 400
    assert r.json()["detail"] == ["Name is required", "Email is required"]


def test_create_duplicate_returns_409(client):
    assert _create(client, "John Doe", "john@example.com").status_code == 201
    r = _create(client, "Jane", "john@example.com")
    assert r.status_code == 409
    assert client.get("/contacts/count").json() == {"count": 1}


def test_list_contacts_newest_first(client):
    _create(client, "First", "first@example.com")
    _create(client, "Second", "second@example.com")
    r = client.get("/contacts")
    assert r.status_code == 200
    assert [c["name"] for c in r.json()] == ["Second", "First"]


def test_search(client):
    _create(client, "Bob Johnson", "bob@work.com")
    _create(client, "Carol", "carol@home.org")

    r = client.get("/contacts/search", params={"q": "johnson"})
    assert r.status_code == 200
    assert [c["name"] for c in r.json()] == ["Bob Johnson"]

    everything = client.get("/contacts").json()
    assert client.get("/contacts/search", params={"q": "  "}).json() == everything
    assert client.get("/contacts/search").json() == everything


def test_get_contact_by_id(client):
    created = _create(client, "Ivan", "ivan@example.com").json()
    r = client.get(f"/contacts/{created['id']}")
    assert r.status_code == 200
    assert r.json() == created
    assert client.get("/contacts/999").status_code == 404


def test_delete_contact(client):
    created = _create(client, "Frank", "frank@example.com").json()
    r = client.delete(f"/contacts/{created['id']}")
    assert r.status_code == 200
    assert r.json() == {"status": "deleted", "id": created["id"]}
    assert client.delete(f"/contacts/{created['id']}").status_code == 404
    assert client.get(f"/contacts/{created['id']}").status_code == 404


def test_storage_failure_returns_500(client):
    client.app.state.service = ContactService(BrokenRepository())
    r = client.get("/contacts")
    assert r.status_code == 500
    assert r.json() == {"detail": "Internal server error"}


def test_sqlite_backend_end_to_end(sqlite_client):
    created = _create(sqlite_client, "John Doe", "john@example.com")
    assert created.status_code == 201
    assert created.json()["id"] == "1"
    assert _create(sqlite_client, "Jane", "john@example.com").status_code == 409
    assert sqlite_client.get("/contacts/abc").status_code == 404
    assert sqlite_client.delete("/contacts/abc").status_code == 404
    assert sqlite_client.delete("/contacts/1").status_code == 200
    assert sqlite_client.get("/contacts").json() == []


def test_create_null_field_is_validation_error(client):
    r = client.post("/contacts", json={"name": None, "email": "a@b.co"})
    assert r.status_code == 400
    assert r.json()["detail"] == ["Name is required"]


def test_create_without_body_is_validation_error(client):
    r = client.post("/contacts")
    assert r.status_code == 400
    assert r.json()["detail"] == ["Name is required", "Email is required"]


def test_create_outcomes_map_to_status_codes(client):
    assert _create(client, "Ann", "ann@example.com").status_code == 201
    assert _create(client, "Ann", "ann@example.com").status_code == 409
    assert _create(client, "Ann1", "ann@example.com").status_code == 400

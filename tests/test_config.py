"""Tests for Settings and backend selection."""

import pytest

from contactbook.config import Settings
from contactbook.infrastructure import (
    InMemoryContactRepository,
    SqliteContactRepository,
    open_backend,
)


def test_defaults(monkeypatch):
    for name in ("CONTACTS_BACKEND", "SQLITE_PATH", "MONGODB_URI", "MONGODB_DB", "CORS_ORIGINS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings.from_env()
    assert settings.backend == "sqlite"
    assert settings.sqlite_path == "data/contacts.db"
    assert settings.mongodb_uri == "mongodb://127.0.0.1:27017"
    assert settings.mongodb_db == "Contacts"
    assert settings.cors_origins == ("*",)
    assert settings.log_level == "INFO"


def test_from_env(monkeypatch):
    monkeypatch.setenv("CONTACTS_BACKEND", " MongoDB ")
    monkeypatch.setenv("MONGODB_DB", "test_contacts")
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost:3000, http://example.com ,")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = Settings.from_env()
    assert settings.backend == "mongodb"
    assert settings.mongodb_db == "test_contacts"
    assert settings.cors_origins == ("http://localhost:3000", "http://example.com")
    assert settings.log_level == "DEBUG"


def test_unknown_backend_rejected(monkeypatch):
    monkeypatch.setenv("CONTACTS_BACKEND", "postgres")
    with pytest.raises(ValueError, match="postgres"):
        Settings.from_env()


def test_open_memory_backend():
    backend = open_backend(Settings(backend="memory"))
    assert backend.name == "memory"
    assert isinstance(backend.repository, InMemoryContactRepository)
    backend.close()


def test_open_sqlite_backend_and_close(tmp_path):
    backend = open_backend(Settings(backend="sqlite", sqlite_path=str(tmp_path / "c.db")))
    try:
        assert backend.name == "sqlite"
        assert isinstance(backend.repository, SqliteContactRepository)
        assert backend.repository.count() == 0
    finally:
        backend.close()

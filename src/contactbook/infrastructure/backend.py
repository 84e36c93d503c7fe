"""Open the configured storage backend. One backend per process, chosen at startup."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from contactbook.application.ports import ContactRepository
from contactbook.config import Settings
from contactbook.infrastructure.memory_repository import InMemoryContactRepository
from contactbook.infrastructure.persistence.mongo_repository import (
    COLLECTION_NAME,
    MongoContactRepository,
    connect_mongo,
    ensure_mongo_indexes,
)
from contactbook.infrastructure.persistence.sqlite_repository import (
    SqliteContactRepository,
    connect_sqlite,
)

logger = logging.getLogger(__name__)


def _noop() -> None:
    return None


@dataclass
class Backend:
    """A repository plus the callable that releases its connection."""

    name: str
    repository: ContactRepository
    close: Callable[[], None] = _noop


def open_backend(settings: Settings) -> Backend:
    if settings.backend == "sqlite":
        conn = connect_sqlite(settings.sqlite_path)
        return Backend("sqlite", SqliteContactRepository(conn), conn.close)
    if settings.backend == "mongodb":
        client = connect_mongo(settings.mongodb_uri)
        try:
            collection = client[settings.mongodb_db][COLLECTION_NAME]
            ensure_mongo_indexes(collection)
        except Exception:
            client.close()
            raise
        return Backend("mongodb", MongoContactRepository(collection), client.close)
    if settings.backend == "memory":
        logger.warning("Using in-memory contact storage; data is lost on exit")
        return Backend("memory", InMemoryContactRepository())
    raise ValueError(f"Unknown backend {settings.backend!r}")

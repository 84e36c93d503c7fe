"""Infrastructure layer: concrete implementations of application ports."""

from contactbook.infrastructure.backend import Backend, open_backend
from contactbook.infrastructure.memory_repository import InMemoryContactRepository
from contactbook.infrastructure.persistence.mongo_repository import (
    MongoContactRepository,
    connect_mongo,
    ensure_mongo_indexes,
)
from contactbook.infrastructure.persistence.sqlite_repository import (
    SqliteContactRepository,
    connect_sqlite,
    ensure_sqlite_schema,
)

__all__ = [
    "Backend",
    "InMemoryContactRepository",
    "MongoContactRepository",
    "SqliteContactRepository",
    "connect_mongo",
    "connect_sqlite",
    "ensure_mongo_indexes",
    "ensure_sqlite_schema",
    "open_backend",
]

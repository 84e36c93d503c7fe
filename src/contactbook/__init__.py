"""
Contactbook core: clean-architecture layout.

- domain: Contact entity and validation rules. No outer dependencies.
- application: use cases (ContactService), ports (ContactRepository), DTOs, errors.
- infrastructure: adapters (InMemory, SQLite, MongoDB) and backend selection.
"""

from contactbook.application import (
    ContactCreated,
    ContactRepository,
    ContactService,
    ContactSummary,
    Duplicate,
    DuplicateKeyError,
    Invalid,
    StorageError,
)
from contactbook.domain import Contact, ValidationResult, validate_contact
from contactbook.infrastructure import (
    InMemoryContactRepository,
    MongoContactRepository,
    SqliteContactRepository,
)

__all__ = [
    "Contact",
    "ContactCreated",
    "ContactRepository",
    "ContactService",
    "ContactSummary",
    "Duplicate",
    "DuplicateKeyError",
    "InMemoryContactRepository",
    "Invalid",
    "MongoContactRepository",
    "SqliteContactRepository",
    "StorageError",
    "ValidationResult",
    "validate_contact",
]

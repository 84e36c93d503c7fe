"""Application layer: use cases, ports, and DTOs. Depends only on domain."""

from contactbook.application.contact_service import ContactService
from contactbook.application.dto import (
    ContactCreated,
    ContactSummary,
    Duplicate,
    Invalid,
)
from contactbook.application.errors import (
    ContactbookError,
    DuplicateKeyError,
    StorageError,
)
from contactbook.application.ports import ContactRepository

__all__ = [
    "ContactCreated",
    "ContactRepository",
    "ContactService",
    "ContactSummary",
    "ContactbookError",
    "Duplicate",
    "DuplicateKeyError",
    "Invalid",
    "StorageError",
]

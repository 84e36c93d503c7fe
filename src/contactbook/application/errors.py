"""Errors raised by storage adapters and surfaced through the application layer."""


class ContactbookError(Exception):
    """Base class for contactbook errors."""


class StorageError(ContactbookError):
    """The storage engine failed (I/O, unexpected constraint, driver error)."""


class DuplicateKeyError(StorageError):
    """Raised by an adapter when the email uniqueness constraint rejects an insert."""

    def __init__(self, email: str) -> None:
        super().__init__(f"A contact with email '{email}' already exists.")
        self.email = email

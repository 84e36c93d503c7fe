"""Application ports (interfaces). Implemented by infrastructure adapters."""

from typing import Protocol

from contactbook.domain import Contact


class ContactRepository(Protocol):
    """Persists and queries contacts in a single contacts table/collection.

    Returned contacts always carry a string id, whatever the engine's key type.
    Absence is reported as None/False, never raised.
    """

    def list_all(self) -> list[Contact]:
        """Return all contacts, newest first."""
        ...

    def find_by_email(self, email: str) -> Contact | None:
        """Return the contact with exactly this email, or None."""
        ...

    def find_by_id(self, contact_id: str) -> Contact | None:
        """Return the contact with the given id, or None (also for malformed ids)."""
        ...

    def insert(self, name: str, email: str) -> Contact:
        """Store a new contact and return it with id and created_at assigned.

        Raises DuplicateKeyError if the email is already stored.
        """
        ...

    def delete_by_id(self, contact_id: str) -> bool:
        """Delete a contact. Returns True if one was removed, False if none matched."""
        ...

    def search(self, query: str) -> list[Contact]:
        """Return contacts whose name or email contains query (case-insensitive), newest first."""
        ...

    def count(self) -> int:
        """Return the total number of contacts."""
        ...

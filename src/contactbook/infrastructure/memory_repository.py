"""In-memory implementation of ContactRepository (no DB)."""

import itertools
import threading

from contactbook.application.errors import DuplicateKeyError
from contactbook.domain import Contact
from contactbook.domain.entities import utcnow


def _newest_first(contacts) -> list[Contact]:
    return sorted(contacts, key=lambda c: (c.created_at, int(c.id)), reverse=True)


class InMemoryContactRepository:
    """Stores contacts in a dict keyed by id. Ids are sequential integers rendered as strings."""

    def __init__(self) -> None:
        self._by_id: dict[str, Contact] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def _snapshot(self) -> list[Contact]:
        with self._lock:
            return list(self._by_id.values())

    def list_all(self) -> list[Contact]:
        return _newest_first(self._snapshot())

    def find_by_email(self, email: str) -> Contact | None:
        for contact in self._snapshot():
            if contact.email == email:
                return contact
        return None

    def find_by_id(self, contact_id: str) -> Contact | None:
        return self._by_id.get(str(contact_id))

    def insert(self, name: str, email: str) -> Contact:
        # Unique email, like the database constraints. Check and write under one lock.
        with self._lock:
            if any(c.email == email for c in self._by_id.values()):
                raise DuplicateKeyError(email)
            contact = Contact(
                id=str(next(self._ids)),
                name=name,
                email=email,
                created_at=utcnow(),
            )
            self._by_id[contact.id] = contact
        return contact

    def delete_by_id(self, contact_id: str) -> bool:
        with self._lock:
            return self._by_id.pop(str(contact_id), None) is not None

    def search(self, query: str) -> list[Contact]:
        needle = query.lower()
        return _newest_first(
            c
            for c in self._snapshot()
            if needle in c.name.lower() or needle in c.email.lower()
        )

    def count(self) -> int:
        return len(self._by_id)

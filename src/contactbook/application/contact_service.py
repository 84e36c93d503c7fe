"""Contact creation, lookup, search and deletion on top of a ContactRepository."""

import logging

from contactbook.application.dto import (
    ContactCreated,
    ContactSummary,
    Duplicate,
    Invalid,
)
from contactbook.application.errors import DuplicateKeyError
from contactbook.application.ports import ContactRepository
from contactbook.domain import Contact

logger = logging.getLogger(__name__)


class ContactService:
    """Business rules around the repository: validate before write, one contact per email."""

    def __init__(self, repository: ContactRepository) -> None:
        self._repo = repository

    def get_all(self) -> list[ContactSummary]:
        """Return all contacts, newest first."""
        return [ContactSummary.from_contact(c) for c in self._repo.list_all()]

    def get_by_id(self, contact_id: str) -> ContactSummary | None:
        contact = self._repo.find_by_id(contact_id)
        if contact is None:
            return None
        return ContactSummary.from_contact(contact)

    def get_by_email(self, email: str) -> ContactSummary | None:
        contact = self._repo.find_by_email(email)
        if contact is None:
            return None
        return ContactSummary.from_contact(contact)

    def create(
        self, name: str | None, email: str | None
    ) -> ContactCreated | Invalid | Duplicate:
        """Validate and store a new contact.

        The find_by_email check only avoids a failed write in the common case;
        a concurrent insert of the same email is caught by the storage
        constraint and reported the same way.
        """
        candidate = Contact.from_input(name, email)
        validation = candidate.validate()
        if not validation.is_valid:
            return Invalid(errors=list(validation.errors))

        if self._repo.find_by_email(candidate.email) is not None:
            logger.info("Rejected duplicate email %s", candidate.email)
            return Duplicate(email=candidate.email)

        try:
            stored = self._repo.insert(candidate.name, candidate.email)
        except DuplicateKeyError:
            logger.info("Rejected duplicate email %s (lost insert race)", candidate.email)
            return Duplicate(email=candidate.email)

        logger.info("Created contact %s", stored.id)
        return ContactCreated(contact=ContactSummary.from_contact(stored))

    def delete(self, contact_id: str) -> bool:
        """Delete by id. Returns whether a contact existed."""
        deleted = self._repo.delete_by_id(contact_id)
        if deleted:
            logger.info("Deleted contact %s", contact_id)
        return deleted

    def search(self, query: str | None) -> list[ContactSummary]:
        """Return contacts whose name or email contains query; blank query lists everything."""
        if not query or not query.strip():
            return self.get_all()
        return [
            ContactSummary.from_contact(c) for c in self._repo.search(query.strip())
        ]

    def count(self) -> int:
        return self._repo.count()

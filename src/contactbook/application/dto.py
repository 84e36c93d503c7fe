"""Canonical contact shape and result types for contact creation."""

from dataclasses import dataclass
from datetime import datetime

from contactbook.domain import Contact


@dataclass(frozen=True)
class ContactSummary:
    """One contact as returned by the service. Same shape for every backend."""

    id: str
    name: str
    email: str
    created_at: datetime

    @classmethod
    def from_contact(cls, contact: Contact) -> "ContactSummary":
        return cls(
            id=str(contact.id),
            name=contact.name,
            email=contact.email,
            created_at=contact.created_at,
        )

    def as_dict(self) -> dict[str, str]:
        """JSON-able form used at the HTTP boundary."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "createdAt": self.created_at.isoformat(),
        }


# --- create results ---


@dataclass(frozen=True)
class ContactCreated:
    """Contact was validated and stored."""

    contact: ContactSummary


@dataclass(frozen=True)
class Invalid:
    """Input failed validation. Nothing was written."""

    errors: list[str]


@dataclass(frozen=True)
class Duplicate:
    """A contact with this email already exists."""

    email: str

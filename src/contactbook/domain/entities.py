"""Domain entity: Contact."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from contactbook.domain.validation import ValidationResult, validate_contact


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Contact:
    """
    A person in the address book, identified by a unique email.
    id is None until storage assigns one; created_at is never mutated.
    """

    name: str = field(default="")
    email: str = field(default="")
    id: str | None = None
    created_at: datetime = field(default_factory=utcnow)

    @classmethod
    def from_input(cls, name: str | None, email: str | None) -> "Contact":
        """Build an unsaved candidate from raw request input."""
        return cls(name=(name or "").strip(), email=(email or "").strip())

    def validate(self) -> ValidationResult:
        return validate_contact(self.name, self.email)

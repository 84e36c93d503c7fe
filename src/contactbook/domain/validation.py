"""Validation rules for contact input. Pure functions, no storage access.

Duplicate-email detection is not a validation rule: it needs a storage lookup
and lives in the service layer.
"""

import re
from dataclasses import dataclass, field

NAME_MAX_LENGTH = 50

_NAME_PATTERN = re.compile(r"[A-Za-z ]+")
_EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


@dataclass(frozen=True)
class ValidationResult:
    """Verdict plus human-readable messages. errors is empty iff is_valid."""

    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def name_errors(name: str | None) -> list[str]:
    """Return at most one message describing what is wrong with name."""
    if not name or not name.strip():
        return ["Name is required"]
    if len(name) > NAME_MAX_LENGTH:
        return [f"Name must be {NAME_MAX_LENGTH} characters or fewer"]
    if not _NAME_PATTERN.fullmatch(name):
        return ["Name must only contain letters and spaces"]
    return []


def email_errors(email: str | None) -> list[str]:
    """Return at most one message describing what is wrong with email."""
    if not email or not email.strip():
        return ["Email is required"]
    if not _EMAIL_PATTERN.fullmatch(email):
        return ["Please provide a valid email address"]
    return []


def validate_contact(name: str | None, email: str | None) -> ValidationResult:
    return ValidationResult(errors=name_errors(name) + email_errors(email))

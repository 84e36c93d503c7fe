"""Domain layer: entities and validation rules. No dependencies on outer layers."""

from contactbook.domain.entities import Contact
from contactbook.domain.validation import (
    NAME_MAX_LENGTH,
    ValidationResult,
    validate_contact,
)

__all__ = ["NAME_MAX_LENGTH", "Contact", "ValidationResult", "validate_contact"]

"""Field-addressable validation errors.

Validation never raises for well-typed input; every problem is reported as a
``FieldError``. Errors with ``field=None`` are form-level (collection
invariants such as "at least one thumbnail template").
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Kinds of validation errors."""

    STATIC_TYPE = "static_type"
    REQUIRED_FIELD_MISSING = "required_field_missing"
    CROSS_FIELD_INVARIANT = "cross_field_invariant"
    UNKNOWN_FAMILY_FIELD = "unknown_family_field"


@dataclass(frozen=True)
class FieldError:
    """A single validation problem.

    Attributes:
        field: Dotted snake_case field path, or None for form-level errors
        kind: Error kind
        message: Human-readable reason
    """

    field: str | None
    kind: ErrorKind
    message: str

    @property
    def is_form_level(self) -> bool:
        return self.field is None

    @property
    def key(self) -> tuple[str | None, ErrorKind]:
        """Identity used to de-duplicate errors reported by several stages."""
        return (self.field, self.kind)

    def to_dict(self) -> dict[str, Any]:
        return {"field": self.field, "kind": self.kind.value, "message": self.message}


def required(field: str, message: str | None = None) -> FieldError:
    return FieldError(field, ErrorKind.REQUIRED_FIELD_MISSING, message or "This field is required")


def invariant(field: str | None, message: str) -> FieldError:
    return FieldError(field, ErrorKind.CROSS_FIELD_INVARIANT, message)


__all__ = ["ErrorKind", "FieldError", "required", "invariant"]

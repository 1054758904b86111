"""Draft validation pipeline.

Validation runs in three stages over the same draft values:

1. Static: each field's type and constraints (``validate_static``).
2. Conditional: errors on currently inactive fields are dropped.
3. Cross-field: invariants across active fields (``cross_field.validate``).

The result is a ``ValidationReport``; nothing here raises for bad input.
``build_payload`` turns a valid draft into the camelCase record sent to the
REST service, with inactive fields stripped.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from studio.config import cross_field
from studio.config.base import ConsoleModel, EntityKind
from studio.config.conditional import active_fields, controlled_fields, prune_inactive
from studio.config.errors import ErrorKind, FieldError
from studio.config.schemas import schema_for, validate_static
from studio.config.validators import snake_keys
from studio.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ValidationReport:
    """Outcome of validating one draft.

    Attributes:
        kind: Entity kind that was validated
        errors: Every problem found, in detection order
        active: Fields that were live while validating
    """

    kind: EntityKind
    errors: tuple[FieldError, ...] = ()
    active: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def field_errors(self) -> dict[str, list[FieldError]]:
        """Errors grouped by field path (form-level errors excluded)."""
        grouped: dict[str, list[FieldError]] = {}
        for error in self.errors:
            if error.field is not None:
                grouped.setdefault(error.field, []).append(error)
        return grouped

    @property
    def form_errors(self) -> list[FieldError]:
        return [error for error in self.errors if error.is_form_level]

    def errors_for(self, path: str) -> list[FieldError]:
        return self.field_errors.get(path, [])

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "valid": self.is_valid,
            "errors": [error.to_dict() for error in self.errors],
        }


def _is_stale(error: FieldError, inactive: frozenset[str]) -> bool:
    if error.field is None or error.kind is ErrorKind.UNKNOWN_FAMILY_FIELD:
        return False
    return any(
        error.field == path or error.field.startswith(f"{path}.") for path in inactive
    )


def _dedupe(errors: list[FieldError]) -> tuple[FieldError, ...]:
    seen: set[tuple[str | None, ErrorKind]] = set()
    unique: list[FieldError] = []
    for error in errors:
        if error.key in seen:
            continue
        seen.add(error.key)
        unique.append(error)
    return tuple(unique)


def validate_entity(kind: EntityKind, values: Mapping[str, Any]) -> ValidationReport:
    """Validate draft values of an entity kind.

    Args:
        kind: Entity kind
        values: Draft values (snake_case or camelCase keys)

    Returns:
        Report listing every static, required and cross-field problem
        on active fields
    """
    if not isinstance(values, Mapping):
        errors = validate_static(kind, values)
        return ValidationReport(kind=kind, errors=tuple(errors))

    values = snake_keys(values)
    active = active_fields(kind, values)
    inactive = controlled_fields(kind) - active

    errors = [error for error in validate_static(kind, values) if not _is_stale(error, inactive)]
    errors.extend(cross_field.validate(kind, values, active))

    report = ValidationReport(kind=kind, errors=_dedupe(errors), active=active)
    if report.is_valid:
        logger.debug("Draft valid", kind=kind.value)
    else:
        logger.info(
            "Draft has validation errors",
            kind=kind.value,
            error_count=len(report.errors),
            fields=sorted(report.field_errors),
        )
    return report


def _exclude_tree(paths: frozenset[str]) -> dict[str, Any]:
    """Turn dotted paths into a pydantic ``exclude`` mapping."""
    tree: dict[str, Any] = {}
    for path in paths:
        *parents, leaf = path.split(".")
        node = tree
        for part in parents:
            child = node.setdefault(part, {})
            if child is True:
                break
            node = child
        else:
            node[leaf] = True
    return tree


def build_record(kind: EntityKind, values: Mapping[str, Any]) -> ConsoleModel:
    """Build the typed record of a draft with inactive fields pruned.

    Raises:
        pydantic.ValidationError: If the active fields are not valid
    """
    pruned = prune_inactive(kind, snake_keys(values))
    return schema_for(kind).model_validate(pruned)


def build_payload(kind: EntityKind, values: Mapping[str, Any]) -> dict[str, Any]:
    """Build the camelCase REST body of a draft.

    Inactive conditional fields are left out entirely so the service never
    stores stale values for them.

    Raises:
        pydantic.ValidationError: If the active fields are not valid
    """
    values = snake_keys(values)
    inactive = controlled_fields(kind) - active_fields(kind, values)
    record = build_record(kind, values)
    exclude = _exclude_tree(inactive)
    if getattr(record, "id", None) is None:
        exclude["id"] = True
    return record.to_wire(exclude=exclude or None)


__all__ = ["ValidationReport", "validate_entity", "build_record", "build_payload"]

"""Entity schema registry and static validation.

Static validation checks each field on its own: type conformance, ranges,
enums and unconditionally required fields. It never looks at sibling
fields; conditional activity and cross-field invariants are handled by
``studio.config.conditional`` and ``studio.config.cross_field``.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError
from pydantic.alias_generators import to_snake

from studio.config.base import ConsoleModel, EntityKind
from studio.config.channel import Channel
from studio.config.errors import ErrorKind, FieldError
from studio.config.hook_template import HookTemplate
from studio.config.model_family import ALL_FAMILY_FIELDS, ModelFamily
from studio.config.prompt_model import MISSING_MODEL_ERROR
from studio.config.thumbnail_template import ThumbnailTemplate
from studio.config.validators import is_blank
from studio.config.video_template import VideoTemplate

ENTITY_SCHEMAS: dict[EntityKind, type[ConsoleModel]] = {
    EntityKind.CHANNEL: Channel,
    EntityKind.VIDEO_TEMPLATE: VideoTemplate,
    EntityKind.HOOK_TEMPLATE: HookTemplate,
    EntityKind.THUMBNAIL_TEMPLATE: ThumbnailTemplate,
}

_UNION_TAGS = frozenset(family.value for family in ModelFamily)

# Error types raised for a blank or null value of a required string
_BLANK_ERROR_TYPES = frozenset({"string_type", "string_too_short", "value_error"})


def schema_for(kind: EntityKind) -> type[ConsoleModel]:
    """Get the schema class for an entity kind."""
    return ENTITY_SCHEMAS[kind]


def schema_fields(kind: EntityKind) -> tuple[str, ...]:
    """Top-level field names of an entity kind, in declaration order."""
    return tuple(schema_for(kind).model_fields)


def nested_fields(kind: EntityKind) -> tuple[str, ...]:
    """Dotted names of fields inside nested records (``video_effects.fog``)."""
    schema = schema_for(kind)
    names: list[str] = []
    for parent in schema.nested_record_fields:
        annotation = schema.model_fields[parent].annotation
        child_fields = getattr(annotation, "model_fields", {})
        names.extend(f"{parent}.{child}" for child in child_fields)
    return tuple(names)


def validate_static(kind: EntityKind, values: Mapping[str, Any]) -> list[FieldError]:
    """Check every field's type and static constraints.

    Args:
        kind: Entity kind
        values: Draft values (snake_case or camelCase keys)

    Returns:
        List of field errors, empty when the draft is statically valid
    """
    if not isinstance(values, Mapping):
        return [FieldError(None, ErrorKind.STATIC_TYPE, f"{kind.value} must be a record")]

    schema = schema_for(kind)
    try:
        schema.model_validate(dict(values))
    except ValidationError as e:
        return [_to_field_error(schema, error) for error in e.errors(include_url=False)]
    return []


def _field_path(loc: tuple[Any, ...]) -> str | None:
    parts = [
        to_snake(str(part))
        for part in loc
        if not isinstance(part, int) and part not in _UNION_TAGS
    ]
    return ".".join(parts) or None


def _is_required_path(schema: type[ConsoleModel], path: str) -> bool:
    head, _, leaf = path.partition(".")
    if not leaf:
        field = schema.model_fields.get(head)
        return field is not None and field.is_required()
    return head in schema.prompt_model_fields and leaf == "model"


def _is_family_parameter(schema: type[ConsoleModel], path: str) -> bool:
    head, _, leaf = path.partition(".")
    return head in schema.prompt_model_fields and leaf in ALL_FAMILY_FIELDS


def _to_field_error(schema: type[ConsoleModel], error: Mapping[str, Any]) -> FieldError:
    error_type = error["type"]
    path = _field_path(tuple(error["loc"]))

    if error_type == "missing":
        return FieldError(path, ErrorKind.REQUIRED_FIELD_MISSING, "This field is required")

    if error_type == MISSING_MODEL_ERROR:
        model_path = f"{path}.model" if path else "model"
        return FieldError(model_path, ErrorKind.REQUIRED_FIELD_MISSING, "A model must be selected")

    if error_type == "extra_forbidden" and path:
        leaf = path.rsplit(".", 1)[-1]
        if leaf in ALL_FAMILY_FIELDS:
            return FieldError(
                path,
                ErrorKind.UNKNOWN_FAMILY_FIELD,
                f"'{leaf}' is not a parameter of the selected model family",
            )
        return FieldError(path, ErrorKind.STATIC_TYPE, f"Unknown field '{leaf}'")

    # A null family parameter is missing, whatever type the family expects
    if path and "input" in error and error["input"] is None and _is_family_parameter(schema, path):
        return FieldError(path, ErrorKind.REQUIRED_FIELD_MISSING, "This field is required")

    if (
        path
        and error_type in _BLANK_ERROR_TYPES
        and is_blank(error.get("input"))
        and _is_required_path(schema, path)
    ):
        return FieldError(path, ErrorKind.REQUIRED_FIELD_MISSING, "This field is required")

    return FieldError(path, ErrorKind.STATIC_TYPE, str(error["msg"]))


__all__ = [
    "ENTITY_SCHEMAS",
    "schema_for",
    "schema_fields",
    "nested_fields",
    "validate_static",
]

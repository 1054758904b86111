"""Cross-field invariants.

These checks run after static validation and conditional resolution and
only look at active fields. They are total: any mapping of values yields a
(possibly empty) error list. Values of the wrong type are skipped here
because static validation already reports them.
"""

from collections.abc import Callable, Mapping
from typing import Any

from studio.config.base import EntityKind
from studio.config.errors import ErrorKind, FieldError, invariant, required
from studio.config.model_family import family_fields, family_of, foreign_fields
from studio.config.schemas import schema_for
from studio.config.validators import get_path, is_blank

Check = Callable[[Mapping[str, Any], frozenset[str]], list[FieldError]]

MIN_EXCEEDS_MAX = "minimum must not exceed maximum"


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return value
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _effective(kind: EntityKind, values: Mapping[str, Any], field: str) -> Any:
    """Draft value of a top-level field, or the schema default when absent."""
    if field in values:
        return values[field]
    return schema_for(kind).model_fields[field].get_default(call_default_factory=True)


def _check_channel(values: Mapping[str, Any], active: frozenset[str]) -> list[FieldError]:
    errors: list[FieldError] = []

    videos_min = _as_number(_effective(EntityKind.CHANNEL, values, "videos_min"))
    videos_max = _as_number(_effective(EntityKind.CHANNEL, values, "videos_max"))
    if videos_min is not None and videos_max is not None and videos_min > videos_max:
        errors.append(invariant("videos_max", MIN_EXCEEDS_MAX))

    if "video_intro_url" in active and is_blank(values.get("video_intro_url")):
        errors.append(invariant("video_intro_url", "Please upload an intro video"))
    if "video_outro_url" in active and is_blank(values.get("video_outro_url")):
        errors.append(invariant("video_outro_url", "Please upload an outro video"))

    # Hook templates are optional; only thumbnails have a minimum
    thumbnail_ids = values.get("thumbnail_ids")
    if thumbnail_ids is None or (isinstance(thumbnail_ids, list | tuple) and not thumbnail_ids):
        errors.append(invariant(None, "Please select at least one thumbnail template"))

    return errors


def _check_thumbnail_template(
    values: Mapping[str, Any], active: frozenset[str]
) -> list[FieldError]:
    errors: list[FieldError] = []
    for field, label in (("prompt", "A prompt"), ("model", "A model")):
        if field not in active:
            continue
        if is_blank(_effective(EntityKind.THUMBNAIL_TEMPLATE, values, field)):
            errors.append(required(field, f"{label} is required for AI-generated thumbnails"))
    return errors


def _check_video_template(values: Mapping[str, Any], active: frozenset[str]) -> list[FieldError]:
    errors: list[FieldError] = []
    if "image_count_range" in values:
        low = _as_number(get_path(values, "image_count_range.min", 3))
        high = _as_number(get_path(values, "image_count_range.max", 6))
        if low is not None and high is not None and low > high:
            errors.append(invariant("image_count_range.max", MIN_EXCEEDS_MAX))
    return errors


def _check_hook_template(values: Mapping[str, Any], active: frozenset[str]) -> list[FieldError]:
    return []


_CHECKS: dict[EntityKind, Check] = {
    EntityKind.CHANNEL: _check_channel,
    EntityKind.THUMBNAIL_TEMPLATE: _check_thumbnail_template,
    EntityKind.VIDEO_TEMPLATE: _check_video_template,
    EntityKind.HOOK_TEMPLATE: _check_hook_template,
}


def check_prompt_model(field: str, config: Any) -> list[FieldError]:
    """Check that a prompt model carries exactly its family's parameters.

    Args:
        field: Name of the prompt-model field (used as error path prefix)
        config: Prompt-model values

    Returns:
        RequiredFieldMissing for each absent own-family parameter and
        UnknownFamilyField for each foreign-family parameter present
    """
    if not isinstance(config, Mapping):
        return []
    model = config.get("model")
    # A blank model has no family; static validation reports it
    if not isinstance(model, str) or is_blank(model):
        return []

    family = family_of(model)
    errors: list[FieldError] = []
    for name in sorted(family_fields(family)):
        if config.get(name) is None:
            errors.append(
                required(f"{field}.{name}", f"'{name}' is required for {family.value} models")
            )
    for name in sorted(foreign_fields(family)):
        if name in config:
            errors.append(
                FieldError(
                    f"{field}.{name}",
                    ErrorKind.UNKNOWN_FAMILY_FIELD,
                    f"'{name}' does not apply to {family.value} model '{model}'",
                )
            )
    return errors


def validate(
    kind: EntityKind,
    values: Mapping[str, Any],
    active: frozenset[str],
) -> list[FieldError]:
    """Run the cross-field invariants of an entity kind.

    Args:
        kind: Entity kind
        values: Draft values (snake_case keys)
        active: Result of ``active_fields(kind, values)``

    Returns:
        List of field errors; form-level errors have ``field=None``
    """
    errors = _CHECKS[kind](values, active)
    for field in schema_for(kind).prompt_model_fields:
        if field in values:
            errors.extend(check_prompt_model(field, values[field]))
    return errors


__all__ = ["MIN_EXCEEDS_MAX", "check_prompt_model", "validate"]

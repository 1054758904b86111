"""Conditional field resolution.

Some fields only matter while a sibling field has a given value: intro
assets while ``video_intro`` is on, the thumbnail prompt while the type is
``ai-generated``, and so on. Rules are declared as data below and evaluated
on every call; nothing is cached, so the result always reflects the current
draft values.

An inactive field is hidden, not required, ignored by validation even when
it holds a stale value, and stripped before persistence.
"""

import copy
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from studio.config.base import EntityKind
from studio.config.model_family import default_prompt_model, family_fields, family_of
from studio.config.schemas import nested_fields, schema_fields, schema_for
from studio.config.thumbnail_template import AI_GENERATED
from studio.config.validators import get_path, is_blank

Predicate = Callable[[Mapping[str, Any]], bool]


@dataclass(frozen=True)
class FieldRule:
    """A group of fields that is active only while ``when`` holds.

    Attributes:
        fields: Dotted field names controlled by the rule
        when: Predicate over the draft values
        description: Human-readable condition
    """

    fields: tuple[str, ...]
    when: Predicate
    description: str


def _is_on(path: str, default: bool = False) -> Predicate:
    return lambda values: get_path(values, path, default) is True


def _not_blank(path: str) -> Predicate:
    return lambda values: not is_blank(get_path(values, path))


def _equals(path: str, expected: Any, default: Any = None) -> Predicate:
    return lambda values: get_path(values, path, default) == expected


FIELD_RULES: dict[EntityKind, tuple[FieldRule, ...]] = {
    EntityKind.CHANNEL: (
        FieldRule(
            ("chapter_marker_bg_color", "chapter_marker_font_color", "chapter_marker_font"),
            _is_on("chapter_indicators"),
            "chapter indicators enabled",
        ),
        FieldRule(
            ("video_intro_url", "intro_dissolve_time", "intro_duration"),
            _is_on("video_intro"),
            "video intro enabled",
        ),
        FieldRule(
            ("video_outro_url", "outro_dissolve_time", "outro_duration"),
            _is_on("video_outro"),
            "video outro enabled",
        ),
        FieldRule(
            ("watermark_position", "watermark_opacity", "watermark_size"),
            _not_blank("watermark_url"),
            "watermark uploaded",
        ),
    ),
    EntityKind.THUMBNAIL_TEMPLATE: (
        FieldRule(
            ("prompt", "model", "fallback_model"),
            _equals("type", AI_GENERATED, default=AI_GENERATED),
            "type is ai-generated",
        ),
    ),
    EntityKind.VIDEO_TEMPLATE: (
        FieldRule(
            ("video_effects.ken_burns_speed", "video_effects.ken_burns_direction"),
            _is_on("video_effects.ken_burns", default=True),
            "Ken Burns effect enabled",
        ),
        FieldRule(
            ("captions_font", "captions_color", "captions_position", "words_per_caption"),
            _is_on("captions_enabled", default=True),
            "captions enabled",
        ),
        FieldRule(
            ("hero_image_model",),
            _is_on("hero_image_enabled"),
            "hero image enabled",
        ),
    ),
    EntityKind.HOOK_TEMPLATE: (),
}


def controlled_fields(kind: EntityKind) -> frozenset[str]:
    """All fields whose activity depends on a rule."""
    return frozenset(name for rule in FIELD_RULES[kind] for name in rule.fields)


def prompt_model_values(values: Mapping[str, Any], field: str) -> Mapping[str, Any] | None:
    """Effective prompt-model values of a draft field.

    An absent field means the schema default applies. Returns None when the
    field holds something other than a record.
    """
    if field not in values:
        return default_prompt_model()
    config = values[field]
    return config if isinstance(config, Mapping) else None


def active_fields(kind: EntityKind, values: Mapping[str, Any]) -> frozenset[str]:
    """Compute the fields that are currently live for a draft.

    Prompt-model parameters are reported with dotted names
    (``prompt_model.effort``); only the resolved family's parameters are
    active.

    Args:
        kind: Entity kind
        values: Draft values (snake_case keys)

    Returns:
        Set of active field names
    """
    active = set(schema_fields(kind)) | set(nested_fields(kind))

    for rule in FIELD_RULES[kind]:
        if not rule.when(values):
            active.difference_update(rule.fields)

    for field in schema_for(kind).prompt_model_fields:
        active.add(f"{field}.model")
        config = prompt_model_values(values, field)
        model = config.get("model") if config is not None else None
        if isinstance(model, str):
            active.update(f"{field}.{name}" for name in family_fields(family_of(model)))

    return frozenset(active)


def prune_inactive(kind: EntityKind, values: Mapping[str, Any]) -> dict[str, Any]:
    """Copy draft values without any inactive field.

    Args:
        kind: Entity kind
        values: Draft values (snake_case keys)

    Returns:
        Deep copy of the values with inactive fields removed
    """
    active = active_fields(kind, values)
    pruned = copy.deepcopy(dict(values))

    for path in controlled_fields(kind) - active:
        _delete_path(pruned, path)

    for field in schema_for(kind).prompt_model_fields:
        config = pruned.get(field)
        if not isinstance(config, dict):
            continue
        for key in list(config):
            if key not in ("model", "kind") and f"{field}.{key}" not in active:
                del config[key]

    return pruned


def _delete_path(values: dict[str, Any], path: str) -> None:
    *parents, leaf = path.split(".")
    current: Any = values
    for part in parents:
        current = current.get(part) if isinstance(current, dict) else None
    if isinstance(current, dict):
        current.pop(leaf, None)


__all__ = [
    "FieldRule",
    "FIELD_RULES",
    "controlled_fields",
    "prompt_model_values",
    "active_fields",
    "prune_inactive",
]

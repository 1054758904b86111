"""Model-family resolution for embedded prompt models.

A model identifier implies exactly one parameter family:

- reasoning: identifiers starting with ``REASONING_MODEL_PREFIX``; the only
  tunable is ``effort``.
- sampling: every other identifier; tunables are ``max_tokens``,
  ``temperature``, ``top_p`` and ``frequency_penalty``.

``family_of`` is the single classification predicate. Nothing else in the
package may test the prefix directly.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

REASONING_MODEL_PREFIX = "gpt-5"


class ModelFamily(str, Enum):
    """Mutually exclusive parameter families."""

    REASONING = "reasoning"
    SAMPLING = "sampling"


_FAMILY_DEFAULTS: dict[ModelFamily, dict[str, Any]] = {
    ModelFamily.REASONING: {"effort": "low"},
    ModelFamily.SAMPLING: {
        "temperature": 0.7,
        "top_p": 0.9,
        "frequency_penalty": 0.0,
        "max_tokens": 8192,
    },
}

REASONING_EFFORTS = ("minimal", "low", "medium", "high")

DEFAULT_PROMPT_MODEL_ID = "gpt-5"


def family_of(model_id: str) -> ModelFamily:
    """Classify a model identifier.

    Total and pure: every string, including the empty string, maps to exactly
    one family and repeated calls agree.

    Args:
        model_id: Model identifier (e.g. "gpt-5-mini", "gpt-4o")

    Returns:
        The model's parameter family
    """
    if model_id.startswith(REASONING_MODEL_PREFIX):
        return ModelFamily.REASONING
    return ModelFamily.SAMPLING


def defaults_for(family: ModelFamily) -> dict[str, Any]:
    """Return a fresh copy of a family's default parameter values."""
    return dict(_FAMILY_DEFAULTS[family])


def family_fields(family: ModelFamily) -> frozenset[str]:
    """Parameter names that belong to a family (``model`` excluded)."""
    return frozenset(_FAMILY_DEFAULTS[family])


def foreign_fields(family: ModelFamily) -> frozenset[str]:
    """Parameter names that belong to the other family."""
    other = ModelFamily.SAMPLING if family is ModelFamily.REASONING else ModelFamily.REASONING
    return family_fields(other)


ALL_FAMILY_FIELDS = family_fields(ModelFamily.REASONING) | family_fields(ModelFamily.SAMPLING)


def default_prompt_model(model_id: str = DEFAULT_PROMPT_MODEL_ID) -> dict[str, Any]:
    """Build a complete prompt-model record for a model identifier.

    Args:
        model_id: Model identifier

    Returns:
        ``{"model": model_id, **defaults_for(family_of(model_id))}``
    """
    return {"model": model_id, **defaults_for(family_of(model_id))}


def migrate(old_config: Mapping[str, Any] | None, new_model_id: str) -> dict[str, Any]:
    """Switch a prompt-model record to a new model identifier.

    If the family is unchanged only ``model`` is updated and tuned values are
    kept. If the family changes, every field of the old family is removed
    and the new family's defaults are installed in the same step.

    Round trips across families are lossy: going sampling -> reasoning ->
    sampling yields the sampling defaults, not the earlier custom values.

    Args:
        old_config: Current prompt-model values (may be None or incomplete)
        new_model_id: Newly selected model identifier

    Returns:
        New prompt-model values; the input is not modified
    """
    old = dict(old_config or {})
    old_model = old.get("model")
    new_family = family_of(new_model_id)

    if isinstance(old_model, str) and family_of(old_model) is new_family:
        # Same family: keep tuned values, drop only stray foreign fields
        kept = {key: value for key, value in old.items() if key not in foreign_fields(new_family)}
        kept["model"] = new_model_id
        return kept

    migrated = {
        key: value
        for key, value in old.items()
        if key not in ALL_FAMILY_FIELDS and key != "kind"
    }
    migrated["model"] = new_model_id
    migrated.update(defaults_for(new_family))
    return migrated


@dataclass(frozen=True)
class ModelOption:
    """A selectable model for prompt-model pickers."""

    model: str
    family: ModelFamily

    @property
    def label(self) -> str:
        return f"{self.model} ({self.family.value})"


def catalog_options(model_ids: Iterable[str]) -> list[ModelOption]:
    """Turn the settings model catalog into selectable options.

    Blank identifiers and repeats are skipped; catalog order is kept.
    """
    options: list[ModelOption] = []
    seen: set[str] = set()
    for model_id in model_ids:
        if not model_id.strip() or model_id in seen:
            continue
        seen.add(model_id)
        options.append(ModelOption(model=model_id, family=family_of(model_id)))
    return options


__all__ = [
    "REASONING_MODEL_PREFIX",
    "REASONING_EFFORTS",
    "DEFAULT_PROMPT_MODEL_ID",
    "ALL_FAMILY_FIELDS",
    "ModelFamily",
    "ModelOption",
    "family_of",
    "defaults_for",
    "family_fields",
    "foreign_fields",
    "default_prompt_model",
    "migrate",
    "catalog_options",
]

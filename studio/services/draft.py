"""In-memory entity drafts.

A draft holds the values of one entity while it is being edited. It is the
only place values change: field edits, model switches, uploads and relation
edits all go through it, and nothing is persisted until the draft is
submitted (see ``studio.services.submission``).
"""

import copy
import math
from collections.abc import Mapping
from typing import Any

from studio.config.base import EntityKind
from studio.config.conditional import active_fields, prompt_model_values
from studio.config.model_family import migrate
from studio.config.relations import ChannelRelations, RelationSet
from studio.config.schemas import schema_for
from studio.config.validators import get_path, snake_keys
from studio.core.logging import get_logger
from studio.infrastructure.console_api import AssetSlot, UploadResult
from studio.services.readiness import ReadinessReport, check_readiness
from studio.services.validation import ValidationReport, build_payload, validate_entity

logger = get_logger(__name__)

_RELATION_FIELDS = ("hook_ids", "thumbnail_ids")


class EntityDraft:
    """Editable values of one channel or template.

    Values use snake_case keys; nested records and prompt models are plain
    dicts addressed with dotted paths (``video_effects.ken_burns``).

    Example:
        >>> draft = EntityDraft(EntityKind.HOOK_TEMPLATE, {"name": "Cold open"})
        >>> draft.set("prompt", "Open with {{TITLE}}")
        >>> draft.set_model("prompt_model", "gpt-4o")
        >>> draft.get("prompt_model.temperature")
        0.7
    """

    def __init__(self, kind: EntityKind, values: Mapping[str, Any] | None = None) -> None:
        """Initialize the draft.

        Args:
            kind: Entity kind
            values: Initial values (snake_case or camelCase keys)
        """
        self.kind = kind
        self._values: dict[str, Any] = snake_keys(dict(values or {}))
        self._relations: ChannelRelations | None = None

    @classmethod
    def from_record(cls, kind: EntityKind, record: Mapping[str, Any]) -> "EntityDraft":
        """Start editing a record fetched from the REST service."""
        return cls(kind, record)

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    @property
    def values(self) -> dict[str, Any]:
        """Snapshot of the current values, relation edits included."""
        self._sync_relations()
        return copy.deepcopy(self._values)

    @property
    def record_id(self) -> int | None:
        record_id = self._values.get("id")
        return record_id if isinstance(record_id, int) else None

    @property
    def is_new(self) -> bool:
        return self.record_id is None

    def get(self, path: str, default: Any = None) -> Any:
        self._sync_relations()
        return get_path(self._values, path, default)

    def set(self, path: str, value: Any) -> None:
        """Set a field, creating nested records along a dotted path.

        Args:
            path: Field name or dotted path
            value: New value (stored as given; validation reports problems)
        """
        if path in _RELATION_FIELDS:
            self._release_relations()

        *parents, leaf = path.split(".")
        node = self._values
        for part in parents:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[leaf] = value

    def unset(self, path: str) -> None:
        """Remove a field so the schema default applies again."""
        if path in _RELATION_FIELDS:
            self._release_relations()

        *parents, leaf = path.split(".")
        node: Any = self._values
        for part in parents:
            node = node.get(part) if isinstance(node, dict) else None
        if isinstance(node, dict):
            node.pop(leaf, None)

    def set_model(self, field: str, model_id: str) -> dict[str, Any]:
        """Select a new model for an embedded prompt model.

        The family migration happens in the same step as the model change, so
        the draft never holds a model next to the other family's parameters.

        Args:
            field: Prompt-model field (e.g. ``outline_prompt_model``)
            model_id: Newly selected model identifier

        Returns:
            The new prompt-model values

        Raises:
            ValueError: If the field is not a prompt-model field of this kind
        """
        if field not in schema_for(self.kind).prompt_model_fields:
            raise ValueError(f"{self.kind.value} has no prompt model field '{field}'")

        migrated = migrate(prompt_model_values(self._values, field), model_id)
        self._values[field] = migrated
        logger.debug("Prompt model selected", kind=self.kind.value, field=field, model=model_id)
        return copy.deepcopy(migrated)

    def record_upload(self, slot: AssetSlot, result: UploadResult) -> None:
        """Store an uploaded asset on a channel draft.

        Video durations are rounded up to whole seconds.

        Raises:
            ValueError: If the draft is not a channel
        """
        if self.kind is not EntityKind.CHANNEL:
            raise ValueError(f"Uploads belong to channels, not {self.kind.value}")

        self._values[slot.url_field] = result.url
        if slot.duration_field is not None and result.duration is not None:
            self._values[slot.duration_field] = math.ceil(result.duration)

    # ------------------------------------------------------------------
    # Relations
    # ------------------------------------------------------------------

    def _channel_relations(self) -> ChannelRelations:
        if self.kind is not EntityKind.CHANNEL:
            raise ValueError(f"{self.kind.value} has no template relations")
        if self._relations is None:
            self._relations = ChannelRelations.from_values(self._values)
            loaded = self._relations.to_values()
            dropped = {}
            for field in _RELATION_FIELDS:
                invalid = _missing_ids(self._values.get(field), loaded[field])
                if invalid:
                    dropped[field] = invalid
            if dropped:
                logger.warning("Dropped invalid relation ids", kind=self.kind.value, **dropped)
        return self._relations

    def _sync_relations(self) -> None:
        if self._relations is not None:
            self._values.update(self._relations.to_values())

    def _release_relations(self) -> None:
        """Write pending relation edits back and reload them lazily."""
        self._sync_relations()
        self._relations = None

    @property
    def hooks(self) -> RelationSet:
        """Linked hook templates (channels only).

        Loading the selection skips ids that are not positive ints, and the
        cleaned list replaces ``hook_ids`` in the draft.
        """
        return self._channel_relations().hooks

    @property
    def thumbnails(self) -> RelationSet:
        """Linked thumbnail templates (channels only); see ``hooks``."""
        return self._channel_relations().thumbnails

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def active_fields(self) -> frozenset[str]:
        return active_fields(self.kind, self.values)

    def is_active(self, path: str) -> bool:
        return path in self.active_fields()

    def validate(self) -> ValidationReport:
        return validate_entity(self.kind, self.values)

    def readiness(self) -> ReadinessReport:
        """Check whether a video template is ready for generation.

        Raises:
            ValueError: If the draft is not a video template
        """
        if self.kind is not EntityKind.VIDEO_TEMPLATE:
            raise ValueError(f"Readiness applies to video templates, not {self.kind.value}")
        return check_readiness(self.values)

    def payload(self) -> dict[str, Any]:
        """camelCase REST body (see ``build_payload``)."""
        return build_payload(self.kind, self.values)

    def __repr__(self) -> str:
        return f"EntityDraft({self.kind.value!r}, id={self.record_id!r})"


def _missing_ids(raw: Any, kept: list[int]) -> list[Any]:
    if not isinstance(raw, list):
        return []
    return [relation_id for relation_id in raw if relation_id not in kept]


__all__ = ["EntityDraft"]

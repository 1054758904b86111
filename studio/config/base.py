"""Shared base for console entity schemas."""

from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class EntityKind(str, Enum):
    """Configuration entities managed by the console."""

    CHANNEL = "channel"
    VIDEO_TEMPLATE = "video_template"
    HOOK_TEMPLATE = "hook_template"
    THUMBNAIL_TEMPLATE = "thumbnail_template"

    @property
    def collection(self) -> str:
        """REST collection name (e.g. ``video-templates``)."""
        return f"{self.value.replace('_', '-')}s"


class ConsoleModel(BaseModel):
    """Base model for records exchanged with the REST service.

    Attributes are snake_case in Python and camelCase on the wire; both
    spellings are accepted on input. Unknown keys such as ``createdAt`` are
    ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    # Names of fields holding an embedded prompt model (see prompt_model.py)
    prompt_model_fields: ClassVar[tuple[str, ...]] = ()

    # Names of fields holding a nested record whose keys are addressed as
    # ``parent.child`` by the field resolver
    nested_record_fields: ClassVar[tuple[str, ...]] = ()

    def to_wire(self, exclude: Any = None) -> dict[str, Any]:
        """Dump the record in its camelCase wire format.

        Args:
            exclude: Pydantic exclude set or nested mapping

        Returns:
            JSON-compatible dictionary
        """
        return self.model_dump(mode="json", by_alias=True, exclude=exclude)


__all__ = ["EntityKind", "ConsoleModel"]

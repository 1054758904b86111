"""Generation readiness of video templates.

A template can pass validation and still be unusable for generating videos:
the pipeline needs an outline prompt, a script prompt and a pool of ideas to
pick from. Missing any of those is a readiness error. Settings that work but
tend to give poor results are reported as warnings, which never block
anything.

Readiness is separate from ``validate_entity``; a template that is not ready
can still be saved.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from studio.config.errors import FieldError, required
from studio.config.validators import is_blank, snake_keys
from studio.config.video_template import VideoTemplate

DEFAULT_IDEAS_DELIMITER = "---"

# Inclusive bounds that give good results
IDEAS_RANGE = (2, 20)
IMAGE_COUNT_RANGE = (3, 20)
MIN_OUTLINE_PROMPT_LENGTH = 50

_REQUIRED_FIELDS = (
    ("story_outline_prompt", "Story outline prompt is required"),
    ("full_script_prompt", "Full script prompt is required"),
    ("ideas_list", "Ideas list is required"),
)


@dataclass(frozen=True)
class ReadinessWarning:
    """Advice about a field that works but is likely to give poor videos."""

    field: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class ReadinessReport:
    """Outcome of a readiness check.

    Attributes:
        errors: Missing inputs that make generation impossible
        warnings: Settings worth a second look
    """

    errors: tuple[FieldError, ...] = ()
    warnings: tuple[ReadinessWarning, ...] = ()

    @property
    def is_ready(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "ready": self.is_ready,
            "errors": [error.to_dict() for error in self.errors],
            "warnings": [warning.to_dict() for warning in self.warnings],
        }


def ideas(values: Mapping[str, Any]) -> list[str]:
    """Split a template's ideas list into individual ideas.

    Ideas are separated by ``ideas_delimiter`` (``---`` when unset). Entries
    are stripped and blank entries dropped.

    Args:
        values: Video template values (snake_case or camelCase keys)

    Returns:
        Ideas in list order; empty when there is no ideas list
    """
    values = snake_keys(values)
    text = values.get("ideas_list")
    if not isinstance(text, str):
        return []

    delimiter = values.get("ideas_delimiter")
    if not isinstance(delimiter, str) or not delimiter:
        delimiter = DEFAULT_IDEAS_DELIMITER
    return [idea.strip() for idea in text.split(delimiter) if idea.strip()]


def _default(field: str) -> Any:
    return VideoTemplate.model_fields[field].get_default(call_default_factory=True)


def _warnings(values: Mapping[str, Any]) -> list[ReadinessWarning]:
    warnings: list[ReadinessWarning] = []

    if not is_blank(values.get("ideas_list")):
        count = len(ideas(values))
        low, high = IDEAS_RANGE
        if count < low:
            warnings.append(
                ReadinessWarning("ideas_list", f"Ideas list should contain at least {low} ideas")
            )
        elif count > high:
            warnings.append(
                ReadinessWarning(
                    "ideas_list",
                    "Ideas list is very long, consider splitting it into several templates",
                )
            )

    outline = values.get("story_outline_prompt")
    if isinstance(outline, str) and 0 < len(outline.strip()) < MIN_OUTLINE_PROMPT_LENGTH:
        warnings.append(
            ReadinessWarning(
                "story_outline_prompt",
                "Story outline prompt seems too short, consider adding more detail",
            )
        )

    image_count = values.get("image_count", _default("image_count"))
    low, high = IMAGE_COUNT_RANGE
    if isinstance(image_count, int) and not isinstance(image_count, bool):
        if not low <= image_count <= high:
            warnings.append(
                ReadinessWarning(
                    "image_count", f"Image count should be between {low} and {high}"
                )
            )

    voices = values.get("audio_voices", _default("audio_voices"))
    if isinstance(voices, list | tuple) and all(is_blank(voice) for voice in voices):
        warnings.append(ReadinessWarning("audio_voices", "No audio voices configured"))

    return warnings


def check_readiness(values: Mapping[str, Any]) -> ReadinessReport:
    """Check whether a video template has what generation needs.

    Args:
        values: Video template values (snake_case or camelCase keys)

    Returns:
        Report with blocking errors and non-blocking warnings
    """
    values = snake_keys(values)
    errors = [
        required(field, message)
        for field, message in _REQUIRED_FIELDS
        if is_blank(values.get(field))
    ]
    return ReadinessReport(errors=tuple(errors), warnings=tuple(_warnings(values)))


__all__ = [
    "DEFAULT_IDEAS_DELIMITER",
    "IDEAS_RANGE",
    "IMAGE_COUNT_RANGE",
    "MIN_OUTLINE_PROMPT_LENGTH",
    "ReadinessReport",
    "ReadinessWarning",
    "check_readiness",
    "ideas",
]

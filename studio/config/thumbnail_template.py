"""Thumbnail template configuration model."""

from typing import Literal

from pydantic import Field

from studio.config.base import ConsoleModel
from studio.config.validators import NonBlankStr, OptionalText

ThumbnailType = Literal["first-image", "last-image", "random-image", "ai-generated"]

AI_GENERATED: ThumbnailType = "ai-generated"


class ThumbnailTemplate(ConsoleModel):
    """How a video's thumbnail is produced.

    Image-picking types reuse a frame of the video. ``ai-generated`` renders a
    new image from ``prompt`` with ``model``, falling back to
    ``fallback_model`` and then to ``fallback_strategy``. Which image a
    ``random-image`` strategy picks is up to the generation service.

    Attributes:
        name: Template name
        type: Thumbnail source
        prompt: Image prompt (ai-generated only)
        model: Primary image model (ai-generated only)
        fallback_model: Secondary image model (ai-generated only)
        fallback_strategy: Frame to use when generation fails
    """

    id: int | None = None
    name: NonBlankStr = Field(..., max_length=100)
    type: ThumbnailType = AI_GENERATED
    prompt: OptionalText = None
    model: OptionalText = "gpt-4o"
    fallback_model: OptionalText = "flux-schnell"
    fallback_strategy: Literal["first-image", "last-image", "random-image"] = "first-image"

    @property
    def requires_prompt(self) -> bool:
        return self.type == AI_GENERATED


__all__ = ["ThumbnailTemplate", "ThumbnailType", "AI_GENERATED"]

"""Hook template configuration model."""

from typing import ClassVar, Literal

from pydantic import Field

from studio.config.base import ConsoleModel
from studio.config.prompt_model import ModelConfig, model_config_field
from studio.config.validators import NonBlankStr


class HookTemplate(ConsoleModel):
    """Short opening hook played before the story.

    Attributes:
        name: Template name
        prompt: Generation prompt (shortcodes kept verbatim)
        prompt_model: Prompt model used for the hook
        duration: Hook length in seconds
        edit_speed: Cut pacing
    """

    prompt_model_fields: ClassVar[tuple[str, ...]] = ("prompt_model",)

    id: int | None = None
    name: NonBlankStr = Field(..., max_length=100)
    prompt: NonBlankStr = Field(..., description="Hook generation prompt")
    prompt_model: ModelConfig = model_config_field()
    duration: int = Field(default=10, ge=5, le=30, description="Seconds")
    edit_speed: Literal["slow", "medium", "fast"] = "medium"


__all__ = ["HookTemplate"]

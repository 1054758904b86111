"""Video template configuration models.

A video template describes how a story video is produced: the generation
prompts (each paired with a prompt model), image and audio model choices,
background music, visual effects, captions and transitions.

Example (wire format):
    ```json
    {
      "name": "Ghost Stories",
      "type": "story",
      "storyOutlinePrompt": "Outline a story about {{TITLE}}",
      "outlinePromptModel": {"model": "gpt-5", "effort": "medium"},
      "videoEffects": {"kenBurns": true, "kenBurnsSpeed": 1.5}
    }
    ```
"""

from typing import ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from studio.config.base import ConsoleModel
from studio.config.prompt_model import ModelConfig, model_config_field
from studio.config.validators import HexColor, NonBlankStr, OptionalText, normalize_string_list


class _NestedRecord(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class VideoEffectsConfig(_NestedRecord):
    """Visual effects applied while rendering.

    Ken Burns speed and direction only apply while ``ken_burns`` is on.
    """

    ken_burns: bool = True
    ken_burns_speed: float = Field(default=1.0, ge=0.1, le=5.0, description="Zoom/pan speed")
    ken_burns_direction: Literal["in", "out", "left", "right"] = "in"
    film_grain: bool = False
    fog: bool = False


class ImageCountRange(_NestedRecord):
    """Images generated per chapter."""

    min: int = Field(default=3, ge=1, le=50)
    max: int = Field(default=6, ge=1, le=50)


class VideoTemplate(ConsoleModel):
    """Complete video production template.

    Attributes:
        name: Template name
        type: Template genre
        hook_prompt: Prompt for the opening hook
        story_outline_prompt: Prompt for the story outline
        image_prompt: Prompt for chapter images
        image_model: Primary image model
        image_fallback_model: Image model used when the primary fails
        audio_model: Text-to-speech model
        audio_voices: Voice identifiers used for narration
        audio_pause_gap: Silence between narration segments (ms)
        video_effects: Ken Burns, film grain and fog settings
        transition_duration: Seconds per transition
    """

    prompt_model_fields: ClassVar[tuple[str, ...]] = (
        "hook_prompt_model",
        "outline_prompt_model",
        "script_prompt_model",
        "visual_style_model",
        "chapter_content_model",
        "image_prompt_model",
    )
    nested_record_fields: ClassVar[tuple[str, ...]] = ("video_effects", "image_count_range")

    id: int | None = None
    name: NonBlankStr = Field(..., max_length=100, description="Template name")
    type: Literal["story", "news", "educational"] = "story"

    # Idea pool
    ideas_list: OptionalText = None
    ideas_delimiter: str = Field(default="---", min_length=1)

    # Generation prompts
    hook_prompt: OptionalText = None
    hook_prompt_model: ModelConfig = model_config_field()
    story_outline_prompt: OptionalText = None
    outline_prompt_model: ModelConfig = model_config_field()
    full_script_prompt: OptionalText = None
    script_prompt_model: ModelConfig = model_config_field()
    visual_style_prompt: OptionalText = None
    visual_style_model: ModelConfig = model_config_field()
    chapter_content_prompt: OptionalText = None
    chapter_content_model: ModelConfig = model_config_field()
    image_prompt: OptionalText = None
    image_prompt_model: ModelConfig = model_config_field()

    # Images
    image_model: NonBlankStr = "flux-schnell"
    image_fallback_model: NonBlankStr = "dalle-3"
    image_count: int = Field(default=8, ge=1, le=50)
    image_count_range: ImageCountRange = Field(default_factory=ImageCountRange)
    hero_image_enabled: bool = False
    hero_image_model: NonBlankStr = "flux-pro"

    # Audio
    audio_model: NonBlankStr = "eleven_labs"
    audio_voices: list[str] = Field(default_factory=list)
    audio_pause_gap: int = Field(default=500, ge=100, le=2000, description="Milliseconds")

    # Background music
    background_music_prompt: OptionalText = None
    music_style: str = "Ambient"
    music_mood: str = "Calm"
    music_volume: int = Field(default=30, ge=0, le=100)

    video_effects: VideoEffectsConfig = Field(default_factory=VideoEffectsConfig)

    # Captions
    captions_enabled: bool = True
    captions_font: NonBlankStr = "Inter"
    captions_color: HexColor = "#ffffff"
    captions_position: Literal["top", "center", "bottom"] = "bottom"
    words_per_caption: int = Field(default=6, ge=1, le=20)

    # Transitions
    video_transitions: Literal["none", "fade", "mix-fade", "slide", "zoom"] = "mix-fade"
    transition_duration: float = Field(default=2.0, ge=0.5, le=5.0, description="Seconds")

    @field_validator("video_effects", "image_count_range", mode="before")
    @classmethod
    def default_nested(cls, v: object) -> object:
        """Stored templates may carry null nested records."""
        return {} if v is None else v

    @field_validator("audio_voices", mode="before")
    @classmethod
    def normalize_voices(cls, v: object) -> object:
        """Strip voice ids and drop blanks and repeats."""
        return normalize_string_list(v)


__all__ = ["VideoTemplate", "VideoEffectsConfig", "ImageCountRange"]

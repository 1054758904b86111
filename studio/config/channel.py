"""Channel configuration model."""

from typing import Literal

from pydantic import Field, field_validator

from studio.config.base import ConsoleModel
from studio.config.validators import (
    HexColor,
    NonBlankStr,
    OptionalText,
    OptionalUrl,
    validate_unique_ids,
)

WatermarkPosition = Literal[
    "top-left",
    "top-right",
    "bottom-left",
    "bottom-right",
    "center",
    "top-center",
    "bottom-center",
]


class Channel(ConsoleModel):
    """A publishing channel and its branding, schedule and template links.

    Field groups that depend on a toggle (chapter markers, intro, outro,
    watermark placement) are only validated and persisted while the toggle
    is on; see ``studio.config.conditional``.

    Attributes:
        id: Numeric identity assigned by the REST service
        name: Channel display name
        url: Channel URL (optional)
        schedule: Publishing cadence
        videos_min: Minimum videos per scheduled run
        videos_max: Maximum videos per scheduled run
        hook_ids: Linked hook templates
        thumbnail_ids: Linked thumbnail templates
    """

    id: int | None = None
    name: NonBlankStr = Field(..., max_length=100, description="Channel name")
    url: OptionalUrl = Field(default=None, description="Channel URL")
    description: OptionalText = None

    # Branding
    logo_url: OptionalText = None
    watermark_url: OptionalText = None
    watermark_position: WatermarkPosition = "bottom-right"
    watermark_opacity: int = Field(default=80, ge=0, le=100, description="Opacity percent")
    watermark_size: int = Field(default=15, ge=5, le=50, description="Size percent of frame")

    # Schedule
    schedule: Literal["daily", "weekly", "custom"] = "daily"
    videos_min: int = Field(default=1, ge=0, le=10)
    videos_max: int = Field(default=2, ge=0, le=10)

    # Feature toggles
    chapter_indicators: bool = False
    video_intro: bool = False
    video_outro: bool = False
    is_active: bool = True

    # Chapter marker style
    chapter_marker_bg_color: HexColor = "#000000"
    chapter_marker_font_color: HexColor = "#FFFFFF"
    chapter_marker_font: NonBlankStr = "Arial"

    # Intro / outro assets
    video_intro_url: OptionalText = None
    intro_dissolve_time: float = Field(default=1, ge=0, le=10, description="Seconds")
    intro_duration: int = Field(default=5, ge=0, description="Seconds")
    video_outro_url: OptionalText = None
    outro_dissolve_time: float = Field(default=1, ge=0, le=10, description="Seconds")
    outro_duration: int = Field(default=5, ge=0, description="Seconds")

    # Title style
    title_font: NonBlankStr = "Arial"
    title_color: HexColor = "#FFFFFF"
    title_bg_color: HexColor = "#000000"

    # Prompt for generated video descriptions ({{TITLE}}, {{SCRIPT}}, ...)
    video_description_prompt: OptionalText = None

    status: Literal["active", "inactive", "processing", "error"] = "inactive"
    youtube_channel_id: OptionalText = None

    # Relations
    hook_ids: list[int] = Field(default_factory=list)
    thumbnail_ids: list[int] = Field(default_factory=list)

    @field_validator("hook_ids")
    @classmethod
    def validate_hook_ids(cls, v: list[int]) -> list[int]:
        """Validate hook template ids (positive, no duplicates)."""
        return validate_unique_ids(v, field_name="Hook template ids")

    @field_validator("thumbnail_ids")
    @classmethod
    def validate_thumbnail_ids(cls, v: list[int]) -> list[int]:
        """Validate thumbnail template ids (positive, no duplicates)."""
        return validate_unique_ids(v, field_name="Thumbnail template ids")


__all__ = ["Channel", "WatermarkPosition"]

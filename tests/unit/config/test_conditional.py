"""Unit tests for conditional field resolution."""

import pytest

from studio.config.base import EntityKind
from studio.config.conditional import (
    FIELD_RULES,
    active_fields,
    controlled_fields,
    prune_inactive,
)
from studio.config.schemas import schema_fields


class TestChannelRules:
    """Tests for channel field activity."""

    def test_toggles_off_by_default(self, channel_values):
        active = active_fields(EntityKind.CHANNEL, channel_values)

        assert "video_intro_url" not in active
        assert "outro_duration" not in active
        assert "chapter_marker_font" not in active
        assert "watermark_position" not in active
        assert "name" in active
        assert "video_intro" in active

    def test_intro_toggle(self, channel_values):
        channel_values["video_intro"] = True
        active = active_fields(EntityKind.CHANNEL, channel_values)

        assert {"video_intro_url", "intro_dissolve_time", "intro_duration"} <= active
        assert "video_outro_url" not in active

    def test_chapter_indicators(self, channel_values):
        channel_values["chapter_indicators"] = True
        active = active_fields(EntityKind.CHANNEL, channel_values)
        assert "chapter_marker_bg_color" in active

    def test_watermark_requires_upload(self, channel_values):
        channel_values["watermark_url"] = "   "
        assert "watermark_opacity" not in active_fields(EntityKind.CHANNEL, channel_values)

        channel_values["watermark_url"] = "/uploads/watermark.png"
        assert "watermark_opacity" in active_fields(EntityKind.CHANNEL, channel_values)

    def test_truthy_non_bool_is_off(self, channel_values):
        """Test only a real True switches a group on."""
        channel_values["video_outro"] = "yes"
        assert "video_outro_url" not in active_fields(EntityKind.CHANNEL, channel_values)

    def test_recomputed_each_call(self, channel_values):
        assert "video_intro_url" not in active_fields(EntityKind.CHANNEL, channel_values)
        channel_values["video_intro"] = True
        assert "video_intro_url" in active_fields(EntityKind.CHANNEL, channel_values)
        channel_values["video_intro"] = False
        assert "video_intro_url" not in active_fields(EntityKind.CHANNEL, channel_values)


class TestThumbnailRules:
    """Tests for thumbnail template field activity."""

    def test_ai_generated(self, thumbnail_template_values):
        active = active_fields(EntityKind.THUMBNAIL_TEMPLATE, thumbnail_template_values)
        assert {"prompt", "model", "fallback_model"} <= active

    def test_default_type_is_ai_generated(self):
        active = active_fields(EntityKind.THUMBNAIL_TEMPLATE, {"name": "X"})
        assert "prompt" in active

    @pytest.mark.parametrize("thumbnail_type", ["first-image", "last-image", "random-image"])
    def test_picking_types(self, thumbnail_type):
        active = active_fields(
            EntityKind.THUMBNAIL_TEMPLATE, {"name": "X", "type": thumbnail_type}
        )
        assert active.isdisjoint({"prompt", "model", "fallback_model"})
        assert "fallback_strategy" in active


class TestVideoTemplateRules:
    """Tests for video template field activity."""

    def test_defaults(self, video_template_values):
        active = active_fields(EntityKind.VIDEO_TEMPLATE, video_template_values)

        assert "video_effects.ken_burns_speed" in active
        assert "captions_font" in active
        assert "hero_image_model" not in active

    def test_ken_burns_off(self, video_template_values):
        video_template_values["video_effects"] = {"ken_burns": False}
        active = active_fields(EntityKind.VIDEO_TEMPLATE, video_template_values)

        assert "video_effects.ken_burns_speed" not in active
        assert "video_effects.ken_burns_direction" not in active
        assert "video_effects.fog" in active

    def test_captions_off(self, video_template_values):
        video_template_values["captions_enabled"] = False
        active = active_fields(EntityKind.VIDEO_TEMPLATE, video_template_values)
        assert "words_per_caption" not in active


class TestPromptModelFields:
    """Tests for prompt-model parameter activity."""

    def test_reasoning_family(self, hook_template_values):
        active = active_fields(EntityKind.HOOK_TEMPLATE, hook_template_values)

        assert "prompt_model.model" in active
        assert "prompt_model.effort" in active
        assert "prompt_model.temperature" not in active

    def test_sampling_family(self, hook_template_values):
        hook_template_values["prompt_model"] = {"model": "gpt-4o"}
        active = active_fields(EntityKind.HOOK_TEMPLATE, hook_template_values)

        assert {"prompt_model.temperature", "prompt_model.max_tokens"} <= active
        assert "prompt_model.effort" not in active

    def test_absent_prompt_model_uses_default(self):
        active = active_fields(EntityKind.HOOK_TEMPLATE, {"name": "X"})
        assert "prompt_model.effort" in active

    def test_every_video_template_prompt_model(self, video_template_values):
        active = active_fields(EntityKind.VIDEO_TEMPLATE, video_template_values)
        for field in ("hook_prompt_model", "script_prompt_model", "image_prompt_model"):
            assert f"{field}.model" in active


class TestRuleTable:
    """Tests for the rule declarations."""

    @pytest.mark.parametrize("kind", list(EntityKind))
    def test_controlled_fields_exist(self, kind):
        """Test every controlled field names a real schema field."""
        top_level = set(schema_fields(kind))
        for path in controlled_fields(kind):
            assert path.split(".")[0] in top_level

    def test_hook_templates_have_no_rules(self):
        assert FIELD_RULES[EntityKind.HOOK_TEMPLATE] == ()


class TestPruneInactive:
    """Tests for prune_inactive."""

    def test_stale_intro_values_removed(self, channel_values):
        channel_values.update(
            video_intro=False, video_intro_url="/uploads/old.mp4", intro_duration=12
        )
        pruned = prune_inactive(EntityKind.CHANNEL, channel_values)

        assert "video_intro_url" not in pruned
        assert "intro_duration" not in pruned
        assert pruned["video_intro"] is False

    def test_input_not_modified(self, channel_values):
        channel_values["video_intro_url"] = "/uploads/old.mp4"
        prune_inactive(EntityKind.CHANNEL, channel_values)
        assert channel_values["video_intro_url"] == "/uploads/old.mp4"

    def test_nested_field_removed(self, video_template_values):
        video_template_values["video_effects"] = {"ken_burns": False, "ken_burns_speed": 3}
        pruned = prune_inactive(EntityKind.VIDEO_TEMPLATE, video_template_values)
        assert pruned["video_effects"] == {"ken_burns": False}

    def test_foreign_model_fields_removed(self, hook_template_values):
        hook_template_values["prompt_model"] = {
            "model": "gpt-5",
            "effort": "high",
            "temperature": 0.7,
        }
        pruned = prune_inactive(EntityKind.HOOK_TEMPLATE, hook_template_values)
        assert pruned["prompt_model"] == {"model": "gpt-5", "effort": "high"}

    def test_thumbnail_prompt_removed_for_picking_type(self):
        values = {"name": "X", "type": "last-image", "prompt": "old", "model": "gpt-4o"}
        pruned = prune_inactive(EntityKind.THUMBNAIL_TEMPLATE, values)
        assert pruned == {"name": "X", "type": "last-image"}

"""Unit tests for cross-field invariants."""

import pytest

from studio.config.base import EntityKind
from studio.config.conditional import active_fields
from studio.config.cross_field import MIN_EXCEEDS_MAX, check_prompt_model, validate
from studio.config.errors import ErrorKind


def _run(kind, values):
    return validate(kind, values, active_fields(kind, values))


class TestChannelInvariants:
    """Tests for channel cross-field checks."""

    def test_valid(self, channel_values):
        assert _run(EntityKind.CHANNEL, channel_values) == []

    def test_min_exceeds_max(self, channel_values):
        channel_values.update(videos_min=5, videos_max=3)
        errors = _run(EntityKind.CHANNEL, channel_values)

        assert len(errors) == 1
        assert errors[0].field == "videos_max"
        assert errors[0].kind is ErrorKind.CROSS_FIELD_INVARIANT
        assert errors[0].message == MIN_EXCEEDS_MAX

    def test_min_equals_max(self, channel_values):
        channel_values.update(videos_min=3, videos_max=3)
        assert _run(EntityKind.CHANNEL, channel_values) == []

    def test_min_against_default_max(self, channel_values):
        """Test an absent bound falls back to its default."""
        del channel_values["videos_max"]
        channel_values["videos_min"] = 4
        assert [e.field for e in _run(EntityKind.CHANNEL, channel_values)] == ["videos_max"]

    def test_ill_typed_bounds_skipped(self, channel_values):
        channel_values.update(videos_min="lots", videos_max=1)
        assert _run(EntityKind.CHANNEL, channel_values) == []

    def test_intro_without_url(self, channel_values):
        channel_values["video_intro"] = True
        errors = _run(EntityKind.CHANNEL, channel_values)

        assert [(e.field, e.kind) for e in errors] == [
            ("video_intro_url", ErrorKind.CROSS_FIELD_INVARIANT)
        ]

    def test_outro_with_blank_url(self, channel_values):
        channel_values.update(video_outro=True, video_outro_url="  ")
        errors = _run(EntityKind.CHANNEL, channel_values)
        assert [e.field for e in errors] == ["video_outro_url"]

    def test_intro_off_ignores_missing_url(self, channel_values):
        channel_values.update(video_intro=False, video_intro_url=None)
        assert _run(EntityKind.CHANNEL, channel_values) == []

    @pytest.mark.parametrize("thumbnail_ids", [[], None])
    def test_no_thumbnails_is_form_error(self, channel_values, thumbnail_ids):
        channel_values["thumbnail_ids"] = thumbnail_ids
        errors = _run(EntityKind.CHANNEL, channel_values)

        assert len(errors) == 1
        assert errors[0].is_form_level
        assert errors[0].kind is ErrorKind.CROSS_FIELD_INVARIANT

    def test_absent_thumbnails_is_form_error(self, channel_values):
        del channel_values["thumbnail_ids"]
        assert _run(EntityKind.CHANNEL, channel_values)[0].field is None

    def test_no_hook_minimum(self, channel_values):
        channel_values["hook_ids"] = []
        assert _run(EntityKind.CHANNEL, channel_values) == []


class TestThumbnailInvariants:
    """Tests for thumbnail template cross-field checks."""

    def test_valid(self, thumbnail_template_values):
        assert _run(EntityKind.THUMBNAIL_TEMPLATE, thumbnail_template_values) == []

    def test_ai_generated_without_prompt(self, thumbnail_template_values):
        thumbnail_template_values["prompt"] = ""
        errors = _run(EntityKind.THUMBNAIL_TEMPLATE, thumbnail_template_values)

        assert [(e.field, e.kind) for e in errors] == [
            ("prompt", ErrorKind.REQUIRED_FIELD_MISSING)
        ]

    def test_ai_generated_without_model(self, thumbnail_template_values):
        thumbnail_template_values["model"] = None
        errors = _run(EntityKind.THUMBNAIL_TEMPLATE, thumbnail_template_values)
        assert [e.field for e in errors] == ["model"]

    def test_default_model_counts(self, thumbnail_template_values):
        del thumbnail_template_values["model"]
        assert _run(EntityKind.THUMBNAIL_TEMPLATE, thumbnail_template_values) == []

    def test_picking_type_needs_no_prompt(self):
        values = {"name": "X", "type": "random-image", "prompt": ""}
        assert _run(EntityKind.THUMBNAIL_TEMPLATE, values) == []


class TestVideoTemplateInvariants:
    """Tests for video template cross-field checks."""

    def test_image_range(self, video_template_values):
        video_template_values["image_count_range"] = {"min": 8, "max": 4}
        errors = _run(EntityKind.VIDEO_TEMPLATE, video_template_values)
        assert [e.field for e in errors] == ["image_count_range.max"]

    def test_image_range_partial(self, video_template_values):
        video_template_values["image_count_range"] = {"min": 7}
        errors = _run(EntityKind.VIDEO_TEMPLATE, video_template_values)
        assert [e.field for e in errors] == ["image_count_range.max"]


class TestCheckPromptModel:
    """Tests for check_prompt_model."""

    def test_complete_reasoning(self):
        assert check_prompt_model("pm", {"model": "gpt-5", "effort": "low"}) == []

    def test_missing_own_field(self):
        errors = check_prompt_model("pm", {"model": "gpt-4o", "temperature": 0.7})

        assert {e.field for e in errors} == {"pm.top_p", "pm.frequency_penalty", "pm.max_tokens"}
        assert all(e.kind is ErrorKind.REQUIRED_FIELD_MISSING for e in errors)

    def test_foreign_field(self):
        errors = check_prompt_model("pm", {"model": "gpt-5", "effort": "low", "temperature": 1})
        assert [(e.field, e.kind) for e in errors] == [
            ("pm.temperature", ErrorKind.UNKNOWN_FAMILY_FIELD)
        ]

    def test_ill_typed_skipped(self):
        assert check_prompt_model("pm", "gpt-5") == []
        assert check_prompt_model("pm", {"model": 5}) == []

    @pytest.mark.parametrize("model", ["", "   "])
    def test_blank_model_has_no_family(self, model):
        """Test a blank model id adds no parameter errors."""
        assert check_prompt_model("pm", {"model": model}) == []

    def test_runs_for_every_prompt_model(self, video_template_values):
        video_template_values["script_prompt_model"] = {"model": "gpt-5", "max_tokens": 10}
        errors = _run(EntityKind.VIDEO_TEMPLATE, video_template_values)

        assert ("script_prompt_model.effort", ErrorKind.REQUIRED_FIELD_MISSING) in [
            (e.field, e.kind) for e in errors
        ]
        assert ("script_prompt_model.max_tokens", ErrorKind.UNKNOWN_FAMILY_FIELD) in [
            (e.field, e.kind) for e in errors
        ]

    def test_never_raises_on_garbage(self):
        for kind in EntityKind:
            assert isinstance(validate(kind, {"videos_min": object()}, frozenset()), list)

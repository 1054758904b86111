"""Unit tests for video template generation readiness."""

from typing import Any

import pytest

from studio.config.errors import ErrorKind
from studio.services.readiness import (
    MIN_OUTLINE_PROMPT_LENGTH,
    ReadinessReport,
    ReadinessWarning,
    check_readiness,
    ideas,
)


@pytest.fixture
def ready_values() -> dict[str, Any]:
    """Video template with everything generation needs."""
    return {
        "name": "Ghost Stories",
        "story_outline_prompt": "Outline a five chapter ghost story about {{TITLE}} with a twist",
        "full_script_prompt": "Write the full narration for {{OUTLINE}}",
        "ideas_list": "The lighthouse keeper---The last train---The empty house",
        "audio_voices": ["narrator"],
    }


def _warned(report: ReadinessReport) -> list[str]:
    return [warning.field for warning in report.warnings]


class TestIdeas:
    """Tests for splitting the ideas list."""

    def test_default_delimiter(self):
        assert ideas({"ideas_list": "One---Two---Three"}) == ["One", "Two", "Three"]

    def test_custom_delimiter(self):
        values = {"ideas_list": "One\nTwo\n\nThree\n", "ideas_delimiter": "\n"}
        assert ideas(values) == ["One", "Two", "Three"]

    def test_entries_stripped_and_blanks_dropped(self):
        assert ideas({"ideas_list": "  One --- --- Two  ---"}) == ["One", "Two"]

    def test_empty_delimiter_falls_back(self):
        assert ideas({"ideas_list": "One---Two", "ideas_delimiter": ""}) == ["One", "Two"]

    def test_camel_case_keys(self):
        assert ideas({"ideasList": "One|Two", "ideasDelimiter": "|"}) == ["One", "Two"]

    @pytest.mark.parametrize("ideas_list", [None, 42, ["One", "Two"]])
    def test_no_text(self, ideas_list):
        assert ideas({"ideas_list": ideas_list}) == []

    def test_absent(self):
        assert ideas({}) == []


class TestReadinessErrors:
    """Tests for inputs generation cannot do without."""

    def test_ready(self, ready_values):
        report = check_readiness(ready_values)

        assert report.is_ready
        assert report.errors == ()
        assert report.warnings == ()

    @pytest.mark.parametrize(
        "field", ["story_outline_prompt", "full_script_prompt", "ideas_list"]
    )
    @pytest.mark.parametrize("blank", [None, "", "   "])
    def test_required_input(self, ready_values, field, blank):
        ready_values[field] = blank
        report = check_readiness(ready_values)

        assert not report.is_ready
        assert [(e.field, e.kind) for e in report.errors] == [
            (field, ErrorKind.REQUIRED_FIELD_MISSING)
        ]

    def test_all_missing(self):
        report = check_readiness({"name": "Empty", "audio_voices": ["narrator"]})

        assert [e.field for e in report.errors] == [
            "story_outline_prompt",
            "full_script_prompt",
            "ideas_list",
        ]
        assert report.warnings == ()

    def test_camel_case_record(self, ready_values):
        record = {
            "storyOutlinePrompt": ready_values["story_outline_prompt"],
            "fullScriptPrompt": ready_values["full_script_prompt"],
            "ideasList": ready_values["ideas_list"],
            "audioVoices": ["narrator"],
        }
        assert check_readiness(record).is_ready


class TestReadinessWarnings:
    """Tests for non-blocking readiness warnings."""

    @pytest.mark.parametrize(
        ("count", "warned"),
        [(1, True), (2, False), (20, False), (21, True)],
    )
    def test_idea_count(self, ready_values, count, warned):
        ready_values["ideas_list"] = "---".join(f"Idea {n}" for n in range(count))
        report = check_readiness(ready_values)

        assert report.is_ready
        assert ("ideas_list" in _warned(report)) is warned

    def test_long_ideas_list_message(self, ready_values):
        ready_values["ideas_list"] = "---".join(f"Idea {n}" for n in range(25))
        (warning,) = check_readiness(ready_values).warnings
        assert "very long" in warning.message

    def test_idea_count_uses_delimiter(self, ready_values):
        ready_values.update(ideas_list="One---Two", ideas_delimiter="\n")
        assert _warned(check_readiness(ready_values)) == ["ideas_list"]

    @pytest.mark.parametrize(
        ("length", "warned"),
        [
            (MIN_OUTLINE_PROMPT_LENGTH - 1, True),
            (MIN_OUTLINE_PROMPT_LENGTH, False),
        ],
    )
    def test_short_outline_prompt(self, ready_values, length, warned):
        ready_values["story_outline_prompt"] = "x" * length
        report = check_readiness(ready_values)
        assert ("story_outline_prompt" in _warned(report)) is warned

    @pytest.mark.parametrize(
        ("image_count", "warned"),
        [(2, True), (3, False), (20, False), (21, True)],
    )
    def test_image_count(self, ready_values, image_count, warned):
        ready_values["image_count"] = image_count
        report = check_readiness(ready_values)
        assert ("image_count" in _warned(report)) is warned

    def test_default_image_count_in_range(self, ready_values):
        ready_values.pop("image_count", None)
        assert "image_count" not in _warned(check_readiness(ready_values))

    def test_ill_typed_image_count_left_to_validation(self, ready_values):
        ready_values["image_count"] = "many"
        assert check_readiness(ready_values).warnings == ()

    @pytest.mark.parametrize("voices", [[], ["  "], None])
    def test_no_audio_voices(self, ready_values, voices):
        if voices is None:
            del ready_values["audio_voices"]
        else:
            ready_values["audio_voices"] = voices
        assert _warned(check_readiness(ready_values)) == ["audio_voices"]

    def test_warnings_do_not_block(self, ready_values):
        ready_values.update(image_count=30, audio_voices=[])
        report = check_readiness(ready_values)

        assert report.is_ready
        assert _warned(report) == ["image_count", "audio_voices"]

    def test_to_dict(self, ready_values):
        ready_values.update(full_script_prompt="", audio_voices=[])

        assert check_readiness(ready_values).to_dict() == {
            "ready": False,
            "errors": [
                {
                    "field": "full_script_prompt",
                    "kind": "required_field_missing",
                    "message": "Full script prompt is required",
                }
            ],
            "warnings": [ReadinessWarning("audio_voices", "No audio voices configured").to_dict()],
        }

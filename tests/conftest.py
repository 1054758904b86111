"""Pytest configuration and fixtures.

This module provides common fixtures used across all tests.
"""

from typing import Any

import pytest

from studio.core.logging import setup_logging

# Setup logging for tests
setup_logging()


@pytest.fixture
def channel_values() -> dict[str, Any]:
    """Minimal valid channel draft (snake_case keys)."""
    return {
        "name": "Midnight Tales",
        "videos_min": 1,
        "videos_max": 2,
        "thumbnail_ids": [1],
    }


@pytest.fixture
def video_template_values() -> dict[str, Any]:
    """Minimal valid video template draft."""
    return {
        "name": "Ghost Stories",
        "story_outline_prompt": "Outline a story about {{TITLE}}",
        "outline_prompt_model": {"model": "gpt-5", "effort": "medium"},
    }


@pytest.fixture
def hook_template_values() -> dict[str, Any]:
    """Minimal valid hook template draft."""
    return {
        "name": "Cold open",
        "prompt": "Open with a question about {{TITLE}}",
        "prompt_model": {"model": "gpt-5-mini", "effort": "low"},
    }


@pytest.fixture
def thumbnail_template_values() -> dict[str, Any]:
    """Minimal valid ai-generated thumbnail template draft."""
    return {
        "name": "Moody poster",
        "type": "ai-generated",
        "prompt": "A dark forest at night, {{TITLE}}",
        "model": "gpt-4o",
    }

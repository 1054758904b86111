"""Unit tests for the settings store."""

import pytest

from studio.config.model_family import ModelFamily
from studio.config.settings_store import (
    SettingKey,
    SettingsStore,
    StringListSetting,
    StringSetting,
)
from studio.core.exceptions import ConfigValidationError


class TestStringSettings:
    """Tests for string-valued settings."""

    def test_starts_empty(self):
        store = SettingsStore()
        assert store.keys() == []
        assert store.get(SettingKey.OPENAI_API_KEY) is None
        assert store.model_list() == []

    def test_set_and_get(self):
        store = SettingsStore()
        store.set_string(SettingKey.OPENAI_API_KEY, "sk-test")

        assert store.get_string(SettingKey.OPENAI_API_KEY) == "sk-test"
        assert store.get(SettingKey.OPENAI_API_KEY) == StringSetting(value="sk-test")

    def test_delete(self):
        store = SettingsStore()
        store.set_string(SettingKey.YOUTUBE_API_KEY, "yt")
        store.delete(SettingKey.YOUTUBE_API_KEY)
        store.delete(SettingKey.YOUTUBE_API_KEY)

        assert store.get(SettingKey.YOUTUBE_API_KEY) is None

    def test_list_under_string_key_rejected(self):
        store = SettingsStore()
        with pytest.raises(ConfigValidationError, match="expects a string"):
            store.save(SettingKey.OPENAI_API_KEY, StringListSetting(values=["a"]))

    def test_string_under_list_key_rejected(self):
        store = SettingsStore()
        with pytest.raises(ConfigValidationError, match="expects a string list"):
            store.set_string(SettingKey.MODEL_LIST, "gpt-4o")


class TestModelCatalog:
    """Tests for the model_list catalog."""

    def test_add_keeps_order_and_dedupes(self):
        store = SettingsStore()
        assert store.add_model("gpt-4o") is True
        assert store.add_model("gpt-5-mini") is True
        assert store.add_model("gpt-4o") is False

        assert store.model_list() == ["gpt-4o", "gpt-5-mini"]

    def test_add_strips_whitespace(self):
        store = SettingsStore()
        store.add_model("  gpt-4o ")
        assert store.model_list() == ["gpt-4o"]

    @pytest.mark.parametrize("model_id", ["", "   "])
    def test_blank_rejected(self, model_id):
        store = SettingsStore()
        with pytest.raises(ConfigValidationError, match="Model name is required"):
            store.add_model(model_id)
        assert store.model_list() == []

    def test_remove_by_value(self):
        store = SettingsStore()
        for model_id in ("a", "b", "c"):
            store.add_model(model_id)

        assert store.remove_model("b") is True
        assert store.remove_model("b") is False
        assert store.model_list() == ["a", "c"]

    def test_model_options(self):
        store = SettingsStore()
        store.add_model("gpt-5")
        store.add_model("gpt-4o")

        families = [option.family for option in store.model_options()]
        assert families == [ModelFamily.REASONING, ModelFamily.SAMPLING]

    def test_model_list_returns_copy(self):
        store = SettingsStore()
        store.add_model("gpt-4o")
        store.model_list().append("mutated")
        assert store.model_list() == ["gpt-4o"]


class TestWireRecords:
    """Tests for the {key, value, jsonValue} wire shape."""

    def test_to_records(self):
        store = SettingsStore()
        store.set_string(SettingKey.OPENAI_API_KEY, "sk")
        store.add_model("gpt-4o")

        assert store.to_records() == [
            {"key": "openai_api_key", "value": "sk", "jsonValue": None},
            {"key": "model_list", "value": None, "jsonValue": ["gpt-4o"]},
        ]

    def test_from_records(self):
        store = SettingsStore.from_records(
            [
                {"key": "replicate_api_key", "value": "r8", "jsonValue": None},
                {"key": "model_list", "value": None, "jsonValue": ["a", "b", "a", 3]},
                {"key": "legacy_flag", "value": "on"},
                {"key": "elevenlabs_api_key", "value": None, "jsonValue": None},
            ]
        )

        assert store.get_string(SettingKey.REPLICATE_API_KEY) == "r8"
        assert store.model_list() == ["a", "b"]
        assert store.get(SettingKey.ELEVENLABS_API_KEY) is None
        assert len(store.keys()) == 2

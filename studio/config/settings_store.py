"""Typed global settings store.

Settings are a process-wide key/value map. Most keys hold a plain string
(API credentials); ``model_list`` holds the catalog of selectable model
identifiers. Values are a tagged union so a key can never hold the wrong
shape:

    StringSetting      {kind: "string", value}
    StringListSetting  {kind: "stringList", values}

On the wire each setting is a ``{key, value, jsonValue}`` record where
``value`` carries strings and ``jsonValue`` carries lists.
"""

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field

from studio.config.model_family import ModelOption, catalog_options
from studio.core.exceptions import ConfigValidationError
from studio.core.logging import get_logger

logger = get_logger(__name__)


class SettingKey(str, Enum):
    """Known settings keys."""

    OPENAI_API_KEY = "openai_api_key"
    REPLICATE_API_KEY = "replicate_api_key"
    ELEVENLABS_API_KEY = "elevenlabs_api_key"
    YOUTUBE_API_KEY = "youtube_api_key"
    MODEL_LIST = "model_list"

    @property
    def holds_list(self) -> bool:
        return self is SettingKey.MODEL_LIST


class StringSetting(BaseModel):
    kind: Literal["string"] = "string"
    value: str


class StringListSetting(BaseModel):
    kind: Literal["stringList"] = "stringList"
    values: list[str] = Field(default_factory=list)


SettingValue = Annotated[StringSetting | StringListSetting, Field(discriminator="kind")]


class SettingsStore:
    """In-memory settings map, initialized empty.

    Example:
        >>> store = SettingsStore()
        >>> store.add_model("gpt-4o")
        >>> store.add_model("gpt-5-mini")
        >>> store.add_model("gpt-4o")
        >>> store.model_list()
        ['gpt-4o', 'gpt-5-mini']
    """

    def __init__(self) -> None:
        self._values: dict[SettingKey, StringSetting | StringListSetting] = {}

    # ------------------------------------------------------------------
    # Generic access
    # ------------------------------------------------------------------

    def get(self, key: SettingKey) -> StringSetting | StringListSetting | None:
        return self._values.get(key)

    def keys(self) -> list[SettingKey]:
        return list(self._values)

    def delete(self, key: SettingKey) -> None:
        """Remove a key; deleting an absent key is a no-op."""
        if self._values.pop(key, None) is not None:
            logger.info("Setting deleted", key=key.value)

    def save(self, key: SettingKey, value: StringSetting | StringListSetting) -> None:
        """Store a value, checking that its shape matches the key.

        Raises:
            ConfigValidationError: If a list is saved under a string key or
                the other way round
        """
        if key.holds_list != isinstance(value, StringListSetting):
            expected = "a string list" if key.holds_list else "a string"
            raise ConfigValidationError(
                field=key.value, value=value.kind, reason=f"expects {expected}"
            )
        self._values[key] = value
        logger.info("Setting saved", key=key.value, kind=value.kind)

    # ------------------------------------------------------------------
    # String settings
    # ------------------------------------------------------------------

    def get_string(self, key: SettingKey) -> str | None:
        setting = self._values.get(key)
        return setting.value if isinstance(setting, StringSetting) else None

    def set_string(self, key: SettingKey, value: str) -> None:
        self.save(key, StringSetting(value=value))

    # ------------------------------------------------------------------
    # Model catalog
    # ------------------------------------------------------------------

    def model_list(self) -> list[str]:
        setting = self._values.get(SettingKey.MODEL_LIST)
        return list(setting.values) if isinstance(setting, StringListSetting) else []

    def add_model(self, model_id: str) -> bool:
        """Append a model to the catalog unless it is already listed.

        Args:
            model_id: Model identifier

        Returns:
            True if the catalog changed

        Raises:
            ConfigValidationError: If the identifier is blank
        """
        model_id = model_id.strip()
        if not model_id:
            raise ConfigValidationError(field="model", reason="Model name is required")

        models = self.model_list()
        if model_id in models:
            return False
        self.save(SettingKey.MODEL_LIST, StringListSetting(values=[*models, model_id]))
        return True

    def remove_model(self, model_id: str) -> bool:
        """Remove a model from the catalog by value.

        Returns:
            True if the catalog changed
        """
        models = self.model_list()
        if model_id not in models:
            return False
        self.save(
            SettingKey.MODEL_LIST,
            StringListSetting(values=[m for m in models if m != model_id]),
        )
        return True

    def model_options(self) -> list[ModelOption]:
        """Catalog entries with their resolved model family."""
        return catalog_options(self.model_list())

    # ------------------------------------------------------------------
    # Wire format
    # ------------------------------------------------------------------

    def to_records(self) -> list[dict[str, Any]]:
        """Dump every setting as a ``{key, value, jsonValue}`` record."""
        return [setting_to_record(key, setting) for key, setting in self._values.items()]

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "SettingsStore":
        """Build a store from REST records, skipping unknown keys and empty values."""
        store = cls()
        for record in records:
            try:
                key = SettingKey(record.get("key"))
            except ValueError:
                logger.debug("Skipping unknown setting", key=record.get("key"))
                continue
            setting = setting_from_record(key, record)
            if setting is not None:
                store.save(key, setting)
        return store


def setting_to_record(
    key: SettingKey, setting: StringSetting | StringListSetting
) -> dict[str, Any]:
    if isinstance(setting, StringListSetting):
        return {"key": key.value, "value": None, "jsonValue": list(setting.values)}
    return {"key": key.value, "value": setting.value, "jsonValue": None}


def setting_from_record(
    key: SettingKey, record: Mapping[str, Any]
) -> StringSetting | StringListSetting | None:
    """Parse one REST record; returns None for cleared settings."""
    if key.holds_list:
        raw = record.get("jsonValue")
        if not isinstance(raw, list):
            return None
        deduped = list(dict.fromkeys(item for item in raw if isinstance(item, str)))
        return StringListSetting(values=deduped)

    value = record.get("value")
    if not isinstance(value, str):
        return None
    return StringSetting(value=value)


__all__ = [
    "SettingKey",
    "StringSetting",
    "StringListSetting",
    "SettingValue",
    "SettingsStore",
    "setting_to_record",
    "setting_from_record",
]

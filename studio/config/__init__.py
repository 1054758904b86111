"""Console entity schemas and field resolvers."""

from studio.config.base import ConsoleModel, EntityKind
from studio.config.channel import Channel
from studio.config.conditional import active_fields, prune_inactive
from studio.config.cross_field import check_prompt_model
from studio.config.errors import ErrorKind, FieldError
from studio.config.hook_template import HookTemplate
from studio.config.model_family import (
    ModelFamily,
    ModelOption,
    catalog_options,
    defaults_for,
    family_fields,
    family_of,
    foreign_fields,
    migrate,
)
from studio.config.prompt_model import (
    ModelConfig,
    ReasoningModelConfig,
    SamplingModelConfig,
    parse_model_config,
)
from studio.config.relations import ChannelRelations, RelationSet
from studio.config.schemas import ENTITY_SCHEMAS, schema_for, validate_static
from studio.config.settings_store import (
    SettingKey,
    SettingsStore,
    StringListSetting,
    StringSetting,
)
from studio.config.thumbnail_template import ThumbnailTemplate
from studio.config.video_template import ImageCountRange, VideoEffectsConfig, VideoTemplate

__all__ = [
    "ConsoleModel",
    "EntityKind",
    "Channel",
    "VideoTemplate",
    "VideoEffectsConfig",
    "ImageCountRange",
    "HookTemplate",
    "ThumbnailTemplate",
    "ModelConfig",
    "ReasoningModelConfig",
    "SamplingModelConfig",
    "parse_model_config",
    "ModelFamily",
    "ModelOption",
    "family_of",
    "defaults_for",
    "family_fields",
    "foreign_fields",
    "migrate",
    "catalog_options",
    "ENTITY_SCHEMAS",
    "schema_for",
    "validate_static",
    "active_fields",
    "prune_inactive",
    "check_prompt_model",
    "ErrorKind",
    "FieldError",
    "RelationSet",
    "ChannelRelations",
    "SettingKey",
    "SettingsStore",
    "StringSetting",
    "StringListSetting",
]

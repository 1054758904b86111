"""Prompt-model configuration embedded in prompt-driven fields.

A prompt model is a tagged union of two structurally exclusive records:

    ReasoningModelConfig  {kind: "reasoning", model, effort}
    SamplingModelConfig   {kind: "sampling", model, max_tokens, temperature,
                           top_p, frequency_penalty}

The tag is never read from the input. The union discriminator asks the
model-family resolver which member applies, so a wire record such as
``{"model": "gpt-4o", "temperature": 0.7}`` parses as the sampling member and
``kind`` is never written back to the wire.
"""

from collections.abc import Mapping
from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    model_validator,
)
from pydantic.alias_generators import to_camel

from studio.config.model_family import (
    DEFAULT_PROMPT_MODEL_ID,
    ModelFamily,
    default_prompt_model,
    family_of,
)
from studio.config.validators import NonBlankStr

MISSING_MODEL_ERROR = "missing_model_identifier"


class _PromptModelBase(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    model: NonBlankStr = Field(..., description="Model identifier")

    @property
    def family(self) -> ModelFamily:
        return family_of(self.model)


class ReasoningModelConfig(_PromptModelBase):
    """Reasoning-tier model: only the reasoning effort is tunable."""

    kind: Literal["reasoning"] = Field(default="reasoning", exclude=True)
    effort: Literal["minimal", "low", "medium", "high"] = Field(
        default="low", description="Reasoning effort"
    )

    @model_validator(mode="after")
    def check_family(self) -> "ReasoningModelConfig":
        """Validate that the model identifier is a reasoning-tier model."""
        if self.family is not ModelFamily.REASONING:
            raise ValueError(f"'{self.model}' is not a reasoning-tier model")
        return self


class SamplingModelConfig(_PromptModelBase):
    """Classic sampling model: token budget and sampling parameters."""

    kind: Literal["sampling"] = Field(default="sampling", exclude=True)
    max_tokens: int = Field(default=8192, gt=0, description="Maximum output tokens")
    temperature: float = Field(default=0.7, ge=0, le=2)
    top_p: float = Field(default=0.9, ge=0, le=1)
    frequency_penalty: float = Field(default=0.0, ge=0, le=2)

    @model_validator(mode="after")
    def check_family(self) -> "SamplingModelConfig":
        """Validate that the model identifier is not a reasoning-tier model."""
        if self.family is not ModelFamily.SAMPLING:
            raise ValueError(f"'{self.model}' is a reasoning-tier model")
        return self


def _family_tag(value: Any) -> str | None:
    if isinstance(value, Mapping):
        model = value.get("model")
    else:
        model = getattr(value, "model", None)
    if not isinstance(model, str):
        return None
    return family_of(model).value


ModelConfig = Annotated[
    Annotated[ReasoningModelConfig, Tag(ModelFamily.REASONING.value)]
    | Annotated[SamplingModelConfig, Tag(ModelFamily.SAMPLING.value)],
    Discriminator(
        _family_tag,
        custom_error_type=MISSING_MODEL_ERROR,
        custom_error_message="Prompt model requires a model identifier",
    ),
]

_MODEL_CONFIG_ADAPTER: TypeAdapter[ReasoningModelConfig | SamplingModelConfig] = TypeAdapter(
    ModelConfig
)


def parse_model_config(raw: Any) -> ReasoningModelConfig | SamplingModelConfig:
    """Parse a raw prompt-model record into the matching union member.

    Raises:
        pydantic.ValidationError: If the record is invalid
    """
    return _MODEL_CONFIG_ADAPTER.validate_python(raw)


def default_model_config(
    model_id: str = DEFAULT_PROMPT_MODEL_ID,
) -> ReasoningModelConfig | SamplingModelConfig:
    """Build the default prompt model for a model identifier."""
    return parse_model_config(default_prompt_model(model_id))


def model_config_field(model_id: str = DEFAULT_PROMPT_MODEL_ID) -> Any:
    """Field declaration for an embedded prompt model with a default."""
    return Field(default_factory=lambda: default_model_config(model_id))


__all__ = [
    "MISSING_MODEL_ERROR",
    "ReasoningModelConfig",
    "SamplingModelConfig",
    "ModelConfig",
    "parse_model_config",
    "default_model_config",
    "model_config_field",
]

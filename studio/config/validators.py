"""Shared validators for console entity schemas.

This module provides common validation utilities used across the entity
models and the field resolvers:
- Blank-string handling
- Unique identifier lists
- URL and color checks
- Dotted-path access into draft values
"""

import re
from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import AfterValidator, BeforeValidator, HttpUrl, TypeAdapter
from pydantic.alias_generators import to_snake

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")
_URL_ADAPTER: TypeAdapter[HttpUrl] = TypeAdapter(HttpUrl)


def is_blank(value: Any) -> bool:
    """Check whether a value is missing or an empty/whitespace string.

    Args:
        value: Any draft value

    Returns:
        True for None and strings with no visible characters
    """
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def reject_blank(value: str) -> str:
    """Reject whitespace-only strings, keeping the original text verbatim.

    Prompt strings keep their surrounding whitespace and ``{{SHORTCODE}}``
    placeholders untouched.

    Raises:
        ValueError: If the string is blank
    """
    if not value.strip():
        raise ValueError("must not be blank")
    return value


def blank_to_none(value: Any) -> Any:
    """Treat empty form inputs as absent."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def validate_url(value: str) -> str:
    """Validate that a string parses as an http(s) URL.

    Args:
        value: URL string

    Returns:
        The original string (not the normalized URL)

    Raises:
        ValueError: If the string is not a valid URL
    """
    try:
        _URL_ADAPTER.validate_python(value)
    except ValueError as e:
        raise ValueError(f"'{value}' is not a valid URL") from e
    return value


def _optional_url(value: str | None) -> str | None:
    return validate_url(value) if value is not None else None


def validate_hex_color(value: str) -> str:
    """Validate a ``#RRGGBB`` color string.

    Raises:
        ValueError: If the value is not a 6-digit hex color
    """
    if not _HEX_COLOR.match(value):
        raise ValueError(f"'{value}' is not a #RRGGBB color")
    return value


def validate_unique_ids(values: list[int], field_name: str = "Ids") -> list[int]:
    """Validate a list of foreign keys: positive and free of duplicates.

    Args:
        values: List of integer ids
        field_name: Name for error messages

    Returns:
        The list unchanged

    Raises:
        ValueError: If any id is non-positive or repeated
    """
    non_positive = [v for v in values if v <= 0]
    if non_positive:
        raise ValueError(f"{field_name} must be positive. Invalid values: {non_positive}")

    seen: set[int] = set()
    duplicates: set[int] = set()
    for v in values:
        if v in seen:
            duplicates.add(v)
        seen.add(v)
    if duplicates:
        raise ValueError(f"{field_name} must not contain duplicates: {sorted(duplicates)}")
    return values


def normalize_string_list(value: Any) -> Any:
    """Normalize a string list: strip entries, drop blanks and repeats.

    Handles None and single strings. Other input is returned unchanged so
    type validation can report it.
    """
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return value

    result: list[Any] = []
    for item in value:
        if isinstance(item, str):
            item = item.strip()
            if not item or item in result:
                continue
        result.append(item)
    return result


def snake_keys(value: Any) -> Any:
    """Recursively convert camelCase mapping keys to snake_case.

    Used to turn wire records into draft values. Lists are walked, scalar
    values are returned unchanged.
    """
    if isinstance(value, Mapping):
        return {to_snake(str(k)): snake_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [snake_keys(v) for v in value]
    return value


def get_path(values: Mapping[str, Any], path: str, default: Any = None) -> Any:
    """Read a dotted path (``video_effects.ken_burns``) from draft values."""
    current: Any = values
    for part in path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return default
        current = current[part]
    return current


NonBlankStr = Annotated[str, AfterValidator(reject_blank)]
OptionalText = Annotated[str | None, BeforeValidator(blank_to_none)]
OptionalUrl = Annotated[str | None, BeforeValidator(blank_to_none), AfterValidator(_optional_url)]
HexColor = Annotated[str, AfterValidator(validate_hex_color)]


__all__ = [
    "is_blank",
    "reject_blank",
    "blank_to_none",
    "validate_url",
    "validate_hex_color",
    "validate_unique_ids",
    "normalize_string_list",
    "snake_keys",
    "get_path",
    "NonBlankStr",
    "OptionalText",
    "OptionalUrl",
    "HexColor",
]

"""Draft file loading.

A draft file is a YAML (or JSON) document holding the kind of entity and
its values, in snake_case or camelCase:

    kind: channel
    values:
      name: Midnight Tales
      videoIntro: true
      videoIntroUrl: /uploads/video/intro.mp4
      thumbnailIds: [1, 2]

Loading only checks the document's shape. Field values are left for the
validation pipeline, which reports every problem at once.
"""

from pathlib import Path
from typing import Any

import yaml

from studio.config.base import EntityKind
from studio.core.config import get_config
from studio.core.exceptions import ConfigError, ConfigNotFoundError, ConfigValidationError
from studio.core.logging import get_logger

logger = get_logger(__name__)

DRAFT_SUFFIXES = (".yaml", ".yml", ".json")


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML document from disk.

    Raises:
        ConfigNotFoundError: If the file doesn't exist
        ConfigError: If parsing fails or the document is not a mapping
    """
    if not path.exists():
        logger.error("Draft file not found", path=str(path))
        raise ConfigNotFoundError(path.name, config_path=str(path))

    try:
        with open(path, encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error("YAML parsing failed", path=str(path), error=str(e))
        raise ConfigError(f"Invalid YAML in {path}: {e}", config_path=str(path)) from e

    if not isinstance(content, dict):
        raise ConfigError(f"Draft file must contain a YAML object: {path}", config_path=str(path))
    return content


def load_draft_file(path: str | Path) -> tuple[EntityKind, dict[str, Any]]:
    """Load a draft file.

    Args:
        path: Path to the draft file

    Returns:
        Tuple of (entity kind, draft values)

    Raises:
        ConfigNotFoundError: If the file doesn't exist
        ConfigError: If the file is not valid YAML
        ConfigValidationError: If ``kind`` is unknown or ``values`` is not a
            mapping
    """
    path = Path(path)
    document = _load_yaml_file(path)

    raw_kind = document.get("kind")
    try:
        kind = EntityKind(str(raw_kind).replace("-", "_"))
    except ValueError as e:
        raise ConfigValidationError(
            field="kind",
            value=raw_kind,
            reason=f"must be one of {[k.value for k in EntityKind]}",
            config_path=str(path),
        ) from e

    values = document.get("values", {})
    if values is None:
        values = {}
    if not isinstance(values, dict):
        raise ConfigValidationError(
            field="values",
            value=type(values).__name__,
            reason="must be a mapping of field names to values",
            config_path=str(path),
        )

    logger.debug("Loaded draft file", path=str(path), kind=kind.value)
    return kind, values


def list_draft_files(directory: str | Path | None = None) -> list[Path]:
    """List draft files in a directory (defaults to ``drafts_directory``).

    Raises:
        ConfigNotFoundError: If the directory doesn't exist
    """
    directory = Path(directory or get_config().drafts_directory)
    if not directory.is_dir():
        raise ConfigNotFoundError(directory.name, config_path=str(directory))
    return sorted(p for p in directory.iterdir() if p.suffix in DRAFT_SUFFIXES)


__all__ = ["DRAFT_SUFFIXES", "load_draft_file", "list_draft_files"]

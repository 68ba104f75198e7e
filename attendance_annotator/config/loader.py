from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import AnnotateConfig

"""YAML config loader.

Responsibilities:
- Load YAML (default ``config/annotate.yml``; ``ATTENDANCE_CONFIG`` overrides)
- Validate against ``contracts/config_schema.json`` (no extra keys)
- Apply defaults (output_directory falls back to source_directory)
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "CONFIG_ENV_VAR",
    "SCHEMA_PATH",
    "resolve_config_path",
    "load_config",
    "default_config",
]

DEFAULT_CONFIG_PATH = Path("config/annotate.yml")
CONFIG_ENV_VAR = "ATTENDANCE_CONFIG"

# attendance_annotator/config/loader.py -> attendance_annotator/contracts
SCHEMA_PATH = Path(__file__).parent.parent / "contracts" / "config_schema.json"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the packaged JSON schema.

    Raises:
        ConfigError: schema file missing/invalid, or data fails validation
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def resolve_config_path(explicit: str | None = None) -> Path:
    """--config > $ATTENDANCE_CONFIG > config/annotate.yml"""
    if explicit:
        return Path(explicit)
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def load_config(path: Path) -> AnnotateConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    source = data["source_directory"]
    defaults = AnnotateConfig(source_directory=source, output_directory=source)
    return AnnotateConfig(
        source_directory=source,
        output_directory=data.get("output_directory", source),
        output_prefix=data.get("output_prefix", defaults.output_prefix),
        sheet_title=data.get("sheet_title", defaults.sheet_title),
        preview_rows=data.get("preview_rows", defaults.preview_rows),
        keep_na_strings=list(data.get("keep_na_strings", [])),
    )


def default_config(source_directory: str = ".") -> AnnotateConfig:
    """Config used when files are given on the command line and no YAML exists."""
    return AnnotateConfig(source_directory=source_directory, output_directory=source_directory)

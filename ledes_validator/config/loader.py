from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Config loader.

Responsibilities:
- Load the YAML run configuration (default ``config/ledes.yml``)
- Validate it against the bundled JSON schema (unknown keys rejected)
- Apply defaults and the ``LEDES_SOURCE_DIRECTORY`` environment override
"""

__all__ = [
    "ConfigError",
    "RunConfig",
    "load_config",
    "SCHEMA_PATH",
    "DEFAULT_CONFIG_PATH",
    "SOURCE_DIRECTORY_ENV",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/ledes.yml")
SOURCE_DIRECTORY_ENV = "LEDES_SOURCE_DIRECTORY"

DEFAULT_EXTENSIONS = (".txt", ".ledes")
DEFAULT_ENCODING = "utf-8"
DEFAULT_ERROR_LOG_DIRECTORY = "./logs"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class RunConfig:
    """Settings for one batch validation run."""
    source_directory: str  # Directory scanned (non-recursive) for LEDES files
    file_extensions: tuple[str, ...]  # Lower-case suffixes, leading dot
    encoding: str  # Text encoding of the input files
    error_log_directory: str  # Where errors-*.log files are written
    report_directory: str | None = None  # CSV findings reports; None disables them


def _validate_config_schema(data: Any) -> None:
    """Validate raw config data against the bundled JSON schema.

    Raises:
        ConfigError: the schema file is missing or unreadable, or the data
            does not satisfy it (missing keys, wrong types, unknown keys)
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


def load_config(path: Path) -> RunConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    source = os.getenv(SOURCE_DIRECTORY_ENV) or data["source_directory"]
    extensions = tuple(e.lower() for e in data.get("file_extensions", DEFAULT_EXTENSIONS))
    return RunConfig(
        source_directory=source,
        file_extensions=extensions,
        encoding=data.get("encoding", DEFAULT_ENCODING),
        error_log_directory=data.get("error_log_directory", DEFAULT_ERROR_LOG_DIRECTORY),
        report_directory=data.get("report_directory"),
    )

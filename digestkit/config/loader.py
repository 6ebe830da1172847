# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Config loader: reads YAML from disk and produces a validated, frozen DigestKitConfig.

The loading pipeline is linear:
  1. Read the file as UTF-8 text
  2. Parse as YAML into a plain dict
  3. Hand the dict to pydantic for schema validation
  4. Return the frozen config object

Any failure stops here with ConfigLoadError or ConfigValidationError.
There are no fallback defaults for a broken file.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from digestkit.config.exceptions import ConfigLoadError, ConfigValidationError
from digestkit.config.schema import DigestKitConfig


def read_yaml_document(path: Path) -> Any:
    """
    Read and parse any YAML (or JSON, which is a subset) document.

    Raises:
        ConfigLoadError: If the file doesn't exist, isn't readable, or isn't valid YAML.
    """
    if not path.exists():
        raise ConfigLoadError(f"File not found: {path}")

    if not path.is_file():
        raise ConfigLoadError(f"Path is not a file: {path}")

    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as err:
        raise ConfigLoadError(f"Cannot read {path}: {err}") from err

    try:
        return yaml.safe_load(raw_text)
    except yaml.YAMLError as err:
        raise ConfigLoadError(f"Invalid YAML in {path}: {err}") from err


def _read_yaml_file(config_path: Path) -> dict[str, Any]:
    parsed = read_yaml_document(config_path)

    if not isinstance(parsed, dict):
        raise ConfigLoadError(
            f"Config file must contain a YAML mapping (dict), got {type(parsed).__name__}"
        )

    return parsed


def load_config(config_path: Path) -> DigestKitConfig:
    """
    Load, validate, and freeze a config file into a DigestKitConfig object.

    Args:
        config_path: Path to a YAML config file.

    Returns:
        A fully validated, frozen DigestKitConfig instance.

    Raises:
        ConfigLoadError: File I/O or YAML parse failures.
        ConfigValidationError: Schema violations (missing fields, wrong types, unknown keys).
    """
    raw_data = _read_yaml_file(config_path)

    try:
        config = DigestKitConfig.model_validate(raw_data)
    except ValidationError as err:
        raise ConfigValidationError(
            f"Config validation failed for {config_path}:\n{err}"
        ) from err

    return config

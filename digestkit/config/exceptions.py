# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Custom exceptions for the configuration system.

Separate from the hashing errors so the CLI can tell "your YAML is wrong"
apart from "hashing failed" and map each to its own exit code.
"""


class ConfigError(Exception):
    """Base for all configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when a config file cannot be read from disk or parsed as YAML."""


class ConfigValidationError(ConfigError):
    """
    Raised when a config file parses fine but fails schema validation:
    missing required fields, unknown keys, an algorithm name that is not
    registered, a key that is not valid hex, and so on.
    """

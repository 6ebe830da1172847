# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Type-safe configuration schemas for digestkit.

Each config section is a frozen pydantic model with:
  - frozen=True: immutability after construction
  - extra="forbid": unknown fields cause immediate failure
  - validate_default=True: even defaults get type-checked

The hashing section reuses Flavor directly, so a flavor read from YAML is
the exact same object hash_append consumes.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from digestkit.digest.registry import list_algorithms
from digestkit.dispatch.flavor import Flavor


class GlobalConfig(BaseModel):
    """
    Cross-cutting settings: schema version and observability.

    This is the first section loaded and it controls where and how loudly
    digestkit logs.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(
        description="Schema version for compatibility tracking, e.g. '1.0.0'"
    )
    log_level: str = Field(
        default="INFO",
        description="One of DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for file-based log output",
    )


class HashingConfig(BaseModel):
    """
    Default algorithm, key and flavor for every hashing command.

    CLI flags override these per invocation.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    algorithm: str = Field(
        default="sha256",
        description="Registered algorithm name, e.g. 'sha256' or 'sha512_256'",
    )
    hmac_key_hex: Optional[str] = Field(
        default=None,
        description="Hex-encoded HMAC key; when set every digest becomes an HMAC",
    )
    flavor: Flavor = Field(
        default_factory=lambda: Flavor(byte_order="little"),
        description="Serialization policy for structured values",
    )

    @field_validator("algorithm")
    @classmethod
    def _algorithm_is_registered(cls, value: str) -> str:
        available = list_algorithms()
        if value not in available:
            raise ValueError(f"unknown algorithm '{value}', expected one of {available}")
        return value

    @field_validator("hmac_key_hex")
    @classmethod
    def _key_is_hex(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            bytes.fromhex(value)
        return value

    @property
    def hmac_key(self) -> Optional[bytes]:
        return None if self.hmac_key_hex is None else bytes.fromhex(self.hmac_key_hex)


class DigestKitConfig(BaseModel):
    """
    Top-level config container.

    Only `global:` is required. A missing `hashing:` section means the
    built-in defaults (SHA-256, no key, little-endian flavor).
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    global_config: GlobalConfig = Field(alias="global")
    hashing: HashingConfig = Field(default_factory=HashingConfig)

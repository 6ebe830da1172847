# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Flavors: how scalar values are laid out as bytes before hashing.

A flavor is a small frozen pydantic model. It is created once, passed to
every hash_append call, and never mutated. Three knobs:

  byte_order  "little", "big" or "native" (native follows the host, so
              only use it when the digest never leaves the machine)
  size_width  bytes used for element counts (4 or 8)
  int_width   canonical width of a Python int (1, 2, 4, 8 or 16)

Two flavors with the same settings compare and hash equal, so a flavor can
sit in a config object or be used as a cache key.
"""

import sys
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ByteOrder = Literal["little", "big", "native"]


class Flavor(BaseModel):
    """Serialization policy for hash_append."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    byte_order: ByteOrder = Field(
        default="native",
        description="Byte order for multi-byte scalars and counts",
    )
    size_width: Literal[4, 8] = Field(
        default=4,
        description="Width in bytes of the element count written before variable-length containers",
    )
    int_width: Literal[1, 2, 4, 8, 16] = Field(
        default=8,
        description="Width in bytes every Python int is encoded to",
    )

    @property
    def order(self) -> Literal["little", "big"]:
        """The concrete byte order, with "native" resolved against the host."""
        if self.byte_order == "native":
            return sys.byteorder  # type: ignore[return-value]
        return self.byte_order


DEFAULT_FLAVOR = Flavor()
LITTLE_ENDIAN_FLAVOR = Flavor(byte_order="little")
BIG_ENDIAN_FLAVOR = Flavor(byte_order="big")

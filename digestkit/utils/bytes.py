# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Byte-level helpers shared by every block transform.

Little-endian word reads and writes, big-endian block parsing, rotation.
Python ints are unbounded, so every helper masks its result back down to
the word width it claims to produce.
"""

import struct

MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF

_BE32x16 = struct.Struct(">16I")
_BE64x16 = struct.Struct(">16Q")


def read64le(data: bytes, offset: int = 0) -> int:
    return int.from_bytes(data[offset : offset + 8], "little")


def write64le(value: int) -> bytes:
    return (value & MASK64).to_bytes(8, "little")


def read_block32be(block: bytes) -> list[int]:
    """Parse a 64-byte block as sixteen big-endian 32-bit words."""
    return list(_BE32x16.unpack(block))


def read_block64be(block: bytes) -> list[int]:
    """Parse a 128-byte block as sixteen big-endian 64-bit words."""
    return list(_BE64x16.unpack(block))


def rotr32(x: int, n: int) -> int:
    return ((x >> n) | (x << (32 - n))) & MASK32


def rotr64(x: int, n: int) -> int:
    return ((x >> n) | (x << (64 - n))) & MASK64

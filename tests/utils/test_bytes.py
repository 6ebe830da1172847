# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Tests for the word read/write and rotation helpers."""

import struct

from digestkit.utils.bytes import (
    MASK64,
    read64le,
    read_block32be,
    read_block64be,
    rotr32,
    rotr64,
    write64le,
)


class TestWordIo:
    def test_little_endian(self) -> None:
        assert write64le(1) == b"\x01" + bytes(7)
        assert read64le(b"\x01" + bytes(7)) == 1
        assert write64le(0x0102030405060708) == bytes(range(8, 0, -1))

    def test_offset(self) -> None:
        data = b"\xff" * 4 + (42).to_bytes(8, "little")
        assert read64le(data, 4) == 42

    def test_writes_mask_to_width(self) -> None:
        assert write64le(MASK64 + 1) == bytes(8)
        assert write64le(-1) == b"\xff" * 8

    def test_block_parsing(self) -> None:
        block = struct.pack(">16I", *range(16))
        assert read_block32be(block) == list(range(16))
        block = b"".join((i << 40).to_bytes(8, "big") for i in range(16))
        assert read_block64be(block) == [i << 40 for i in range(16)]


class TestRotation:
    def test_rotr32_wraps_low_bits(self) -> None:
        assert rotr32(1, 1) == 0x80000000
        assert rotr32(0x12345678, 8) == 0x78123456

    def test_rotr64_wraps_low_bits(self) -> None:
        assert rotr64(1, 1) == 0x8000000000000000
        assert rotr64(0x0123456789ABCDEF, 4) == 0xF0123456789ABCDE

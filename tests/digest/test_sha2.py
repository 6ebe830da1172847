# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
SHA-2 correctness tests.

hashlib is the oracle for the four algorithms every Python build ships.
SHA-512/224 and SHA-512/256 depend on the OpenSSL build, so those are
checked against the FIPS 180-4 example vectors instead.

Lengths around the block boundary matter most: they decide whether padding
fits in the last block or spills into an extra one.
"""

import hashlib

import pytest

from digestkit.digest.exceptions import DigestFinalizedError
from digestkit.digest.sha2 import (
    SHA2_ALGORITHMS,
    Sha224,
    Sha256,
    Sha384,
    Sha512,
    Sha512_224,
    Sha512_256,
    compress256,
)
from digestkit.selftest.vectors import ABC, TWO_BLOCK_512

HASHLIB_PAIRS = [
    (Sha224, "sha224"),
    (Sha256, "sha256"),
    (Sha384, "sha384"),
    (Sha512, "sha512"),
]


def _digest(cls: type, data: bytes) -> bytes:
    h = cls()
    h.absorb(data)
    return h.finalize()


def _boundary_lengths(block_size: int) -> list[int]:
    return sorted({
        0, 1, block_size - 17, block_size - 16, block_size - 9, block_size - 8,
        block_size - 1, block_size, block_size + 1,
        2 * block_size - 1, 2 * block_size, 2 * block_size + 1,
    })


class TestAgainstHashlib:
    @pytest.mark.parametrize("cls,name", HASHLIB_PAIRS)
    def test_boundary_lengths(self, cls: type, name: str) -> None:
        for length in _boundary_lengths(cls.block_size):
            data = bytes((i * 7 + 3) & 0xFF for i in range(length))
            assert _digest(cls, data) == hashlib.new(name, data).digest(), length

    @pytest.mark.parametrize("cls,name", HASHLIB_PAIRS)
    def test_abc(self, cls: type, name: str) -> None:
        assert _digest(cls, ABC) == hashlib.new(name, ABC).digest()


class TestTruncatedSha512:
    def test_sha512_224_known_answers(self) -> None:
        assert _digest(Sha512_224, ABC).hex() == (
            "4634270f707b6a54daae7530460842e20e37ed265ceee9a43e8924aa"
        )
        assert _digest(Sha512_224, TWO_BLOCK_512).hex() == (
            "23fec5bb94d60b23308192640b0c453335d664734fe40e7268674af9"
        )

    def test_sha512_256_known_answers(self) -> None:
        assert _digest(Sha512_256, ABC).hex() == (
            "53048e2681941ef99b2e29b76b4c7dabe4c2d0c634fc6d46e0e2f13107e7af23"
        )
        assert _digest(Sha512_256, b"").hex() == (
            "c672b8d1ef56ed28ab87c3622c5114069bdd3ad7b8f9737498d0c01ecef0967a"
        )

    def test_truncated_variants_are_not_prefixes_of_sha512(self) -> None:
        full = _digest(Sha512, ABC)
        assert not full.startswith(_digest(Sha512_256, ABC))
        assert not full.startswith(_digest(Sha512_224, ABC))


class TestDigestSizes:
    @pytest.mark.parametrize("cls", SHA2_ALGORITHMS)
    def test_output_length(self, cls: type) -> None:
        h = cls()
        assert len(_digest(cls, b"x")) == h.digest_size

    def test_block_sizes(self) -> None:
        assert Sha224.block_size == Sha256.block_size == 64
        assert Sha384.block_size == Sha512.block_size == Sha512_224.block_size == 128
        assert Sha512_256.block_size == 128


class TestStreaming:
    @pytest.mark.parametrize("cls", SHA2_ALGORITHMS)
    @pytest.mark.parametrize("chunk", [1, 3, 63, 64, 65, 127, 128, 129])
    def test_chunking_is_invariant(self, cls: type, chunk: int) -> None:
        message = bytes(range(256)) + b"tail" * 11
        h = cls()
        for i in range(0, len(message), chunk):
            h.absorb(message[i : i + chunk])
        assert h.finalize() == _digest(cls, message)

    def test_fresh_instances_agree(self) -> None:
        assert _digest(Sha256, b"same") == _digest(Sha256, b"same")

    def test_instances_do_not_share_state(self) -> None:
        a = Sha256()
        b = Sha256()
        a.absorb(b"only in a")
        assert b.finalize() == hashlib.sha256(b"").digest()

    def test_strided_memoryview(self) -> None:
        h = Sha512()
        h.absorb(memoryview(b"abcdef")[::2])
        assert h.finalize() == hashlib.sha512(b"ace").digest()


class TestLifecycle:
    def test_finalize_twice_raises(self) -> None:
        h = Sha256()
        h.finalize()
        with pytest.raises(DigestFinalizedError):
            h.finalize()

    def test_absorb_after_finalize_raises(self) -> None:
        h = Sha512()
        h.finalize()
        with pytest.raises(DigestFinalizedError):
            h.absorb(b"late")

    def test_copy_after_finalize_raises(self) -> None:
        h = Sha384()
        h.finalize()
        with pytest.raises(DigestFinalizedError):
            h.copy()

    def test_finalized_flag(self) -> None:
        h = Sha224()
        assert not h.finalized
        h.finalize()
        assert h.finalized

    def test_copy_forks_running_state(self) -> None:
        h = Sha256()
        h.absorb(b"prefix-")
        fork = h.copy()

        h.absorb(b"one")
        fork.absorb(b"two")

        assert h.finalize() == hashlib.sha256(b"prefix-one").digest()
        assert fork.finalize() == hashlib.sha256(b"prefix-two").digest()

    def test_repr_names_algorithm(self) -> None:
        assert "sha256" in repr(Sha256())


class TestCompressionFunction:
    def test_compress256_is_pure(self) -> None:
        state = [0] * 8
        block = bytes(64)
        first = compress256(block, state)
        second = compress256(block, state)

        assert first == second
        assert state == [0] * 8
        assert all(0 <= word <= 0xFFFFFFFF for word in first)

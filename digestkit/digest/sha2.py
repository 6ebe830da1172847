# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
SHA-2 message digests, FIPS 180-4 / RFC 6234.

Two compression functions cover the whole family:

  compress256: 64-byte blocks, 32-bit words, 64 rounds
  compress512: 128-byte blocks, 64-bit words, 80 rounds

Each is a pure function (block, state) -> new state. The six algorithms
are thin classes that pair one of them with an initialization vector and
a truncation rule, and delegate buffering to BlockBuffer:

  SHA-224      IV224,     first 7 x 32-bit words
  SHA-256      IV256,     all 8 x 32-bit words
  SHA-384      IV384,     first 6 x 64-bit words
  SHA-512      IV512,     all 8 x 64-bit words
  SHA-512/224  IV512_224, 3 x 64-bit words + high half of word 3
  SHA-512/256  IV512_256, first 4 x 64-bit words

All word arithmetic wraps (mod 2^32 or 2^64); overflow is part of the
algorithm, not an error.
"""

import struct

from digestkit.digest.block import BlockBuffer
from digestkit.digest.interfaces import DigestAlgorithm
from digestkit.utils.bytes import MASK32, MASK64, read_block32be, read_block64be, rotr32, rotr64

K256: tuple[int, ...] = (
    0x428A2F98, 0x71374491, 0xB5C0FBCF, 0xE9B5DBA5, 0x3956C25B, 0x59F111F1, 0x923F82A4, 0xAB1C5ED5,
    0xD807AA98, 0x12835B01, 0x243185BE, 0x550C7DC3, 0x72BE5D74, 0x80DEB1FE, 0x9BDC06A7, 0xC19BF174,
    0xE49B69C1, 0xEFBE4786, 0x0FC19DC6, 0x240CA1CC, 0x2DE92C6F, 0x4A7484AA, 0x5CB0A9DC, 0x76F988DA,
    0x983E5152, 0xA831C66D, 0xB00327C8, 0xBF597FC7, 0xC6E00BF3, 0xD5A79147, 0x06CA6351, 0x14292967,
    0x27B70A85, 0x2E1B2138, 0x4D2C6DFC, 0x53380D13, 0x650A7354, 0x766A0ABB, 0x81C2C92E, 0x92722C85,
    0xA2BFE8A1, 0xA81A664B, 0xC24B8B70, 0xC76C51A3, 0xD192E819, 0xD6990624, 0xF40E3585, 0x106AA070,
    0x19A4C116, 0x1E376C08, 0x2748774C, 0x34B0BCB5, 0x391C0CB3, 0x4ED8AA4A, 0x5B9CCA4F, 0x682E6FF3,
    0x748F82EE, 0x78A5636F, 0x84C87814, 0x8CC70208, 0x90BEFFFA, 0xA4506CEB, 0xBEF9A3F7, 0xC67178F2,
)

K512: tuple[int, ...] = (
    0x428A2F98D728AE22, 0x7137449123EF65CD, 0xB5C0FBCFEC4D3B2F, 0xE9B5DBA58189DBBC,
    0x3956C25BF348B538, 0x59F111F1B605D019, 0x923F82A4AF194F9B, 0xAB1C5ED5DA6D8118,
    0xD807AA98A3030242, 0x12835B0145706FBE, 0x243185BE4EE4B28C, 0x550C7DC3D5FFB4E2,
    0x72BE5D74F27B896F, 0x80DEB1FE3B1696B1, 0x9BDC06A725C71235, 0xC19BF174CF692694,
    0xE49B69C19EF14AD2, 0xEFBE4786384F25E3, 0x0FC19DC68B8CD5B5, 0x240CA1CC77AC9C65,
    0x2DE92C6F592B0275, 0x4A7484AA6EA6E483, 0x5CB0A9DCBD41FBD4, 0x76F988DA831153B5,
    0x983E5152EE66DFAB, 0xA831C66D2DB43210, 0xB00327C898FB213F, 0xBF597FC7BEEF0EE4,
    0xC6E00BF33DA88FC2, 0xD5A79147930AA725, 0x06CA6351E003826F, 0x142929670A0E6E70,
    0x27B70A8546D22FFC, 0x2E1B21385C26C926, 0x4D2C6DFC5AC42AED, 0x53380D139D95B3DF,
    0x650A73548BAF63DE, 0x766A0ABB3C77B2A8, 0x81C2C92E47EDAEE6, 0x92722C851482353B,
    0xA2BFE8A14CF10364, 0xA81A664BBC423001, 0xC24B8B70D0F89791, 0xC76C51A30654BE30,
    0xD192E819D6EF5218, 0xD69906245565A910, 0xF40E35855771202A, 0x106AA07032BBD1B8,
    0x19A4C116B8D2D0C8, 0x1E376C085141AB53, 0x2748774CDF8EEB99, 0x34B0BCB5E19B48A8,
    0x391C0CB3C5C95A63, 0x4ED8AA4AE3418ACB, 0x5B9CCA4F7763E373, 0x682E6FF3D6B2B8A3,
    0x748F82EE5DEFB2FC, 0x78A5636F43172F60, 0x84C87814A1F0AB72, 0x8CC702081A6439EC,
    0x90BEFFFA23631E28, 0xA4506CEBDE82BDE9, 0xBEF9A3F7B2C67915, 0xC67178F2E372532B,
    0xCA273ECEEA26619C, 0xD186B8C721C0C207, 0xEADA7DD6CDE0EB1E, 0xF57D4F7FEE6ED178,
    0x06F067AA72176FBA, 0x0A637DC5A2C898A6, 0x113F9804BEF90DAE, 0x1B710B35131C471B,
    0x28DB77F523047D84, 0x32CAAB7B40C72493, 0x3C9EBE0A15C9BEBC, 0x431D67C49C100D4C,
    0x4CC5D4BECB3E42B6, 0x597F299CFC657E2A, 0x5FCB6FAB3AD6FAEC, 0x6C44198C4A475817,
)

IV224: tuple[int, ...] = (
    0xC1059ED8, 0x367CD507, 0x3070DD17, 0xF70E5939,
    0xFFC00B31, 0x68581511, 0x64F98FA7, 0xBEFA4FA4,
)

IV256: tuple[int, ...] = (
    0x6A09E667, 0xBB67AE85, 0x3C6EF372, 0xA54FF53A,
    0x510E527F, 0x9B05688C, 0x1F83D9AB, 0x5BE0CD19,
)

IV384: tuple[int, ...] = (
    0xCBBB9D5DC1059ED8, 0x629A292A367CD507, 0x9159015A3070DD17, 0x152FECD8F70E5939,
    0x67332667FFC00B31, 0x8EB44A8768581511, 0xDB0C2E0D64F98FA7, 0x47B5481DBEFA4FA4,
)

IV512: tuple[int, ...] = (
    0x6A09E667F3BCC908, 0xBB67AE8584CAA73B, 0x3C6EF372FE94F82B, 0xA54FF53A5F1D36F1,
    0x510E527FADE682D1, 0x9B05688C2B3E6C1F, 0x1F83D9ABFB41BD6B, 0x5BE0CD19137E2179,
)

IV512_224: tuple[int, ...] = (
    0x8C3D37C819544DA2, 0x73E1996689DCD4D6, 0x1DFAB7AE32FF9C82, 0x679DD514582F9FCF,
    0x0F6D2B697BD44DA8, 0x77E36F7304C48942, 0x3F9D85A86A1D36C8, 0x1112E6AD91D692A1,
)

IV512_256: tuple[int, ...] = (
    0x22312194FC2BF72C, 0x9F555FA3C84C64C2, 0x2393B86B6F53B151, 0x963877195940EABD,
    0x96283EE2A88EFFE3, 0xBE5E1E2553863992, 0x2B0199FC2C85B8AA, 0x0EB72DDC81C52CA2,
)


# ── 256-bit family ──────────────────────────────────────────────────────────


def compress256(block: bytes | bytearray | memoryview, state: list[int]) -> list[int]:
    """
    Run the SHA-256 compression function over one 64-byte block.

    Args:
        block: Exactly 64 bytes of message.
        state: Eight 32-bit chaining words.

    Returns:
        The eight updated chaining words (a new list; `state` is not touched).
    """
    w = read_block32be(block)
    for t in range(16, 64):
        x = w[t - 15]
        s0 = rotr32(x, 7) ^ rotr32(x, 18) ^ (x >> 3)
        x = w[t - 2]
        s1 = rotr32(x, 17) ^ rotr32(x, 19) ^ (x >> 10)
        w.append((s1 + w[t - 7] + s0 + w[t - 16]) & MASK32)

    a, b, c, d, e, f, g, h = state

    for t in range(64):
        big_s1 = rotr32(e, 6) ^ rotr32(e, 11) ^ rotr32(e, 25)
        ch = (e & f) ^ (~e & g)
        t1 = (h + big_s1 + ch + K256[t] + w[t]) & MASK32
        big_s0 = rotr32(a, 2) ^ rotr32(a, 13) ^ rotr32(a, 22)
        maj = (a & b) ^ (a & c) ^ (b & c)
        t2 = (big_s0 + maj) & MASK32

        h = g
        g = f
        f = e
        e = (d + t1) & MASK32
        d = c
        c = b
        b = a
        a = (t1 + t2) & MASK32

    return [(s + v) & MASK32 for s, v in zip(state, (a, b, c, d, e, f, g, h))]


# ── 512-bit family ──────────────────────────────────────────────────────────


def compress512(block: bytes | bytearray | memoryview, state: list[int]) -> list[int]:
    """
    Run the SHA-512 compression function over one 128-byte block.

    Args:
        block: Exactly 128 bytes of message.
        state: Eight 64-bit chaining words.

    Returns:
        The eight updated chaining words.
    """
    w = read_block64be(block)
    for t in range(16, 80):
        x = w[t - 15]
        s0 = rotr64(x, 1) ^ rotr64(x, 8) ^ (x >> 7)
        x = w[t - 2]
        s1 = rotr64(x, 19) ^ rotr64(x, 61) ^ (x >> 6)
        w.append((s1 + w[t - 7] + s0 + w[t - 16]) & MASK64)

    a, b, c, d, e, f, g, h = state

    for t in range(80):
        big_s1 = rotr64(e, 14) ^ rotr64(e, 18) ^ rotr64(e, 41)
        ch = (e & f) ^ (~e & g)
        t1 = (h + big_s1 + ch + K512[t] + w[t]) & MASK64
        big_s0 = rotr64(a, 28) ^ rotr64(a, 34) ^ rotr64(a, 39)
        maj = (a & b) ^ (a & c) ^ (b & c)
        t2 = (big_s0 + maj) & MASK64

        h = g
        g = f
        f = e
        e = (d + t1) & MASK64
        d = c
        c = b
        b = a
        a = (t1 + t2) & MASK64

    return [(s + v) & MASK64 for s, v in zip(state, (a, b, c, d, e, f, g, h))]


# ── Algorithms ──────────────────────────────────────────────────────────────


class _Sha2(DigestAlgorithm):
    """
    Glue between BlockBuffer and a SHA-2 variant.

    Subclasses set the class attributes below; nothing else varies across
    the family. `_length_size` is the width of the trailing bit-length field
    and `_word_format` the struct code used to serialize the state.
    """

    _compress = staticmethod(compress256)
    _iv: tuple[int, ...] = IV256
    _length_size: int = 8
    _word_format: str = "I"

    def __init__(self) -> None:
        self._finalized = False
        self._buffer = BlockBuffer(self.block_size, self._compress, list(self._iv))

    def _absorb(self, data: bytes | bytearray | memoryview) -> None:
        self._buffer.absorb(data)

    def _finalize(self) -> bytes:
        self._buffer.pad(self._length_size)
        state = self._buffer.state
        raw = struct.pack(f">8{self._word_format}", *state)
        return raw[: self.digest_size]

    def _copy(self) -> "_Sha2":
        clone = type(self).__new__(type(self))
        clone._finalized = False
        clone._buffer = self._buffer.copy()
        return clone


class Sha256(_Sha2):
    name = "sha256"
    block_size = 64
    digest_size = 32
    _iv = IV256


class Sha224(_Sha2):
    name = "sha224"
    block_size = 64
    digest_size = 28
    _iv = IV224


class _Sha512Family(_Sha2):
    _compress = staticmethod(compress512)
    _length_size = 16
    _word_format = "Q"
    block_size = 128


class Sha512(_Sha512Family):
    name = "sha512"
    digest_size = 64
    _iv = IV512


class Sha384(_Sha512Family):
    name = "sha384"
    digest_size = 48
    _iv = IV384


class Sha512_224(_Sha512Family):
    # 28 bytes = three full words plus the high (big-endian first) half of
    # the fourth, which is exactly a prefix of the serialized state.
    name = "sha512_224"
    digest_size = 28
    _iv = IV512_224


class Sha512_256(_Sha512Family):
    name = "sha512_256"
    digest_size = 32
    _iv = IV512_256


SHA2_ALGORITHMS: tuple[type[DigestAlgorithm], ...] = (
    Sha224,
    Sha256,
    Sha384,
    Sha512,
    Sha512_224,
    Sha512_256,
)

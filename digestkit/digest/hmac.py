# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
HMAC (RFC 2104) over any DigestAlgorithm.

    HMAC(K, m) = H((K' ^ opad) || H((K' ^ ipad) || m))

K' is the key hashed down to digest size when it is longer than one block,
then zero-padded to a full block. The inner and outer instances absorb
their pad block at construction time, so after that the context behaves
like any other streaming digest: absorb() feeds the inner hash, finalize()
folds the inner digest into the outer one.

Because Hmac is itself a DigestAlgorithm it can be handed to hash_append,
the checksum tools, or another Hmac, with no special casing anywhere.
"""

import hmac as _stdlib_hmac
from collections.abc import Callable

from digestkit.digest.interfaces import DigestAlgorithm
from digestkit.digest.sha2 import Sha224, Sha256, Sha384, Sha512, Sha512_224, Sha512_256
from digestkit.utils.bytes import MASK64, write64le

IPAD = 0x36
OPAD = 0x5C

KeyMaterial = bytes | bytearray | memoryview | int | None


def _key_bytes(key: KeyMaterial) -> bytes:
    """
    Turn the accepted key forms into raw key bytes.

    An int is a 64-bit seed: 0 means "no key", anything else is used as
    its 8-byte little-endian encoding.
    """
    if key is None:
        return b""
    if isinstance(key, bool):
        raise TypeError("HMAC key must be bytes, an int seed, or None, not bool")
    if isinstance(key, int):
        if key < 0 or key > MASK64:
            raise ValueError(f"HMAC seed must fit in 64 bits, got {key}")
        return b"" if key == 0 else write64le(key)
    return bytes(key)


class Hmac(DigestAlgorithm):
    """
    Keyed MAC wrapping a digest algorithm factory.

    Args:
        factory: Zero-argument callable producing a fresh inner algorithm,
                 normally the algorithm class itself (e.g. Sha256).
        key: Raw key bytes, a 64-bit integer seed, or None for the empty key.
    """

    def __init__(self, factory: Callable[[], DigestAlgorithm], key: KeyMaterial = None) -> None:
        self._finalized = False
        self._factory = factory

        self._inner = factory()
        self._outer = factory()

        self.name = f"hmac-{self._inner.name}"
        self.block_size = self._inner.block_size
        self.digest_size = self._inner.digest_size

        self._init_pads(_key_bytes(key))

    def _init_pads(self, key: bytes) -> None:
        block_size = self.block_size

        if len(key) > block_size:
            h = self._factory()
            h.absorb(key)
            key = h.finalize()[:block_size]

        padded = key.ljust(block_size, b"\x00")

        self._inner.absorb(bytes(b ^ IPAD for b in padded))
        self._outer.absorb(bytes(b ^ OPAD for b in padded))

    def _absorb(self, data: bytes | bytearray | memoryview) -> None:
        self._inner.absorb(data)

    def _finalize(self) -> bytes:
        self._outer.absorb(self._inner.finalize())
        return self._outer.finalize()

    def _copy(self) -> "Hmac":
        clone = type(self).__new__(type(self))
        clone._finalized = False
        clone._factory = self._factory
        clone._inner = self._inner.copy()
        clone._outer = self._outer.copy()
        clone.name = self.name
        clone.block_size = self.block_size
        clone.digest_size = self.digest_size
        return clone


def compare_digest(a: bytes, b: bytes) -> bool:
    """Constant-time comparison for MAC verification."""
    return _stdlib_hmac.compare_digest(a, b)


class HmacSha224(Hmac):
    def __init__(self, key: KeyMaterial = None) -> None:
        super().__init__(Sha224, key)


class HmacSha256(Hmac):
    def __init__(self, key: KeyMaterial = None) -> None:
        super().__init__(Sha256, key)


class HmacSha384(Hmac):
    def __init__(self, key: KeyMaterial = None) -> None:
        super().__init__(Sha384, key)


class HmacSha512(Hmac):
    def __init__(self, key: KeyMaterial = None) -> None:
        super().__init__(Sha512, key)


class HmacSha512_224(Hmac):
    def __init__(self, key: KeyMaterial = None) -> None:
        super().__init__(Sha512_224, key)


class HmacSha512_256(Hmac):
    def __init__(self, key: KeyMaterial = None) -> None:
        super().__init__(Sha512_256, key)

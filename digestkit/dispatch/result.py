# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
One-shot helpers on top of hash_append.

Most callers just want "the digest of this value". These wrap the
construct / hash_append / finalize dance and turn the digest into the
shape they need: raw bytes, a hex fingerprint, or an integer suitable for
__hash__ or bucket selection.
"""

from typing import Any

from digestkit.digest.hmac import KeyMaterial
from digestkit.digest.registry import new_algorithm
from digestkit.dispatch.append import hash_append
from digestkit.dispatch.flavor import DEFAULT_FLAVOR, Flavor


def integral_result(digest: bytes, bits: int = 64) -> int:
    """
    Read the leading bytes of a digest as a little-endian unsigned integer.

    Args:
        digest: A finished digest.
        bits: Width of the result, a multiple of 8 no larger than the digest.

    Raises:
        ValueError: If `bits` is not a positive multiple of 8 that fits the digest.
    """
    if bits <= 0 or bits % 8 != 0 or bits // 8 > len(digest):
        raise ValueError(
            f"bits must be a positive multiple of 8 up to {len(digest) * 8}, got {bits}"
        )
    return int.from_bytes(digest[: bits // 8], "little")


def digest_value(
    value: Any,
    algorithm: str = "sha256",
    flavor: Flavor = DEFAULT_FLAVOR,
    key: KeyMaterial = None,
) -> bytes:
    """Hash one value with a fresh algorithm instance and return the digest."""
    h = new_algorithm(algorithm, key)
    hash_append(h, flavor, value)
    return h.finalize()


def fingerprint(
    value: Any,
    algorithm: str = "sha256",
    flavor: Flavor = DEFAULT_FLAVOR,
    key: KeyMaterial = None,
) -> str:
    """Lowercase hex digest of a value."""
    return digest_value(value, algorithm, flavor, key).hex()


def hash_value(
    value: Any,
    algorithm: str = "sha256",
    flavor: Flavor = DEFAULT_FLAVOR,
    key: KeyMaterial = None,
    bits: int = 64,
) -> int:
    """
    Integer hash of a value, stable across processes.

    Unlike the built-in hash(), the result does not change between runs or
    with PYTHONHASHSEED, which makes it usable for sharding and on-disk
    indexes.
    """
    return integral_result(digest_value(value, algorithm, flavor, key), bits)

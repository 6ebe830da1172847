# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
File and buffer digests on top of the digestkit engine.

Files are streamed through absorb() in 64 KiB chunks, so memory use stays
flat no matter how large the file is. Any registered algorithm works, and
passing a key turns the digest into an HMAC.
"""

from pathlib import Path
from typing import BinaryIO

from digestkit.digest.hmac import KeyMaterial, compare_digest
from digestkit.digest.registry import new_algorithm

DEFAULT_ALGORITHM = "sha256"
HASH_BUFFER_SIZE = 65536


def compute_digest_stream(
    stream: BinaryIO,
    algorithm: str = DEFAULT_ALGORITHM,
    key: KeyMaterial = None,
) -> str:
    """
    Hex digest of everything readable from a binary stream.

    Args:
        stream: An open binary file object (a file, stdin.buffer, BytesIO).
        algorithm: Registered algorithm name.
        key: Optional HMAC key.

    Returns:
        Lowercase hex string of the digest.
    """
    hasher = new_algorithm(algorithm, key)
    while True:
        chunk = stream.read(HASH_BUFFER_SIZE)
        if not chunk:
            break
        hasher.absorb(chunk)
    return hasher.finalize().hex()


def compute_digest(
    file_path: Path,
    algorithm: str = DEFAULT_ALGORITHM,
    key: KeyMaterial = None,
) -> str:
    """
    Hex digest of a file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        OSError: If the file can't be read.
    """
    with open(file_path, "rb") as f:
        return compute_digest_stream(f, algorithm, key)


def compute_digest_bytes(
    data: bytes,
    algorithm: str = DEFAULT_ALGORITHM,
    key: KeyMaterial = None,
) -> str:
    """Hex digest of raw bytes."""
    hasher = new_algorithm(algorithm, key)
    hasher.absorb(data)
    return hasher.finalize().hex()


def compute_sha256(file_path: Path) -> str:
    """SHA-256 hex digest of a file."""
    return compute_digest(file_path, "sha256")


def verify_checksum(
    file_path: Path,
    expected_hash: str,
    algorithm: str = DEFAULT_ALGORITHM,
    key: KeyMaterial = None,
) -> bool:
    """
    Check whether a file's digest matches the expected hex string.

    The comparison is case-insensitive and constant-time.
    """
    actual_hash = compute_digest(file_path, algorithm, key)
    return compare_digest(actual_hash.encode("ascii"), expected_hash.lower().encode("ascii"))

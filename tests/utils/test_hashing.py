# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the file and buffer digest helpers.

hashlib and the stdlib hmac module are the reference: whatever digestkit
computes for a file must be what any other SHA-2 tool would print.
"""

import hashlib
import hmac
import io
from pathlib import Path

import pytest

from digestkit.utils.hashing import (
    HASH_BUFFER_SIZE,
    compute_digest,
    compute_digest_bytes,
    compute_digest_stream,
    compute_sha256,
    verify_checksum,
)


class TestDigestDeterminism:
    def test_same_bytes_produce_same_hash(self) -> None:
        data = b"deterministic input"
        assert compute_digest_bytes(data) == compute_digest_bytes(data)

    def test_different_bytes_produce_different_hash(self) -> None:
        assert compute_digest_bytes(b"input_a") != compute_digest_bytes(b"input_b")

    def test_empty_bytes_has_known_hash(self) -> None:
        expected = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        assert compute_digest_bytes(b"") == expected

    @pytest.mark.parametrize("algorithm", ["sha224", "sha256", "sha384", "sha512"])
    def test_matches_hashlib(self, algorithm: str) -> None:
        data = b"the quick brown fox" * 37
        assert compute_digest_bytes(data, algorithm) == hashlib.new(algorithm, data).hexdigest()

    def test_key_produces_hmac(self) -> None:
        key = b"secret"
        data = b"message"
        expected = hmac.new(key, data, hashlib.sha256).hexdigest()
        assert compute_digest_bytes(data, "sha256", key) == expected


class TestFileHashing:
    def test_file_hash_matches_bytes_hash(self, tmp_path: Path) -> None:
        content = b"some file content for hashing"
        test_file = tmp_path / "test.bin"
        test_file.write_bytes(content)

        assert compute_sha256(test_file) == compute_digest_bytes(content)

    def test_file_larger_than_read_buffer(self, tmp_path: Path) -> None:
        content = bytes(range(256)) * (HASH_BUFFER_SIZE // 256 + 3)
        test_file = tmp_path / "big.bin"
        test_file.write_bytes(content)

        assert compute_digest(test_file, "sha512") == hashlib.sha512(content).hexdigest()

    def test_stream_hashing(self) -> None:
        stream = io.BytesIO(b"streamed")
        assert compute_digest_stream(stream) == hashlib.sha256(b"streamed").hexdigest()

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            compute_digest(tmp_path / "nope.bin")


class TestVerifyChecksum:
    def test_correct_checksum_passes(self, tmp_path: Path) -> None:
        test_file = tmp_path / "verified.txt"
        test_file.write_bytes(b"verify me")
        expected = compute_sha256(test_file)

        assert verify_checksum(test_file, expected) is True

    def test_uppercase_checksum_passes(self, tmp_path: Path) -> None:
        test_file = tmp_path / "upper.txt"
        test_file.write_bytes(b"verify me")
        expected = compute_sha256(test_file).upper()

        assert verify_checksum(test_file, expected) is True

    def test_wrong_checksum_fails(self, tmp_path: Path) -> None:
        test_file = tmp_path / "tampered.txt"
        test_file.write_bytes(b"original content")

        assert verify_checksum(test_file, "0" * 64) is False

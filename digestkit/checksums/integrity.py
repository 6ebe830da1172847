# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Checksum file generation and verification.

Checksum file format (checksum.txt), the same layout GNU coreutils'
sha256sum/sha512sum read and write:

    <hexdigest>  <filename>
    <hexdigest>  <filename>

One line per file, two spaces between digest and name, sorted by filename.
The digest length must match the algorithm in use; a SHA-256 list checked
with --algorithm sha512 is reported as malformed rather than as a wall of
mismatches.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from digestkit.digest.hmac import KeyMaterial, compare_digest
from digestkit.digest.registry import get_algorithm
from digestkit.utils.filesystem import atomic_write
from digestkit.utils.hashing import DEFAULT_ALGORITHM, compute_digest

_logger = logging.getLogger(__name__)

CHECKSUM_FILENAME = "checksum.txt"

# Never checksummed: the checksum file itself
_CHECKSUM_EXCLUDED_FILES: frozenset[str] = frozenset({CHECKSUM_FILENAME})


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of a checksum verification run."""

    is_valid: bool
    checked_count: int
    mismatches: list[str] = field(default_factory=list)
    missing_files: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def _hex_length(algorithm: str) -> int:
    return get_algorithm(algorithm)().digest_size * 2


def generate_checksums(
    directory: Path,
    algorithm: str = DEFAULT_ALGORITHM,
    key: KeyMaterial = None,
) -> dict[str, str]:
    """
    Compute digests for every regular file directly inside a directory.

    Skips checksum.txt itself and temp files left by atomic writes.

    Args:
        directory: Directory to scan (not recursive).
        algorithm: Registered algorithm name.
        key: Optional HMAC key.

    Returns:
        Dict of {filename: hexdigest}, ordered by filename.

    Raises:
        FileNotFoundError: If directory doesn't exist.
    """
    if not directory.is_dir():
        raise FileNotFoundError(f"Directory not found: {directory}")

    checksums: dict[str, str] = {}
    for file_path in sorted(directory.iterdir()):
        if not file_path.is_file():
            continue
        if file_path.name in _CHECKSUM_EXCLUDED_FILES or file_path.name.startswith(".digestkit_tmp_"):
            continue
        digest = compute_digest(file_path, algorithm, key)
        checksums[file_path.name] = digest
        _logger.debug(
            "Computed checksum",
            extra={"file": file_path.name, "algorithm": algorithm, "digest": digest[:16] + "..."},
        )

    _logger.info(
        "Checksums generated",
        extra={"file_count": len(checksums), "directory": str(directory), "algorithm": algorithm},
    )
    return checksums


def write_checksum_file(directory: Path, checksums: dict[str, str]) -> Path:
    """
    Atomically write checksums to checksum.txt in the directory.

    Returns:
        Path to the written checksum.txt file.
    """
    checksum_path = directory / CHECKSUM_FILENAME
    lines = [f"{checksums[filename]}  {filename}" for filename in sorted(checksums)]

    atomic_write(checksum_path, "\n".join(lines) + "\n")

    _logger.info(
        "Checksum file written",
        extra={"path": str(checksum_path), "entries": len(lines)},
    )
    return checksum_path


def parse_checksum_file(checksum_path: Path, algorithm: str = DEFAULT_ALGORITHM) -> dict[str, str]:
    """
    Parse a checksum file into a dict of {filename: hexdigest}.

    Raises:
        FileNotFoundError: If file doesn't exist.
        ValueError: If a line is malformed or a digest has the wrong length.
    """
    if not checksum_path.is_file():
        raise FileNotFoundError(f"Checksum file not found: {checksum_path}")

    expected_length = _hex_length(algorithm)
    checksums: dict[str, str] = {}
    content = checksum_path.read_text(encoding="utf-8")

    for line_num, line in enumerate(content.splitlines(), start=1):
        line = line.strip()
        if not line:
            continue
        parts = line.split("  ", maxsplit=1)
        if len(parts) != 2:
            raise ValueError(
                f"Invalid checksum format at line {line_num}: expected "
                f"'<digest>  <filename>', got: {line!r}"
            )
        digest, filename = parts
        if len(digest) != expected_length:
            raise ValueError(
                f"Invalid {algorithm} digest length at line {line_num}: "
                f"expected {expected_length} chars, got {len(digest)}"
            )
        checksums[filename] = digest.lower()

    return checksums


def verify_checksums(
    directory: Path,
    algorithm: str = DEFAULT_ALGORITHM,
    key: KeyMaterial = None,
) -> VerificationResult:
    """
    Verify every entry of checksum.txt against the files in a directory.

    Reports all mismatches and missing files, not just the first.
    """
    checksum_path = directory / CHECKSUM_FILENAME
    if not checksum_path.is_file():
        return VerificationResult(
            is_valid=False,
            checked_count=0,
            errors=[f"{CHECKSUM_FILENAME} not found in {directory}"],
        )

    try:
        expected = parse_checksum_file(checksum_path, algorithm)
    except ValueError as err:
        return VerificationResult(
            is_valid=False,
            checked_count=0,
            errors=[f"Failed to parse {CHECKSUM_FILENAME}: {err}"],
        )

    mismatches: list[str] = []
    missing_files: list[str] = []
    checked = 0

    for filename, expected_hash in sorted(expected.items()):
        file_path = directory / filename
        if not file_path.is_file():
            missing_files.append(filename)
            _logger.error("File missing during verification", extra={"file": filename})
            continue

        actual_hash = compute_digest(file_path, algorithm, key)
        checked += 1

        if not compare_digest(actual_hash.encode("ascii"), expected_hash.encode("ascii")):
            mismatches.append(filename)
            _logger.error(
                "Checksum mismatch",
                extra={
                    "file": filename,
                    "expected": expected_hash[:16] + "...",
                    "actual": actual_hash[:16] + "...",
                },
            )
        else:
            _logger.debug("Checksum verified", extra={"file": filename})

    is_valid = not mismatches and not missing_files

    if is_valid:
        _logger.info("All checksums verified", extra={"checked_count": checked})
    else:
        _logger.error(
            "Checksum verification failed",
            extra={"mismatches": len(mismatches), "missing": len(missing_files)},
        )

    return VerificationResult(
        is_valid=is_valid,
        checked_count=checked,
        mismatches=mismatches,
        missing_files=missing_files,
    )

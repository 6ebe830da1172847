# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Safe filesystem writes for digestkit.

Checksum files are written atomically: a temp file in the target directory
is filled and then renamed over the target. A crash mid-write leaves the
old checksum file intact instead of a truncated one that would fail every
later verification.
"""

import tempfile
from pathlib import Path


def atomic_write(target_path: Path, content: str, encoding: str = "utf-8") -> None:
    """
    Write content to a file atomically.

    Args:
        target_path: Where the final file should end up.
        content: The string content to write.
        encoding: Text encoding to use.

    Raises:
        OSError: If the write or rename fails.
    """
    target_path.parent.mkdir(parents=True, exist_ok=True)

    temp_fd = tempfile.NamedTemporaryFile(
        mode="w",
        encoding=encoding,
        dir=str(target_path.parent),
        prefix=".digestkit_tmp_",
        suffix=".tmp",
        delete=False,
    )
    temp_path = Path(temp_fd.name)

    try:
        temp_fd.write(content)
        temp_fd.flush()
        temp_fd.close()
        temp_path.replace(target_path)
    except BaseException:
        temp_fd.close()
        if temp_path.exists():
            temp_path.unlink()
        raise

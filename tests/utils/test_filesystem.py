# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for atomic_write.

The target file either has the full new content or the old content. There
should never be a partially written file or a stray temp file.
"""

from pathlib import Path

from digestkit.utils.filesystem import atomic_write


class TestAtomicWrite:
    def test_writes_content_successfully(self, tmp_path: Path) -> None:
        target = tmp_path / "output.txt"
        atomic_write(target, "hello world")

        assert target.read_text(encoding="utf-8") == "hello world"

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "deep" / "output.txt"
        atomic_write(target, "nested content")

        assert target.read_text(encoding="utf-8") == "nested content"

    def test_overwrites_existing_file(self, tmp_path: Path) -> None:
        target = tmp_path / "overwrite.txt"
        atomic_write(target, "first version")
        atomic_write(target, "second version")

        assert target.read_text(encoding="utf-8") == "second version"

    def test_no_leftover_temp_files_on_success(self, tmp_path: Path) -> None:
        atomic_write(tmp_path / "clean.txt", "clean write")

        assert list(tmp_path.glob(".digestkit_tmp_*")) == []

# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Environment checks for digestkit.

digestkit output must be identical on every machine, so the `info` command
and the bootstrap log record what the host looks like, including its
native byte order, which is the one thing the "native" flavor depends on.
"""

import platform
import sys
from typing import NamedTuple

MINIMUM_PYTHON_MAJOR = 3
MINIMUM_PYTHON_MINOR = 11


class SystemInfo(NamedTuple):
    """Snapshot of the current system environment."""

    python_version: str
    platform: str
    architecture: str
    byte_order: str


def get_python_version() -> tuple[int, int, int]:
    """Return the current Python version as a (major, minor, micro) tuple."""
    return sys.version_info[:3]


def check_minimum_python() -> None:
    """
    Verify we're running Python 3.11+.

    Raises:
        RuntimeError: If Python version is below 3.11.
    """
    major, minor, _ = get_python_version()
    if major < MINIMUM_PYTHON_MAJOR or (
        major == MINIMUM_PYTHON_MAJOR and minor < MINIMUM_PYTHON_MINOR
    ):
        raise RuntimeError(
            f"digestkit requires Python >= {MINIMUM_PYTHON_MAJOR}.{MINIMUM_PYTHON_MINOR}, "
            f"but you're running {major}.{minor}. Please upgrade."
        )


def get_system_info() -> SystemInfo:
    """Collect basic system information for logging and diagnostics."""
    return SystemInfo(
        python_version=platform.python_version(),
        platform=platform.system(),
        architecture=platform.machine(),
        byte_order=sys.byteorder,
    )

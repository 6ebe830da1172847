# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Runtime bootstrap for digestkit.

Runs once at the start of every CLI command that has a config:
  1. Validate the environment (Python version)
  2. Attach the JSON handler to the package logger at the configured level

Library modules log through plain logging.getLogger(__name__) children of
"digestkit", so configuring the package logger here is what makes the
checksum and self-test logs visible.
"""

from pathlib import Path

from digestkit.config.schema import GlobalConfig
from digestkit.logging.logger import get_logger
from digestkit.runtime.environment import check_minimum_python, get_system_info

PACKAGE_LOGGER = "digestkit"


def bootstrap(config: GlobalConfig) -> None:
    """
    Put the process into a known state before any hashing command runs.

    Args:
        config: The validated global configuration.
    """
    check_minimum_python()

    log_file = None
    if config.log_file is not None:
        log_file = Path(config.log_file)

    logger = get_logger(PACKAGE_LOGGER, log_level=config.log_level, log_file=log_file)

    system_info = get_system_info()
    logger.debug(
        "digestkit bootstrap complete",
        extra={
            "config_version": config.config_version,
            "python_version": system_info.python_version,
            "platform": system_info.platform,
            "architecture": system_info.architecture,
            "byte_order": system_info.byte_order,
        },
    )

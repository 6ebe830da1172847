# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Runtime smoke tests: environment detection and bootstrap.
"""

import logging
import sys

import pytest

from digestkit.config.schema import GlobalConfig
from digestkit.runtime import environment
from digestkit.runtime.bootstrap import PACKAGE_LOGGER, bootstrap
from digestkit.runtime.environment import check_minimum_python, get_system_info


@pytest.fixture(autouse=True)
def _reset_package_logger() -> None:
    yield  # type: ignore[misc]
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


class TestEnvironment:
    def test_system_info_reports_byte_order(self) -> None:
        info = get_system_info()
        assert info.byte_order == sys.byteorder
        assert info.python_version

    def test_current_python_passes(self) -> None:
        check_minimum_python()

    def test_old_python_is_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(environment, "get_python_version", lambda: (3, 9, 0))
        with pytest.raises(RuntimeError, match="3.11"):
            check_minimum_python()


class TestBootstrap:
    def test_configures_package_logger(self) -> None:
        bootstrap(GlobalConfig(config_version="1.0.0", log_level="WARNING"))

        logger = logging.getLogger(PACKAGE_LOGGER)
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_log_file_is_created(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        log_file = tmp_path / "digestkit.log"
        bootstrap(GlobalConfig(config_version="1.0.0", log_level="DEBUG", log_file=str(log_file)))

        assert log_file.is_file()
        assert "bootstrap complete" in log_file.read_text(encoding="utf-8")

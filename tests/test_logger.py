"""Tests for loguru setup."""

from __future__ import annotations

from pathlib import Path

import pytest
from loguru import logger

import android_location
from android_location.config import LocationConfig
from android_location.core.locator import AndroidLocator
from android_location.logger import LOG_FILE_NAME, setup_logger, teardown_logger


@pytest.fixture(autouse=True)
def _restore_logging():
    yield
    teardown_logger()


@pytest.fixture
def locator(tmp_path: Path) -> AndroidLocator:
    home = tmp_path / "user"
    home.mkdir()
    return AndroidLocator(LocationConfig(properties={"user.home": str(home)}, environ={}))


class TestSetupLogger:
    def test_exported_from_package(self) -> None:
        assert android_location.setup_logger is setup_logger

    def test_file_sink_receives_package_records(self, tmp_path: Path, locator: AndroidLocator) -> None:
        log_dir = tmp_path / "logs"
        setup_logger(log_dir)
        locator.get_folder()

        content = (log_dir / LOG_FILE_NAME).read_text(encoding="utf-8")
        assert "Created Android preference folder" in content

    def test_file_sink_ignores_host_records(self, tmp_path: Path) -> None:
        log_dir = tmp_path / "logs"
        setup_logger(log_dir)
        logger.info("host application message")

        content = (log_dir / LOG_FILE_NAME).read_text(encoding="utf-8")
        assert "host application message" not in content

    def test_silent_after_teardown(self, tmp_path: Path, locator: AndroidLocator) -> None:
        messages: list[str] = []
        sink_id = logger.add(messages.append, level="DEBUG")
        try:
            setup_logger()
            teardown_logger()
            locator.get_folder()
        finally:
            logger.remove(sink_id)
        assert messages == []

    def test_console_only_creates_no_files(self, tmp_path: Path) -> None:
        setup_logger()
        assert not any(tmp_path.iterdir())

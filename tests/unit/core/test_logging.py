"""Tests for structured logging."""

import logging
from pathlib import Path

import pytest

from semvertag.core import logging as st_logging
from semvertag.core.logging import (
    LogConfig,
    StructuredLogger,
    configure_logging,
    get_logger,
)


@pytest.fixture(autouse=True)
def _restore_config():
    original = st_logging._ConfigHolder.get_config()
    yield
    st_logging._ConfigHolder.set_config(original)
    for structured in st_logging._loggers.values():
        structured.reconfigure(original)


class TestStructuredLogger:
    """Tests for StructuredLogger."""

    def test_format_without_fields(self) -> None:
        logger = StructuredLogger("semvertag.test.plain", LogConfig(console=False))
        assert logger._format_message("hello") == "hello"

    def test_format_with_fields(self) -> None:
        logger = StructuredLogger("semvertag.test.fields", LogConfig(console=False))
        assert (
            logger._format_message("Tag created", tag="v1.0.0", sha="abc")
            == "Tag created | tag=v1.0.0 | sha=abc"
        )

    def test_bind_and_unbind(self) -> None:
        logger = StructuredLogger("semvertag.test.bind", LogConfig(console=False))
        logger.bind(repository="octo/widgets")

        assert logger._format_message("x") == "x | repository=octo/widgets"

        logger.unbind("repository")
        assert logger._format_message("x") == "x"

    def test_level_applied(self) -> None:
        logger = StructuredLogger(
            "semvertag.test.level", LogConfig(level="WARNING", console=False)
        )
        assert logger.logger.level == logging.WARNING

    def test_file_output(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "run.log"
        logger = StructuredLogger(
            "semvertag.test.file", LogConfig(console=False, file_path=log_file)
        )

        logger.info("Created tag", tag="v1.2.0")
        for handler in logger.logger.handlers:
            handler.flush()

        assert "Created tag | tag=v1.2.0" in log_file.read_text(encoding="utf-8")


class TestFactory:
    """Tests for get_logger and configure_logging."""

    def test_loggers_are_cached(self) -> None:
        assert get_logger("semvertag.test.cached") is get_logger(
            "semvertag.test.cached"
        )

    def test_configure_updates_existing_loggers(self) -> None:
        logger = get_logger("semvertag.test.reconfigure")

        configure_logging(level="DEBUG", console=False)

        assert logger.logger.level == logging.DEBUG
        assert logger.logger.handlers == []

    def test_configure_sets_default_for_new_loggers(self) -> None:
        config = configure_logging(level="ERROR", console=False)

        assert st_logging._ConfigHolder.get_config() is config
        assert get_logger("semvertag.test.new").logger.level == logging.ERROR

"""Unit tests for logging configuration."""
from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from wallet_balances.logging_setup import HANDLER_NAME, LOG_FORMAT, configure_logging


def _own_handlers() -> list[logging.Handler]:
    return [h for h in logging.getLogger().handlers if h.get_name() == HANDLER_NAME]


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    level = root.level
    yield
    for handler in _own_handlers():
        root.removeHandler(handler)
    root.setLevel(level)


class TestConfigureLogging:
    def test_sets_info_level(self) -> None:
        configure_logging("INFO")
        assert logging.getLogger().level == logging.INFO

    def test_lowercase_level(self) -> None:
        configure_logging("warning")
        assert logging.getLogger().level == logging.WARNING

    def test_babel_kept_at_warning(self) -> None:
        configure_logging("DEBUG")
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("babel").level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self) -> None:
        configure_logging("VERBOSE")
        assert logging.getLogger().level == logging.INFO


class TestConsoleHandler:
    def test_installs_formatted_handler(self) -> None:
        configure_logging("INFO")
        handlers = _own_handlers()
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)
        assert handlers[0].formatter is not None
        assert handlers[0].formatter._fmt == LOG_FORMAT

    def test_repeated_calls_do_not_duplicate(self) -> None:
        configure_logging("INFO")
        configure_logging("DEBUG")
        assert len(_own_handlers()) == 1

    def test_format_renders_logger_name(self) -> None:
        configure_logging("INFO")
        record = logging.LogRecord(
            "wallet_balances.merger", logging.INFO, __file__, 1, "merged %d", (3,), None
        )
        line = _own_handlers()[0].format(record)
        assert "INFO" in line
        assert "wallet_balances.merger: merged 3" in line

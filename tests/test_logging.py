"""Tests for jsloc logger configuration."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from jsloc.logging import configure_logging, get_logger


@pytest.fixture(autouse=True)
def _reset_jsloc_logger():
    yield
    logger = logging.getLogger("jsloc")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_get_logger_nests_under_jsloc() -> None:
    assert get_logger("orchestrator").name == "jsloc.orchestrator"
    assert get_logger().name == "jsloc"


@pytest.mark.parametrize(
    ("verbose", "quiet", "level"),
    [
        (False, False, logging.INFO),
        (True, False, logging.DEBUG),
        (False, True, logging.WARNING),
        (True, True, logging.DEBUG),
    ],
)
def test_configure_logging_levels(verbose: bool, quiet: bool, level: int) -> None:
    logger = configure_logging(verbose=verbose, quiet=quiet)
    assert logger.level == level
    assert logger.propagate is False


def test_repeated_configuration_does_not_stack_handlers() -> None:
    configure_logging()
    logger = configure_logging()
    assert len(logger.handlers) == 1


def test_log_file_receives_records(tmp_path: Path) -> None:
    log_file = tmp_path / "jsloc.log"
    configure_logging(quiet=True, log_file=log_file)

    get_logger("orchestrator").warning("Skipping %s", "bad.js")
    get_logger("orchestrator").info("hidden")
    for handler in logging.getLogger("jsloc").handlers:
        handler.flush()

    content = log_file.read_text(encoding="utf-8")
    assert "WARNING jsloc.orchestrator: Skipping bad.js" in content
    assert "hidden" not in content

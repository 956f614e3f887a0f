"""Logger setup shared by the jsloc CLI and service."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "jsloc"
_CONSOLE_FORMAT = "[jsloc] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Child of the ``jsloc`` logger, e.g. ``jsloc.orchestrator``."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route jsloc records to stderr and, when given, to ``log_file``.

    Skipped files are reported at WARNING, so ``quiet`` still shows them.
    ``verbose`` wins over ``quiet``.
    """
    level = _resolve_level(verbose=verbose, quiet=quiet)
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # One console handler per process, however often main() runs.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    _attach(logger, logging.StreamHandler(), _CONSOLE_FORMAT, level)
    if log_file is not None:
        _attach(logger, logging.FileHandler(log_file, encoding="utf-8"), _FILE_FORMAT, level)

    return logger


def _attach(logger: logging.Logger, handler: logging.Handler, fmt: str, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)


def _resolve_level(*, verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


__all__ = ["configure_logging", "get_logger"]

"""Opt-in log output for the bridge's package logger.

Library modules only ever call ``logging.getLogger(__name__)``; loading the
script module never touches handlers. A host that wants the bridge's own
output calls ``configure_logging()`` once from its entry point. Handlers go
on the ``aws_script_bridge`` logger, never on the root logger.
"""

from __future__ import annotations

import logging
import sys
import threading
from pathlib import Path

from aws_script_bridge.config import Settings, load_settings

PACKAGE_LOGGER = "aws_script_bridge"

_FORMATTER = logging.Formatter(
    "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
)

_installed: list[logging.Handler] = []
_lock = threading.Lock()

_logger = logging.getLogger(__name__)


def _build_handlers(log_file: str | None) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        try:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(log_file))
        except OSError as exc:
            _logger.warning("Failed to open log file %s: %s", log_file, exc)
    for handler in handlers:
        handler.setFormatter(_FORMATTER)
    return handlers


def _detach(package_logger: logging.Logger) -> None:
    for handler in _installed:
        package_logger.removeHandler(handler)
        handler.close()
    _installed.clear()


def configure_logging(settings: Settings | None = None) -> logging.Logger:
    """Attach stderr (and optional file) handlers to the package logger.

    A repeated call replaces the handlers of the previous one. Records stop
    propagating to the root logger while these handlers are installed, so a
    host with its own root handlers does not see them twice.
    """
    settings = settings or load_settings()
    level = getattr(logging, settings.logging.level.upper(), logging.INFO)
    package_logger = logging.getLogger(PACKAGE_LOGGER)

    with _lock:
        _detach(package_logger)
        for handler in _build_handlers(settings.logging.file):
            package_logger.addHandler(handler)
            _installed.append(handler)
        package_logger.setLevel(level)
        package_logger.propagate = False
    return package_logger


def reset_logging() -> None:
    """Undo ``configure_logging``; the package logger propagates again."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    with _lock:
        _detach(package_logger)
        package_logger.setLevel(logging.NOTSET)
        package_logger.propagate = True

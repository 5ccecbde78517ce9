# swiftflow/log_manager.py
"""
Logging setup for SwiftFlow.

Every module logs to a child of the ``swiftflow`` logger
(``swiftflow.project``, ``swiftflow.runner``...), and only that root logger
gets handlers. Records are tagged with the short step name, so a verbose run
reads like::

    [DEBUG] 14:02:11 runner   | Running ['swift', 'run'] in /tmp/Hello

Console output is colored through `colorlog` when stdout is a TTY, or when
``SWIFTFLOW_FORCE_COLOR`` is truthy; ``SWIFTFLOW_FORCE_COLOR=0`` disables it.
A log file, when requested, always gets the plain format with a full date.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

import colorlog

__all__ = ["get_logger", "ROOT_LOGGER"]

ROOT_LOGGER = "swiftflow"

_CONSOLE_FMT = "[%(levelname)s] %(asctime)s %(step)-8s | %(message)s"
_CONSOLE_DATEFMT = "%H:%M:%S"
_FILE_FMT = "%(asctime)s %(levelname)-7s %(step)s: %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Warnings are the only records a normal run shows; keep them readable.
_STEP_COLORS = {
    "DEBUG": "thin_white",
    "INFO": "white",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}


class _StepFilter(logging.Filter):
    """Expose ``swiftflow.runner`` as ``%(step)s == "runner"``."""

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name.startswith(ROOT_LOGGER + "."):
            name = name[len(ROOT_LOGGER) + 1:]
        record.step = name
        return True


def _color_enabled() -> bool:
    forced = os.getenv("SWIFTFLOW_FORCE_COLOR")
    if forced is not None:
        return forced.strip().lower() in {"1", "true", "yes", "on"}
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler(stream=sys.stdout)
    if _color_enabled():
        handler.setFormatter(
            colorlog.ColoredFormatter(
                fmt="%(log_color)s" + _CONSOLE_FMT + "%(reset)s",
                datefmt=_CONSOLE_DATEFMT,
                log_colors=_STEP_COLORS,
            )
        )
    else:
        handler.setFormatter(logging.Formatter(_CONSOLE_FMT, _CONSOLE_DATEFMT))
    handler.addFilter(_StepFilter())
    handler._swiftflow_console = True  # type: ignore[attr-defined]
    return handler


def get_logger(
    name: str = ROOT_LOGGER,
    level: int = logging.WARNING,
    log_to_file: Optional[str] = None,
) -> logging.Logger:
    """Configure and return logger `name`.

    Repeated calls only adjust the level: the console handler is attached
    once, and a file handler once per absolute path.

    Raises
    ------
    OSError
        If `log_to_file` cannot be opened for appending.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    if not any(getattr(h, "_swiftflow_console", False) for h in logger.handlers):
        logger.addHandler(_console_handler())

    if log_to_file:
        path = os.path.abspath(log_to_file)
        if not any(getattr(h, "baseFilename", None) == path for h in logger.handlers):
            fhandler = logging.FileHandler(path, encoding="utf-8")
            fhandler.setFormatter(logging.Formatter(_FILE_FMT, _FILE_DATEFMT))
            fhandler.addFilter(_StepFilter())
            logger.addHandler(fhandler)

    return logger

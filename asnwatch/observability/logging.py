"""Logger factory shared by the API, the CLI and the deadline engine."""

from __future__ import annotations

import logging
import os
from typing import Final

_HANDLER_ATTACHED: bool = False
_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATEFMT: Final[str] = "%Y-%m-%d %H:%M:%S"


def _resolve_level(override: str | None = None) -> int:
    level_name = (override or os.getenv("ASNWATCH_LOG_LEVEL", "INFO")).upper()
    return getattr(logging, level_name, logging.INFO)


def _attach_root_handler(level: int) -> None:
    global _HANDLER_ATTACHED

    root = logging.getLogger()
    if not _HANDLER_ATTACHED:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
        root.addHandler(handler)
        _HANDLER_ATTACHED = True
    root.setLevel(level)


def configure_logging(level: str | None = None) -> None:
    """Set the process-wide level, e.g. from the CLI's --verbose flag."""
    resolved = _resolve_level(level)
    _attach_root_handler(resolved)
    logging.getLogger("asnwatch").setLevel(resolved)


def get_logger(name: str) -> logging.Logger:
    """Return a module logger configured with a single stream handler."""
    level = _resolve_level()
    _attach_root_handler(level)
    return logging.getLogger(name)

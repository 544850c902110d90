"""Logging helpers shared by the CLI and the resolution modules.

Modules log through ``logging.getLogger(__name__)``; this module only
installs the root handler and builds the ``extra`` payload attached to
structured debug records.
"""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from constants import Constants

_CONFIGURED = False


def _level_from_env(default: int = logging.INFO) -> int:
    name = os.environ.get(Constants.ENV_LOG_LEVEL, "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default


def configure_logging(level: Optional[int] = None, quiet: bool = False) -> None:
    """Install a stderr handler on the root logger once.

    Args:
        level: Explicit level; falls back to GITSTAMP_LOG_LEVEL, then INFO.
        quiet: Only report errors on the console.
    """
    global _CONFIGURED  # pylint: disable=global-statement
    root = logging.getLogger()
    if not _CONFIGURED:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        root.addHandler(handler)
        _CONFIGURED = True
    if quiet:
        root.setLevel(logging.ERROR)
    else:
        root.setLevel(level if level is not None else _level_from_env())


def add_file_handler(path: str) -> logging.Handler:
    """Mirror log records into a file."""
    file_handler = logging.FileHandler(path, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(Constants.LOG_FILE_FORMAT))
    logging.getLogger().addHandler(file_handler)
    return file_handler


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when the logger would emit DEBUG records."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build the ``extra`` mapping for a structured log record, dropping None values."""
    return {key: value for key, value in fields.items() if value is not None}

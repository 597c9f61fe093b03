"""
Logging setup for the Lox toolchain.
"""

import logging
import os
import sys
from typing import Optional, Union

ROOT_LOGGER_NAME = "lox"
LOG_LEVEL_ENV = "LOX_LOG_LEVEL"
DEFAULT_LEVEL = "WARNING"
LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def env_log_level() -> str:
    """Level named by ``LOX_LOG_LEVEL``; unknown names fall back to WARNING."""
    level = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LEVEL).strip().upper()
    if level not in LEVEL_NAMES:
        return DEFAULT_LEVEL
    return level


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Return a logger namespaced under ``lox``, installing one handler on the root."""
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler(stream=sys.stderr)
        fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        handler.setFormatter(fmt)
        root.addHandler(handler)
        root.setLevel(env_log_level())

    return logging.getLogger(name)


def configure_logging(level: Optional[Union[str, int]] = None) -> logging.Logger:
    """
    Set the level of the ``lox`` logger tree.

    Falls back to ``LOX_LOG_LEVEL`` and then WARNING when no level is given.
    An explicit level name that logging does not know raises ValueError.
    """
    if level is None:
        level = env_log_level()
    if isinstance(level, str):
        level = level.upper()

    root = get_logger()
    root.setLevel(level)
    return root

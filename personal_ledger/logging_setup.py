"""Centralized logging configuration for the ``personal_ledger`` package.

- ``configure_logging(...)``: attach a single ``StreamHandler`` to the package
  root logger (``"personal_ledger"``). Called once by the CLI at startup.
- ``get_logger(name)``: acquire a logger by name, keeping a ``NullHandler`` on
  the package root logger until the CLI (or a host application) configures
  output.

Library modules never attach their own handlers.
"""

from __future__ import annotations

import logging
import os
import sys

_PKG_LOGGER_NAME = "personal_ledger"
_LEVEL_ENV = "PERSONAL_LEDGER_LOG_LEVEL"
_CONFIGURED = False


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        # Numeric strings or standard level names (INFO/DEBUG/etc.).
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
        return logging.INFO
    env_val = os.getenv(_LEVEL_ENV)
    if env_val:
        return _parse_level(env_val)
    return logging.INFO


_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def configure_logging(level: int | str | None = None) -> None:
    """Send ``personal_ledger`` logs to stderr; later calls are no-ops.

    ``level`` falls back to ``PERSONAL_LEDGER_LOG_LEVEL``, then ``INFO``.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))

    logger.setLevel(_parse_level(level))
    logger.addHandler(handler)
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger by name, with a silent default until configured."""

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)

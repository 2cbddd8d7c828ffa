from __future__ import annotations

import logging
import os
from typing import Optional

PACKAGE_LOGGER = "totpgen"


def _configure_package_logger() -> logging.Logger:
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if package_logger.handlers:  # already configured
        return package_logger

    env_level = os.getenv("TOTP_LOG_LEVEL", "WARNING").upper()
    resolved_level = getattr(logging, env_level, logging.WARNING)
    package_logger.setLevel(resolved_level)
    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    package_logger.addHandler(handler)
    package_logger.propagate = False
    return package_logger


def get_logger(name: str, *, level: Optional[int] = None) -> logging.Logger:
    """Return a module logger under the ``totpgen`` package logger.

    Policy:
    - One stream handler lives on the package logger; module loggers only
      propagate to it, so importing more modules never duplicates output.
    - DEBUG: generator construction, env configuration
    - WARNING: rejected configuration
    - Secrets and generated codes are never logged, only key lengths.
    - Quiet by default; controllable via TOTP_LOG_LEVEL env.
    """

    _configure_package_logger()
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger

"""Logging configuration for FairLens.

Log lines go to stderr so the CLIs can write JSON snapshots to stdout.
FAIRLENS_LOG_LEVEL (e.g. DEBUG) overrides the level for every logger
created here.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

# SDK loggers that log every HTTP request at INFO
_NOISY_LOGGERS = ("httpx", "httpcore", "openai", "anthropic")


def _env_level(default: int) -> int:
    name = os.getenv("FAIRLENS_LOG_LEVEL", "").upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default


def setup_logging(
    level: int = logging.INFO,
    module_name: str = "fairlens",
    stream: TextIO | None = None,
) -> logging.Logger:
    """Configure and return a logger with consistent formatting.

    Args:
        level: Logging level (default INFO, overridable via FAIRLENS_LOG_LEVEL).
        module_name: Name for the logger instance.
        stream: Output stream (default stderr).

    Returns:
        Configured logger.
    """
    logger = logging.getLogger(module_name)

    if logger.handlers:
        return logger

    level = _env_level(level)
    logger.setLevel(level)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    for noisy in _NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(max(level, logging.WARNING))

    return logger

"""Logging setup for the pricing engine and the straddle driver."""

import logging
import sys
from typing import Optional

from .settings import get_settings

# Emits one DEBUG line per solve and a WARNING per failed solve
SOLVER_LOGGER = "optionrisk.derivatives.options"


def setup_logging(
    level: Optional[str] = None,
    solver_level: Optional[str] = None,
) -> logging.Logger:
    """
    Configure package logging on stderr, leaving stdout to printed results.

    Args:
        level: Package log level, defaults to LOG_LEVEL
        solver_level: Implied volatility solver log level, defaults to SOLVER_LOG_LEVEL

    Returns:
        The package root logger
    """
    settings = get_settings()
    log_level = (level or settings.LOG_LEVEL).upper()

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )

    logger = logging.getLogger("optionrisk")
    logger.setLevel(log_level)
    logging.getLogger(SOLVER_LOGGER).setLevel(
        (solver_level or settings.SOLVER_LOG_LEVEL).upper()
    )

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a named logger under the optionrisk namespace."""
    return logging.getLogger(f"optionrisk.{name}")

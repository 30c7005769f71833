"""Pytest configuration and fixtures."""

import logging

import pytest

from optionrisk.config import get_settings
from optionrisk.config.logging import SOLVER_LOGGER
from optionrisk.derivatives import CallOption, PutOption


@pytest.fixture(autouse=True)
def fresh_settings():
    """Re-read settings from the environment for every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo setup_logging() calls made by a test."""
    root = logging.getLogger()
    package = logging.getLogger("optionrisk")
    solver = logging.getLogger(SOLVER_LOGGER)
    handlers, level = root.handlers[:], root.level
    package_level, solver_level = package.level, solver.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    package.setLevel(package_level)
    solver.setLevel(solver_level)


@pytest.fixture
def sample_market():
    """Market from the sample straddle run."""
    return {"spot": 100.0, "rate": 0.05}


@pytest.fixture
def put_105():
    return PutOption(strike=105.0, time_to_expiry=1.0)


@pytest.fixture
def call_105():
    return CallOption(strike=105.0, time_to_expiry=1.0)

"""
Pytest Configuration
====================

Shared fixtures for testing.
"""

import logging

import pytest

from core.logging_config import MODULE_LOG_LEVELS
from tests.fixtures import AS_OF, make_contract, make_snapshot


@pytest.fixture
def as_of():
    return AS_OF


@pytest.fixture
def snapshot():
    """S=100, r=5%, q=0 snapshot."""
    return make_snapshot()


@pytest.fixture
def atm_call():
    """30-day at-the-money call with no market price."""
    return make_contract()


@pytest.fixture
def test_config():
    """Minimal configuration in config.yaml layout."""
    return {
        "analysis": {
            "default_volatility": 0.25,
            "edge_threshold": 0.05,
            "min_time_to_expiry": 0.01,
            "iv_solver": {
                "max_iterations": 50,
                "tolerance": 1e-7,
            },
        },
        "logging": {
            "level": "DEBUG",
        },
    }


@pytest.fixture
def restore_logging():
    """Undo root and module logger changes made by LoggingConfig.apply()."""
    root = logging.getLogger()
    root_level = root.level
    names = list(MODULE_LOG_LEVELS) + ["core.custom"]
    module_levels = {name: logging.getLogger(name).level for name in names}

    yield

    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(root_level)
    for name, level in module_levels.items():
        logging.getLogger(name).setLevel(level)

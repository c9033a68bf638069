"""
Test Fixtures Package
=====================

Builders for option contracts and market snapshots used across tests.
"""

from tests.fixtures.option_fixtures import (
    AS_OF,
    make_contract,
    make_snapshot,
)

__all__ = [
    "AS_OF",
    "make_contract",
    "make_snapshot",
]

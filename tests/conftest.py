"""Shared pytest fixtures for the pace-match test suite.

Wraps the factories in ``tests.fixtures.records``. No external service
dependencies are required for unit tests.
"""

from __future__ import annotations

import pytest

from tests.fixtures.records import make_match_row, make_run, make_user


@pytest.fixture()
def user_factory():
    """Return the ``make_user`` factory callable."""
    return make_user


@pytest.fixture()
def run_factory():
    """Return the ``make_run`` factory callable."""
    return make_run


@pytest.fixture()
def match_row_factory():
    """Return the ``make_match_row`` factory callable."""
    return make_match_row

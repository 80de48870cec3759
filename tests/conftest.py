"""Pytest configuration and shared fixtures."""

from datetime import datetime

import pytest


@pytest.fixture
def t0():
    return datetime(2026, 1, 1, 9, 0, 0)


@pytest.fixture
def t1():
    return datetime(2026, 1, 31, 18, 0, 0)

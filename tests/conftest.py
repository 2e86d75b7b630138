# tests/conftest.py
from __future__ import annotations

import pytest

from bankbalance import runtime


@pytest.fixture(autouse=True)
def fresh_runtime():
    """Each test starts (and ends) without an applied profile."""
    runtime.reset()
    yield
    runtime.reset()

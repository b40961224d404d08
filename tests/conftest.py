import os
import sys
from datetime import datetime, timedelta

import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from engine.series import TimeRange
from engine.timeline import timeline_service


@pytest.fixture(autouse=True)
def clear_timeline_cache():
    """Start and finish every test with an empty shared timeline cache."""
    timeline_service.clear_cache()
    yield
    timeline_service.clear_cache()


@pytest.fixture
def t0():
    return datetime(2026, 3, 2)  # a Monday


@pytest.fixture
def day_range(t0):
    return TimeRange(t0, t0 + timedelta(days=1))

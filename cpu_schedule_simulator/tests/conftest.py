import os
import sys

import pytest

# Charts are rendered off-screen during tests
os.environ.setdefault("MPLBACKEND", "Agg")


def pytest_sessionstart(session):
    # Ensure repo root is on sys.path so 'cpu_schedule_simulator' can be imported
    here = os.path.dirname(os.path.abspath(__file__))
    repo_root = os.path.abspath(os.path.join(here, os.pardir, os.pardir))
    if repo_root not in sys.path:
        sys.path.insert(0, repo_root)


@pytest.fixture
def long_then_short():
    """A long job at 0 and a shorter one arriving while it runs."""
    return [(0, 7), (2, 4)]


@pytest.fixture
def mixed_pairs():
    return [(0, 8), (1, 4), (2, 9), (3, 5)]

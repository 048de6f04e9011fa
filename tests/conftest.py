import os
import sys
import pytest

# Ensure the repo root (containing the app modules) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
REPO_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from eurocountries import TargetCountry
from stopwatch import Stopwatch


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


FRANCE = TargetCountry("France", "Paris", "Most visited country.", 46.23, 2.21)
SPAIN = TargetCountry("Spain", "Madrid", "Lots of olive oil.", 40.46, -3.75)


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def stopwatch(clock):
    return Stopwatch(clock=clock)


@pytest.fixture()
def small_catalog():
    return (FRANCE, SPAIN)


@pytest.fixture()
def france():
    return FRANCE


@pytest.fixture()
def spain():
    return SPAIN


@pytest.fixture()
def engine(small_catalog, stopwatch):
    from quiz_session import SessionEngine
    return SessionEngine(small_catalog, stopwatch)

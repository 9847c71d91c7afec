import random

import pytest

from rapidtype.logic.stopwatch import Stopwatch
from rapidtype.session.records import RecordStore
from rapidtype.tests.helpers import FakeClock


@pytest.fixture
def clock():
    return FakeClock(start_ms=1_000)


@pytest.fixture
def wall_clock():
    return FakeClock(start_ms=1_700_000_000_000)


@pytest.fixture
def stopwatch(clock):
    return Stopwatch(clock)


@pytest.fixture
def records():
    return RecordStore()


@pytest.fixture
def rng():
    return random.Random(1234)  # noqa: S311

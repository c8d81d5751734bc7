import copy
from datetime import datetime, timedelta

import pytest

# rows hold 5 numbers each; columns ascend top to bottom
SAMPLE_TICKET = [
    [1, None, 21, None, 41, None, 61, None, 81],
    [None, 11, None, 31, None, 51, None, 71, 85],
    [5, None, 25, None, 45, None, 65, 75, None],
]


@pytest.fixture
def sample_ticket():
    return copy.deepcopy(SAMPLE_TICKET)


def make_clock(*offsets):
    """Clock returning 2024-01-01 12:00 plus each offset (seconds) in turn."""
    start = datetime(2024, 1, 1, 12, 0, 0)
    it = iter(offsets)
    return lambda: start + timedelta(seconds=next(it))


@pytest.fixture
def clock_factory():
    return make_clock

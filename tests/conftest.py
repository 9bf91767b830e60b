from datetime import datetime

import pytest

from levelog import prefix as prefix_module

FROZEN_NOW = datetime(2024, 5, 1, 12, 30, 45)


class FrozenClock(datetime):
    """datetime whose now() is pinned to FROZEN_NOW."""

    @classmethod
    def now(cls, tz=None):
        return cls(
            FROZEN_NOW.year,
            FROZEN_NOW.month,
            FROZEN_NOW.day,
            FROZEN_NOW.hour,
            FROZEN_NOW.minute,
            FROZEN_NOW.second,
        )


@pytest.fixture
def frozen_clock(monkeypatch):
    """Pin the prefix timestamp to 2024-05-01 12:30:45."""
    monkeypatch.setattr(prefix_module, "datetime", FrozenClock)
    return FROZEN_NOW


@pytest.fixture
def close_loggers():
    """Collect loggers built in a test and close their sinks afterwards."""
    loggers = []
    yield loggers.append
    for log in loggers:
        log.close()

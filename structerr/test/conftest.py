from __future__ import annotations

from collections.abc import Iterator

import pytest

from structerr.core.config import Settings, set_settings
from structerr.scheduler import ManualScheduler, set_scheduler


@pytest.fixture(autouse=True)
def manual_scheduler() -> Iterator[ManualScheduler]:
    """Give every test default settings and its own deterministic scheduler."""
    scheduler = ManualScheduler()
    previous_settings = set_settings(Settings())
    previous_scheduler = set_scheduler(scheduler)
    yield scheduler
    set_scheduler(previous_scheduler)
    set_settings(previous_settings)

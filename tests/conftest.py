from __future__ import annotations

from datetime import datetime

import pytest

from tests.fakes import RecordingPushSender, in_memory_container


@pytest.fixture
def now() -> datetime:
    # mid-June 2025: current period is June (30 days, 5 weeks), previous is May
    return datetime(2025, 6, 15, 10, 0, 0)


@pytest.fixture
def push_sender() -> RecordingPushSender:
    return RecordingPushSender()


@pytest.fixture
def container(push_sender):
    return in_memory_container(push_sender)

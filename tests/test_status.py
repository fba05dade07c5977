# -*- coding: utf-8 -*-
"""Tests for event status, progress and countdown texts."""
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from zonetime.models import EventWindow
from zonetime.status import (
    EventStatus,
    actual_end,
    actual_start,
    countdown_text,
    event_progress,
    event_status,
    time_remaining_text,
)

UTC = timezone.utc
TOKYO = ZoneInfo("Asia/Tokyo")

START = datetime(2025, 7, 15, 10, 0, tzinfo=UTC)
END = datetime(2025, 7, 15, 12, 0, tzinfo=UTC)
WINDOW = EventWindow(start=START, end=END, is_global_time=True)


def test_global_event_bounds_are_unchanged() -> None:
    assert actual_start(WINDOW, TOKYO) == START
    assert actual_end(WINDOW, TOKYO) == END


def test_local_event_starts_at_wall_clock_in_user_zone() -> None:
    window = EventWindow(start=datetime(2025, 7, 15, 18, 0), end=datetime(2025, 7, 15, 21, 0), is_global_time=False)

    assert actual_start(window, TOKYO) == datetime(2025, 7, 15, 9, 0, tzinfo=UTC)
    assert actual_end(window, TOKYO) == datetime(2025, 7, 15, 12, 0, tzinfo=UTC)


@pytest.mark.parametrize(
    ("now", "expected"),
    [
        (START - timedelta(seconds=1), EventStatus.UPCOMING),
        (START, EventStatus.ACTIVE),
        (START + timedelta(hours=1), EventStatus.ACTIVE),
        (END, EventStatus.ACTIVE),
        (END + timedelta(seconds=1), EventStatus.PAST),
    ],
)
def test_event_status_bounds_are_inclusive(now: datetime, expected: EventStatus) -> None:
    assert event_status(WINDOW, TOKYO, now) is expected


def test_event_progress() -> None:
    assert event_progress(WINDOW, TOKYO, START + timedelta(minutes=30)) == 0.25
    assert event_progress(WINDOW, TOKYO, START - timedelta(hours=1)) == 0.0
    assert event_progress(WINDOW, TOKYO, END + timedelta(hours=1)) == 0.0


@pytest.mark.parametrize(
    ("before_start", "expected"),
    [
        (timedelta(days=2, hours=3, minutes=10), "Starts in 2d 3h"),
        (timedelta(hours=3, minutes=5), "Starts in 3h 5min"),
        (timedelta(minutes=12), "Starts in 12min"),
        (timedelta(seconds=30), "Starting soon"),
    ],
)
def test_countdown_text(before_start: timedelta, expected: str) -> None:
    assert countdown_text(WINDOW, TOKYO, START - before_start) == expected


def test_countdown_text_only_for_upcoming_events() -> None:
    assert countdown_text(WINDOW, TOKYO, START) is None


@pytest.mark.parametrize(
    ("before_end", "expected"),
    [
        (timedelta(hours=1, minutes=20), "Ends in 1h 20min"),
        (timedelta(minutes=5), "Ends in 5min"),
        (timedelta(seconds=20), "Ending soon"),
    ],
)
def test_time_remaining_text(before_end: timedelta, expected: str) -> None:
    assert time_remaining_text(WINDOW, TOKYO, END - before_end) == expected


def test_time_remaining_text_counts_days_as_hours() -> None:
    window = EventWindow(start=START, end=START + timedelta(days=2), is_global_time=True)

    assert time_remaining_text(window, TOKYO, START) == "Ends in 48h 0min"


def test_time_remaining_text_only_for_active_events() -> None:
    assert time_remaining_text(WINDOW, TOKYO, START - timedelta(minutes=1)) is None
    assert time_remaining_text(WINDOW, TOKYO, END + timedelta(minutes=1)) is None

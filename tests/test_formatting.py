# -*- coding: utf-8 -*-
"""Tests for display strings of times, ranges and timezone differences."""
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from zonetime.formatting import (
    FormatStyle,
    compact_range,
    difference_description,
    format_duration,
    format_event_range,
    format_instant,
    format_instant_with_zone,
    format_local_event_in_user_time,
    format_range,
    timezone_abbreviation,
)
from zonetime.models import EventWindow

UTC = timezone.utc
TOKYO = ZoneInfo("Asia/Tokyo")
BERLIN = ZoneInfo("Europe/Berlin")
LONDON = ZoneInfo("Europe/London")
NEW_YORK = ZoneInfo("America/New_York")

JULY = datetime(2025, 7, 15, 12, 0, tzinfo=UTC)


def _global_window() -> EventWindow:
    return EventWindow(
        start=datetime(2025, 7, 15, 5, 0, tzinfo=UTC),
        end=datetime(2025, 7, 15, 8, 0, tzinfo=UTC),
        is_global_time=True,
    )


def _local_window() -> EventWindow:
    return EventWindow(
        start=datetime(2025, 7, 15, 18, 0),
        end=datetime(2025, 7, 15, 21, 0),
        is_global_time=False,
    )


def test_format_instant_styles() -> None:
    instant = datetime(2025, 7, 15, 5, 0, tzinfo=UTC)

    assert format_instant(instant, FormatStyle.TIME, TOKYO) == "14:00"
    assert format_instant(instant, FormatStyle.DATE, TOKYO) == "July 15, 2025"
    assert format_instant(instant, FormatStyle.DATE_TIME, TOKYO) == "Jul 15, 2025, 14:00"


def test_global_range_is_converted_into_zone() -> None:
    window = _global_window()

    assert format_range(window.start, window.end, TOKYO) == "14:00-17:00 JST"
    assert format_range(window.start, window.end, TOKYO, include_date=True) == "July 15, 2025, 14:00-17:00 JST"
    assert format_event_range(window, BERLIN) == "07:00-10:00 CEST"


def test_global_formatting_is_idempotent() -> None:
    window = _global_window()

    first = format_event_range(window, NEW_YORK, include_date=True)
    second = format_event_range(window, NEW_YORK, include_date=True)

    assert first == second == "July 15, 2025, 01:00-04:00 EDT"


def test_local_range_keeps_clock_digits() -> None:
    """A local 18:00 event reads 18:00 in every zone; only the label changes."""
    window = _local_window()

    assert format_event_range(window, TOKYO) == "18:00-21:00 JST"
    assert format_event_range(window, NEW_YORK) == "18:00-21:00 EDT"
    assert format_event_range(window, BERLIN, include_date=True) == "July 15, 2025, 18:00-21:00 CEST"


def test_local_event_in_user_time() -> None:
    window = _local_window()

    assert format_local_event_in_user_time(window, TOKYO, BERLIN) == "11:00-14:00 CEST"
    assert format_local_event_in_user_time(window, NEW_YORK, BERLIN, include_date=True) == (
        "July 16, 2025, 00:00-03:00 CEST"
    )


def test_abbreviation_follows_daylight_saving() -> None:
    assert timezone_abbreviation(BERLIN, datetime(2025, 1, 15, tzinfo=UTC)) == "CET"
    assert timezone_abbreviation(BERLIN, JULY) == "CEST"
    assert timezone_abbreviation(LONDON, JULY) == "BST"
    assert timezone_abbreviation(ZoneInfo("UTC"), JULY) == "UTC"


def test_numeric_abbreviation_falls_back_to_identifier() -> None:
    assert timezone_abbreviation(ZoneInfo("Asia/Bangkok"), JULY) == "Asia/Bangkok"


def test_compact_range_and_instant_with_zone() -> None:
    window = _global_window()

    assert compact_range(window.start, window.end, TOKYO) == "14:00–17:00"
    assert compact_range(window.start, window.end, TOKYO, include_date=True) == "July 15, 2025 14:00–17:00"
    assert format_instant_with_zone(window.start, TOKYO) == "Jul 15, 2025, 14:00 JST"
    assert format_instant_with_zone(window.start, TOKYO, include_date=False) == "14:00 JST"


def test_difference_description() -> None:
    assert difference_description(BERLIN, BERLIN, JULY) == "Same as your time"
    assert difference_description(BERLIN, TOKYO, JULY) == "7 hours ahead"
    assert difference_description(BERLIN, NEW_YORK, JULY) == "6 hours behind"
    assert difference_description(LONDON, BERLIN, JULY) == "1 hour ahead"
    assert difference_description(BERLIN, LONDON, JULY) == "1 hour behind"


def test_format_duration() -> None:
    assert format_duration(timedelta(hours=3)) == "3h"
    assert format_duration(timedelta(hours=1, minutes=30)) == "1h 30min"
    assert format_duration(timedelta(minutes=45)) == "45min"
    assert format_duration(timedelta(0)) == "0min"
    assert format_duration(timedelta(minutes=-30)) == "0min"

# -*- coding: utf-8 -*-
"""Tests for timeline chart geometry."""
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from timeline.builder import build_timeline
from timeline.layout import (
    assign_lanes,
    build_layout,
    padding_for,
    progress,
    tick_marks,
)
from timeline.models import CityTimeEntry
from zonetime.cities import palette_index
from zonetime.models import CityParticipant, EventWindow

UTC = timezone.utc
BERLIN = ZoneInfo("Europe/Berlin")


def _at(hour: int, minute: int = 0, day: int = 15) -> datetime:
    return datetime(2025, 7, day, hour, minute, tzinfo=UTC)


def _entry(city_id: str, start: datetime, end: datetime) -> CityTimeEntry:
    return CityTimeEntry(city_id=city_id, city_name=city_id.title(), start=start, end=end)


def test_padding_is_clamped() -> None:
    assert padding_for(timedelta(hours=1)) == timedelta(minutes=15)
    assert padding_for(timedelta(hours=10)) == timedelta(hours=1)
    assert padding_for(timedelta(hours=40)) == timedelta(hours=3)


def test_half_hour_ticks_for_short_ranges() -> None:
    ticks = tick_marks(_at(10), _at(12))

    assert ticks == [_at(10), _at(10, 30), _at(11), _at(11, 30), _at(12)]


def test_range_bounds_are_added_around_aligned_ticks() -> None:
    ticks = tick_marks(_at(10, 10), _at(12, 10))

    assert ticks == [_at(10, 10), _at(10, 30), _at(11), _at(11, 30), _at(12), _at(12, 10)]


def test_tick_step_grows_with_range() -> None:
    ticks = tick_marks(_at(0), _at(12))  # 12 hours -> 2 hour step
    assert ticks == [_at(hour) for hour in range(0, 13, 2)]

    ticks = tick_marks(_at(0), _at(0, day=17))  # 48 hours -> 6 hour step
    steps = {b - a for a, b in zip(ticks, ticks[1:])}
    assert steps == {timedelta(hours=6)}


def test_zero_length_range_has_bound_ticks_only() -> None:
    assert tick_marks(_at(10), _at(10)) == [_at(10), _at(10)]


def test_progress_is_clamped() -> None:
    assert progress(_at(11), _at(10), _at(12)) == 0.5
    assert progress(_at(8), _at(10), _at(12)) == 0.0
    assert progress(_at(14), _at(10), _at(12)) == 1.0
    assert progress(_at(10), _at(10), _at(10)) == 0.0


def test_overlapping_entries_get_separate_lanes() -> None:
    entries = [
        _entry("berlin", _at(11, 30), _at(13)),
        _entry("london", _at(12, 30), _at(14)),
        _entry("tokyo", _at(13), _at(14, 30)),
        _entry("sydney", _at(14), _at(15)),
    ]

    markers, lane_count = assign_lanes(entries)

    assert lane_count == 2
    assert [(marker.entry.city_id, marker.lane) for marker in markers] == [
        ("berlin", 0),
        ("london", 1),
        ("tokyo", 0),
        ("sydney", 1),
    ]


def test_build_layout_for_timeline() -> None:
    event = EventWindow(
        start=datetime(2025, 7, 15, 18, 0),
        end=datetime(2025, 7, 15, 21, 0),
        is_global_time=False,
    )
    cities = [
        CityParticipant.from_identifier("tokyo", "Tokyo", "Asia/Tokyo"),
        CityParticipant.from_identifier("nyc", "New York", "America/New_York"),
    ]
    timeline = build_timeline(event, cities, BERLIN)

    layout = build_layout(timeline)

    assert layout is not None
    # 16 hour span -> 96 minutes of padding on each side
    assert layout.range_start == _at(9) - timedelta(minutes=96)
    assert layout.range_end == _at(1, day=16) + timedelta(minutes=96)
    assert layout.lane_count == 1
    assert layout.axis_zone is BERLIN
    assert layout.tick_marks[0] == layout.range_start
    assert layout.tick_marks[-1] == layout.range_end

    tokyo, new_york = layout.markers
    assert tokyo.palette_index == palette_index("Asia/Tokyo")
    assert new_york.palette_index == palette_index("America/New_York")
    assert 0.0 < layout.progress(tokyo.entry.start) < layout.progress(new_york.entry.start) < 1.0


def test_build_layout_without_timeline() -> None:
    assert build_layout(None) is None

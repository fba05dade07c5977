"""Geometry of a timeline chart: padded range, axis ticks and lanes.

Positions are relative (0..1 along the range) so any renderer can scale
them to its own width.
"""
from __future__ import annotations

import math
import typing as t
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo

from timeline.models import CityTimeEntry, Timeline
from zonetime.cities import palette_index

MIN_PADDING = timedelta(minutes=15)
MAX_PADDING = timedelta(hours=3)
TICK_TOLERANCE = timedelta(seconds=60)
MAX_TICK_ITERATIONS = 80

# Ticks are aligned to multiples of the step counted from this instant.
TICK_REFERENCE = datetime(2001, 1, 1, tzinfo=timezone.utc)

EARLIEST = datetime.min.replace(tzinfo=timezone.utc)
LATEST = datetime.max.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class TimelineMarker:
    """An entry placed in a lane."""
    entry: CityTimeEntry
    lane: int
    palette_index: int


@dataclass(frozen=True)
class TimelineLayout:
    range_start: datetime
    range_end: datetime
    tick_marks: tuple[datetime, ...]
    markers: tuple[TimelineMarker, ...]
    lane_count: int
    axis_zone: tzinfo

    @property
    def duration(self) -> timedelta:
        return self.range_end - self.range_start

    def progress(self, instant: datetime) -> float:
        return progress(instant, self.range_start, self.range_end)


def _shift(instant: datetime, delta: timedelta) -> datetime:
    """``instant + delta``, clamped to the representable calendar range."""
    try:
        return instant + delta
    except OverflowError:
        return LATEST if delta > timedelta(0) else EARLIEST


def padding_for(duration: timedelta) -> timedelta:
    """A tenth of the duration, kept between 15 minutes and 3 hours."""
    return min(max(duration * 0.1, MIN_PADDING), MAX_PADDING)


def _tick_step_hours(hours: float) -> float:
    if hours < 3:
        return 0.5
    if hours < 8:
        return 1
    if hours < 16:
        return 2
    if hours < 32:
        return 3
    return max(math.ceil(hours / 8.0), 4)


def tick_marks(range_start: datetime, range_end: datetime) -> list[datetime]:
    """Axis ticks at round multiples of a step that grows with the range."""
    total_seconds = (range_end - range_start).total_seconds()
    if total_seconds <= 0:
        return [range_start, range_end]

    step = _tick_step_hours(total_seconds / 3600) * 3600
    current = math.floor((range_start - TICK_REFERENCE).total_seconds() / step) * step
    lower = _shift(range_start, -TICK_TOLERANCE)
    upper = _shift(range_end, TICK_TOLERANCE)
    stop = _shift(range_end, timedelta(seconds=step))
    ticks: list[datetime] = []
    for _ in range(MAX_TICK_ITERATIONS):
        try:
            tick = TICK_REFERENCE + timedelta(seconds=current)
        except OverflowError:
            # before year 1 keep stepping, past year 9999 stop
            if ticks or current > 0:
                break
            current += step
            continue
        if lower <= tick <= upper:
            ticks.append(tick)
        if tick > stop:
            break
        current += step

    if not ticks:
        return [range_start, range_end]
    if ticks[0] > _shift(range_start, TICK_TOLERANCE):
        ticks.insert(0, range_start)
    if ticks[-1] < _shift(range_end, -TICK_TOLERANCE):
        ticks.append(range_end)
    return ticks


def progress(instant: datetime, range_start: datetime, range_end: datetime) -> float:
    """Relative position of ``instant`` in the range, clamped to [0, 1]."""
    total = (range_end - range_start).total_seconds()
    if total <= 0:
        return 0.0
    clamped = min(max(instant, range_start), range_end)
    return (clamped - range_start).total_seconds() / total


def assign_lanes(entries: t.Iterable[CityTimeEntry]) -> tuple[list[TimelineMarker], int]:
    """Place entries in the first lane that is free by their start.

    :return: The markers in start order and the number of lanes used.
    """
    lane_ends: list[datetime] = []
    markers: list[TimelineMarker] = []
    for entry in sorted(entries, key=lambda e: e.start):
        for lane, lane_end in enumerate(lane_ends):
            if entry.start >= lane_end:
                lane_ends[lane] = entry.end
                break
        else:
            lane = len(lane_ends)
            lane_ends.append(entry.end)
        markers.append(TimelineMarker(
            entry=entry,
            lane=lane,
            palette_index=palette_index(entry.timezone_identifier or entry.city_id),
        ))
    return markers, len(lane_ends)


def build_layout(timeline: t.Optional[Timeline]) -> t.Optional[TimelineLayout]:
    """Lay out a built timeline, or None when there is nothing to draw."""
    if timeline is None or not timeline.entries:
        return None

    entries = timeline.entries
    earliest = min(entry.start for entry in entries)
    latest = max(entry.end for entry in entries)
    if latest <= earliest:
        return None

    padding = padding_for(latest - earliest)
    range_start = _shift(earliest, -padding)
    range_end = _shift(latest, padding)
    markers, lane_count = assign_lanes(entries)
    return TimelineLayout(
        range_start=range_start,
        range_end=range_end,
        tick_marks=tuple(tick_marks(range_start, range_end)),
        markers=tuple(markers),
        lane_count=lane_count,
        axis_zone=timeline.user_zone,
    )

"""
Data models for a multi-city event timeline.

A timeline is the ordered sequence of one event's per-city participation
windows, converted into the viewer's zone, with the gaps between them.
All models are recomputed per build and never mutated.
"""
from __future__ import annotations

import typing as t
from dataclasses import dataclass, field
from datetime import datetime, timedelta, tzinfo
from enum import Enum

# Gaps shorter than this leave too little time to get from one city's
# window to the next.
COOLDOWN_THRESHOLD = timedelta(hours=2)


class GapKind(Enum):
    """Classification of the time between two consecutive windows."""
    OVERLAP = "overlap"              # windows touch or overlap
    COOLDOWN_RISK = "cooldown_risk"  # shorter than COOLDOWN_THRESHOLD
    NORMAL = "normal"


def classify_gap(duration: timedelta, threshold: timedelta = COOLDOWN_THRESHOLD) -> GapKind:
    if duration <= timedelta(0):
        return GapKind.OVERLAP
    if duration < threshold:
        return GapKind.COOLDOWN_RISK
    return GapKind.NORMAL


@dataclass(frozen=True)
class CityTimeEntry:
    """One city's participation window in the viewer's zone."""
    city_id: str
    city_name: str
    start: datetime
    end: datetime
    timezone_identifier: str = ""

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


@dataclass(frozen=True)
class TimeGap:
    """Time between one entry's end and the next entry's start. Negative means overlap."""
    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def kind(self) -> GapKind:
        return classify_gap(self.duration)

    @property
    def is_overlap(self) -> bool:
        return self.kind is GapKind.OVERLAP


TimelineItem = t.Union[CityTimeEntry, TimeGap]


@dataclass(frozen=True)
class Timeline:
    """Entries interleaved with gaps: entry, gap, entry, ..., entry."""
    items: tuple[TimelineItem, ...]
    user_zone: tzinfo = field(compare=False)
    total_start: datetime
    total_end: datetime
    play_duration: timedelta

    @property
    def total_duration(self) -> timedelta:
        return self.total_end - self.total_start

    @property
    def entries(self) -> list[CityTimeEntry]:
        return [item for item in self.items if isinstance(item, CityTimeEntry)]

    @property
    def gaps(self) -> list[TimeGap]:
        return [item for item in self.items if isinstance(item, TimeGap)]

    @property
    def overlaps(self) -> list[TimeGap]:
        return [gap for gap in self.gaps if gap.kind is GapKind.OVERLAP]

    @property
    def cooldown_risks(self) -> list[TimeGap]:
        return [gap for gap in self.gaps if gap.kind is GapKind.COOLDOWN_RISK]

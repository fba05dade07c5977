"""
Data models for the timeline MCP server.

These dataclasses are the tool-facing shapes: instants travel as ISO-8601
strings and zones as IANA identifiers.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import typing as t


@dataclass
class CityInput:
    """A followed city as supplied by a tool caller."""
    id: str
    name: str
    timezone: str


@dataclass
class ConvertedWindow:
    """A local event's window resolved for one city, shown in the viewer's zone."""
    start: str
    end: str
    formatted: str
    city_timezone: str
    user_timezone: str


@dataclass
class TimelineItemView:
    """One row of a timeline: a city window or the gap after it."""
    kind: t.Literal["city", "gap"]
    start: str
    end: str
    label: str
    duration_minutes: int
    city_id: str = ""
    city_name: str = ""
    gap_kind: str = ""  # "overlap", "cooldown_risk" or "normal" for gaps


@dataclass
class CityTimeline:
    """A built timeline with its summary figures."""
    event_name: str
    user_timezone: str
    items: list[TimelineItemView] = field(default_factory=list)
    total_start: str = ""
    total_end: str = ""
    total_duration_minutes: int = 0
    play_duration_minutes: int = 0
    overlap_count: int = 0
    cooldown_risk_count: int = 0

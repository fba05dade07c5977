"""
Shared Pydantic models for REST API serialization.

This module contains Pydantic equivalents of the dataclass models in
timeline_server/models.py, plus the request/response bodies of the timeline
service, so that the service and the MCP wrapper serialize the same way.
"""
from __future__ import annotations

import typing as t
from pydantic import BaseModel, Field


TimelineItemKind = t.Literal["city", "gap"]
GapKind = t.Literal["overlap", "cooldown_risk", "normal", ""]


class CityInput(BaseModel):
    """A followed city, e.g. ``{"id": "tokyo", "name": "Tokyo", "timezone": "Asia/Tokyo"}``."""
    id: str
    name: str
    timezone: str


class ConvertedWindow(BaseModel):
    start: str                 # ISO datetime in the user's zone
    end: str
    formatted: str             # "July 15, 2025, 11:00-14:00 CEST"
    city_timezone: str
    user_timezone: str


class TimelineItemView(BaseModel):
    """
    One row of a timeline: a city window or the gap that follows it.
    """
    kind: TimelineItemKind
    start: str
    end: str
    label: str
    duration_minutes: int
    city_id: str = ""
    city_name: str = ""
    gap_kind: GapKind = ""


class CityTimeline(BaseModel):
    event_name: str = ""
    user_timezone: str
    items: list[TimelineItemView] = Field(default_factory=list)
    total_start: str = ""
    total_end: str = ""
    total_duration_minutes: int = 0
    play_duration_minutes: int = 0
    overlap_count: int = 0
    cooldown_risk_count: int = 0


class LayoutMarker(BaseModel):
    """A city window placed in a lane of the timeline chart."""
    city_id: str
    city_name: str
    start: str
    end: str
    lane: int
    palette_index: int
    color: str
    start_progress: float     # 0..1 along the layout range
    end_progress: float


class TimelineLayoutView(BaseModel):
    range_start: str
    range_end: str
    tick_marks: list[str] = Field(default_factory=list)
    markers: list[LayoutMarker] = Field(default_factory=list)
    lane_count: int = 0
    axis_timezone: str = ""


# Request/Response Models for API endpoints
class ConvertLocalEventRequest(BaseModel):
    """Request model for converting a local-time event window."""
    start: str
    end: str
    city_timezone: str
    user_timezone: str = ""


class FormatRangeRequest(BaseModel):
    """Request model for formatting an event's time range."""
    start: str
    end: str
    is_global_time: bool
    timezone: str
    include_date: bool = False


class FormatRangeResponse(BaseModel):
    formatted: str


class TimeDifferenceRequest(BaseModel):
    """Request model for describing the difference between two timezones."""
    from_timezone: str
    to_timezone: str
    at: str = ""               # ISO datetime; "" means now


class TimeDifferenceResponse(BaseModel):
    description: str


class BuildTimelineRequest(BaseModel):
    """Request model shared by the timeline build, layout and show endpoints."""
    start: str
    end: str
    is_global_time: bool = False
    cities: list[CityInput] = Field(default_factory=list)
    user_timezone: str = ""
    event_name: str = ""


class BuildTimelineResponse(BaseModel):
    """Response model for a built timeline; ``timeline`` is null when nothing is left to show."""
    timeline: t.Optional[CityTimeline] = None


class TimelineLayoutResponse(BaseModel):
    layout: t.Optional[TimelineLayoutView] = None


class ShowTimelineResponse(BaseModel):
    """Response model for the formatted timeline table."""
    formatted_timeline: str

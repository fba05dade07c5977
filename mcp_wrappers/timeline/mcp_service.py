"""
MCP wrapper for the timeline service.

This module keeps the timeline_server tool signatures but makes HTTP calls
to the timeline REST service. It converts between the dataclass models the
tools return and the Pydantic models used on the wire.
"""
from __future__ import annotations

import os
import typing as t

import httpx
from fastmcp import FastMCP

# Dataclass models for MCP interface compatibility
from timeline_server.models import CityInput, CityTimeline, ConvertedWindow, TimelineItemView
# Pydantic models for HTTP serialization
from services.shared.models import (
    BuildTimelineRequest,
    BuildTimelineResponse,
    CityInput as PydanticCityInput,
    CityTimeline as PydanticCityTimeline,
    ConvertedWindow as PydanticConvertedWindow,
    ConvertLocalEventRequest,
    FormatRangeRequest,
    FormatRangeResponse,
    ShowTimelineResponse,
    TimeDifferenceRequest,
    TimeDifferenceResponse,
)


mcp = FastMCP("TimelineMCPWrapper")

# Service URL - configurable via environment variable
TIMELINE_SERVICE_URL = os.getenv("TIMELINE_SERVICE_URL", "http://localhost:8004")

# Every endpoint is a pure computation (in seconds)
STANDARD_TIMEOUT = 30.0


def _post(path: str, payload: dict[str, t.Any], action: str) -> dict[str, t.Any]:
    try:
        with httpx.Client(timeout=STANDARD_TIMEOUT) as client:
            response = client.post(f"{TIMELINE_SERVICE_URL}{path}", json=payload)
            response.raise_for_status()
        return response.json()

    except httpx.TimeoutException:
        raise RuntimeError(f"{action} timed out after {STANDARD_TIMEOUT} seconds")
    except httpx.HTTPStatusError as e:
        raise RuntimeError(f"HTTP error from timeline service: {e.response.status_code} {e.response.text}")
    except Exception as e:
        raise RuntimeError(f"Error calling timeline service: {str(e)}")


def _city_payload(cities: t.Iterable[t.Any]) -> list[PydanticCityInput]:
    payload = []
    for city in cities:
        if isinstance(city, dict):
            payload.append(PydanticCityInput(**city))
        else:
            payload.append(PydanticCityInput(id=city.id, name=city.name, timezone=city.timezone))
    return payload


def _pydantic_to_dataclass_timeline(timeline: PydanticCityTimeline) -> CityTimeline:
    return CityTimeline(
        event_name=timeline.event_name,
        user_timezone=timeline.user_timezone,
        items=[TimelineItemView(**item.model_dump()) for item in timeline.items],
        total_start=timeline.total_start,
        total_end=timeline.total_end,
        total_duration_minutes=timeline.total_duration_minutes,
        play_duration_minutes=timeline.play_duration_minutes,
        overlap_count=timeline.overlap_count,
        cooldown_risk_count=timeline.cooldown_risk_count,
    )


def _timeline_request(
        start: str,
        end: str,
        is_global_time: bool,
        cities: list[CityInput],
        user_timezone: str,
        event_name: str,
) -> dict[str, t.Any]:
    return BuildTimelineRequest(
        start=start,
        end=end,
        is_global_time=is_global_time,
        cities=_city_payload(cities),
        user_timezone=user_timezone,
        event_name=event_name,
    ).model_dump()


def _convert_local_event_time(start: str, end: str, city_timezone: str, user_timezone: str = "") -> ConvertedWindow:
    request = ConvertLocalEventRequest(
        start=start, end=end, city_timezone=city_timezone, user_timezone=user_timezone
    )
    data = _post("/time/convert-local", request.model_dump(), "Event time conversion")
    return ConvertedWindow(**PydanticConvertedWindow(**data).model_dump())


def _format_event_time_range(
        start: str,
        end: str,
        is_global_time: bool,
        timezone_identifier: str,
        include_date: bool = False,
) -> str:
    request = FormatRangeRequest(
        start=start,
        end=end,
        is_global_time=is_global_time,
        timezone=timezone_identifier,
        include_date=include_date,
    )
    data = _post("/time/format-range", request.model_dump(), "Time range formatting")
    return FormatRangeResponse(**data).formatted


def _describe_time_difference(from_timezone: str, to_timezone: str, at: str = "") -> str:
    request = TimeDifferenceRequest(from_timezone=from_timezone, to_timezone=to_timezone, at=at)
    data = _post("/time/difference", request.model_dump(), "Time difference lookup")
    return TimeDifferenceResponse(**data).description


def _build_city_timeline(
        start: str,
        end: str,
        is_global_time: bool,
        cities: list[CityInput],
        user_timezone: str = "",
        event_name: str = "",
) -> t.Optional[CityTimeline]:
    payload = _timeline_request(start, end, is_global_time, cities, user_timezone, event_name)
    response = BuildTimelineResponse(**_post("/timeline/build", payload, "Timeline build"))
    if response.timeline is None:
        return None
    return _pydantic_to_dataclass_timeline(response.timeline)


def _show_city_timeline(
        start: str,
        end: str,
        is_global_time: bool,
        cities: list[CityInput],
        user_timezone: str = "",
        event_name: str = "",
) -> str:
    payload = _timeline_request(start, end, is_global_time, cities, user_timezone, event_name)
    return ShowTimelineResponse(**_post("/timeline/show", payload, "Timeline display")).formatted_timeline


@mcp.tool()
def convert_local_event_time(start: str, end: str, city_timezone: str, user_timezone: str = "") -> ConvertedWindow:
    """Converts a local-time event window into the user's timezone.

    :param start: Event start as ISO datetime; its clock digits are the local time.
    :param end: Event end as ISO datetime.
    :param city_timezone: IANA timezone where the event is played (e.g. "Asia/Tokyo").
    :param user_timezone: IANA timezone of the user (optional).
    :return: The converted window with a formatted range.
    """
    return _convert_local_event_time(start, end, city_timezone, user_timezone)


@mcp.tool()
def format_event_time_range(
        start: str,
        end: str,
        is_global_time: bool,
        timezone_identifier: str,
        include_date: bool = False,
) -> str:
    """Formats an event's time range for a timezone.

    :param start: Event start as ISO datetime.
    :param end: Event end as ISO datetime.
    :param is_global_time: True if the event starts at the same instant everywhere.
    :param timezone_identifier: IANA timezone to format for.
    :param include_date: Whether to prefix the date.
    :return: A string like "14:00-17:00 JST".
    """
    return _format_event_time_range(start, end, is_global_time, timezone_identifier, include_date)


@mcp.tool()
def describe_time_difference(from_timezone: str, to_timezone: str, at: str = "") -> str:
    """Describes how far one timezone is ahead of or behind another.

    :param from_timezone: The reference IANA timezone (usually the user's).
    :param to_timezone: The IANA timezone to compare.
    :param at: ISO datetime to evaluate offsets at (optional, defaults to now).
    :return: "Same as your time", "N hours ahead" or "N hours behind".
    """
    return _describe_time_difference(from_timezone, to_timezone, at)


@mcp.tool()
def build_city_timeline(
        start: str,
        end: str,
        is_global_time: bool,
        cities: list[CityInput],
        user_timezone: str = "",
        event_name: str = "",
) -> t.Optional[CityTimeline]:
    """Builds the chronological timeline of one event across several cities.

    :return: The timeline, or null when no city has a usable window.
    """
    return _build_city_timeline(start, end, is_global_time, cities, user_timezone, event_name)


@mcp.tool()
def show_city_timeline(
        start: str,
        end: str,
        is_global_time: bool,
        cities: list[CityInput],
        user_timezone: str = "",
        event_name: str = "",
) -> str:
    """Displays the multi-city timeline of an event as a formatted table."""
    return _show_city_timeline(start, end, is_global_time, cities, user_timezone, event_name)


if __name__ == "__main__":
    mcp.run()

# -*- coding: utf-8 -*-
"""
MCP server exposing event time conversion and multi-city timelines.

Raw ``_`` functions hold the logic so that the REST service and tests can
call them directly; the ``@mcp.tool()`` functions below register them.
"""

import typing as t
from datetime import datetime, timedelta, timezone

from fastmcp import FastMCP

from timeline.builder import build_timeline, participants_from_records
from timeline.models import CityTimeEntry, Timeline
from timeline_server.models import CityInput, CityTimeline, ConvertedWindow, TimelineItemView
from zonetime.conversion import convert_wall_clock
from zonetime.formatting import difference_description, format_duration, format_event_range, format_range
from zonetime.lookup import resolve_timezone_or_default, zone_identifier
from zonetime.lookup import user_timezone as default_user_zone
from zonetime.models import EventWindow, parse_instant

mcp = FastMCP("TimelineServer")


def _minutes(delta: timedelta) -> int:
    return int(delta.total_seconds() // 60)


def _event_window(start: str, end: str, is_global_time: bool, event_name: str = "") -> EventWindow:
    try:
        return EventWindow(
            start=parse_instant(start),
            end=parse_instant(end),
            is_global_time=is_global_time,
            name=event_name,
        )
    except (ValueError, AttributeError) as e:
        raise ValueError(f"Invalid event time range {start!r} - {end!r}: {e}") from e


def _user_zone(identifier: str):
    return resolve_timezone_or_default(identifier) if identifier else default_user_zone()


def timeline_to_view(timeline: Timeline, event_name: str = "") -> CityTimeline:
    """Flatten a core timeline into the tool-facing dataclass."""
    zone = timeline.user_zone
    items: list[TimelineItemView] = []
    for item in timeline.items:
        if isinstance(item, CityTimeEntry):
            items.append(TimelineItemView(
                kind="city",
                start=item.start.isoformat(),
                end=item.end.isoformat(),
                label=format_range(item.start, item.end, zone),
                duration_minutes=_minutes(item.duration),
                city_id=item.city_id,
                city_name=item.city_name,
            ))
        else:
            items.append(TimelineItemView(
                kind="gap",
                start=item.start.isoformat(),
                end=item.end.isoformat(),
                label=format_duration(abs(item.duration)),
                duration_minutes=_minutes(item.duration),
                gap_kind=item.kind.value,
            ))

    return CityTimeline(
        event_name=event_name,
        user_timezone=zone_identifier(zone),
        items=items,
        total_start=timeline.total_start.isoformat(),
        total_end=timeline.total_end.isoformat(),
        total_duration_minutes=_minutes(timeline.total_duration),
        play_duration_minutes=_minutes(timeline.play_duration),
        overlap_count=len(timeline.overlaps),
        cooldown_risk_count=len(timeline.cooldown_risks),
    )


def _convert_local_event_time(start: str, end: str, city_timezone: str, user_timezone: str = "") -> ConvertedWindow:
    window = _event_window(start, end, is_global_time=False)
    city_zone = resolve_timezone_or_default(city_timezone)
    viewer_zone = _user_zone(user_timezone)
    converted_start = convert_wall_clock(window.start, city_zone, viewer_zone)
    converted_end = convert_wall_clock(window.end, city_zone, viewer_zone)
    return ConvertedWindow(
        start=converted_start.isoformat(),
        end=converted_end.isoformat(),
        formatted=format_range(converted_start, converted_end, viewer_zone, include_date=True),
        city_timezone=city_zone.key,
        user_timezone=viewer_zone.key,
    )


def _format_event_time_range(
        start: str,
        end: str,
        is_global_time: bool,
        timezone_identifier: str,
        include_date: bool = False,
) -> str:
    window = _event_window(start, end, is_global_time)
    return format_event_range(window, resolve_timezone_or_default(timezone_identifier), include_date=include_date)


def _describe_time_difference(from_timezone: str, to_timezone: str, at: str = "") -> str:
    reference = parse_instant(at) if at else datetime.now(timezone.utc)
    return difference_description(
        resolve_timezone_or_default(from_timezone),
        resolve_timezone_or_default(to_timezone),
        reference,
    )


def timeline_for(
        start: str,
        end: str,
        is_global_time: bool,
        cities: t.Iterable[t.Any],
        user_timezone: str = "",
        event_name: str = "",
) -> t.Optional[Timeline]:
    """Parse raw tool input and build the core timeline.

    ``cities`` may hold any objects with ``id``, ``name`` and ``timezone``.

    :raises ValueError: If ``start`` or ``end`` is not ISO-8601.
    """
    window = _event_window(start, end, is_global_time, event_name)
    participants = participants_from_records((city.id, city.name, city.timezone) for city in cities)
    return build_timeline(window, participants, _user_zone(user_timezone))


def _build_city_timeline(
        start: str,
        end: str,
        is_global_time: bool,
        cities: list[CityInput],
        user_timezone: str = "",
        event_name: str = "",
) -> t.Optional[CityTimeline]:
    timeline = timeline_for(start, end, is_global_time, cities, user_timezone, event_name)
    if timeline is None:
        return None
    return timeline_to_view(timeline, event_name)


def format_city_timeline(view: t.Optional[CityTimeline]) -> str:
    """Render a timeline view as a plain-text table."""
    if view is None or not view.items:
        return "🕒 No timeline available for the selected cities."

    lines = []
    title = f"🕒 TIMELINE: {view.event_name}" if view.event_name else "🕒 TIMELINE"
    lines.append(f"{title} ({view.user_timezone})")
    lines.append("=" * 80)
    lines.append(f"{'#':<4} {'City / Gap':<35} {'Time':<25} {'Duration':<14}")
    lines.append("-" * 80)

    city_number = 0
    for item in view.items:
        if item.kind == "city":
            city_number += 1
            name = item.city_name[:34] if len(item.city_name) > 34 else item.city_name
            duration = format_duration(timedelta(minutes=item.duration_minutes))
            lines.append(f"{city_number:<4} {name:<35} {item.label:<25} {duration:<14}")
        else:
            marker = {
                "overlap": "⚠️  Overlap",
                "cooldown_risk": "⏳ Short break",
            }.get(item.gap_kind, "✈️  Travel / break")
            lines.append(f"{'':<4} {marker:<35} {'':<25} {item.label:<14}")

    lines.append("=" * 80)
    lines.append(
        f"Total: {format_duration(timedelta(minutes=view.total_duration_minutes))}, "
        f"active play: {format_duration(timedelta(minutes=view.play_duration_minutes))}"
    )
    if view.overlap_count:
        lines.append(f"Overlaps: {view.overlap_count}")
    if view.cooldown_risk_count:
        lines.append(f"Short breaks: {view.cooldown_risk_count}")
    return "\n".join(lines)


def _show_city_timeline(
        start: str,
        end: str,
        is_global_time: bool,
        cities: list[CityInput],
        user_timezone: str = "",
        event_name: str = "",
) -> str:
    return format_city_timeline(
        _build_city_timeline(start, end, is_global_time, cities, user_timezone, event_name)
    )


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

    Global events are converted; local events keep their clock digits and
    are labeled with the timezone's abbreviation.

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

    :param start: Event start as ISO datetime.
    :param end: Event end as ISO datetime.
    :param is_global_time: True if the event starts at the same instant everywhere.
    :param cities: Cities to include, each with an IANA timezone.
    :param user_timezone: IANA timezone of the user (optional).
    :param event_name: Display name of the event (optional).
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
    """Displays the multi-city timeline of an event as a formatted table.

    :return: Formatted string with each city's window and the breaks between them.
    """
    return _show_city_timeline(start, end, is_global_time, cities, user_timezone, event_name)


if __name__ == "__main__":
    mcp.run()

"""Display strings for instants, ranges and timezone differences.

Every function formats fresh datetime values, so nothing here holds
formatter state between calls.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo
from enum import Enum

from zonetime.conversion import convert_wall_clock, time_zone_offset_difference_hours
from zonetime.lookup import zone_identifier
from zonetime.models import EventWindow, ensure_utc


class FormatStyle(Enum):
    """How much of an instant to show."""
    DATE = "date"            # July 15, 2025
    TIME = "time"            # 14:00
    DATE_TIME = "date_time"  # Jul 15, 2025, 14:00


def _localize(instant: datetime, zone: tzinfo) -> datetime:
    instant = ensure_utc(instant)
    try:
        return instant.astimezone(zone)
    except (OverflowError, ValueError):
        return instant


def format_instant(instant: datetime, style: FormatStyle, zone: tzinfo) -> str:
    """Format ``instant`` as seen in ``zone``."""
    local = _localize(instant, zone)
    if style is FormatStyle.DATE:
        return f"{local:%B} {local.day}, {local.year}"
    if style is FormatStyle.TIME:
        return f"{local:%H:%M}"
    return f"{local:%b} {local.day}, {local.year}, {local:%H:%M}"


def timezone_abbreviation(zone: tzinfo, at: datetime) -> str:
    """Abbreviation in effect at ``at`` (``"JST"``, ``"CEST"``).

    Zones without a lettered abbreviation report numeric names such as
    ``"+07"``; those fall back to the IANA identifier.
    """
    name = _localize(at, zone).tzname()
    if not name or name[0] in "+-":
        return zone_identifier(zone)
    return name


def format_range(start: datetime, end: datetime, zone: tzinfo, include_date: bool = False) -> str:
    """``"14:00-17:00 JST"`` or ``"July 15, 2025, 14:00-17:00 JST"``."""
    start_time = format_instant(start, FormatStyle.TIME, zone)
    end_time = format_instant(end, FormatStyle.TIME, zone)
    abbreviation = timezone_abbreviation(zone, start)
    if include_date:
        date_string = format_instant(start, FormatStyle.DATE, zone)
        return f"{date_string}, {start_time}-{end_time} {abbreviation}"
    return f"{start_time}-{end_time} {abbreviation}"


def compact_range(start: datetime, end: datetime, zone: tzinfo, include_date: bool = False) -> str:
    """``"14:00–17:00"`` with an optional leading date, no zone label."""
    start_time = format_instant(start, FormatStyle.TIME, zone)
    end_time = format_instant(end, FormatStyle.TIME, zone)
    if include_date:
        return f"{format_instant(start, FormatStyle.DATE, zone)} {start_time}–{end_time}"
    return f"{start_time}–{end_time}"


def format_event_range(window: EventWindow, zone: tzinfo, include_date: bool = False) -> str:
    """Format an event's time range for a viewer in ``zone``.

    Global events are converted into ``zone``. Local events are not: their
    stored digits are shown as read in UTC, so an 18:00 kickoff reads 18:00
    in every city, and ``zone`` only supplies the label.
    """
    if window.is_global_time:
        return format_range(window.start, window.end, zone, include_date=include_date)

    start_time = format_instant(window.start, FormatStyle.TIME, timezone.utc)
    end_time = format_instant(window.end, FormatStyle.TIME, timezone.utc)
    abbreviation = timezone_abbreviation(zone, window.start)
    if include_date:
        date_string = format_instant(window.start, FormatStyle.DATE, timezone.utc)
        return f"{date_string}, {start_time}-{end_time} {abbreviation}"
    return f"{start_time}-{end_time} {abbreviation}"


def format_local_event_in_user_time(
        window: EventWindow,
        city_zone: tzinfo,
        user_zone: tzinfo,
        include_date: bool = False,
) -> str:
    """When a city's local event runs, expressed in the viewer's zone."""
    start = convert_wall_clock(window.start, city_zone, user_zone)
    end = convert_wall_clock(window.end, city_zone, user_zone)
    return format_range(start, end, user_zone, include_date=include_date)


def format_instant_with_zone(instant: datetime, zone: tzinfo, include_date: bool = True) -> str:
    """``"Jul 15, 2025, 14:00 JST"`` or ``"14:00 JST"``."""
    style = FormatStyle.DATE_TIME if include_date else FormatStyle.TIME
    return f"{format_instant(instant, style, zone)} {timezone_abbreviation(zone, instant)}"


def _hours(count: int) -> str:
    return f"{count} hour" if count == 1 else f"{count} hours"


def difference_description(from_zone: tzinfo, to_zone: tzinfo, at: datetime) -> str:
    """Describe how far ``to_zone`` is from ``from_zone`` at ``at``."""
    difference = time_zone_offset_difference_hours(from_zone, to_zone, at)
    if difference == 0:
        return "Same as your time"
    if difference > 0:
        return f"{_hours(abs(difference))} ahead"
    return f"{_hours(abs(difference))} behind"


def format_duration(delta: timedelta) -> str:
    """``"3h"``, ``"1h 30min"`` or ``"45min"``. Negative values read as zero."""
    total_seconds = max(0, int(delta.total_seconds()))
    hours, remainder = divmod(total_seconds, 3600)
    minutes = remainder // 60
    if hours and minutes:
        return f"{hours}h {minutes}min"
    if hours:
        return f"{hours}h"
    return f"{minutes}min"

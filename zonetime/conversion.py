"""Timezone arithmetic for global and local-time events.

All functions are pure: they take instants and zones and return new
instants. Offsets are always evaluated at a specific instant because
daylight saving time changes them over the year.
"""
from __future__ import annotations

import typing as t
from datetime import datetime, timezone, tzinfo

from loguru import logger

from zonetime.models import EventWindow, ensure_utc


def convert_wall_clock(instant: datetime, from_zone: tzinfo, to_zone: tzinfo) -> datetime:
    """Reinterpret the UTC wall-clock reading of ``instant`` as local time in ``from_zone``.

    A local event stored as 18:00 (read in UTC) happens at 18:00 in each
    city. The returned instant is the moment it is 18:00 in ``from_zone``;
    formatting it in ``to_zone`` shows when that is for the viewer.

    Wall-clock times inside a DST gap or fold resolve with ``fold=0``: a
    missing time moves forward by the gap, an ambiguous one takes its first
    occurrence. If the rebuilt instant falls outside the supported calendar
    range, ``instant`` is returned unchanged.

    :param instant: Instant whose UTC components hold the local clock time.
    :param from_zone: Zone where the event happens.
    :param to_zone: Zone the result will be displayed in.
    :return: The absolute instant of the event in ``from_zone``.
    """
    instant = ensure_utc(instant)
    wall_clock = instant.replace(tzinfo=None)
    try:
        return wall_clock.replace(tzinfo=from_zone).astimezone(timezone.utc)
    except (OverflowError, ValueError):
        logger.debug("Wall-clock reconstruction failed for {} in {}, keeping original", instant, from_zone)
        return instant


def convert_between_zones(instant: datetime, from_zone: tzinfo, to_zone: tzinfo) -> datetime:
    """Move the wall-clock reading of ``instant`` in ``from_zone`` over to ``to_zone``.

    14:00 in ``from_zone`` becomes 14:00 in ``to_zone``. Identical zones
    return the instant unchanged.
    """
    instant = ensure_utc(instant)
    try:
        wall_clock = instant.astimezone(from_zone).replace(tzinfo=None)
        return wall_clock.replace(tzinfo=to_zone).astimezone(timezone.utc)
    except (OverflowError, ValueError):
        logger.debug("Zone transfer failed for {} from {} to {}, keeping original", instant, from_zone, to_zone)
        return instant


def utc_offset_seconds(zone: tzinfo, at: datetime) -> int:
    """Offset of ``zone`` from UTC at ``at``, in seconds."""
    try:
        offset = ensure_utc(at).astimezone(zone).utcoffset()
    except (OverflowError, ValueError):
        offset = zone.utcoffset(ensure_utc(at).replace(tzinfo=None))
    return int(offset.total_seconds()) if offset is not None else 0


def time_zone_offset_difference_hours(a: tzinfo, b: tzinfo, at: datetime) -> int:
    """Hours that ``b`` is ahead of ``a`` at ``at``, truncated toward zero.

    Bangkok (UTC+7) to Berlin is -6 in January and -5 in July.
    """
    difference = utc_offset_seconds(b, at) - utc_offset_seconds(a, at)
    return int(difference / 3600)


def resolve_event_window(
        window: EventWindow,
        city_zone: tzinfo,
        user_zone: t.Optional[tzinfo] = None,
) -> tuple[datetime, datetime]:
    """The absolute (start, end) of ``window`` for a city.

    Global events are the same everywhere; local events are anchored in
    ``city_zone``.
    """
    if window.is_global_time:
        return window.start, window.end
    target = user_zone if user_zone is not None else city_zone
    return (
        convert_wall_clock(window.start, city_zone, target),
        convert_wall_clock(window.end, city_zone, target),
    )

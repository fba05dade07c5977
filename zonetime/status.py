"""Where an event stands for the viewer right now: upcoming, active or past."""
from __future__ import annotations

import typing as t
from datetime import datetime, timedelta, timezone, tzinfo
from enum import Enum

from zonetime.conversion import convert_wall_clock
from zonetime.models import EventWindow, ensure_utc


class EventStatus(Enum):
    UPCOMING = "upcoming"
    ACTIVE = "active"
    PAST = "past"


def actual_start(window: EventWindow, user_zone: tzinfo) -> datetime:
    """When the event starts for a viewer in ``user_zone``.

    Local events start at their wall-clock time in the viewer's own zone.
    """
    if window.is_global_time:
        return window.start
    return convert_wall_clock(window.start, user_zone, user_zone)


def actual_end(window: EventWindow, user_zone: tzinfo) -> datetime:
    if window.is_global_time:
        return window.end
    return convert_wall_clock(window.end, user_zone, user_zone)


def _now(now: t.Optional[datetime]) -> datetime:
    return ensure_utc(now) if now is not None else datetime.now(timezone.utc)


def event_status(window: EventWindow, user_zone: tzinfo, now: t.Optional[datetime] = None) -> EventStatus:
    """Status at ``now``; both bounds count as active."""
    current = _now(now)
    if actual_start(window, user_zone) > current:
        return EventStatus.UPCOMING
    if actual_end(window, user_zone) < current:
        return EventStatus.PAST
    return EventStatus.ACTIVE


def event_progress(window: EventWindow, user_zone: tzinfo, now: t.Optional[datetime] = None) -> float:
    """Elapsed share of an active event in [0, 1]; 0 when not active."""
    current = _now(now)
    if event_status(window, user_zone, current) is not EventStatus.ACTIVE:
        return 0.0
    start = actual_start(window, user_zone)
    total = (actual_end(window, user_zone) - start).total_seconds()
    if total <= 0:
        return 0.0
    return min(max((current - start).total_seconds() / total, 0.0), 1.0)


def _split(delta: timedelta) -> tuple[int, int, int]:
    seconds = int(delta.total_seconds())
    days, seconds = divmod(seconds, 86400)
    hours, seconds = divmod(seconds, 3600)
    return days, hours, seconds // 60


def countdown_text(window: EventWindow, user_zone: tzinfo, now: t.Optional[datetime] = None) -> t.Optional[str]:
    """``"Starts in 2d 3h"`` style text for upcoming events, else None."""
    current = _now(now)
    if event_status(window, user_zone, current) is not EventStatus.UPCOMING:
        return None
    days, hours, minutes = _split(actual_start(window, user_zone) - current)
    if days > 0:
        return f"Starts in {days}d {hours}h"
    if hours > 0:
        return f"Starts in {hours}h {minutes}min"
    if minutes > 0:
        return f"Starts in {minutes}min"
    return "Starting soon"


def time_remaining_text(window: EventWindow, user_zone: tzinfo, now: t.Optional[datetime] = None) -> t.Optional[str]:
    """``"Ends in 1h 20min"`` style text for active events, else None."""
    current = _now(now)
    if event_status(window, user_zone, current) is not EventStatus.ACTIVE:
        return None
    days, hours, minutes = _split(actual_end(window, user_zone) - current)
    hours += days * 24
    if hours > 0:
        return f"Ends in {hours}h {minutes}min"
    if minutes > 0:
        return f"Ends in {minutes}min"
    return "Ending soon"

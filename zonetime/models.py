"""
Data models for events and the cities that take part in them.

Instants are timezone-aware datetimes normalized to UTC. Zones are
``ZoneInfo`` objects resolved at the edge (see ``zonetime.lookup``).
"""
from __future__ import annotations

import typing as t
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from zonetime.lookup import resolve_timezone


def ensure_utc(instant: datetime) -> datetime:
    """Normalize a datetime to an aware UTC instant. Naive values are read as UTC."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def parse_instant(value: str) -> datetime:
    """Parse an ISO-8601 string (``Z`` suffix allowed) into a UTC instant.

    :raises ValueError: If the string is not ISO-8601.
    """
    return ensure_utc(datetime.fromisoformat(value.strip().replace("Z", "+00:00")))


@dataclass(frozen=True)
class EventWindow:
    """An event's start and end.

    When ``is_global_time`` is true the instants are absolute. Otherwise their
    UTC wall-clock components are the local clock time in every city
    ("18:00 local, wherever you are").
    """
    start: datetime
    end: datetime
    is_global_time: bool
    event_id: str = ""
    name: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", ensure_utc(self.start))
        object.__setattr__(self, "end", ensure_utc(self.end))

    @classmethod
    def from_feed(cls, raw_start: str, raw_end: str, event_id: str = "", name: str = "") -> "EventWindow":
        """Build a window from event-feed timestamps.

        The feed marks global events with a trailing ``Z`` on either bound;
        timestamps without it are local wall-clock times.

        :raises ValueError: If either timestamp is not ISO-8601.
        """
        is_global = raw_start.strip().endswith("Z") or raw_end.strip().endswith("Z")
        return cls(
            start=parse_instant(raw_start),
            end=parse_instant(raw_end),
            is_global_time=is_global,
            event_id=event_id,
            name=name,
        )

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def is_degenerate(self) -> bool:
        return self.end <= self.start


@dataclass(frozen=True)
class CityParticipant:
    """A city the user follows, with the zone its local events run in."""
    id: str
    display_name: str
    zone: ZoneInfo = field(compare=False)

    @property
    def timezone_identifier(self) -> str:
        return self.zone.key

    @classmethod
    def from_identifier(cls, id: str, display_name: str, timezone_identifier: str) -> "CityParticipant":
        """Build a participant from a raw IANA identifier.

        :raises TimezoneLookupError: If the identifier is unknown.
        """
        return cls(id=id, display_name=display_name, zone=resolve_timezone(timezone_identifier))


# (id, display name, IANA identifier)
CityRecord = t.Tuple[str, str, str]

"""Build the chronological multi-city timeline of one event.

The builder never raises for typed input: cities whose window cannot be
resolved or is degenerate are left out, and a build with nothing left
returns ``None``.
"""
from __future__ import annotations

import typing as t
from datetime import timedelta, tzinfo

from loguru import logger

from timeline.models import CityTimeEntry, TimeGap, Timeline, TimelineItem
from zonetime.conversion import resolve_event_window
from zonetime.lookup import TimezoneLookupError
from zonetime.models import CityParticipant, CityRecord, EventWindow


def participants_from_records(records: t.Iterable[CityRecord]) -> list[CityParticipant]:
    """Turn raw ``(id, name, timezone identifier)`` records into participants.

    Records with an unknown timezone are dropped.
    """
    participants: list[CityParticipant] = []
    for city_id, name, identifier in records:
        try:
            participants.append(CityParticipant.from_identifier(city_id, name, identifier))
        except TimezoneLookupError:
            logger.debug("Dropping city {!r}: unknown timezone {!r}", name, identifier)
    return participants


def _entry_for(event: EventWindow, city: CityParticipant, user_zone: tzinfo) -> t.Optional[CityTimeEntry]:
    start, end = resolve_event_window(event, city.zone, user_zone)
    if end <= start:
        logger.debug("Dropping city {!r}: empty window {} - {}", city.display_name, start, end)
        return None
    return CityTimeEntry(
        city_id=city.id,
        city_name=city.display_name,
        start=start,
        end=end,
        timezone_identifier=city.timezone_identifier,
    )


def build_timeline(
        event: EventWindow,
        cities: t.Sequence[CityParticipant],
        user_zone: tzinfo,
) -> t.Optional[Timeline]:
    """Order each city's window of ``event`` in time and annotate the gaps.

    :param event: The event to place on the timeline.
    :param cities: Participating cities, in the caller's preferred order.
    :param user_zone: The viewer's zone.
    :return: The timeline, or None when no city has a usable window.
    """
    if not cities:
        return None

    entries = [entry for entry in (_entry_for(event, city, user_zone) for city in cities) if entry is not None]
    if not entries:
        return None

    # sorted() is stable: equal starts keep the caller's city order
    entries = sorted(entries, key=lambda entry: entry.start)

    items: list[TimelineItem] = []
    play_duration = timedelta(0)
    for index, entry in enumerate(entries):
        play_duration += entry.duration
        items.append(entry)
        if index < len(entries) - 1:
            items.append(TimeGap(start=entry.end, end=entries[index + 1].start))

    return Timeline(
        items=tuple(items),
        user_zone=user_zone,
        total_start=entries[0].start,
        total_end=entries[-1].end,
        play_duration=play_duration,
    )

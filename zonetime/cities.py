"""Display helpers for followed cities: continents, offsets, colours and sorting."""
from __future__ import annotations

import typing as t
import zlib
from datetime import datetime, timezone, tzinfo
from enum import Enum

from zonetime.conversion import utc_offset_seconds
from zonetime.models import CityParticipant


PALETTE = (
    "blue",
    "mint",
    "orange",
    "purple",
    "teal",
    "pink",
    "indigo",
    "cyan",
    "green",
    "red",
)

# America/* zones that belong to South America
_SOUTH_AMERICA_MARKERS = ("Argentina", "Buenos_Aires", "Sao_Paulo", "Santiago", "Lima", "Bogota", "Caracas")

_REGION_CONTINENTS = {
    "africa": "Africa",
    "antarctica": "Antarctica",
    "arctic": "Arctic",
    "asia": "Asia",
    "atlantic": "Atlantic",
    "australia": "Oceania",
    "europe": "Europe",
    "indian": "Indian Ocean",
    "pacific": "Oceania",
}


def continent_for(timezone_identifier: str) -> str:
    """Continent name for an IANA identifier, ``"Unknown"`` when it has no region."""
    region = timezone_identifier.split("/")[0].lower() if timezone_identifier else ""
    if region == "america":
        if any(marker in timezone_identifier for marker in _SOUTH_AMERICA_MARKERS):
            return "South America"
        return "North America"
    return _REGION_CONTINENTS.get(region, "Unknown")


def extract_country(full_name: str) -> t.Optional[str]:
    """Country from ``"City, Country"`` or ``"City, Region, Country"``."""
    parts = [part.strip() for part in full_name.split(",")]
    if len(parts) >= 2:
        return parts[-1]
    return None


def utc_offset_hours(zone: tzinfo, at: datetime) -> int:
    """Whole hours from UTC at ``at``, truncated toward zero."""
    return int(utc_offset_seconds(zone, at) / 3600)


def formatted_utc_offset(zone: tzinfo, at: datetime) -> str:
    """``"UTC+9"``, ``"UTC-5"`` or ``"UTC+5:30"``."""
    seconds = utc_offset_seconds(zone, at)
    sign = "+" if seconds >= 0 else "-"
    hours, remainder = divmod(abs(seconds), 3600)
    minutes = remainder // 60
    if minutes:
        return f"UTC{sign}{hours}:{minutes:02d}"
    return f"UTC{sign}{hours}"


def palette_index(key: str, size: int = len(PALETTE)) -> int:
    """Stable palette slot for ``key``; the same key maps to the same slot on every run."""
    if size <= 0:
        return 0
    return zlib.crc32(key.encode("utf-8")) % size


def palette_color(key: str) -> str:
    return PALETTE[palette_index(key)]


class CitySortOption(Enum):
    NAME = "name"
    COUNTRY = "country"
    CONTINENT = "continent"
    TIME_ZONE = "time_zone"


class SortOrder(Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"

    def toggled(self) -> "SortOrder":
        return SortOrder.DESCENDING if self is SortOrder.ASCENDING else SortOrder.ASCENDING


def sort_cities(
        cities: t.Iterable[CityParticipant],
        option: CitySortOption = CitySortOption.NAME,
        order: SortOrder = SortOrder.ASCENDING,
        at: t.Optional[datetime] = None,
) -> list[CityParticipant]:
    """Sort cities for display. Ties fall back to the display name.

    :param at: Reference instant for offset sorting, defaults to now.
    """
    reference = at or datetime.now(timezone.utc)

    def sort_key(city: CityParticipant) -> tuple:
        name = city.display_name.casefold()
        if option is CitySortOption.COUNTRY:
            return ((extract_country(city.display_name) or "").casefold(), name)
        if option is CitySortOption.CONTINENT:
            return (continent_for(city.timezone_identifier), name)
        if option is CitySortOption.TIME_ZONE:
            return (utc_offset_seconds(city.zone, reference), name)
        return (name,)

    return sorted(cities, key=sort_key, reverse=order is SortOrder.DESCENDING)

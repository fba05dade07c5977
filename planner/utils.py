"""Utility functions for the timeline CLI."""
import re

import click

from timeline_server.models import CityInput


def _slug(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-") or "city"


def parse_city_option(value: str) -> CityInput:
    """Parse a ``--city`` value.

    Args:
        value: ``"Name=Area/Location"`` (e.g. ``"Tokyo=Asia/Tokyo"``), or a bare
            IANA identifier whose last component becomes the name.

    Returns:
        The city as a tool input.

    Raises:
        click.BadParameter: If the value has an empty name or timezone.
    """
    if "=" in value:
        name, _, timezone = value.partition("=")
    else:
        timezone = value
        name = value.rsplit("/", 1)[-1].replace("_", " ")

    name, timezone = name.strip(), timezone.strip()
    if not name or not timezone:
        raise click.BadParameter(f"Expected NAME=TIMEZONE, got {value!r}", param_hint="--city")

    return CityInput(id=_slug(name), name=name, timezone=timezone)


def parse_city_options(values: tuple[str, ...]) -> list[CityInput]:
    """Parse every ``--city`` value, keeping command-line order.

    Repeated names get a numbered id (``paris``, ``paris-2``) so each city
    keeps its own row and colour.
    """
    cities: list[CityInput] = []
    used: set[str] = set()
    for value in values:
        city = parse_city_option(value)
        city_id, suffix = city.id, 1
        while city_id in used:
            suffix += 1
            city_id = f"{city.id}-{suffix}"
        used.add(city_id)
        cities.append(CityInput(id=city_id, name=city.name, timezone=city.timezone))
    return cities

"""Timezone lookup at the input edge.

Raw IANA identifiers are parsed here, once. Everything behind this module
works with concrete ``ZoneInfo`` objects.
"""
from __future__ import annotations

import os
import typing as t
from datetime import timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from loguru import logger

UTC = ZoneInfo("UTC")

# User zone override, then the conventional TZ variable.
USER_TIMEZONE = os.getenv("PZB_USER_TIMEZONE") or os.getenv("TZ") or ""


class TimezoneLookupError(ValueError):
    """Raised when an identifier does not name a zone in the IANA database."""

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Unknown timezone identifier: {identifier!r}")
        self.identifier = identifier


def resolve_timezone(identifier: str) -> ZoneInfo:
    """Resolve an IANA identifier such as ``"Asia/Tokyo"``.

    :param identifier: The IANA timezone identifier.
    :return: The matching ZoneInfo.
    :raises TimezoneLookupError: If the identifier is empty, malformed or unknown.
    """
    if not isinstance(identifier, str) or not identifier.strip():
        raise TimezoneLookupError(str(identifier))
    try:
        return ZoneInfo(identifier.strip())
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise TimezoneLookupError(identifier) from e


def resolve_timezone_or_default(identifier: t.Optional[str], default: ZoneInfo = UTC) -> ZoneInfo:
    """Resolve an identifier, falling back to ``default`` when it is unknown."""
    if not identifier:
        return default
    try:
        return resolve_timezone(identifier)
    except TimezoneLookupError:
        logger.warning("Unknown timezone {!r}, falling back to {}", identifier, default.key)
        return default


def is_valid_timezone(identifier: str) -> bool:
    try:
        resolve_timezone(identifier)
    except TimezoneLookupError:
        return False
    return True


def user_timezone() -> ZoneInfo:
    """The viewer's zone: ``PZB_USER_TIMEZONE``, else ``TZ``, else UTC."""
    return resolve_timezone_or_default(USER_TIMEZONE)


def zone_identifier(zone: t.Any) -> str:
    """Best-effort identifier for any tzinfo, used in labels and ids."""
    key = getattr(zone, "key", None)
    if key:
        return key
    if zone is timezone.utc:
        return "UTC"
    return str(zone)

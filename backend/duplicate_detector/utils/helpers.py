"""Miscellaneous helper functions."""

from __future__ import annotations

import datetime as dt
from typing import Optional


def parse_iso_datetime(value: str | None) -> Optional[dt.datetime]:
    """Parse an ISO8601 date or datetime string into a :class:`datetime` object.

    Some data sources provide timestamps that end with ``z`` or ``Z``
    instead of an explicit offset. This function normalises that case to
    ``+00:00`` and returns ``None`` if the value cannot be parsed.
    """
    if not value:
        return None
    value = value.strip()
    if value[-1:] in ("z", "Z"):
        value = value[:-1] + "+00:00"
    try:
        return dt.datetime.fromisoformat(value)
    except ValueError:
        return None


def utc_timestamp() -> str:
    """Current UTC time as an ISO8601 string with millisecond precision."""
    now = dt.datetime.now(dt.timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")

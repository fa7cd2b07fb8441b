"""Timestamp helpers for status snapshots and host CLI output."""

from __future__ import annotations

import datetime as dt


def utcnow() -> dt.datetime:
    """Return an aware UTC timestamp for status snapshots."""
    return dt.datetime.now(dt.UTC)


def parse_iso_datetime(value: str) -> dt.datetime:
    """Parse an ISO 8601 timestamp from a host CLI into aware UTC.

    Both ``gh`` and ``glab`` emit RFC 3339 strings, with GitHub using a
    trailing ``Z`` and GitLab an explicit offset (sometimes with fractional
    seconds).

    Raises
    ------
    ValueError
        If the value is not ISO 8601 or carries no timezone.

    """
    text = value.replace("Z", "+00:00")
    parsed = dt.datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        msg = f"Host datetime missing timezone: {value}"
        raise ValueError(msg)
    return parsed.astimezone(dt.UTC)

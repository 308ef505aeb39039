"""Conversion between save-file Julian seconds and datetimes."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

__all__ = ["UNIX_JULIAN_DELTA", "from_julian_seconds", "to_julian_seconds"]

UNIX_JULIAN_DELTA = 210866803200
"""Seconds between the start of the Julian day count and the Unix epoch."""

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def from_julian_seconds(julian_seconds: int) -> datetime:
    """Return the UTC moment ``julian_seconds`` after the Julian day epoch."""
    if julian_seconds < UNIX_JULIAN_DELTA:
        raise ValueError(f"{julian_seconds} lies before the Unix epoch")
    unix_seconds = julian_seconds - UNIX_JULIAN_DELTA
    days, seconds = divmod(unix_seconds, 86400)
    try:
        return _EPOCH + timedelta(days=days, seconds=seconds)
    except OverflowError as exc:
        raise ValueError(f"{julian_seconds} is out of the supported date range") from exc


def to_julian_seconds(moment: datetime | None) -> int:
    """Return the Julian seconds of ``moment``; ``None`` counts as the Unix epoch.

    A naive datetime is taken to be in local time.
    """
    unix_seconds = int(moment.timestamp()) if moment is not None else 0
    return unix_seconds + UNIX_JULIAN_DELTA
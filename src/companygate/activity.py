"""Derivation of the canonical ``active`` flag from closure dates."""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import UTC, datetime, timedelta, timezone

from .errors import DateFormatError

Clock = Callable[[], datetime]

# RFC 3339 date-time: date, time and offset are all mandatory.
_RFC3339 = re.compile(
    r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"T(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>Z|(?P<sign>[+-])(?P<off_hour>\d{2}):(?P<off_minute>\d{2}))",
    re.ASCII,
)


def utc_now() -> datetime:
    return datetime.now(UTC)


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp into an aware :class:`datetime`.

    Fractional seconds are truncated to microseconds. Raises
    :class:`DateFormatError` when the string does not follow the format or a
    component is out of range.
    """

    return _parse_with_remainder(value)[0]


def _parse_with_remainder(value: str) -> tuple[datetime, bool]:
    """Parse ``value`` and report whether non-zero sub-microsecond digits were dropped."""

    match = _RFC3339.fullmatch(value)
    if match is None:
        raise DateFormatError(value, "expected RFC 3339 format YYYY-MM-DDTHH:MM:SS(Z|+HH:MM)")

    if match["offset"] == "Z":
        tzinfo: timezone = UTC
    else:
        off_hour, off_minute = int(match["off_hour"]), int(match["off_minute"])
        if off_hour > 23 or off_minute > 59:
            raise DateFormatError(value, "time zone offset out of range")
        offset = timedelta(hours=off_hour, minutes=off_minute)
        tzinfo = timezone(-offset if match["sign"] == "-" else offset)

    fraction = match["fraction"] or ""
    microsecond = int(fraction[:6].ljust(6, "0"))
    has_remainder = fraction[6:].strip("0") != ""

    try:
        parsed = datetime(
            int(match["year"]),
            int(match["month"]),
            int(match["day"]),
            int(match["hour"]),
            int(match["minute"]),
            int(match["second"]),
            microsecond,
            tzinfo=tzinfo,
        )
    except ValueError as exc:
        raise DateFormatError(value, str(exc)) from exc
    return parsed, has_remainder


def is_active(closure_date: str, now: datetime | None = None) -> bool:
    """Return whether a company with the given closure date is active at ``now``.

    An empty date means the company was never closed and counts as active.
    Otherwise the company stays active until the closure instant; at or after
    it, it is inactive. ``now`` defaults to the current UTC time; naive values
    are read as UTC.
    """

    if closure_date == "":
        return True

    closed_at, has_remainder = _parse_with_remainder(closure_date)

    if now is None:
        now = utc_now()
    elif now.tzinfo is None:
        now = now.replace(tzinfo=UTC)

    if closed_at == now:
        # Nanoseconds past the truncated instant still lie after ``now``.
        return has_remainder
    return closed_at > now

"""
Timestamp layout used for the `last_modified` field of version records.

The layout is Go's reference-time notation, kept verbatim because version
records are exchanged with tooling that renders timestamps this way, e.g.:

    2017-08-31 13:45:10.123456789 -0700 PDT
    2017-08-31 20:45:10 +0000 UTC

Parsing follows Go's `time.Parse` for this layout: the fraction may use "." or
",", may have any number of digits and may be omitted; the hour may be a single
digit; offsets allow hour 24 and minute 60; the zone must be an abbreviation Go
recognizes (upper case, or a signed hour such as "+03").

Known differences from Go:
- offsets of 24 hours or more are rejected, a tzinfo must stay under one day;
- digits past microseconds are dropped rather than kept as nanoseconds.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone


TIME_FORMAT = "2006-01-02 15:04:05.999999999 -0700 MST"

_PATTERN = re.compile(
    r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2}) "
    r"(?P<hour>[0-9]{1,2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})"
    r"(?:[.,](?P<fraction>[0-9]+))? "
    r"(?P<sign>[+-])(?P<off_h>[0-9]{2})(?P<off_m>[0-9]{2}) "
    r"(?P<zone>.+)"
)

# Upper-case abbreviations: 3 letters, 4 or 5 ending in T, plus the odd ones out
_ZONE_LETTERS = re.compile(r"[A-Z]{3}|[A-Z]{3,4}T|WITA|ChST|MeST")
_SIGNED_HOUR = re.compile(r"[+-](?P<hours>[0-9]+)")


def is_zone_abbreviation(name: str) -> bool:
    """True if `name` is a zone abbreviation the layout's "MST" element accepts."""
    if name.startswith("GMT") and name != "GMT":
        name = name[3:]
        if name[:1] not in ("+", "-"):
            return False
    m = _SIGNED_HOUR.fullmatch(name)
    if m is not None:
        return int(m.group("hours")) <= 23
    return _ZONE_LETTERS.fullmatch(name) is not None


def _error(value: str, detail: str) -> ValueError:
    return ValueError(f'parsing time "{value}" as "{TIME_FORMAT}": {detail}')


def parse_timestamp(value: str) -> datetime:
    """Parse `value` laid out as TIME_FORMAT into a timezone-aware datetime.

    The numeric offset determines the instant; the zone abbreviation is kept
    as the tzinfo name when it is alphabetic. Raises ValueError on any
    mismatch or out-of-range component.
    """
    m = _PATTERN.fullmatch(value)
    if m is None:
        raise _error(value, "does not match layout")

    zone = m.group("zone")
    if not is_zone_abbreviation(zone):
        raise _error(value, f'cannot parse "{zone}" as "MST"')

    off_h = int(m.group("off_h"))
    off_m = int(m.group("off_m"))
    if off_h > 24:
        raise _error(value, "time zone offset hour out of range")
    if off_m > 60:
        raise _error(value, "time zone offset minute out of range")
    offset = timedelta(hours=off_h, minutes=off_m)
    if offset >= timedelta(hours=24):
        raise _error(value, "time zone offset must be less than 24 hours")
    if m.group("sign") == "-":
        offset = -offset

    tz = timezone(offset, zone) if zone.isalpha() else timezone(offset)

    fraction = m.group("fraction") or ""
    micro = int(fraction[:6].ljust(6, "0")) if fraction else 0

    try:
        return datetime(
            int(m.group("year")),
            int(m.group("month")),
            int(m.group("day")),
            int(m.group("hour")),
            int(m.group("minute")),
            int(m.group("second")),
            micro,
            tzinfo=tz,
        )
    except ValueError as ex:
        raise _error(value, str(ex)) from ex


def format_timestamp(dt: datetime) -> str:
    """Render an aware datetime as TIME_FORMAT (trailing fraction zeros dropped).

    Zones without a usable abbreviation become "+HH"/"-HH" for whole hours;
    anything else is converted to UTC so the output always parses back.
    """
    offset = dt.utcoffset()
    if offset is None:
        raise ValueError("timestamp must be timezone-aware")

    minutes = int(offset.total_seconds()) // 60
    sign = "-" if minutes < 0 else "+"
    hh, mm = divmod(abs(minutes), 60)

    name = dt.tzname() or ""
    if not is_zone_abbreviation(name):
        if minutes == 0:
            name = "UTC"
        elif mm == 0:
            name = f"{sign}{hh:02d}"
        else:
            return format_timestamp(dt.astimezone(timezone.utc))

    frac = f".{dt.microsecond:06d}".rstrip("0") if dt.microsecond else ""
    return f"{dt:%Y-%m-%d %H:%M:%S}{frac} {sign}{hh:02d}{mm:02d} {name}"

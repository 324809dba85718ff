"""
Duration parsing for URL expiry settings.

Strings follow the `ms` package grammar ("90s", "1m", "2 hours", "1.5h", "7d").
A bare numeric string is milliseconds. Numbers are seconds, as everywhere else
in the settings layer.
"""

from __future__ import annotations

from datetime import timedelta
import re

from sasurl.core.errors import ConfigurationError

_SECOND = 1.0
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR
_WEEK = 7 * _DAY
_YEAR = 365.25 * _DAY

_UNITS: dict[str, float] = {}
for _aliases, _seconds in (
    (("milliseconds", "millisecond", "msecs", "msec", "ms"), 0.001),
    (("seconds", "second", "secs", "sec", "s"), _SECOND),
    (("minutes", "minute", "mins", "min", "m"), _MINUTE),
    (("hours", "hour", "hrs", "hr", "h"), _HOUR),
    (("days", "day", "d"), _DAY),
    (("weeks", "week", "w"), _WEEK),
    (("years", "year", "yrs", "yr", "y"), _YEAR),
):
    for _alias in _aliases:
        _UNITS[_alias] = _seconds

_DURATION_RE = re.compile(r"^(?P<value>-?(?:\d+)?\.?\d+) *(?P<unit>[a-z]+)?$", re.IGNORECASE)

DurationLike = timedelta | int | float | str


def parse_duration(value: DurationLike) -> timedelta:
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool):
        raise ConfigurationError(f"Invalid duration: {value!r}")
    if isinstance(value, (int, float)):
        return timedelta(seconds=value)

    raw = str(value or "").strip()
    match = _DURATION_RE.match(raw)
    if not match:
        raise ConfigurationError(f"Invalid duration: {value!r}")

    unit = (match.group("unit") or "ms").lower()
    if unit not in _UNITS:
        raise ConfigurationError(f"Unknown duration unit {unit!r} in {value!r}")

    return timedelta(seconds=float(match.group("value")) * _UNITS[unit])


def parse_ttl(value: DurationLike, *, field: str) -> timedelta:
    """Parse a TTL and require it to be strictly positive."""
    ttl = parse_duration(value)
    if ttl <= timedelta(0):
        raise ConfigurationError(f"{field} must be a positive duration, got {value!r}")
    return ttl

from datetime import timedelta

import pytest

from sasurl.core.durations import parse_duration, parse_ttl
from sasurl.core.errors import ConfigurationError


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("1m", timedelta(minutes=1)),
        ("90s", timedelta(seconds=90)),
        ("2 hours", timedelta(hours=2)),
        ("1.5h", timedelta(minutes=90)),
        ("7d", timedelta(days=7)),
        ("1w", timedelta(weeks=1)),
        ("500ms", timedelta(milliseconds=500)),
        ("2500", timedelta(milliseconds=2500)),
        ("10 MINS", timedelta(minutes=10)),
        (".5s", timedelta(milliseconds=500)),
        (45, timedelta(seconds=45)),
        (0.25, timedelta(milliseconds=250)),
        (timedelta(hours=3), timedelta(hours=3)),
    ],
)
def test_parse_duration(raw, expected):
    assert parse_duration(raw) == expected


def test_parse_duration_year_is_julian():
    assert parse_duration("1y") == timedelta(days=365.25)


@pytest.mark.parametrize("raw", ["", "abc", "1 fortnight", "m", True, None])
def test_parse_duration_rejects_garbage(raw):
    with pytest.raises(ConfigurationError):
        parse_duration(raw)


@pytest.mark.parametrize("raw", ["0", "-1m", 0, timedelta(0)])
def test_parse_ttl_requires_positive(raw):
    with pytest.raises(ConfigurationError, match="read_ttl"):
        parse_ttl(raw, field="read_ttl")

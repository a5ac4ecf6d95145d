"""Tests for the Instant value type."""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from datetool import Instant

# Fri 2019-07-05 14:30:45.123 UTC
SAMPLE_MS = 1562337045123


def test_from_datetime_utc():
    """Test converting an aware UTC datetime."""
    dt = datetime(2019, 7, 5, 14, 30, 45, 123000, tzinfo=timezone.utc)
    assert Instant.from_datetime(dt) == Instant(SAMPLE_MS)


def test_from_datetime_other_zone():
    """Test that the zone offset is applied."""
    dt = datetime(2019, 7, 5, 7, 30, 45, 123000, tzinfo=ZoneInfo("US/Pacific"))
    assert Instant.from_datetime(dt) == Instant(SAMPLE_MS)


def test_from_datetime_truncates_microseconds():
    """Test that sub-millisecond precision is dropped, not rounded."""
    dt = datetime(2019, 7, 5, 14, 30, 45, 123999, tzinfo=timezone.utc)
    assert Instant.from_datetime(dt).millis == SAMPLE_MS


def test_from_datetime_rejects_naive():
    """Test that naive datetimes raise a helpful TypeError."""
    with pytest.raises(TypeError, match="timezone-aware"):
        Instant.from_datetime(datetime(2019, 7, 5))


def test_to_datetime_round_trip():
    """Test converting back to a datetime."""
    dt = Instant(SAMPLE_MS).to_datetime()
    assert dt == datetime(2019, 7, 5, 14, 30, 45, 123000, tzinfo=timezone.utc)

    pacific = Instant(SAMPLE_MS).to_datetime("US/Pacific")
    assert (pacific.hour, pacific.minute) == (7, 30)


def test_pre_epoch_instant():
    """Test instants before 1970."""
    dt = Instant(-1).to_datetime()
    assert dt == datetime(1969, 12, 31, 23, 59, 59, 999000, tzinfo=timezone.utc)


def test_seconds_truncates():
    """Test that whole seconds drop the millisecond part."""
    assert Instant(SAMPLE_MS).seconds == 1562337045
    assert Instant(1999).seconds == 1
    assert Instant(-1500).seconds == -2


def test_from_seconds():
    """Test building an instant from epoch seconds."""
    assert Instant.from_seconds(1562284800) == Instant(1562284800000)


def test_subtraction_yields_milliseconds():
    """Test that subtracting instants gives elapsed milliseconds."""
    assert Instant(5000) - Instant(2000) == 3000
    assert Instant(2000) - Instant(5000) == -3000


def test_ordering_and_hashing():
    """Test that instants compare and hash by value."""
    assert Instant(1) < Instant(2)
    assert len({Instant(1), Instant(1), Instant(2)}) == 2


def test_immutable():
    """Test that instants cannot be modified."""
    instant = Instant(0)
    with pytest.raises(AttributeError):
        instant.millis = 5  # type: ignore[misc]


def test_rejects_non_int():
    """Test that only ints are accepted as milliseconds."""
    with pytest.raises(TypeError, match="must be an int"):
        Instant(1.5)  # type: ignore[arg-type]
    with pytest.raises(TypeError, match="must be an int"):
        Instant(True)


def test_coerce():
    """Test coercing supported values."""
    instant = Instant(SAMPLE_MS)
    assert Instant.coerce(instant) is instant
    assert Instant.coerce(SAMPLE_MS) == instant
    aware = datetime(2019, 7, 5, 14, 30, 45, 123000, tzinfo=timezone.utc)
    assert Instant.coerce(aware) == instant


def test_coerce_rejects_unsupported():
    """Test that unsupported values raise TypeError."""
    with pytest.raises(TypeError, match="bare date"):
        Instant.coerce(date(2019, 7, 5))
    with pytest.raises(TypeError, match="Cannot convert str"):
        Instant.coerce("1562337045123")
    with pytest.raises(TypeError, match="timezone-aware"):
        Instant.coerce(datetime(2019, 7, 5))


def test_now_is_current():
    """Test that now() tracks the wall clock."""
    before = datetime.now(timezone.utc) - timedelta(seconds=1)
    now = Instant.now()
    after = datetime.now(timezone.utc) + timedelta(seconds=1)
    assert Instant.from_datetime(before) <= now <= Instant.from_datetime(after)


def test_str():
    """Test the human-friendly string form."""
    assert str(Instant(SAMPLE_MS)) == "Instant(2019-07-05T14:30:45.123+00:00)"


def test_rejects_out_of_range_millis():
    """Test that instants beyond the calendar range are refused up front."""
    with pytest.raises(ValueError, match="out of range"):
        Instant(-(10**15))
    with pytest.raises(ValueError, match="out of range"):
        Instant(10**17)
    with pytest.raises(ValueError, match="out of range"):
        Instant.from_datetime(datetime.max.replace(tzinfo=timezone.utc))


def test_range_edges_render_in_any_zone():
    """Test that the first and last supported instants convert in any zone."""
    first = Instant.from_datetime(datetime(1, 1, 2, tzinfo=timezone.utc))
    last = Instant.from_datetime(
        datetime(9999, 12, 30, 23, 59, 59, 999000, tzinfo=timezone.utc)
    )
    assert first.to_datetime("US/Pacific").year == 1
    assert last.to_datetime("Asia/Tokyo").year == 9999


def test_relative_description_coerces_reference():
    """Test that int and datetime references are accepted."""
    past = Instant(0)
    assert past.relative_description(120_000) == "2 minutes ago"
    later = datetime(1970, 1, 1, 3, tzinfo=timezone.utc)
    assert past.relative_description(later) == "3 hours ago"

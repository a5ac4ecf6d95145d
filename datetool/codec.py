"""Conversions between timestamp strings, instants and date strings.

A timestamp is a decimal string of epoch milliseconds (13 digits today) or,
with :attr:`Accuracy.SECOND`, epoch seconds (10 digits today).
"""

import re

from datetool.cache import FormatterCache, shared_formatter
from datetool.errors import ParseError
from datetool.instant import Accuracy, Instant
from datetool.util import SECOND_MS

_TIMESTAMP_RE = re.compile(r"[+-]?[0-9]+")


def date_from_timestamp(
    timestamp: str, accuracy: Accuracy = Accuracy.MILLISECOND
) -> Instant:
    """Read a timestamp string.

    Raises:
        TypeError: If timestamp is not a string
        ParseError: If timestamp is not a plain decimal integer
    """
    if not isinstance(timestamp, str):
        raise TypeError(f"Timestamp must be a string, got {type(timestamp).__name__}")
    if _TIMESTAMP_RE.fullmatch(timestamp) is None:
        raise ParseError(
            f"Malformed timestamp: {timestamp!r}\n"
            f"Expected a decimal integer such as '1562284800000' (milliseconds) "
            f"or '1562284800' (seconds)"
        )
    try:
        value = int(timestamp)
        if accuracy is Accuracy.SECOND:
            return Instant.from_seconds(value)
        return Instant(value)
    except ValueError as exc:
        # Too many digits for int(), or outside the supported calendar range
        raise ParseError(f"Timestamp {timestamp[:32]!r} is out of range") from exc


def timestamp(instant: Instant, accuracy: Accuracy = Accuracy.MILLISECOND) -> str:
    """Write an instant as a timestamp string.

    Second accuracy drops the sub-second part instead of rounding it.
    """
    instant = Instant.coerce(instant)
    if accuracy is Accuracy.SECOND:
        return str(instant.millis // SECOND_MS)
    return str(instant.millis)


def current_timestamp(accuracy: Accuracy = Accuracy.MILLISECOND) -> str:
    return timestamp(Instant.now(), accuracy)


def formatted_string(
    instant: Instant, pattern: str, cache: FormatterCache | None = None
) -> str:
    """Render an instant with a date pattern, e.g. "yyyy-MM-dd HH:mm:ss SS"."""
    return shared_formatter(pattern, cache).format(instant)


def date_string(
    timestamp: str, pattern: str, cache: FormatterCache | None = None
) -> str:
    """Render a millisecond timestamp string with a date pattern.

    Example:
        >>> date_string("1562284800000", "yyyy-MM-dd")
        '2019-07-05'
    """
    return formatted_string(date_from_timestamp(timestamp), pattern, cache)


def timestamp_from_date_string(
    date_string: str,
    pattern: str,
    accuracy: Accuracy = Accuracy.MILLISECOND,
    cache: FormatterCache | None = None,
) -> str:
    """Read a date string written in ``pattern`` and return its timestamp.

    Raises:
        ParseError: If date_string does not match pattern

    Example:
        >>> timestamp_from_date_string("2019-07-05", "yyyy-MM-dd", Accuracy.SECOND)
        '1562284800'
    """
    instant = shared_formatter(pattern, cache).parse(date_string)
    return timestamp(instant, accuracy)


def weekday(value: Instant | str, tz: str = "UTC") -> int:
    """Day of the week, 1 = Sunday, 2 = Monday ... 7 = Saturday.

    Args:
        value: An Instant or a millisecond timestamp string
        tz: Zone whose calendar decides the day

    Raises:
        ParseError: If value is a malformed timestamp string
    """
    if isinstance(value, str):
        instant = date_from_timestamp(value)
    else:
        instant = Instant.coerce(value)
    local = instant.to_datetime(tz)
    # isoweekday() is 1 = Monday ... 7 = Sunday
    return local.isoweekday() % 7 + 1

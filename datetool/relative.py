"""Relative "time ago" descriptions.

Deltas are measured in whole seconds and bucketed with truncating division:

    < 1 minute      "just now" (also for instants in the future)
    < 1 hour        "N minutes ago"
    < 1 day         "N hours ago"
    < 10 days       "N days ago"
    otherwise       the date itself, e.g. "2019-7-5"
"""

from datetool.cache import FormatterCache, shared_formatter
from datetool.codec import date_from_timestamp
from datetool.instant import Instant
from datetool.util import (
    ABSOLUTE_DATE_PATTERN,
    DAY,
    HOUR,
    MINUTE,
    RELATIVE_CUTOFF,
    SECOND_MS,
)

JUST_NOW = "just now"


def describe(past: Instant, now: Instant, cache: FormatterCache | None = None) -> str:
    """Describe ``past`` as seen from ``now``.

    Args:
        past: The instant being described
        now: Reference instant
        cache: Formatter cache for the absolute-date fallback (default: the
            process-wide cache)

    Example:
        >>> describe(Instant(0), Instant(150_000))
        '2 minutes ago'
    """
    delta = (now - past) // SECOND_MS

    if delta < MINUTE:
        return JUST_NOW
    if delta < HOUR:
        return f"{delta // MINUTE} minutes ago"
    if delta < DAY:
        return f"{delta // HOUR} hours ago"
    if delta < RELATIVE_CUTOFF:
        return f"{delta // DAY} days ago"
    return shared_formatter(ABSOLUTE_DATE_PATTERN, cache).format(past)


def relative_description(
    value: str | Instant,
    reference: Instant | None = None,
    *,
    cache: FormatterCache | None = None,
) -> str:
    """Describe a timestamp string or an Instant relative to ``reference``.

    ``reference`` defaults to the current wall-clock instant.

    Raises:
        ParseError: If ``value`` is a malformed timestamp string

    Example:
        >>> relative_description("1562284800000", Instant(1562284800000 + 7_200_000))
        '2 hours ago'
    """
    if isinstance(value, str):
        past = date_from_timestamp(value)
    else:
        past = Instant.coerce(value)
    if reference is None:
        reference = Instant.now()
    return describe(past, Instant.coerce(reference), cache=cache)

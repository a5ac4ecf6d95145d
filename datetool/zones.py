"""Timezone name resolution."""

from datetime import timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil.tz import tzlocal

LOCAL = "local"


def _unknown(tz: str) -> ValueError:
    return ValueError(
        f"Unknown timezone: {tz!r}\n"
        f"Hint: use an IANA name such as 'UTC', 'US/Pacific' or "
        f"'Europe/London', or '{LOCAL}' for the host's zone."
    )


def resolve_zone(tz: str) -> tzinfo:
    """Return the tzinfo for an IANA name, "UTC", or "local".

    "local" is the host's configured zone, which is what platform date
    formatters use when nobody sets one.
    """
    if not tz:
        raise _unknown(tz)
    if tz == "UTC":
        return timezone.utc
    if tz.lower() == LOCAL:
        return tzlocal()
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise _unknown(tz) from exc

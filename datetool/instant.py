from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from time import time_ns
from typing import TYPE_CHECKING, Any

from datetool.util import SECOND_MS
from datetool.zones import resolve_zone

if TYPE_CHECKING:
    from datetool.cache import FormatterCache

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
ONE_MS = timedelta(milliseconds=1)

# One day inside datetime.min / datetime.max so any zone offset still fits
MIN_MILLIS = (datetime(1, 1, 2, tzinfo=timezone.utc) - EPOCH) // ONE_MS
MAX_MILLIS = (
    datetime(9999, 12, 30, 23, 59, 59, 999000, tzinfo=timezone.utc) - EPOCH
) // ONE_MS


class Accuracy(Enum):
    """Unit width of a timestamp string."""

    MILLISECOND = "millisecond"  # 13 digits for present-day instants
    SECOND = "second"  # 10 digits for present-day instants


@dataclass(frozen=True, order=True)
class Instant:
    """A point in time, stored as milliseconds since the Unix epoch."""

    millis: int

    def __post_init__(self) -> None:
        if isinstance(self.millis, bool) or not isinstance(self.millis, int):
            raise TypeError(
                f"Instant millis must be an int, got {type(self.millis).__name__}"
            )
        if not MIN_MILLIS <= self.millis <= MAX_MILLIS:
            raise ValueError(
                f"Instant millis {self.millis} is out of range.\n"
                f"Supported range: {MIN_MILLIS} (0001-01-02) to "
                f"{MAX_MILLIS} (9999-12-30)"
            )

    def __str__(self) -> str:
        return f"Instant({self.to_datetime().isoformat(timespec='milliseconds')})"

    def __sub__(self, other: "Instant") -> int:
        """Milliseconds elapsed from ``other`` to ``self``."""
        if not isinstance(other, Instant):
            return NotImplemented
        return self.millis - other.millis

    @classmethod
    def now(cls) -> "Instant":
        return cls(time_ns() // 1_000_000)

    @classmethod
    def from_seconds(cls, seconds: int) -> "Instant":
        return cls(seconds * SECOND_MS)

    @classmethod
    def from_datetime(cls, dt: datetime) -> "Instant":
        """Convert a timezone-aware datetime, truncating below milliseconds."""
        if dt.tzinfo is None or dt.utcoffset() is None:
            raise TypeError(
                f"Instant requires a timezone-aware datetime.\n"
                f"Got naive datetime: {dt!r}\n"
                f"Hint: Add timezone info:\n"
                f"  from zoneinfo import ZoneInfo\n"
                f"  dt = datetime(..., tzinfo=ZoneInfo('UTC'))  "
                f"# or 'US/Pacific', etc.\n"
                f"  # Or use timezone.utc for UTC:\n"
                f"  dt = datetime(..., tzinfo=timezone.utc)"
            )
        return cls((dt - EPOCH) // ONE_MS)

    @classmethod
    def coerce(cls, value: Any) -> "Instant":
        """Accept an Instant, an int of epoch milliseconds, or an aware datetime.

        Raises:
            TypeError: If value is an unsupported type or a naive datetime
        """
        if isinstance(value, Instant):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value)
        if isinstance(value, datetime):
            return cls.from_datetime(value)
        if isinstance(value, date):
            raise TypeError(
                f"Cannot convert a bare date to an Instant: {value!r}\n"
                f"Hint: use an aware datetime, e.g. "
                f"datetime(d.year, d.month, d.day, tzinfo=timezone.utc)"
            )
        raise TypeError(
            f"Cannot convert {type(value).__name__} to an Instant.\n"
            f"Supported types: Instant, int (epoch milliseconds), aware datetime"
        )

    @property
    def seconds(self) -> int:
        """Whole seconds since the epoch; the sub-second part is dropped."""
        return self.millis // SECOND_MS

    def to_datetime(self, tz: str = "UTC") -> datetime:
        return (EPOCH + self.millis * ONE_MS).astimezone(resolve_zone(tz))

    def timestamp(self, accuracy: Accuracy = Accuracy.MILLISECOND) -> str:
        from datetool.codec import timestamp

        return timestamp(self, accuracy)

    def formatted(self, pattern: str, cache: "FormatterCache | None" = None) -> str:
        from datetool.codec import formatted_string

        return formatted_string(self, pattern, cache=cache)

    def weekday(self, tz: str = "UTC") -> int:
        """Day of the week, 1 = Sunday through 7 = Saturday."""
        from datetool.codec import weekday

        return weekday(self, tz)

    def relative_description(
        self,
        reference: Any = None,
        *,
        cache: "FormatterCache | None" = None,
    ) -> str:
        """Describe this instant relative to ``reference`` (default: now)."""
        from datetool.relative import describe

        if reference is None:
            reference = Instant.now()
        return describe(self, Instant.coerce(reference), cache=cache)

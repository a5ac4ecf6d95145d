"""Compiled Unicode (LDML) date patterns.

A pattern such as ``"yyyy-MM-dd HH:mm:ss SS"`` is compiled once into a
token list for rendering and an anchored regular expression for parsing.
Compiling is the expensive step, which is why formatters are shared through
:class:`datetool.cache.FormatterCache` instead of being rebuilt per call.

Supported fields:

    y, yyyy   year (yy = two-digit year)
    M, MM     month number; MMM = "Jan", MMMM = "January"
    d, dd     day of month
    H, HH     hour 0-23
    h, hh     hour 1-12 (pair with ``a``)
    m, mm     minute
    s, ss     second
    S...      fraction of a second, one digit per letter
    a         AM / PM
    E...EEE   weekday "Fri"; EEEE = "Friday"

Text in single quotes is literal, ``''`` is a quote, and every character
that is not an ASCII letter is literal.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from datetool.errors import ConstructionError, ParseError
from datetool.instant import EPOCH, Instant, ONE_MS
from datetool.zones import resolve_zone

# Fixed English names; the platform locale is never consulted.
MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]
MONTH_ABBRS = [name[:3] for name in MONTH_NAMES]

# Monday first, matching datetime.weekday()
DAY_NAMES = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]
DAY_ABBRS = [name[:3] for name in DAY_NAMES]

# Largest width accepted for each field letter
_MAX_WIDTH = {
    "y": 4,
    "M": 4,
    "d": 2,
    "H": 2,
    "h": 2,
    "m": 2,
    "s": 2,
    "S": 9,
    "a": 3,
    "E": 4,
}

# Two-digit years at or above this map to the 1900s (POSIX %y rule)
_CENTURY_PIVOT = 69


@dataclass(frozen=True)
class Field:
    letter: str
    width: int

    def __str__(self) -> str:
        return self.letter * self.width


Token = str | Field


def tokenize(pattern: str) -> list[Token]:
    """Split a pattern into literal strings and Field tokens.

    Raises:
        ConstructionError: On an unknown field letter, an over-long field,
            or an unterminated quote
    """
    tokens: list[Token] = []
    literal: list[str] = []
    i = 0
    n = len(pattern)

    while i < n:
        char = pattern[i]

        if char == "'":
            # '' outside quotes is a literal quote
            if i + 1 < n and pattern[i + 1] == "'":
                literal.append("'")
                i += 2
                continue
            i += 1
            while True:
                if i >= n:
                    raise ConstructionError(
                        f"Unterminated quote in pattern {pattern!r}\n"
                        f"Hint: close quoted text with ' and write '' "
                        f"for a literal quote"
                    )
                if pattern[i] == "'":
                    if i + 1 < n and pattern[i + 1] == "'":
                        literal.append("'")
                        i += 2
                        continue
                    i += 1
                    break
                literal.append(pattern[i])
                i += 1
            continue

        if not (char.isascii() and char.isalpha()):
            literal.append(char)
            i += 1
            continue

        if char not in _MAX_WIDTH:
            valid = ", ".join(sorted(_MAX_WIDTH))
            raise ConstructionError(
                f"Unsupported field {char!r} in pattern {pattern!r}\n"
                f"Supported fields: {valid}\n"
                f"Hint: quote literal text, e.g. \"yyyy-MM-dd'T'HH:mm\""
            )

        width = 1
        while i + width < n and pattern[i + width] == char:
            width += 1
        if width > _MAX_WIDTH[char]:
            raise ConstructionError(
                f"Field {char * width!r} in pattern {pattern!r} is too wide "
                f"(at most {_MAX_WIDTH[char]} letters)"
            )

        if literal:
            tokens.append("".join(literal))
            literal = []
        tokens.append(Field(char, width))
        i += width

    if literal:
        tokens.append("".join(literal))
    return tokens


def _names(names: list[str]) -> str:
    alternatives = "|".join(sorted(names, key=len, reverse=True))
    return f"(?i:{alternatives})"


def _field_regex(field: Field) -> str:
    letter, width = field.letter, field.width
    if letter == "y":
        return r"\d{2}" if width == 2 else rf"\d{{{width},4}}"
    if letter == "M" and width == 3:
        return _names(MONTH_ABBRS)
    if letter == "M" and width == 4:
        return _names(MONTH_NAMES)
    if letter == "S":
        return rf"\d{{{width}}}"
    if letter == "a":
        return "(?i:AM|PM)"
    if letter == "E":
        return _names(DAY_NAMES if width == 4 else DAY_ABBRS)
    # Remaining fields are two-digit numbers
    return r"\d{2}" if width == 2 else r"\d{1,2}"


def _render(field: Field, dt: datetime) -> str:
    letter, width = field.letter, field.width
    if letter == "y":
        if width == 2:
            return f"{dt.year % 100:02d}"
        return f"{dt.year:0{width}d}"
    if letter == "M":
        if width == 3:
            return MONTH_ABBRS[dt.month - 1]
        if width == 4:
            return MONTH_NAMES[dt.month - 1]
        return f"{dt.month:0{width}d}"
    if letter == "S":
        return f"{dt.microsecond:06d}".ljust(width, "0")[:width]
    if letter == "a":
        return "AM" if dt.hour < 12 else "PM"
    if letter == "E":
        names = DAY_NAMES if width == 4 else DAY_ABBRS
        return names[dt.weekday()]

    value = {
        "d": dt.day,
        "H": dt.hour,
        "h": dt.hour % 12 or 12,
        "m": dt.minute,
        "s": dt.second,
    }[letter]
    return f"{value:0{width}d}"


def _field_value(field: Field, text: str) -> Any:
    """Convert matched text for one field into the value stored for it."""
    letter, width = field.letter, field.width
    if letter == "y" and width == 2:
        short = int(text)
        return short + (1900 if short >= _CENTURY_PIVOT else 2000)
    if letter == "M" and width >= 3:
        names = MONTH_NAMES if width == 4 else MONTH_ABBRS
        return [name.lower() for name in names].index(text.lower()) + 1
    if letter == "S":
        # Scale to microseconds; digits past the sixth are dropped
        return int(text[:6].ljust(6, "0"))
    if letter == "a":
        return text.upper()
    if letter == "E":
        names = DAY_NAMES if width == 4 else DAY_ABBRS
        return [name.lower() for name in names].index(text.lower())
    return int(text)


class Formatter:
    """A compiled date pattern bound to one timezone.

    Instances are immutable after construction and safe to share between
    threads.
    """

    def __init__(self, pattern: str, tz: str = "UTC"):
        """
        Compile a pattern.

        Args:
            pattern: Unicode date pattern, e.g. "yyyy-MM-dd HH:mm:ss SS"
            tz: Zone used to render and read calendar fields (IANA name,
                "UTC", or "local")

        Raises:
            TypeError: If pattern is not a string
            ConstructionError: If the pattern cannot be compiled

        Example:
            >>> fmt = Formatter("yyyy-M-d")
            >>> fmt.format(Instant(1562284800000))
            '2019-7-5'
        """
        if not isinstance(pattern, str):
            raise TypeError(
                f"Format pattern must be a string, got {type(pattern).__name__}"
            )
        self.pattern: str = pattern
        self.tz: str = tz
        self.zone = resolve_zone(tz)
        self._tokens: tuple[Token, ...] = tuple(tokenize(pattern))
        self._fields: tuple[Field, ...] = tuple(
            token for token in self._tokens if isinstance(token, Field)
        )

        parts: list[str] = []
        group = 0
        for token in self._tokens:
            if isinstance(token, Field):
                parts.append(f"(?P<f{group}>{_field_regex(token)})")
                group += 1
            else:
                parts.append(re.escape(token))
        self._regex: re.Pattern[str] = re.compile("".join(parts), re.ASCII)

    def __repr__(self) -> str:
        return f"Formatter({self.pattern!r}, tz={self.tz!r})"

    def format(self, value: Any) -> str:
        """Render an Instant (or epoch millis, or aware datetime) as text."""
        instant = Instant.coerce(value)
        dt = (EPOCH + instant.millis * ONE_MS).astimezone(self.zone)
        return "".join(
            _render(token, dt) if isinstance(token, Field) else token
            for token in self._tokens
        )

    def parse(self, text: str) -> Instant:
        """Read text written in this pattern.

        Fields absent from the pattern default to 1970-01-01 00:00:00.000 in
        this formatter's zone.

        Raises:
            TypeError: If text is not a string
            ParseError: If text does not match the pattern in full, or names
                an impossible date
        """
        if not isinstance(text, str):
            raise TypeError(f"Date string must be a string, got {type(text).__name__}")

        match = self._regex.fullmatch(text)
        if match is None:
            raise ParseError(
                f"Date string {text!r} does not match pattern {self.pattern!r}"
            )

        values: dict[str, Any] = {}
        for i, field in enumerate(self._fields):
            value = _field_value(field, match.group(f"f{i}"))
            # Repeated fields must agree ("MMM d yyyy (M)" for instance)
            if field.letter in values and values[field.letter] != value:
                raise ParseError(
                    f"Date string {text!r} has conflicting values for "
                    f"{field.letter!r} in pattern {self.pattern!r}"
                )
            values[field.letter] = value

        hour = values.get("H", 0)
        if "h" in values:
            clock = values["h"]
            if not 1 <= clock <= 12:
                raise ParseError(
                    f"Hour {clock} in {text!r} is outside 1-12 for pattern "
                    f"{self.pattern!r}"
                )
            hour = clock % 12 + (12 if values.get("a") == "PM" else 0)
        elif "a" in values and "H" in values:
            if values["a"] != ("PM" if hour >= 12 else "AM"):
                raise ParseError(
                    f"Hour {hour} in {text!r} contradicts {values['a']} for "
                    f"pattern {self.pattern!r}"
                )

        try:
            dt = datetime(
                values.get("y", 1970),
                values.get("M", 1),
                values.get("d", 1),
                hour,
                values.get("m", 0),
                values.get("s", 0),
                values.get("S", 0),
                tzinfo=self.zone,
            )
        except ValueError as exc:
            raise ParseError(
                f"Date string {text!r} is not a valid date for pattern "
                f"{self.pattern!r}: {exc}"
            ) from exc

        if "E" in values and values["E"] != dt.weekday():
            raise ParseError(
                f"Date string {text!r} names {DAY_NAMES[values['E']]} but the "
                f"date falls on {DAY_NAMES[dt.weekday()]}"
            )

        try:
            return Instant.from_datetime(dt)
        except (ValueError, OverflowError) as exc:
            raise ParseError(
                f"Date string {text!r} is outside the supported range"
            ) from exc

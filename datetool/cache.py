"""Shared formatter cache.

Compiling a pattern is the costly part of formatting, so formatters are
compiled once per pattern string and reused. A cache is an ordinary object:
applications that want isolation construct their own and pass it around,
everything else falls back to :func:`default_cache`.
"""

import logging
import threading

from datetool.pattern import Formatter
from datetool.zones import resolve_zone

logger = logging.getLogger(__name__)


class FormatterCache:
    """Map of pattern string to compiled :class:`Formatter`.

    Entries live as long as the cache; there is no eviction. Pattern strings
    come from a small set of call sites, so the map stays small.
    """

    def __init__(self, tz: str = "UTC"):
        """
        Args:
            tz: Zone every formatter in this cache renders in (IANA name,
                "UTC", or "local")

        Raises:
            ValueError: If tz is not a known zone
        """
        # Fail here rather than on the first get()
        resolve_zone(tz)
        self.tz: str = tz
        self._formatters: dict[str, Formatter] = {}
        self._lock: threading.Lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._formatters)

    def __contains__(self, pattern: object) -> bool:
        return pattern in self._formatters

    def __repr__(self) -> str:
        return f"FormatterCache(tz={self.tz!r}, patterns={len(self)})"

    def get(self, pattern: str) -> Formatter:
        """Return the formatter for ``pattern``, compiling it on first use.

        Repeated calls with the same string return the same object.

        Raises:
            TypeError: If pattern is not a string
            ConstructionError: If the pattern cannot be compiled; nothing is
                cached in that case
        """
        formatter = self._formatters.get(pattern)
        if formatter is not None:
            return formatter

        with self._lock:
            # Another thread may have compiled it while we waited
            formatter = self._formatters.get(pattern)
            if formatter is None:
                formatter = Formatter(pattern, self.tz)
                self._formatters[pattern] = formatter
                logger.debug("Compiled date pattern %r (tz=%s)", pattern, self.tz)
        return formatter


_default_cache = FormatterCache()


def default_cache() -> FormatterCache:
    """Process-wide cache used when callers do not supply one."""
    return _default_cache


def shared_formatter(pattern: str, cache: FormatterCache | None = None) -> Formatter:
    """Return the shared formatter for ``pattern``.

    Example:
        >>> from datetool import shared_formatter
        >>> shared_formatter("yyyy-MM-dd") is shared_formatter("yyyy-MM-dd")
        True
    """
    if cache is None:
        cache = _default_cache
    return cache.get(pattern)

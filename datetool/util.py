"""Utility constants for datetool.

Time unit constants represent durations in seconds unless suffixed with
``_MS``. Instants store milliseconds; relative descriptions work in seconds.
"""

# Time unit constants (all values in seconds)
MINUTE = 60
HOUR = 3600
DAY = 86400

# Milliseconds per second
SECOND_MS = 1000

# Relative descriptions switch to an absolute date at this age
RELATIVE_CUTOFF = 10 * DAY

# Pattern used for dates older than RELATIVE_CUTOFF (e.g. "2019-7-5")
ABSOLUTE_DATE_PATTERN = "yyyy-M-d"

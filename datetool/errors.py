"""Exceptions raised by datetool.

Both subclass ValueError so callers that already guard user input with
``except ValueError`` keep working.
"""


class ParseError(ValueError):
    """A timestamp or date string could not be read."""


class ConstructionError(ValueError):
    """A format pattern was rejected while compiling it."""

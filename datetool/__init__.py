from .cache import FormatterCache, default_cache, shared_formatter
from .codec import (
    current_timestamp,
    date_from_timestamp,
    date_string,
    formatted_string,
    timestamp,
    timestamp_from_date_string,
    weekday,
)
from .errors import ConstructionError, ParseError
from .instant import Accuracy, Instant
from .pattern import Formatter
from .relative import describe, relative_description

__all__ = [
    "Instant",
    "Accuracy",
    "Formatter",
    "FormatterCache",
    "ParseError",
    "ConstructionError",
    "default_cache",
    "shared_formatter",
    "describe",
    "relative_description",
    "date_from_timestamp",
    "timestamp",
    "current_timestamp",
    "formatted_string",
    "date_string",
    "timestamp_from_date_string",
    "weekday",
]

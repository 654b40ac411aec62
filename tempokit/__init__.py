from .cancel import CancelSignal
from .dates import DEFAULT_DATE_FORMAT, format_date, parse_date
from .duration import format_duration, parse_duration
from .errors import (
    CancellationError,
    DateOverflowError,
    FormatError,
    ParseError,
    TempokitError,
)
from .sleep import SleepAborted, sleep
from .util import DAY, HOUR, MILLISECOND, MINUTE, SECOND, WEEK

__all__ = [
    "MILLISECOND",
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY",
    "WEEK",
    "CancelSignal",
    "sleep",
    "SleepAborted",
    "format_duration",
    "parse_duration",
    "format_date",
    "parse_date",
    "DEFAULT_DATE_FORMAT",
    "TempokitError",
    "CancellationError",
    "ParseError",
    "FormatError",
    "DateOverflowError",
]

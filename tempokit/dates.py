"""Pattern-based date formatting and strict parsing.

Patterns use the tokens below; everything else is literal text.

    yyyy  year          MM  month (01-12)    dd  day of month
    HH    hour (00-23)  mm  minute           ss  second
    SSS   millisecond

``format_date`` also accepts shorter or longer runs of the same letter
(``yy``, ``M``, ``d`` ...); see its docstring. ``parse_date`` only
recognizes the exact tokens above and never rolls invalid fields over into
the next month or day.
"""

import logging
import re
from datetime import date, datetime, time
from functools import lru_cache
from typing import Callable, Literal, overload

from tempokit.errors import DateOverflowError, FormatError

logger = logging.getLogger(__name__)

DEFAULT_DATE_FORMAT = "yyyy-MM-dd HH:mm:ss"

# Parse tokens mapped to (datetime field, max digits)
_TOKEN_FIELDS: dict[str, tuple[str, int]] = {
    "yyyy": ("year", 4),
    "MM": ("month", 2),
    "dd": ("day", 2),
    "HH": ("hour", 2),
    "mm": ("minute", 2),
    "ss": ("second", 2),
    "SSS": ("millisecond", 3),
}
_TOKEN_RE = re.compile("|".join(_TOKEN_FIELDS))

# Format runs, substituted in this order
_RUN_RES: dict[str, re.Pattern[str]] = {
    letter: re.compile(f"{letter}+") for letter in ("y", "S", "M", "d", "H", "m", "s")
}


def _substitute_first(text: str, letter: str, render: Callable[[int], str]) -> str:
    """Replace the first run of ``letter`` with ``render(run_length)``."""
    match = _RUN_RES[letter].search(text)
    if match is None:
        return text
    return text[: match.start()] + render(len(match.group())) + text[match.end() :]


def _padded(value: int) -> Callable[[int], str]:
    def render(width: int) -> str:
        return str(value) if width == 1 else str(value).zfill(width)

    return render


def format_date(moment: date | datetime, pattern: str) -> str:
    """Render a date/datetime using a token pattern.

    Token runs (a letter repeated N times):

    - ``y``: the last N digits of the zero-padded four digit year
      (``yyyy`` -> ``"2026"``, ``yy`` -> ``"26"``)
    - ``S``: milliseconds padded to three digits, cut to the first N
    - ``M``, ``d``, ``H``, ``m``, ``s``: month (1-12), day, hour, minute,
      second. A single letter renders the bare number, longer runs are
      zero-padded to N digits.

    Only the first run of each letter is replaced; later runs of the same
    letter are left as literal text.

    Args:
        moment: Value to render. A plain ``date`` is treated as midnight.
        pattern: Format pattern, e.g. ``"yyyy/M/d H:mm"``.

    Example:
        >>> format_date(datetime(2026, 1, 15, 14, 5, 9), "yyyy/M/d H:mm")
        '2026/1/15 14:05'
    """
    if not isinstance(moment, datetime):
        moment = datetime.combine(moment, time.min)

    year = f"{moment.year:04d}"
    millis = f"{moment.microsecond // 1000:03d}"

    result = _substitute_first(pattern, "y", lambda n: year[-n:])
    result = _substitute_first(result, "S", lambda n: millis[:n])
    for letter, value in (
        ("M", moment.month),
        ("d", moment.day),
        ("H", moment.hour),
        ("m", moment.minute),
        ("s", moment.second),
    ):
        result = _substitute_first(result, letter, _padded(value))
    return result


@lru_cache(maxsize=64)
def _compile_pattern(pattern: str) -> tuple[re.Pattern[str], tuple[str, ...]]:
    """Build an anchored regex for ``pattern`` plus the field of each group."""
    parts: list[str] = []
    fields: list[str] = []
    pos = 0
    for match in _TOKEN_RE.finditer(pattern):
        field, width = _TOKEN_FIELDS[match.group()]
        parts.append(re.escape(pattern[pos : match.start()]))
        parts.append(f"([0-9]{{1,{width}}})")
        fields.append(field)
        pos = match.end()
    parts.append(re.escape(pattern[pos:]))
    return re.compile("".join(parts)), tuple(fields)


@overload
def parse_date(
    s: str, *, format: str = DEFAULT_DATE_FORMAT, silent: Literal[True]
) -> datetime | None: ...


@overload
def parse_date(
    s: str, *, format: str = DEFAULT_DATE_FORMAT, silent: Literal[False] = False
) -> datetime: ...


def parse_date(
    s: str, *, format: str = DEFAULT_DATE_FORMAT, silent: bool = False
) -> datetime | None:
    """Parse ``s`` into a naive datetime according to ``format``.

    The whole string must match the pattern. Each token accepts up to its
    width in digits (4 for ``yyyy``, 3 for ``SSS``, 2 for the rest). Fields
    missing from the pattern default to year 0, January 1st, midnight; since
    year 0 does not exist, patterns without ``yyyy`` never parse.

    Args:
        s: Input string.
        format: Token pattern (default ``"yyyy-MM-dd HH:mm:ss"``).
        silent: Return None instead of raising on failure.

    Raises:
        FormatError: If ``s`` does not match the pattern.
        DateOverflowError: If ``s`` matches but the fields do not form a
            real date or time, e.g. ``"2026-02-30 10:00:00"``.
    """
    regex, fields = _compile_pattern(format)
    match = regex.fullmatch(s)
    if match is None:
        if silent:
            logger.debug("Ignoring date %r not matching %r", s, format)
            return None
        raise FormatError(
            f"String {s!r} does not match format {format!r}",
            text=s,
            pattern=format,
        )

    values = {
        "year": 0,
        "month": 1,
        "day": 1,
        "hour": 0,
        "minute": 0,
        "second": 0,
        "millisecond": 0,
    }
    for field, digits in zip(fields, match.groups()):
        values[field] = int(digits)

    # datetime rejects out-of-range fields instead of normalizing them, so a
    # constructed value always reads back the fields it was given
    try:
        return datetime(
            values["year"],
            values["month"],
            values["day"],
            values["hour"],
            values["minute"],
            values["second"],
            values["millisecond"] * 1000,
        )
    except ValueError as exc:
        if silent:
            logger.debug("Ignoring out-of-range date %r: %s", s, exc)
            return None
        raise DateOverflowError(
            f"Invalid date logic (overflow): {s!r} parsed as {values}\n"
            f"Reason: {exc}",
            text=s,
            pattern=format,
        ) from exc

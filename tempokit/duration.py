"""Human-readable duration strings.

Durations are plain numbers of milliseconds. ``format_duration`` renders
them in a compact form such as ``"1h30m"`` or ``"5s500ms"``;
``parse_duration`` reads that form (and looser variants with whitespace,
mixed case, or fractional counts) back into milliseconds.

Example:
    >>> format_duration(5 * SECOND + 500)
    '5s500ms'
    >>> parse_duration("1h 30m")
    5400000
"""

import logging
import math
import re
from datetime import timedelta
from decimal import Decimal
from typing import Literal, overload

from tempokit.errors import FormatError
from tempokit.util import DAY, HOUR, MILLISECOND, MINUTE, SECOND

logger = logging.getLogger(__name__)

# Added before decomposition and removed before rounding the millisecond
# term, so values like 1.9999999999 do not leave a remainder artifact
_EPSILON = 1e-7

# Magnitudes below this render as "0ms"
_ZERO_THRESHOLD = 0.001

_UNITS: tuple[tuple[str, int], ...] = (
    ("d", DAY),
    ("h", HOUR),
    ("m", MINUTE),
    ("s", SECOND),
)

_UNIT_MAP: dict[str, int] = {
    "ms": MILLISECOND,
    "s": SECOND,
    "m": MINUTE,
    "h": HOUR,
    "d": DAY,
}

# "ms" must precede "m" and "s" in the alternation
_TERM_RE = re.compile(r"([-+]?[0-9]*\.?[0-9]+)(ms|s|m|h|d)", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")
_GRAMMAR = "<number><ms|s|m|h|d>..."


def _format_millis(value: float) -> str:
    return f"{value:.3f}".rstrip("0").rstrip(".")


def format_duration(ms: float | timedelta) -> str:
    """Convert milliseconds to a compact human-friendly string.

    Whole days, hours, minutes and seconds are emitted in that order,
    followed by any leftover milliseconds rounded to three decimals.
    Zero-count units are skipped and there is no separator.

    Args:
        ms: Duration in milliseconds (may be negative or fractional), or a
            ``timedelta``.

    Returns:
        A string like ``"1d2h"``, ``"0.5ms"`` or ``"-5s"``. Zero and
        magnitudes below 0.001ms render as ``"0ms"``.

    Raises:
        ValueError: If ``ms`` is NaN or infinite.
    """
    if isinstance(ms, timedelta):
        ms = ms / timedelta(milliseconds=1)
    if not math.isfinite(ms):
        raise ValueError(
            f"Cannot format a non-finite duration: {ms!r}\n"
            f"Hint: format_duration() expects a finite number of milliseconds"
        )
    if ms < 0:
        return f"-{format_duration(-ms)}"
    if ms < _ZERO_THRESHOLD:
        return "0ms"

    parts: list[str] = []
    remaining = ms + _EPSILON

    for label, size in _UNITS:
        if remaining >= size:
            count = int(remaining // size)
            remaining %= size
            parts.append(f"{count}{label}")

    if remaining > _EPSILON:
        millis = round(remaining - _EPSILON, 3)
        if millis > 0:
            parts.append(f"{_format_millis(millis)}ms")

    return "".join(parts) if parts else "0ms"


@overload
def parse_duration(s: str, *, silent: Literal[True]) -> int | float | None: ...


@overload
def parse_duration(s: str, *, silent: Literal[False] = False) -> int | float: ...


def parse_duration(s: str, *, silent: bool = False) -> int | float | None:
    """Convert a human-readable duration string to milliseconds.

    The string is a sequence of ``<number><unit>`` terms with units ``ms``,
    ``s``, ``m``, ``h`` and ``d`` (case-insensitive). Numbers may carry a
    sign and a fractional part. Whitespace anywhere is ignored and terms are
    summed, so ``"1h 30m"`` and ``"90M"`` are equal.

    Args:
        s: The duration string.
        silent: Return None instead of raising on invalid input.

    Returns:
        Total milliseconds, as an int when the total is whole, otherwise a
        float. None for invalid input in silent mode.

    Raises:
        FormatError: If the string is empty or any part of it is not a term
            (unless ``silent``).
    """
    normalized = _WHITESPACE_RE.sub("", s)
    if not normalized:
        return _invalid(s, f"Invalid duration: {s!r} is empty", silent)

    total = Decimal(0)
    pos = 0
    while pos < len(normalized):
        match = _TERM_RE.match(normalized, pos)
        if match is None:
            return _invalid(
                s,
                f"Invalid duration format: {s!r}\n"
                f"Unexpected text at {normalized[pos:]!r}\n"
                f"Expected terms like '1h', '30m', '1.5s' or '500ms'",
                silent,
            )
        number, unit = match.groups()
        total += Decimal(number) * _UNIT_MAP[unit.lower()]
        pos = match.end()

    if total == total.to_integral_value():
        return int(total)
    return float(total)


def _invalid(text: str, message: str, silent: bool) -> None:
    if silent:
        logger.debug("Ignoring invalid duration %r", text)
        return None
    raise FormatError(message, text=text, pattern=_GRAMMAR)

"""Human duration expressions (``"1m"``, ``"1h30m"``, ``"100ms"``).

Numbers without a unit are milliseconds. Fractions are accepted (``"1.5h"``)
and a leading minus yields a negative duration, which the scheduler treats as
"expire immediately".
"""

from __future__ import annotations

import math
import re

from ..exceptions import DurationParseError

_MS_PER_UNIT: dict[str, float] = {
    "": 1,
    "ms": 1,
    "msec": 1,
    "msecs": 1,
    "millisecond": 1,
    "milliseconds": 1,
    "s": 1_000,
    "sec": 1_000,
    "secs": 1_000,
    "second": 1_000,
    "seconds": 1_000,
    "m": 60_000,
    "min": 60_000,
    "mins": 60_000,
    "minute": 60_000,
    "minutes": 60_000,
    "h": 3_600_000,
    "hr": 3_600_000,
    "hrs": 3_600_000,
    "hour": 3_600_000,
    "hours": 3_600_000,
    "d": 86_400_000,
    "day": 86_400_000,
    "days": 86_400_000,
    "w": 604_800_000,
    "wk": 604_800_000,
    "week": 604_800_000,
    "weeks": 604_800_000,
}

# Stays well inside what datetime arithmetic can represent.
MAX_DURATION_MS = 1_000 * 365 * 86_400_000

_TOKEN = re.compile(r"\s*(?P<value>\d+(?:\.\d+)?|\.\d+)\s*(?P<unit>[a-z]*)\s*,?")

_FORMAT_UNITS: tuple[tuple[str, int], ...] = (
    ("d", 86_400_000),
    ("h", 3_600_000),
    ("m", 60_000),
    ("s", 1_000),
    ("ms", 1),
)


def parse_duration(expression: str) -> int:
    """Convert ``expression`` into whole milliseconds.

    Raises :class:`DurationParseError` for empty input, unknown units or any
    trailing garbage.
    """

    text = expression.strip().lower()
    sign = 1
    if text.startswith("-"):
        sign = -1
        text = text[1:]
    if not text:
        raise DurationParseError(f"Invalid expire: {expression!r}")

    total = 0.0
    position = 0
    while position < len(text):
        match = _TOKEN.match(text, position)
        if match is None or match.end() == position:
            raise DurationParseError(f"Invalid expire: {expression!r}")
        unit = match.group("unit")
        if unit not in _MS_PER_UNIT:
            raise DurationParseError(f"Invalid expire: unknown unit {unit!r}")
        total += float(match.group("value")) * _MS_PER_UNIT[unit]
        position = match.end()

    if not math.isfinite(total) or total > MAX_DURATION_MS:
        raise DurationParseError(f"Invalid expire: {expression!r} is too long")
    return sign * round(total)


def format_duration(milliseconds: int) -> str:
    """Render milliseconds compactly, e.g. ``90_500 -> "1m 30s 500ms"``."""

    if milliseconds == 0:
        return "0ms"
    prefix = "-" if milliseconds < 0 else ""
    remaining = abs(milliseconds)
    parts: list[str] = []
    for suffix, size in _FORMAT_UNITS:
        amount, remaining = divmod(remaining, size)
        if amount:
            parts.append(f"{amount}{suffix}")
    return prefix + " ".join(parts)


__all__ = ["MAX_DURATION_MS", "format_duration", "parse_duration"]

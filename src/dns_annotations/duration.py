"""Parser for duration strings such as ``"10m"``, ``"1h30m"`` or ``"20.5s"``."""
from __future__ import annotations

import re

NANOSECOND = 1
MICROSECOND = 1000 * NANOSECOND
MILLISECOND = 1000 * MICROSECOND
SECOND = 1000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE

UNITS: dict[str, int] = {
    "ns": NANOSECOND,
    "us": MICROSECOND,
    "µs": MICROSECOND,
    "μs": MICROSECOND,
    "ms": MILLISECOND,
    "s": SECOND,
    "m": MINUTE,
    "h": HOUR,
}

# Durations are held in a signed 64-bit nanosecond count.
MAX_DURATION = (1 << 63) - 1

# "ms" precedes "m" so milliseconds are not read as minutes.
_COMPONENT = re.compile(r"([0-9]*)(?:\.([0-9]*))?(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(text: str) -> int:
    """Parse a duration string into nanoseconds.

    A duration is an optional sign followed by one or more decimal numbers,
    each with an optional fraction and a mandatory unit suffix. The string
    ``"0"`` is the only value accepted without a unit.

    Args:
        text: Duration expression, e.g. ``"300ms"``, ``"-1.5h"`` or ``"2h45m"``.

    Returns:
        Signed duration in nanoseconds. Sub-nanosecond fractions are truncated.

    Raises:
        ValueError: If the string is not a valid duration or overflows.
    """
    s = text
    negative = False
    if s[:1] in ("-", "+"):
        negative = s[0] == "-"
        s = s[1:]
    if s == "0":
        return 0
    if not s:
        raise ValueError(f"invalid duration {text!r}")

    total = 0
    pos = 0
    while pos < len(s):
        m = _COMPONENT.match(s, pos)
        if m is None:
            raise ValueError(f"invalid duration {text!r}")
        whole, frac, unit = m.group(1), m.group(2) or "", m.group(3)
        if not whole and not frac:
            raise ValueError(f"invalid duration {text!r}")
        scale = UNITS[unit]
        total += int(whole or "0") * scale
        if frac:
            total += int(frac) * scale // 10 ** len(frac)
        if total > MAX_DURATION + negative:
            raise ValueError(f"invalid duration {text!r}")
        pos = m.end()

    return -total if negative else total


def duration_seconds(text: str) -> int:
    """Parse a duration string and truncate it to whole seconds.

    Args:
        text: Duration expression.

    Returns:
        Whole seconds, truncated toward zero (``"20.5s"`` gives 20).

    Raises:
        ValueError: If the string is not a valid duration.
    """
    ns = parse_duration(text)
    seconds = abs(ns) // SECOND
    return -seconds if ns < 0 else seconds

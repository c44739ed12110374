"""Duration parsing for metric template intervals.

Metric templates express intervals in the compact form used by canary
controllers: a sequence of decimal numbers each followed by a unit, such as
``30s``, ``1m``, ``1h30m`` or ``1.5h``.
"""

from __future__ import annotations

import re
from decimal import Decimal

from whenever import TimeDelta

from canary_metrics.errors import InvalidIntervalError

_UNIT_NANOSECONDS: dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # micro sign
    "μs": 1_000,  # greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

# Longer units first so "ms" is not read as "m" followed by garbage.
_COMPONENT = re.compile(r"([0-9]*\.?[0-9]*)(ns|us|µs|μs|ms|s|m|h)")

# Largest representable interval: a signed 64-bit nanosecond count.
_MAX_NANOSECONDS = 2**63 - 1


def parse_duration(value: str) -> TimeDelta:
    """Parse a duration string like ``'30s'`` or ``'1h30m'`` into a TimeDelta.

    Raises:
        InvalidIntervalError: if the string is not a valid duration, or is
            longer than a signed 64-bit nanosecond count can hold.
    """
    s = value
    sign = 1
    if s[:1] in ("-", "+"):
        if s[0] == "-":
            sign = -1
        s = s[1:]

    if s == "0":
        return TimeDelta()
    if not s:
        raise InvalidIntervalError(value)

    total = Decimal(0)
    pos = 0
    while pos < len(s):
        match = _COMPONENT.match(s, pos)
        if match is None:
            raise InvalidIntervalError(value)
        number, unit = match.groups()
        if not number.replace(".", "", 1):
            raise InvalidIntervalError(value)
        total += Decimal(number) * _UNIT_NANOSECONDS[unit]
        if total > _MAX_NANOSECONDS:
            raise InvalidIntervalError(value)
        pos = match.end()

    try:
        return TimeDelta(nanoseconds=sign * int(total))
    except (ValueError, OverflowError) as exc:
        raise InvalidIntervalError(value) from exc

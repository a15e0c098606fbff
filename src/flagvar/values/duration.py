# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Duration Value Adapter.

Durations are written as a possibly signed sequence of decimal numbers,
each with an optional fraction and a unit suffix, such as `300ms`,
`-1.5h` or `2h45m`. Valid units are `ns`, `us` (or `µs`), `ms`, `s`,
`m` and `h`. Values are stored as `datetime.timedelta`, so the
resolution is one microsecond; finer input is truncated.
"""

import re
from datetime import timedelta
from decimal import Decimal

from flagvar.values.base import Value

_COMPONENT = re.compile(r"([0-9]*(?:\.[0-9]*)?)([^0-9.]*)")

# Nanoseconds per unit.
_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # U+00B5 micro sign
    "μs": 1_000,  # U+03BC greek small letter mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}


def parse_duration(text: str) -> timedelta:
    """Parses a duration string such as `1h2m3s`.

    Raises:
        ValueError: Raised on malformed input or unknown units.
        OverflowError: Raised if the duration exceeds the `timedelta` range.
    """
    rest = text
    negative = False

    if rest[:1] in ("-", "+"):
        negative = rest[0] == "-"
        rest = rest[1:]

    # Special case: a bare zero needs no unit.
    if rest == "0":
        return timedelta(0)
    if rest == "":
        raise ValueError(f"invalid duration {text!r}")

    total = Decimal(0)
    pos = 0

    while pos < len(rest):
        match = _COMPONENT.match(rest, pos)
        assert match is not None

        number, unit = match.groups()
        if number in ("", "."):
            raise ValueError(f"invalid duration {text!r}")
        if unit == "":
            raise ValueError(f"missing unit in duration {text!r}")
        if unit not in _UNITS:
            raise ValueError(f"unknown unit {unit!r} in duration {text!r}")

        total += Decimal(number) * _UNITS[unit]
        pos = match.end()

    microseconds = int(total) // 1_000
    return timedelta(microseconds=-microseconds if negative else microseconds)


def _fraction(value: int, digits: int) -> str:
    if value == 0:
        return ""
    return "." + f"{value:0{digits}d}".rstrip("0")


def format_duration(value: timedelta) -> str:
    """Renders a duration in the form accepted by `parse_duration`.

    Durations below one second use the smaller units (`1.5ms`), everything
    else is written as hours, minutes and seconds where leading zero units
    are omitted (`1h2m3s`, `2m0s`, `4.25s`).
    """
    us = (value.days * 86400 + value.seconds) * 1_000_000 + value.microseconds
    if us == 0:
        return "0s"

    sign = "-" if us < 0 else ""
    us = abs(us)

    if us < 1_000:
        return f"{sign}{us}µs"
    if us < 1_000_000:
        ms, frac = divmod(us, 1_000)
        return f"{sign}{ms}{_fraction(frac, 3)}ms"

    seconds, frac = divmod(us, 1_000_000)
    minutes, seconds = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)

    out = f"{seconds}{_fraction(frac, 6)}s"
    if hours > 0 or minutes > 0:
        out = f"{minutes}m{out}"
    if hours > 0:
        out = f"{hours}h{out}"
    return sign + out


class DurationValue(Value[timedelta]):
    target = "duration"

    def _parse(self, text: str) -> timedelta:
        return parse_duration(text)

    def _format(self, value: timedelta) -> str:
        return format_duration(value)

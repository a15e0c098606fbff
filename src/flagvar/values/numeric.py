# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Integer and Floating Point Value Adapters.

Integers are parsed at a fixed width: the parsed value has to fit the
range of a signed or unsigned machine integer with the configured number
of bits. Floats are parsed either as 64 bit values or rounded to the
nearest 32 bit value. In both cases the formatted text reads back to the
exact same value.
"""

import math
import struct
from decimal import Decimal

from flagvar.ref import Ref
from flagvar.types import NATIVE_BITS, Width
from flagvar.values.base import Value

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
_FLOAT32 = struct.Struct("<f")


def _check_literal(text: str) -> None:
    # int() and float() are more lenient than a flag value should be.
    if len(text) == 0 or not text.isascii() or text != text.strip() or "_" in text:
        raise ValueError("invalid syntax")


def parse_int(text: str, bits: int = NATIVE_BITS, base: int = 10) -> int:
    _check_literal(text)
    value = int(text, base)

    width = Width(bits)
    if not width.min <= value <= width.max:
        raise ValueError("value out of range")
    return value


def parse_uint(text: str, bits: int = NATIVE_BITS, base: int = 10) -> int:
    _check_literal(text)
    if text[0] in "+-":
        raise ValueError("invalid syntax")
    value = int(text, base)

    if value > Width(bits, signed=False).max:
        raise ValueError("value out of range")
    return value


def format_int(value: int, base: int = 10) -> str:
    if base == 10:
        return str(value)
    if not 2 <= base <= 36:
        raise ValueError(f"invalid base: {base}")
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    value = abs(value)
    out = []
    while value > 0:
        value, digit = divmod(value, base)
        out.append(_DIGITS[digit])
    return sign + "".join(reversed(out))


def round32(value: float) -> float:
    """Rounds `value` to the nearest 32 bit float.

    Raises:
        OverflowError: Raised if the value exceeds the float32 range.
    """
    return _FLOAT32.unpack(_FLOAT32.pack(value))[0]


def parse_float(text: str, bits: int = 64) -> float:
    _check_literal(text)
    value = float(text)

    if math.isinf(value) and text.lstrip("+-").lower() not in ("inf", "infinity"):
        raise ValueError("value out of range")
    if bits == 32 and math.isfinite(value):
        value = round32(value)
    return value


def format_float(value: float, bits: int = 64) -> str:
    """Renders the shortest plain decimal that reads back bit-exact at `bits`."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"

    digits = repr(value)
    if bits == 32:
        try:
            value = round32(value)
        except OverflowError:
            pass
        else:
            for precision in range(1, 10):
                digits = f"{value:.{precision}g}"
                if round32(float(digits)) == value:
                    break

    plain = format(Decimal(digits), "f")
    if "." in plain:
        plain = plain.rstrip("0").rstrip(".")
    return plain


class IntValue(Value[int]):
    def __init__(self, ref: Ref[int], bits: int = NATIVE_BITS, base: int = 10) -> None:
        if not 2 <= base <= 36:
            raise ValueError(f"invalid base: {base}")

        super().__init__(ref)
        self.width = Width(bits)
        self.bits = bits
        self.base = base
        self.target = f"int{bits}"

    def _parse(self, text: str) -> int:
        return parse_int(text, self.bits, self.base)

    def _format(self, value: int) -> str:
        return format_int(value, self.base)


class UintValue(Value[int]):
    def __init__(self, ref: Ref[int], bits: int = NATIVE_BITS, base: int = 10) -> None:
        if not 2 <= base <= 36:
            raise ValueError(f"invalid base: {base}")

        super().__init__(ref)
        self.width = Width(bits, signed=False)
        self.bits = bits
        self.base = base
        self.target = f"uint{bits}"

    def _parse(self, text: str) -> int:
        return parse_uint(text, self.bits, self.base)

    def _format(self, value: int) -> str:
        return format_int(value, self.base)


class FloatValue(Value[float]):
    def __init__(self, ref: Ref[float], bits: int = 64) -> None:
        if bits not in (32, 64):
            raise ValueError(f"unsupported float width: {bits}")

        super().__init__(ref)
        self.bits = bits
        self.target = f"float{bits}"

    def _parse(self, text: str) -> float:
        return parse_float(text, self.bits)

    def _format(self, value: float) -> str:
        return format_float(value, self.bits)

    def get(self) -> float | None:
        value = self.ref.load()
        if value is None or self.bits == 64 or not math.isfinite(value):
            return value
        try:
            return round32(value)
        except OverflowError:
            return math.copysign(math.inf, value)

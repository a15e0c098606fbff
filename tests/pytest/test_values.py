# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

import math
from typing import Any

import pytest

from flagvar import ParseError, Var
from flagvar.values import ZERO, BoolValue, FloatValue, IntValue, StringValue, UintValue, Value
from flagvar.values.numeric import format_float, format_int, round32

FLOAT32_MAX = 3.4028234663852886e38


@pytest.mark.parametrize("text", ["1", "t", "T", "TRUE", "true", "True"])
def test_bool_true(text: str) -> None:
    var = Var(False)
    BoolValue(var).set(text)
    assert var.value is True


@pytest.mark.parametrize("text", ["0", "f", "F", "FALSE", "false", "False"])
def test_bool_false(text: str) -> None:
    var = Var(True)
    BoolValue(var).set(text)
    assert var.value is False


@pytest.mark.parametrize("text", ["", "yes", "tRUE", " true", "2"])
def test_bool_invalid(text: str) -> None:
    var = Var(True)
    with pytest.raises(ParseError):
        BoolValue(var).set(text)
    assert var.value is True


@pytest.mark.parametrize(
    "bits,text,expected",
    [
        (8, "-128", -128),
        (8, "127", 127),
        (16, "-32768", -32768),
        (32, "2147483647", 2147483647),
        (64, "-9223372036854775808", -(2**63)),
        (64, "+42", 42),
        (64, "007", 7),
    ],
)
def test_int(bits: int, text: str, expected: int) -> None:
    var = Var(0)
    IntValue(var, bits).set(text)
    assert var.value == expected


@pytest.mark.parametrize(
    "bits,text",
    [
        (8, "128"),
        (8, "-129"),
        (16, "32768"),
        (64, "9223372036854775808"),
        (64, "1.5"),
        (64, "0x10"),
        (64, " 1"),
        (64, "1_000"),
        (64, ""),
        (64, "\u0661\u0662"),
        (64, "\uff11"),
    ],
)
def test_int_invalid(bits: int, text: str) -> None:
    var = Var(5)
    value = IntValue(var, bits)

    with pytest.raises(ParseError) as exc_info:
        value.set(text)

    assert exc_info.value.text == text
    assert exc_info.value.target == f"int{bits}"
    assert var.value == 5


@pytest.mark.parametrize(
    "bits,text,expected",
    [
        (8, "255", 255),
        (16, "65535", 65535),
        (32, "4294967295", 4294967295),
        (64, "18446744073709551615", 2**64 - 1),
        (64, "0", 0),
    ],
)
def test_uint(bits: int, text: str, expected: int) -> None:
    var = Var(0)
    UintValue(var, bits).set(text)
    assert var.value == expected


@pytest.mark.parametrize("bits,text", [(8, "256"), (8, "-1"), (8, "+1"), (8, "-0"), (64, "18446744073709551616")])
def test_uint_invalid(bits: int, text: str) -> None:
    with pytest.raises(ParseError):
        UintValue(Var(0), bits).set(text)


def test_int_base() -> None:
    var = Var(0)
    value = IntValue(var, 16, base=16)

    value.set("-ff")
    assert var.value == -255
    assert value.format() == "-ff"

    assert format_int(5, 2) == "101"
    assert format_int(0, 36) == "0"

    with pytest.raises(ValueError):
        format_int(5, 37)


def test_float64() -> None:
    var = Var(0.0)
    value = FloatValue(var, 64)

    value.set("0.1")
    assert var.value == 0.1
    assert value.format() == "0.1"
    assert value.get() == 0.1

    value.set("-2.5e-3")
    assert var.value == -0.0025


def test_float32_rounds() -> None:
    var = Var(0.0)
    value = FloatValue(var, 32)

    value.set("0.1")
    assert var.value == round32(0.1)
    assert var.value != 0.1
    assert value.format() == "0.1"
    assert value.get() == round32(0.1)


def test_float32_max() -> None:
    var = Var(0.0)
    value = FloatValue(var, 32)

    value.set("3.4028235e+38")
    assert var.value == FLOAT32_MAX
    assert value.format() == "340282350000000000000000000000000000000"


@pytest.mark.parametrize("bits,text", [(32, "1e39"), (64, "1e400"), (64, "-1e400"), (64, "abc"), (64, "1_0.0")])
def test_float_out_of_range(bits: int, text: str) -> None:
    with pytest.raises(ParseError):
        FloatValue(Var(0.0), bits).set(text)


@pytest.mark.parametrize("text", ["inf", "+Inf", "-infinity", "NaN"])
def test_float_special(text: str) -> None:
    var = Var(0.0)
    FloatValue(var, 32).set(text)
    assert math.isinf(var.value) or math.isnan(var.value)


@pytest.mark.parametrize(
    "value,bits,expected",
    [
        (1.0, 64, "1"),
        (-0.0, 64, "-0"),
        (1e21, 64, "1000000000000000000000"),
        (1.5e-7, 64, "0.00000015"),
        (math.inf, 64, "+Inf"),
        (-math.inf, 32, "-Inf"),
        (math.nan, 64, "NaN"),
        (round32(1.1), 32, "1.1"),
        (16777216.0, 32, "16777216"),
    ],
)
def test_format_float(value: float, bits: int, expected: str) -> None:
    assert format_float(value, bits) == expected


def test_float_invalid_width() -> None:
    with pytest.raises(ValueError):
        FloatValue(Var(0.0), 16)


@pytest.mark.parametrize("cls", [IntValue, UintValue])
def test_int_invalid_width(cls: type[IntValue] | type[UintValue]) -> None:
    with pytest.raises(ValueError, match="unsupported width"):
        cls(Var(0), 12)


@pytest.mark.parametrize("base", [0, 1, 37])
def test_int_invalid_base(base: int) -> None:
    with pytest.raises(ValueError, match="invalid base"):
        IntValue(Var(0), 64, base=base)


def test_float_non_ascii_digits() -> None:
    var = Var(1.0)

    with pytest.raises(ParseError):
        FloatValue(var).set("\u0661.5")
    assert var.value == 1.0


def test_string() -> None:
    var = Var("")
    value = StringValue(var)

    value.set("hello world")
    assert var.value == "hello world"
    assert value.format() == "hello world"
    assert value.get() == "hello world"

    value.set("")
    assert var.value == ""


@pytest.mark.parametrize(
    "value",
    [
        BoolValue(Var(None, bool)),
        IntValue(Var(None, int)),
        UintValue(Var(None, int)),
        FloatValue(Var(None, float)),
        StringValue(Var(None, str)),
    ],
)
def test_unset_slot_formats_zero(value: Value[Any]) -> None:
    assert value.format() == ZERO
    assert str(value) == ZERO


@pytest.mark.parametrize(
    "value,inputs",
    [
        (BoolValue(Var(False)), [True, False]),
        (IntValue(Var(0), 8), [-128, -1, 0, 1, 127]),
        (IntValue(Var(0), 64), [-(2**63), 0, 2**63 - 1]),
        (UintValue(Var(0), 16), [0, 1, 65535]),
        (UintValue(Var(0), 64), [0, 2**64 - 1]),
        (FloatValue(Var(0.0), 64), [0.0, -0.0, 0.1, 1 / 3, 1e300, 5e-324, -2.5, math.inf]),
        (FloatValue(Var(0.0), 32), [round32(x) for x in (0.1, 1 / 3, 1e30, 1e-40, -7.25)] + [FLOAT32_MAX]),
        (StringValue(Var("")), ["", "a", "with space", "ümlaut"]),
    ],
)
def test_round_trip(value: Value[Any], inputs: list[Any]) -> None:
    for x in inputs:
        value.ref.store(x)
        text = value.format()
        value.ref.store(None)
        value.set(text)
        assert value.get() == x
        if isinstance(x, float):
            assert math.copysign(1, value.get()) == math.copysign(1, x)

# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Value Adapters for Record Fields.

This package contains one value adapter per supported field type, as well
as `new_value()`, which selects the adapter for a record field. Selection
happens in two steps, first match wins:

1. An exact type table (`datetime.timedelta`, `datetime.datetime` and
   everything added with `register_type()`).
2. A kind table checked in order: `bool`, `enum.Enum`, `int`, `float`
   and `str`. Integer and float widths are taken from the `Width` marker
   in the field's metadata.

Fields of any other type, e.g. containers, get no adapter.
"""

import enum
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any, TypeAlias

from flagvar.record import RecordField
from flagvar.ref import Ref
from flagvar.types import NATIVE_BITS

from .base import ZERO, Settable, Value
from .boolean import BoolValue
from .duration import DurationValue, format_duration, parse_duration
from .numeric import FloatValue, IntValue, UintValue
from .oneof import EnumValue, OneOfValue
from .string import StringValue
from .strings import StringsValue
from .timestamp import (
    DATE_ONLY,
    DATETIME,
    RFC3339,
    RFC3339_MICRO,
    TIME_ONLY,
    TimeValue,
    format_time,
)

ValueFactory: TypeAlias = Callable[[Ref[Any], RecordField], Value[Any]]


def _int_value(ref: Ref[Any], field: RecordField) -> Value[Any]:
    width = field.width()
    if width is None:
        return IntValue(ref, NATIVE_BITS)
    if width.signed:
        return IntValue(ref, width.bits)
    return UintValue(ref, width.bits)


def _float_value(ref: Ref[Any], field: RecordField) -> Value[Any]:
    width = field.width()
    return FloatValue(ref, 64 if width is None else width.bits)


_TYPE_VALUES: dict[Any, ValueFactory] = {
    timedelta: lambda ref, _: DurationValue(ref),
    datetime: lambda ref, _: TimeValue(ref, RFC3339),
}

# Order matters: bool and IntEnum are subclasses of int.
_KIND_VALUES: list[tuple[type, ValueFactory]] = [
    (bool, lambda ref, _: BoolValue(ref)),
    (enum.Enum, lambda ref, _: EnumValue(ref)),
    (int, _int_value),
    (float, _float_value),
    (str, lambda ref, _: StringValue(ref)),
]


def register_type(typ: Any, factory: ValueFactory) -> None:
    """Adds an exact type override, checked before the kind table.

    Args:
        typ (Any): The field type, compared by identity.
        factory (ValueFactory): Called with the slot handle and the field,
            returns the adapter.
    """
    _TYPE_VALUES[typ] = factory


def new_value(ref: Ref[Any], field: RecordField) -> Value[Any] | None:
    """Returns the adapter for `field`, or `None` if its type is unsupported."""
    try:
        factory = _TYPE_VALUES.get(field.annotation)
    except TypeError:
        # Unhashable annotation
        factory = None

    if factory is not None:
        return factory(ref, field)

    for kind, factory in _KIND_VALUES:
        if field.is_a(kind):
            return factory(ref, field)

    return None


# Public Re-Exports
__all__ = (
    "DATE_ONLY",
    "DATETIME",
    "RFC3339",
    "RFC3339_MICRO",
    "TIME_ONLY",
    "ZERO",
    "BoolValue",
    "DurationValue",
    "EnumValue",
    "FloatValue",
    "IntValue",
    "OneOfValue",
    "Settable",
    "StringValue",
    "StringsValue",
    "TimeValue",
    "UintValue",
    "Value",
    "ValueFactory",
    "format_duration",
    "format_time",
    "new_value",
    "parse_duration",
    "register_type",
)

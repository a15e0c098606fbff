# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Closed Enumeration Value Adapters.

`OneOfValue` restricts a variable to a fixed set of named values. The
mapping from names to values is frozen at construction time, and every
mapped value must be of exactly the type declared for the variable.
`EnumValue` is the special case used for `enum.Enum` fields, where the
member names are the valid choices.
"""

import enum
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, TypeVar

from flagvar.errors import InvalidArgumentError, InvalidChoiceError
from flagvar.ref import Ref
from flagvar.values.base import Value

T = TypeVar("T")
E = TypeVar("E", bound=enum.Enum)


class OneOfValue(Value[T]):
    target = "one-of"

    def __init__(self, ref: Ref[T], mapping: Mapping[str, T]) -> None:
        super().__init__(ref)

        typ = ref.declared_type
        for key, value in mapping.items():
            if type(value) is not typ:
                raise InvalidArgumentError(
                    f"value for mapping key {key!r} is {type(value).__name__}; "
                    f"but receiver is {getattr(typ, '__name__', typ)}"
                )

        self.mapping: Mapping[str, T] = MappingProxyType(dict(mapping))

    def _parse(self, text: str) -> T:
        try:
            return self.mapping[text]
        except KeyError:
            raise InvalidChoiceError(text, self.mapping.keys()) from None

    def _format(self, value: T) -> str:
        return str(value)


class EnumValue(OneOfValue[E]):
    def __init__(self, ref: Ref[E]) -> None:
        enum_type: Any = ref.declared_type
        super().__init__(ref, {member.name: member for member in enum_type})

    def _format(self, value: E) -> str:
        return value.name

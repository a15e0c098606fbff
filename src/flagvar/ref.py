# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Handles to the variable slots value adapters write to.

A value adapter never copies the variable it is bound to. Instead it keeps
a handle which reads and writes the slot in place: a `FieldRef` for an
attribute of a record, or a `Var` box for a standalone variable.
"""

from typing import Any, Generic, Protocol, TypeVar

T = TypeVar("T")


class Ref(Protocol[T]):
    """A readable and writable slot holding a value of `declared_type`."""

    declared_type: Any

    def load(self) -> T | None: ...

    def store(self, value: T) -> None: ...


class FieldRef(Generic[T]):
    def __init__(self, record: Any, name: str, declared_type: Any | None = None) -> None:
        self.record = record
        self.name = name

        if declared_type is None:
            declared_type = type(getattr(record, name))
        self.declared_type = declared_type

    def load(self) -> T | None:
        return getattr(self.record, self.name, None)

    def store(self, value: T) -> None:
        setattr(self.record, self.name, value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({type(self.record).__name__}.{self.name})"


class Var(Generic[T]):
    """A standalone variable for adapters used outside of a record.

    ```python
    mode = Var(Mode.FAST)
    flags.var(OneOf(mode, {"fast": Mode.FAST, "slow": Mode.SLOW}), "mode")
    ```
    """

    def __init__(self, value: T | None = None, declared_type: Any | None = None) -> None:
        if declared_type is None:
            if value is None:
                raise TypeError("declared_type is required without an initial value")
            declared_type = type(value)

        self.value = value
        self.declared_type = declared_type

    def load(self) -> T | None:
        return self.value

    def store(self, value: T) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"

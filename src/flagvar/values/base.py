# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Base Class of the Value Adapters.

A value adapter binds a single variable slot to parse and format logic:
`set()` parses text and writes the result through the slot handle in
place, `format()` renders the current value back to text, and `get()`
returns the typed value.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, Protocol, TypeVar

from flagvar.errors import ParseError
from flagvar.ref import Ref

ZERO = "<zero>"

T = TypeVar("T")


class Value(ABC, Generic[T]):
    """Settable value contract shared by all adapters.

    Subclasses implement `_parse()`, raising `ValueError` on malformed
    input, and `_format()`. Conversion of the `ValueError` into a
    `ParseError` and the handling of unset slots happen here.
    """

    #: Name of the target type used in error messages.
    target: str = "value"
    #: Whether the flag may be given without a value, e.g. `-verbose`.
    is_bool_flag: ClassVar[bool] = False

    def __init__(self, ref: Ref[T]) -> None:
        self.ref = ref

    @abstractmethod
    def _parse(self, text: str) -> T: ...

    @abstractmethod
    def _format(self, value: T) -> str: ...

    def set(self, text: str) -> None:
        """Parses `text` and stores the result into the bound slot.

        Args:
            text (str): Textual representation of the new value.

        Raises:
            ParseError: Raised if the text is malformed or out of range.
                The slot keeps its previous value.
        """
        try:
            value = self._parse(text)
        except ParseError:
            raise
        except (ValueError, OverflowError) as e:
            raise ParseError(text, self.target, str(e) or None) from e

        self.ref.store(value)

    def format(self) -> str:
        value = self.ref.load()
        if value is None:
            return ZERO
        return self._format(value)

    def get(self) -> Any:
        return self.ref.load()

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.ref!r})"


class Settable(Protocol):
    """What a registry needs from a flag value."""

    is_bool_flag: ClassVar[bool]

    def set(self, text: str) -> None: ...

    def format(self) -> str: ...

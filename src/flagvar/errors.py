# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from collections.abc import Iterable
from typing import Any


class FlagvarError(Exception):
    pass


class InvalidArgumentError(FlagvarError, TypeError):
    """Raised if the binder is invoked with something it cannot bind to."""


class UnsupportedTypeError(FlagvarError, TypeError):
    def __init__(self, name: str, annotation: Any):
        self.name = name
        self.annotation = annotation

        super().__init__(f"can't define flag {name!r}: unsupported type {annotation!r}")


class DuplicateNameError(FlagvarError):
    def __init__(self, name: str):
        self.name = name

        super().__init__(f"can't define flag {name!r}: already exists")


class ParseError(FlagvarError, ValueError):
    def __init__(self, text: str, target: str, message: str | None = None):
        self.text = text
        self.target = target
        self.message = message

        super().__init__(text, target)

    def _message_core(self) -> str:
        return f"can't parse {self.text!r} as {self.target}"

    def __str__(self) -> str:
        message = self._message_core()

        if self.message is not None:
            message = f"{message}: {self.message}"

        return message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({repr(str(self))})"


class InvalidChoiceError(ParseError):
    def __init__(self, text: str, choices: Iterable[str]):
        self.choices = sorted(choices)

        super().__init__(text, "one-of")

    def _message_core(self) -> str:
        return f"value {self.text!r} is not one of {self.choices!r}"

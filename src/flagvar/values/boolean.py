# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from flagvar.values.base import Value

_TRUE = frozenset(("1", "t", "T", "TRUE", "true", "True"))
_FALSE = frozenset(("0", "f", "F", "FALSE", "false", "False"))


def parse_bool(text: str) -> bool:
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError("invalid syntax")


def format_bool(value: bool) -> str:
    return "true" if value else "false"


class BoolValue(Value[bool]):
    target = "bool"
    is_bool_flag = True

    def _parse(self, text: str) -> bool:
        return parse_bool(text)

    def _format(self, value: bool) -> str:
        return format_bool(value)

# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from typing import ClassVar


class StringsValue:
    """Accumulates flag values into a list of strings.

    Each call to `set()` appends to the list instead of replacing it. With a
    non-empty separator, the text is split and all parts are appended:

    ```python
    hosts: list[str] = []
    flags.var(Strings(hosts, ","), "host")
    # -host a,b -host c  =>  hosts == ["a", "b", "c"]
    ```
    """

    is_bool_flag: ClassVar[bool] = False

    def __init__(self, items: list[str], separator: str = "") -> None:
        self.items = items
        self.separator = separator

    def set(self, text: str) -> None:
        if self.separator != "":
            self.items.extend(text.split(self.separator))
        else:
            self.items.append(text)

    def format(self) -> str:
        if self.separator != "":
            return self.separator.join(self.items)
        return str(self.items)

    def get(self) -> list[str]:
        return self.items

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.items!r}, {self.separator!r})"

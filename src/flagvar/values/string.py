# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from flagvar.values.base import Value


class StringValue(Value[str]):
    target = "string"

    def _parse(self, text: str) -> str:
        return text

    def _format(self, value: str) -> str:
        return value

# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from datetime import datetime, timezone

from flagvar.ref import Ref
from flagvar.values.base import Value

RFC3339 = "%Y-%m-%dT%H:%M:%S%z"
RFC3339_MICRO = "%Y-%m-%dT%H:%M:%S.%f%z"
DATETIME = "%Y-%m-%d %H:%M:%S"
DATE_ONLY = "%Y-%m-%d"
TIME_ONLY = "%H:%M:%S"

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def format_time(value: datetime, layout: str) -> str:
    """Renders `value` with `layout` so that `strptime` reads it back.

    Years are always written with four digits; the platform `strftime`
    does not pad years below 1000. Naive values are taken as UTC if the
    layout contains an offset.
    """
    if value.tzinfo is None and "%z" in layout:
        value = value.replace(tzinfo=timezone.utc)
    return value.strftime(layout.replace("%Y", f"{value.year:04d}"))


class TimeValue(Value[datetime]):
    """Timestamp adapter parsing and formatting with a `strptime` layout.

    With the `RFC3339` layout, fractional seconds are accepted as well.
    """

    target = "timestamp"

    def __init__(self, ref: Ref[datetime], layout: str = RFC3339) -> None:
        super().__init__(ref)
        self.layout = layout

    def _parse(self, text: str) -> datetime:
        try:
            return datetime.strptime(text, self.layout)
        except ValueError:
            if self.layout != RFC3339:
                raise
        return datetime.strptime(text, RFC3339_MICRO)

    def _format(self, value: datetime) -> str:
        return format_time(value, self.layout)

    def format(self) -> str:
        value = self.ref.load()
        if value is None:
            value = ZERO_TIME
        return self._format(value)

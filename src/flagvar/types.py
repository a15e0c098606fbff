# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Width markers for integer and floating point fields.

Python only knows a single `int` and a single `float` type. Fields that
should be parsed with the range of a fixed width machine type carry a
`Width` marker in their `typing.Annotated` metadata. The aliases in this
module cover the usual widths:

```python
class Settings(BaseModel):
    retries: Uint8 = 3
    ratio: Float32 = 0.5
```

A plain `int` is treated as a signed integer of the native width, a
plain `float` as a 64 bit float.
"""

import sys
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Annotated, Any

NATIVE_BITS = 64 if sys.maxsize > 2**32 else 32


@dataclass(frozen=True)
class Width:
    bits: int
    signed: bool = True

    def __post_init__(self) -> None:
        if self.bits not in (8, 16, 32, 64):
            raise ValueError(f"unsupported width: {self.bits}")

    @property
    def min(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1


def all_types(types: Iterable[Any]) -> bool:
    """Check if all inputs are `type`s and not instances."""
    return all(isinstance(t, type) for t in types)


def find_width(metadata: Iterable[Any]) -> Width | None:
    for m in metadata:
        if isinstance(m, Width):
            return m
    return None


Int = Annotated[int, Width(NATIVE_BITS)]
Int8 = Annotated[int, Width(8)]
Int16 = Annotated[int, Width(16)]
Int32 = Annotated[int, Width(32)]
Int64 = Annotated[int, Width(64)]

Uint = Annotated[int, Width(NATIVE_BITS, signed=False)]
Uint8 = Annotated[int, Width(8, signed=False)]
Uint16 = Annotated[int, Width(16, signed=False)]
Uint32 = Annotated[int, Width(32, signed=False)]
Uint64 = Annotated[int, Width(64, signed=False)]

Float32 = Annotated[float, Width(32)]
Float64 = Annotated[float, Width(64)]

# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Binds Record Fields to Flag Variables.

The `binder` module contains `bind()`, which walks the fields of a record
(a `pydantic` model or a dataclass instance) and registers one flag per
field with a registry:

1. Define the record
2. Bind it to a registry, e.g. a `FlagSet`
3. Parse the command line; the values are written into the record

```python
class Settings(BaseModel):
    Verbose: bool = False
    Timeout: timedelta = timedelta(seconds=5)

settings = Settings()
flags = FlagSet()
bind(flags, settings)
flags.parse(["-verbose", "-timeout=1m30s"])
```
"""

from typing import Any, Protocol

from pydantic import ValidationError

from flagvar.errors import (
    DuplicateNameError,
    FlagvarError,
    InvalidArgumentError,
    UnsupportedTypeError,
)
from flagvar.lispcase import lispcase
from flagvar.log import get_logger
from flagvar.options import BindOptions
from flagvar.record import RecordField, is_frozen, is_record
from flagvar.ref import FieldRef
from flagvar.values import Settable, new_value

logger = get_logger(__name__)


class Registry(Protocol):
    """The flag registry `bind()` defines its flags in.

    The registry is the only authority on name collisions: `bind()` asks
    it via `lookup()` before every definition.
    """

    def lookup(self, name: str) -> Settable | None: ...

    def var(self, value: Settable, name: str, usage: str = "") -> None: ...


def bind(
    registry: Registry,
    record: Any,
    options: BindOptions | None = None,
    /,
    **overrides: Any,
) -> None:
    """Defines a flag for every settable field of `record`.

    Fields are visited depth-first in declaration order. Fields of
    unsupported types, such as containers, are skipped unless the `strict`
    option is set. Definitions made before an error are not undone.

    Args:
        registry (Registry): Registry to define the flags in.
        record (Any): Instance of a `pydantic` model or a dataclass.
        options (BindOptions | None): Binder options, defaults to `BindOptions()`.
        overrides (Any): Single options overriding those in `options`,
            e.g. `recursion=True`.

    Raises:
        InvalidArgumentError: Raised if `record` is not a bindable record
            instance or the options are invalid.
        DuplicateNameError: Raised if a flag name is already defined.
        UnsupportedTypeError: Raised in strict mode for unsupported fields.
    """
    try:
        if options is None:
            options = BindOptions(**overrides)
        elif len(overrides) > 0:
            options = BindOptions.model_validate({**options.model_dump(), **overrides})
    except ValidationError as e:
        raise InvalidArgumentError(f"invalid bind options: {e}") from e

    if isinstance(record, type):
        raise InvalidArgumentError(f"can't setup non-addressable value: {record.__name__}")
    if not is_record(record):
        raise InvalidArgumentError(f"can't setup non-struct value: {type(record).__name__}")
    if is_frozen(record):
        raise InvalidArgumentError(
            f"can't setup non-addressable value: {type(record).__name__} is frozen"
        )

    _Binder(registry, options).bind_record("", record)


class _Binder:
    def __init__(self, registry: Registry, options: BindOptions) -> None:
        self.registry = registry
        self.options = options

    def flag_name(self, parent: str, field: RecordField) -> str:
        name = lispcase(field.name) if self.options.lisp_case else field.name
        if parent != "":
            name = parent + self.options.separator + name
        return name

    def bind_record(self, parent: str, record: Any) -> None:
        for field in RecordField.parse_record(record):
            if not field.settable:
                logger.trace("skipping unsettable field %s.%s", type(record).__name__, field.name)
                continue

            name = self.flag_name(parent, field)

            if self.options.recursion and field.is_record():
                nested = getattr(record, field.name)

                if is_record(nested):
                    self.bind_record(name, nested)
                    continue

            try:
                self.setup(name, field, record)
            except FlagvarError as e:
                e.add_note(f"set up {type(record).__name__}'s field {field.name}")
                raise

    def setup(self, name: str, field: RecordField, record: Any) -> None:
        value = new_value(FieldRef(record, field.name, field.annotation), field)

        if value is None:
            if self.options.strict:
                raise UnsupportedTypeError(name, field.annotation)

            logger.debug("skipping flag %s: unsupported type %r", name, field.annotation)
            return

        if self.registry.lookup(name) is not None:
            raise DuplicateNameError(name)

        self.registry.var(value, name, field.usage)
        logger.trace("defined flag %s (%s)", name, type(value).__name__)

# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Field Descriptors of Bindable Records.

The `record` module describes the fields of the records the binder walks.
Supported records are instances of `pydantic` models and dataclasses. For
both kinds the fields are yielded in declaration order, with their
annotations reduced to the type that matters for flag parsing.
"""

import dataclasses
from collections.abc import Iterator
from dataclasses import dataclass
from types import UnionType
from typing import Annotated, Any, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel

from flagvar.errors import InvalidArgumentError
from flagvar.types import Width, find_width

NoneType = type(None)


def is_record_type(t: Any) -> bool:
    return isinstance(t, type) and (issubclass(t, BaseModel) or dataclasses.is_dataclass(t))


def is_record(obj: Any) -> bool:
    return not isinstance(obj, type) and is_record_type(type(obj))


def is_frozen(record: Any) -> bool:
    if isinstance(record, BaseModel):
        return bool(record.model_config.get("frozen", False))
    return bool(type(record).__dataclass_params__.frozen)  # type: ignore[attr-defined]


def unwrap(annotation: Any) -> tuple[Any, tuple[Any, ...]]:
    """Strips `Annotated` and `Optional` wrappers from a type annotation.

    Args:
        annotation (Any): The annotation as declared on the record.

    Returns:
        tuple[Any, tuple[Any, ...]]: The bare type and the collected
            `Annotated` metadata. Unions of more than one non-`None` type
            are returned unchanged.
    """
    metadata: list[Any] = []

    while True:
        origin = get_origin(annotation)

        if origin is Annotated:
            annotation, *extra = get_args(annotation)
            metadata.extend(extra)
        elif origin is Union or origin is UnionType:
            args = [arg for arg in get_args(annotation) if arg is not NoneType]
            if len(args) != 1:
                break
            annotation = args[0]
        else:
            break

    return annotation, tuple(metadata)


@dataclass
class RecordField:
    """A single field of a record.

    The recommended entry point for an arbitrary record is the classmethod
    `RecordField.parse_record`.
    """

    name: str
    annotation: Any
    metadata: tuple[Any, ...] = ()
    settable: bool = True
    usage: str = ""

    @classmethod
    def parse_record(cls, record: Any) -> Iterator["RecordField"]:
        """Iterator over the record fields in declaration order.

        Yields:
            Instances of self (`RecordField`)
        """
        if isinstance(record, BaseModel):
            yield from cls._parse_model(record)
        else:
            yield from cls._parse_dataclass(record)

    @classmethod
    def _parse_model(cls, model: BaseModel) -> Iterator["RecordField"]:
        frozen = is_frozen(model)

        for name, info in type(model).model_fields.items():
            annotation, metadata = unwrap(info.annotation)
            yield cls(
                name=name,
                annotation=annotation,
                metadata=(*info.metadata, *metadata),
                settable=not (frozen or info.frozen or name.startswith("_")),
                usage=info.description or "",
            )

    @classmethod
    def _parse_dataclass(cls, obj: Any) -> Iterator["RecordField"]:
        frozen = is_frozen(obj)
        # Resolves string annotations, e.g. from `from __future__ import annotations`
        try:
            hints = get_type_hints(type(obj), include_extras=True)
        except NameError as e:
            raise InvalidArgumentError(
                f"can't resolve field types of {type(obj).__name__}: {e}"
            ) from e

        for field in dataclasses.fields(obj):
            annotation, metadata = unwrap(hints.get(field.name, field.type))
            yield cls(
                name=field.name,
                annotation=annotation,
                metadata=metadata,
                settable=not (frozen or field.name.startswith("_")),
                usage=field.metadata.get("usage", ""),
            )

    def is_a(self, types: type | tuple[type, ...]) -> bool:
        """Checks whether the field type is a subclass of any of the supplied types.

        Parametrized generics, such as `list[str]`, are never considered a
        subclass of anything.
        """
        t = self.annotation
        return isinstance(t, type) and get_origin(t) is None and issubclass(t, types)

    def is_record(self) -> bool:
        return get_origin(self.annotation) is None and is_record_type(self.annotation)

    def width(self) -> Width | None:
        return find_width(self.metadata)

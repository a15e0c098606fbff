# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Flag Variables Derived from Record Fields.

This is the `flagvar` package, which binds the fields of `pydantic` models
and dataclasses to individually settable command-line flags. Flag names
and parsing behaviour are derived from the field names and types.

The public interface consists of `bind()` and its `BindOptions`, the
`FlagSet` registry, and the standalone value adapters `OneOf`, `Strings`
and `Time` for variables outside of records.
"""

from flagvar.binder import Registry, bind
from flagvar.errors import (
    DuplicateNameError,
    FlagvarError,
    InvalidArgumentError,
    InvalidChoiceError,
    ParseError,
    UnsupportedTypeError,
)
from flagvar.flagset import FlagSet
from flagvar.lispcase import lispcase
from flagvar.options import BindOptions
from flagvar.ref import FieldRef, Var
from flagvar.values import OneOfValue, StringsValue, TimeValue

# Constructors of the standalone adapters
OneOf = OneOfValue
Strings = StringsValue
Time = TimeValue

# Public Re-Exports
__all__ = (
    "BindOptions",
    "DuplicateNameError",
    "FieldRef",
    "FlagSet",
    "FlagvarError",
    "InvalidArgumentError",
    "InvalidChoiceError",
    "OneOf",
    "ParseError",
    "Registry",
    "Strings",
    "Time",
    "UnsupportedTypeError",
    "Var",
    "bind",
    "lispcase",
)

# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from pydantic import BaseModel, ConfigDict, Field


class BindOptions(BaseModel):
    """Controls how `bind()` derives flag names from record fields."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    lisp_case: bool = Field(True, description="derive flag names in lisp-case form")
    recursion: bool = Field(False, description="descend into nested records")
    separator: str = Field(".", description="joins the names of nested records and their fields")
    strict: bool = Field(False, description="raise on fields of unsupported types")

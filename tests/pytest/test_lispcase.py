# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

import pytest

from flagvar import lispcase


@pytest.mark.parametrize(
    "name,expected",
    [
        ("LispCase", "lisp-case"),
        ("HTTPServer", "http-server"),
        ("ServeHTTP", "servehttp"),
        ("A", "a"),
        ("AB", "ab"),
        ("Ab", "ab"),
        ("aB", "ab"),
        ("NestedString", "nested-string"),
        ("MaxIdleConns", "max-idle-conns"),
        ("XMLHttpRequest", "xml-http-request"),
        ("ÄpfelÖl", "äpfel-öl"),
        ("", ""),
    ],
)
def test_lispcase(name: str, expected: str) -> None:
    assert lispcase(name) == expected


@pytest.mark.parametrize("name", ["lisp", "a", "already", "snake_case", "with-hyphen", "über"])
def test_lispcase_lowercase_unchanged(name: str) -> None:
    assert lispcase(name) == name

# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0


def lispcase(s: str) -> str:
    """Converts a mixed or Pascal case identifier to lisp-case.

    A hyphen is inserted in front of every uppercase character that is
    followed by a non-uppercase one, unless it is the first character.
    Runs of uppercase characters (acronyms) thus stay joined until their
    last character: ``HTTPServer`` becomes ``http-server``.
    """
    if len(s) == 0:
        return s

    out: list[str] = []
    current = s[0]

    for i, following in enumerate(s[1:]):
        if i > 0 and current.isupper() and not following.isupper():
            out.append("-")
        out.append(current.lower())
        current = following

    out.append(current.lower())
    return "".join(out)

# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Flag Registry on Top of `argparse`.

The `flagset` module contains the `FlagSet` class, a registry for flag
values built on the standard library `argparse.ArgumentParser`. Every flag
is a single-dash option backed by a value adapter. Parsing does not
produce a namespace; each occurrence of a flag is handed to the adapter's
`set()`, which writes into the bound variable directly.

Accepted forms are `-name=value` and `-name value`. Boolean flags may be
given without a value (`-verbose`), which sets them to `true`. Parsing
stops at the first argument that is not a flag; it and all following
arguments are returned by `parse()`.
"""

import argparse
import sys
from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Any, NoReturn, cast

from flagvar.config import Config, to_text
from flagvar.errors import DuplicateNameError, ParseError
from flagvar.log import get_logger
from flagvar.values import ZERO, OneOfValue, Settable

logger = get_logger(__name__)


class ValueAction(argparse.Action):
    """Hands the argument of a flag to its value adapter."""

    def __init__(
        self,
        option_strings: Sequence[str],
        dest: str,
        value: Settable,
        nargs: int | str | None = None,
        const: Any = None,
        help: str | None = None,  # noqa: A002
        metavar: str | tuple[str, ...] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            option_strings=option_strings,
            dest=dest,
            nargs=nargs,
            const=const,
            default=argparse.SUPPRESS,
            help=help,
            metavar=metavar,
        )
        self.value = value

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: str | Sequence[Any] | None,
        option_string: str | None = None,
    ) -> None:
        # nargs is either None or "?" with a const, so this is always a single string.
        text = cast(str, values)

        try:
            self.value.set(text)
        except ParseError as e:
            raise argparse.ArgumentError(self, str(e)) from e


class FlagSet(argparse.ArgumentParser):
    """A registry of named flag values.

    `FlagSet` implements the registry protocol consumed by `bind()`:
    `lookup()` and `var()`. Defining the same name twice raises a
    `DuplicateNameError`.
    """

    # Argument Group Names
    FLAGS = "flags"
    HELP = "help"

    # Exit Codes
    EXIT_ERROR = 2

    def __init__(
        self,
        prog: str | None = None,
        description: str | None = None,
        epilog: str | None = None,
        add_help: bool = True,
        exit_on_error: bool = True,
    ) -> None:
        """Instantiates an empty flag set.

        :param prog: Program name for the usage message.
        :param description: Program description for the usage message.
        :param epilog: Optional text following the help message.
        :param add_help: Whether to add `-h`/`-help` flags.
        :param exit_on_error: Whether to exit on error, or to raise `argparse.ArgumentError`.
        """
        super().__init__(
            prog=prog,
            description=description,
            epilog=epilog,
            exit_on_error=exit_on_error,
            add_help=False,  # Always disable the automatic help flag.
            allow_abbrev=False,
            argument_default=argparse.SUPPRESS,
            formatter_class=argparse.RawTextHelpFormatter,
        )

        self.exit_on_error = exit_on_error
        self._values: dict[str, Settable] = {}
        self._flag_group = self.add_argument_group(FlagSet.FLAGS)

        self.add_argument("args", nargs=argparse.REMAINDER, default=[], help=argparse.SUPPRESS)

        if add_help:
            self._help_group = self.add_argument_group(FlagSet.HELP)
            self._help_group.add_argument(
                "-h",
                "-help",
                action=argparse._HelpAction,
                help="show this help message and exit",
            )

    @property
    def flags(self) -> Mapping[str, Settable]:
        """Read-only view of the defined flags by name, in definition order."""
        return MappingProxyType(self._values)

    def lookup(self, name: str) -> Settable | None:
        return self._values.get(name)

    def var(self, value: Settable, name: str, usage: str = "") -> None:
        """Defines a flag backed by `value`.

        The current value of the variable, rendered by `value.format()`, is
        shown as the default in the help message.

        Raises:
            DuplicateNameError: Raised if a flag with this name exists.
        """
        option = f"-{name}"
        if name in self._values or option in self._option_string_actions:
            raise DuplicateNameError(name)

        args: dict[str, Any] = {}
        if value.is_bool_flag:
            args.update(nargs=argparse.OPTIONAL, const="true")
        else:
            args.update(metavar=self._metavar(value))

        self._flag_group.add_argument(
            option,
            action=ValueAction,
            value=value,
            dest=name,
            help=self._description(usage, value),
            **args,
        )
        self._values[name] = value

    def _description(self, usage: str, value: Settable) -> str:
        # argparse applies %-formatting to help texts
        usage = usage.replace("%", "%%")
        default = value.format()
        if default in ("", ZERO):
            return usage

        default = f"(default: {default.replace('%', '%%')})"
        return f"{usage} {default}" if len(usage) > 0 else default

    def _metavar(self, value: Settable) -> str:
        if isinstance(value, OneOfValue):
            return f"{{{', '.join(sorted(value.mapping))}}}"
        return getattr(value, "target", "value").upper()

    def parse(self, args: Sequence[str] | None = None) -> list[str]:
        """Parses flags from `args` (default: `sys.argv[1:]`).

        :return: The arguments following the flags.
        """
        namespace = self.parse_args(args)
        return list(namespace.args)

    def apply_config(
        self,
        config: Mapping[str, Any],
        separator: str = ".",
        source: str = "config",
    ) -> None:
        """Sets flags from a (nested) configuration mapping.

        Nested tables are joined with `separator` to form flag names, so a
        `[nested]` table with a `string` key sets the flag `nested.string`.
        Lists set the flag once per element. Unknown keys are ignored.

        :param config: The configuration, e.g. loaded by :func:`flagvar.config.load_config_file`.
        :param separator: The separator used when binding nested records.
        :param source: Describes the origin of the configuration in error notes.
        """
        for name, item in Config(config).flatten(separator).items():
            value = self._values.get(name)
            if value is None:
                logger.debug("%s: ignoring unknown key %s", source, name)
                continue

            items = item if isinstance(item, list) else [item]
            for element in items:
                try:
                    value.set(to_text(element))
                except ParseError as e:
                    e.add_note(f"key {name} from {source}")
                    raise

    def print_defaults(self) -> None:
        self.print_help(sys.stderr)

    def error(self, message: str) -> NoReturn:
        """Prints a usage message to `stderr` and exits if required.

        Raises:
            argparse.ArgumentError: Raised if not exiting on error.
            SystemExit: Raised if exiting on error.
        """
        if self.exit_on_error:
            self.print_usage(sys.stderr)
            self.exit(FlagSet.EXIT_ERROR, f"error: {message}\n")

        raise argparse.ArgumentError(None, message)

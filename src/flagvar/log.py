# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import atexit
import datetime
import logging
import os
import sys
import traceback
from enum import Enum, IntEnum, unique
from logging.handlers import QueueHandler, QueueListener
from queue import Queue
from typing import TYPE_CHECKING, Any, TextIO, cast

if TYPE_CHECKING:
    from logging import _ExcInfoType


@unique
class ColorMode(Enum):
    """ColorMode is used as an argument to :func:`setup_logging`."""

    #: Colors are always turned on.
    ALWAYS = "always"
    #: Colors are turned off if the target
    #: stream (e.g. stderr) is not a tty.
    AUTO = "auto"
    #: No colors are used.
    NEVER = "never"


def resolve_color_mode(mode: ColorMode, stream: TextIO = sys.stderr) -> bool:
    """Decides whether the console log handler emits colors.

    :param mode: The available options are described in :class:`ColorMode`.
    :param stream: Used as a reference for :attr:`ColorMode.AUTO`.
    """
    if sys.platform == "win32":
        return False

    match mode:
        case ColorMode.ALWAYS:
            return True
        case ColorMode.AUTO:
            if os.getenv("NO_COLOR") is not None:
                return False
            else:
                return stream.isatty()
        case ColorMode.NEVER:
            return False


logging.addLevelName(5, "TRACE")


@unique
class Loglevel(IntEnum):
    """The loglevels of python's ``logging`` module plus ``TRACE``,
    which flagvar uses for per-flag messages during binding.
    """

    CRITICAL = logging.CRITICAL
    ERROR = logging.ERROR
    WARNING = logging.WARNING
    INFO = logging.INFO
    DEBUG = logging.DEBUG
    TRACE = 5

    @classmethod
    def from_str(cls, string: str) -> Loglevel:
        """Converts a numeric string or a case insensitive
        level name (e.g. ``debug``) to a Loglevel.
        """
        if string.isnumeric():
            return cls(int(string, 0))

        try:
            return cls[string.upper()]
        except KeyError:
            raise ValueError(f"{string} not a valid loglevel") from None


@unique
class _Color(Enum):
    NOP = ""
    RESET = "\033[0m"
    BOLD = "\033[1m"
    RED = "\033[31m"
    YELLOW = "\033[33m"
    GRAY = "\033[0;38;5;245m"


def _colorize_msg(data: str, levelno: int) -> str:
    match levelno:
        case Loglevel.TRACE | Loglevel.DEBUG:
            style = _Color.GRAY.value
        case Loglevel.INFO:
            style = _Color.NOP.value
        case Loglevel.WARNING:
            style = _Color.YELLOW.value
        case Loglevel.ERROR:
            style = _Color.RED.value
        case Loglevel.CRITICAL:
            style = _Color.RED.value + _Color.BOLD.value
        case _:
            style = _Color.NOP.value

    return style + data + _Color.RESET.value


class _ConsoleFormatter(logging.Formatter):
    colored: bool = False

    def format(self, record: logging.LogRecord) -> str:
        data = record.getMessage()
        if self.colored:
            data = _colorize_msg(data, record.levelno)

        msg = datetime.datetime.fromtimestamp(record.created).strftime("%b %d %H:%M:%S.%f")[:-3]
        msg += f" {record.name}: {data}\n"

        if record.exc_info:
            exc_type, exc_value, exc_traceback = record.exc_info
            msg += "".join(traceback.format_exception(exc_type, exc_value, exc_traceback))

        return msg


def setup_logging(
    level: Loglevel | None = None,
    color_mode: ColorMode = ColorMode.AUTO,
    logger_name: str = "flagvar",
) -> None:
    """Enable and configure flagvar's console logging.

    flagvar itself never calls this; it is meant for programs and
    test suites which want to see what the binder does.

    :param level: The loglevel to enable for the console handler.
                  If this argument is None, the env variable
                  ``FLAGVAR_LOGLEVEL`` is read.
    :param color_mode: The color mode to use for the console.
    :param logger_name: The logger to attach the handler to.
    """
    if level is None:
        if (raw := os.getenv("FLAGVAR_LOGLEVEL")) is not None:
            level = Loglevel.from_str(raw)
        else:
            level = Loglevel.DEBUG

    logger = logging.getLogger(logger_name)
    # LogLevel cannot be 0 (NOTSET), because only the root logger sends it to its handlers then
    logger.setLevel(1)

    # Clean up potentially existing handlers and create a new QueueHandler for stderr output
    while len(logger.handlers) > 0:
        logger.handlers[0].close()
        logger.removeHandler(logger.handlers[0])

    add_stderr_log_handler(logger_name, level, resolve_color_mode(color_mode))


def add_stderr_log_handler(logger_name: str, level: Loglevel, colored: bool) -> None:
    queue: Queue[Any] = Queue()
    logger = logging.getLogger(logger_name)
    logger.addHandler(QueueHandler(queue))

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(level)
    stderr_handler.terminator = ""  # The formatter adds the terminator

    console_formatter = _ConsoleFormatter()
    console_formatter.colored = colored
    stderr_handler.setFormatter(console_formatter)

    queue_listener = QueueListener(queue, stderr_handler, respect_handler_level=True)
    queue_listener.start()
    atexit.register(queue_listener.stop)


class Logger(logging.Logger):
    def trace(
        self,
        msg: Any,
        *args: Any,
        exc_info: _ExcInfoType = None,
        stack_info: bool = False,
        extra: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        if self.isEnabledFor(Loglevel.TRACE):
            self._log(
                Loglevel.TRACE,
                msg,
                args,
                exc_info=exc_info,
                extra=extra,
                stack_info=stack_info,
                **kwargs,
            )


logging.setLoggerClass(Logger)


def get_logger(name: str) -> Logger:
    return cast(Logger, logging.getLogger(name))

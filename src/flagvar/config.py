# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

import os
import subprocess
import tomllib
from datetime import date, datetime, time
from pathlib import Path
from typing import Any

from boltons.iterutils import research  # type: ignore
from platformdirs import user_config_path

from flagvar.values.timestamp import RFC3339, RFC3339_MICRO, format_time


class Config(dict[str, Any]):
    def get_value(self, key: str, default: Any | None = None) -> Any | None:
        parts = key.split(".")
        subdict: dict[str, Any] | None = self
        val: Any | None = None

        for part in parts:
            if subdict is None:
                return default

            val = subdict.get(part)
            subdict = val if isinstance(val, dict) else None

        return val if val is not None else default

    def flatten(self, separator: str = ".") -> dict[str, Any]:
        """Returns all leaves keyed by their table path joined with `separator`.

        Arrays are leaves; tables nested in arrays are not visited.
        """
        leaves = research(
            self,
            query=lambda path, key, value: (
                isinstance(key, str)
                and all(isinstance(p, str) for p in path)
                and not isinstance(value, dict)
            ),
        )
        return {separator.join(path): value for path, value in leaves}


def to_text(item: Any) -> str:
    """Renders a TOML value in the textual form the value adapters parse."""
    if isinstance(item, bool):
        return "true" if item else "false"
    if isinstance(item, datetime):
        # TOML local date-times carry no offset; they are taken as UTC.
        return format_time(item, RFC3339 if item.microsecond == 0 else RFC3339_MICRO)
    if isinstance(item, date | time):
        return item.isoformat()
    return str(item)


def get_git_root() -> Path | None:
    try:
        p = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            capture_output=True,
            check=True,
        )
    except FileNotFoundError:
        return None
    except subprocess.CalledProcessError:
        return None
    return Path(p.stdout.decode().strip())


def get_config_dirs(appname: str) -> list[Path]:
    user_conf = user_config_path(appname)
    git_root = get_git_root()
    cwd = Path.cwd()
    if git_root is not None:
        return [cwd, git_root, user_conf]
    return [cwd, user_conf]


def search_config(
    appname: str,
    filename: Path | None = None,
    extra_paths: list[Path] | None = None,
) -> Path | None:
    """Looks up the config file of `appname`.

    The environment variable ``<APPNAME>_CONFIG`` takes precedence. Otherwise
    ``<appname>.toml`` (or `filename`) is searched in the current directory,
    the git root, the user config directory and `extra_paths`, in this order.
    """
    name = filename if filename is not None else Path(f"{appname}.toml")
    if (s := os.getenv(f"{appname.upper()}_CONFIG")) is not None:
        if (path := Path(s)).exists():
            return path
        raise FileNotFoundError(s)

    extra = []
    if extra_paths is not None:
        extra = extra_paths

    search_paths = get_config_dirs(appname) + extra

    for dir_ in search_paths:
        if (path := dir_.joinpath(name)).exists():
            return path

    return None


def load_config_file(
    appname: str,
    filename: Path | None = None,
    extra_paths: list[Path] | None = None,
) -> tuple[Config, Path | None]:
    if (path := search_config(appname, filename, extra_paths)) is not None:
        return Config(tomllib.loads(path.read_text())), path
    return Config(), None

# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

import shutil
import subprocess
from datetime import date, datetime, timezone
from pathlib import Path

import platformdirs
import pytest

from flagvar.config import Config, get_config_dirs, load_config_file, to_text


def init_repository(path: Path) -> None:
    subprocess.run(["git", "init", path], check=True, capture_output=True)


@pytest.mark.skipif(shutil.which("git") is None, reason="git binary is not available")
def test_config_discovery_git(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    testrepo = tmp_path.joinpath("testrepo")
    testrepo.mkdir()
    init_repository(testrepo)
    monkeypatch.chdir(testrepo)

    config_file = testrepo.joinpath("testapp.toml")
    config_file.touch()

    _, path = load_config_file("testapp")
    assert path is not None
    assert path.name == "testapp.toml"

    foodir = testrepo.joinpath("foo")
    foodir.mkdir()
    monkeypatch.chdir(foodir)

    _, path = load_config_file("testapp")
    assert path is not None
    assert config_file.resolve() == path.resolve()


def test_config_discovery_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_file = tmp_path.joinpath("testapp.toml")
    config_file.touch()
    monkeypatch.chdir(tmp_path)

    _, path = load_config_file("testapp")
    assert path is not None
    assert config_file == path


def test_config_discovery_none(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    _, path = load_config_file("testapp-does-not-exist")
    assert path is None


def test_config_discovery_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_file = tmp_path.joinpath("custom.toml")
    config_file.touch()
    monkeypatch.setenv("TESTAPP_CONFIG", str(config_file))

    _, path = load_config_file("testapp")
    assert path == config_file

    config_file.unlink()
    with pytest.raises(FileNotFoundError):
        load_config_file("testapp")


def test_get_config_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    dirs = get_config_dirs("testapp")
    assert dirs[0] == Path.cwd()
    assert dirs[-1] == platformdirs.user_config_path("testapp")


def test_get_value(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_file = tmp_path.joinpath("testapp.toml")
    config_file.write_text(
        """[testapp.foobar]
baz = "fiz"
"""
    )
    monkeypatch.chdir(tmp_path)

    config, _ = load_config_file("testapp")

    assert config.get_value("testapp.foobar.baz") == "fiz"
    assert config.get_value("testapp.foobar.missing", "default") == "default"
    assert config.get_value("testapp.foobar.baz.deeper") is None


def test_invalid_config(tmp_path: Path) -> None:
    config_file = tmp_path.joinpath("testapp.toml")
    config_file.write_text(
        """[testapp.foobar]
baz = fiz
"""
    )

    with pytest.raises(ValueError):
        load_config_file("testapp", config_file)


def test_flatten() -> None:
    config = Config(
        {
            "verbose": True,
            "server": {"http-server": {"port": 80}, "hosts": ["a", "b"]},
            "jobs": [{"name": "x"}],
        }
    )

    assert config.flatten() == {
        "verbose": True,
        "server.http-server.port": 80,
        "server.hosts": ["a", "b"],
        "jobs": [{"name": "x"}],
    }
    assert "server/http-server/port" in config.flatten("/")


@pytest.mark.parametrize(
    "item,expected",
    [
        (True, "true"),
        (False, "false"),
        (12, "12"),
        (1.5, "1.5"),
        ("1h", "1h"),
        (date(2024, 1, 2), "2024-01-02"),
        (datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc), "2024-01-02T03:04:05+0000"),
        (datetime(2024, 1, 2, 3, 4, 5, 500000, tzinfo=timezone.utc), "2024-01-02T03:04:05.500000+0000"),
        (datetime(1979, 5, 27, 7, 32), "1979-05-27T07:32:00+0000"),
    ],
)
def test_to_text(item: object, expected: str) -> None:
    assert to_text(item) == expected

# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

import shutil
import subprocess
from pathlib import Path

import platformdirs
import pytest
from _pytest.monkeypatch import MonkeyPatch
from pydantic import ValidationError

from argstore.config import (
    CONFIG_ENV,
    StoreSettings,
    config_search_path,
    find_config,
    load_settings,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV, raising=False)


def init_repository(path: Path) -> None:
    subprocess.run(["git", "init", path], check=True, capture_output=True)


@pytest.mark.skipif(shutil.which("git") is None, reason="git binary is not available")
def test_config_discovery_git(tmp_path: Path, monkeypatch: MonkeyPatch) -> None:
    testrepo = tmp_path.joinpath("testrepo")
    testrepo.mkdir()
    init_repository(testrepo)
    monkeypatch.chdir(testrepo)

    config_file = testrepo.joinpath("argstore.toml")
    config_file.touch()

    path = find_config()
    assert path is not None
    assert path.name == "argstore.toml"

    foodir = testrepo.joinpath("foo")
    foodir.mkdir()
    monkeypatch.chdir(foodir)

    path = find_config()
    assert path is not None
    assert path.resolve() == config_file.resolve()


def test_config_discovery_cwd(tmp_path: Path, monkeypatch: MonkeyPatch) -> None:
    config_file = tmp_path.joinpath("argstore.toml")
    config_file.touch()
    monkeypatch.chdir(tmp_path)

    assert find_config() == config_file


def test_config_discovery_env(tmp_path: Path, monkeypatch: MonkeyPatch) -> None:
    config_file = tmp_path.joinpath("custom.toml")
    config_file.touch()
    monkeypatch.setenv(CONFIG_ENV, str(config_file))
    assert find_config() == config_file

    config_file.unlink()
    with pytest.raises(FileNotFoundError):
        load_settings()


def test_config_search_path(tmp_path: Path, monkeypatch: MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    dirs = config_search_path()
    assert dirs[0] == Path.cwd()
    assert dirs[-1] == platformdirs.user_config_path("argstore")


def test_load_settings_without_file(tmp_path: Path, monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setattr("argstore.config.config_search_path", lambda: [tmp_path])

    loaded = load_settings()
    assert loaded.path is None
    assert loaded.settings == StoreSettings()
    assert loaded.document == {}


def test_load_settings(tmp_path: Path) -> None:
    config_file = tmp_path.joinpath("argstore.toml")
    config_file.write_text(
        """[argstore]
copy_on_read = true

[extra.nested]
key = "value"
"""
    )

    loaded = load_settings(config_file)
    assert loaded.path == config_file
    assert loaded.settings == StoreSettings(copy_on_read=True)
    assert loaded.document["extra"]["nested"]["key"] == "value"


def test_load_settings_without_table(tmp_path: Path) -> None:
    config_file = tmp_path.joinpath("argstore.toml")
    config_file.write_text('[other]\nkey = "value"\n')

    assert load_settings(config_file).settings.copy_on_read is False


def test_load_settings_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path.joinpath("missing.toml"))


def test_invalid_config(tmp_path: Path) -> None:
    config_file = tmp_path.joinpath("argstore.toml")
    config_file.write_text(
        """[argstore]
copy_on_read = yes
"""
    )

    with pytest.raises(ValueError):
        load_settings(config_file)


@pytest.mark.parametrize("table", ["copy_on_read = 'sometimes'", "unknown = 1"])
def test_invalid_settings(tmp_path: Path, table: str) -> None:
    config_file = tmp_path.joinpath("argstore.toml")
    config_file.write_text(f"[argstore]\n{table}\n")

    with pytest.raises(ValidationError):
        load_settings(config_file)

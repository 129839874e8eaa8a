# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Settings of the argument store, read from ``argstore.toml``.

The file is taken from ``$ARGSTORE_CONFIG`` if set. Otherwise the current
directory, the root of the enclosing git repository and the user config
directory are searched, in that order. Only the ``[argstore]`` table is
interpreted; other tables are kept for display.
"""

import os
import subprocess
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from platformdirs import user_config_path
from pydantic import BaseModel, ConfigDict

CONFIG_NAME = "argstore.toml"
CONFIG_ENV = "ARGSTORE_CONFIG"
SETTINGS_TABLE = "argstore"


class StoreSettings(BaseModel):
    """Settings of an :class:`argstore.store.ArgStore`."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    #: Leave the stored arguments untouched when extracting quoted
    #: ``--flag="..."`` values instead of cutting them at the closing quote.
    copy_on_read: bool = False


@dataclass(frozen=True)
class LoadedSettings:
    settings: StoreSettings
    #: None if no config file was found.
    path: Path | None = None
    #: The whole parsed file.
    document: dict[str, Any] = field(default_factory=dict)


def git_toplevel() -> Path | None:
    try:
        p = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            capture_output=True,
            text=True,
        )
    except FileNotFoundError:
        return None
    if p.returncode != 0:
        return None
    return Path(p.stdout.strip())


def config_search_path() -> list[Path]:
    dirs = [Path.cwd()]
    if (toplevel := git_toplevel()) is not None:
        dirs.append(toplevel)
    dirs.append(user_config_path("argstore"))
    return dirs


def find_config() -> Path | None:
    """Locates ``argstore.toml``.

    :raises FileNotFoundError: ``$ARGSTORE_CONFIG`` names a missing file.
    """
    if (env := os.getenv(CONFIG_ENV)) is not None:
        if not (path := Path(env)).is_file():
            raise FileNotFoundError(env)
        return path

    for dir_ in config_search_path():
        if (path := dir_.joinpath(CONFIG_NAME)).is_file():
            return path
    return None


def load_settings(path: Path | None = None) -> LoadedSettings:
    """Reads the ``[argstore]`` table of ``path``, or of the discovered
    config file if ``path`` is None. Defaults are used without a file.

    :raises FileNotFoundError: The config file does not exist.
    :raises ValueError: The file is no valid TOML.
    :raises pydantic.ValidationError: The table holds invalid settings.
    """
    if path is None:
        path = find_config()
    if path is None:
        return LoadedSettings(StoreSettings())

    document = tomllib.loads(path.read_text())
    settings = StoreSettings.model_validate(document.get(SETTINGS_TABLE, {}))
    return LoadedSettings(settings, path, document)

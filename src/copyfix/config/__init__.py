# This file is part of copyfix.
# Copyright (C) 2026 copyfix contributors.
# Licensed under the MIT license, see LICENSE.md for details.
# SPDX-License-Identifier: MIT

"""
copyfix configuration
"""

from __future__ import annotations

import warnings
from os import PathLike
from pathlib import Path

from pydantic import BaseModel, PositiveFloat, PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict, TomlConfigSettingsSource

from copyfix.diagnostics import ConfigWarning
from copyfix.headers import COPYRIGHT_END, COPYRIGHT_START, ECLIPSE_HEADER, HEADER_SCAN_LINES
from copyfix.logging import get_logger
from copyfix.walker import EXCLUDED_DIRS, SOURCE_DIR, SOURCE_EXTENSIONS

__all__ = [
    "copyfix_config",
    "configure",
    "locate_configuration_root",
    "CopyfixSettings",
    "ScanSettings",
    "HeaderSettings",
    "HistorySettings",
]

CONFIG_FILES = ["copyfix.toml", "copyfix.local.toml"]
_log = get_logger(__name__)
_settings: CopyfixSettings | None = None


def copyfix_config() -> CopyfixSettings:
    """
    Get the copyfix configuration.

    If no configuration has been specified, returns a default settings object.
    """
    if _settings is None:
        return CopyfixSettings()
    else:
        return _settings


class ScanSettings(BaseModel):
    """
    Which files in the tree are considered.
    """

    extensions: list[str] = list(SOURCE_EXTENSIONS)
    """
    File name suffixes of the source files to check.
    """
    exclude: list[str] = list(EXCLUDED_DIRS)
    """
    Names of directories that are never descended into.  These are plain
    names, compared for equality, not patterns.
    """
    source_dir: str = SOURCE_DIR
    """
    Name of the source directory a file must live in (directly or one level
    below) to be checked.
    """


class HeaderSettings(BaseModel):
    """
    How copyright lines are recognized and rendered.
    """

    start: str = COPYRIGHT_START
    "Text that begins the copyright statement."
    end: str = COPYRIGHT_END
    "Text that ends the copyright statement; must follow the start marker."
    scan_lines: PositiveInt = HEADER_SCAN_LINES
    "Number of leading lines searched for the copyright line."
    template: str = ECLIPSE_HEADER
    "License block inserted into files without a copyright line."
    year_range: bool = False
    """
    Render ``<created> - <modified>`` instead of only the last-modified year.
    """
    insert_missing: bool = False
    """
    Insert :attr:`template` into files where no copyright line was found.
    """


class HistorySettings(BaseModel):
    """
    Version-control history lookup.
    """

    git: str = "git"
    "The git executable."
    timeout: PositiveFloat | None = 120.0
    """
    Seconds to wait for each ``git log`` call; ``None`` waits indefinitely.
    """


class CopyfixSettings(BaseSettings):
    """
    Definition of copyfix settings.

    Settings are read from the environment (``COPYFIX_``-prefixed, with
    ``__`` separating nested keys, e.g. ``COPYFIX_HEADER__YEAR_RANGE=1``) and,
    when :func:`configure` is called, from ``copyfix.toml`` and
    ``copyfix.local.toml``.
    """

    model_config = SettingsConfigDict(
        nested_model_default_partial_update=True,
        env_prefix="COPYFIX_",
        env_nested_delimiter="__",
    )

    scan: ScanSettings = ScanSettings()
    header: HeaderSettings = HeaderSettings()
    history: HistorySettings = HistorySettings()

    @classmethod
    def settings_customise_sources(
        cls, settings_cls, init_settings, env_settings, dotenv_settings, file_secret_settings
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )


def configure(cfg_dir: Path | None = None, *, _set_global: bool = True) -> CopyfixSettings:
    """
    Initialize copyfix configuration.

    copyfix does **not** automatically read configuration files; if this
    function is never called, configuration is entirely done through defaults
    and environment variables.

    Args:
        cfg_dir:
            The directory in which to look for configuration files.  If not
            provided, uses the current directory.

    Returns:
        The configured settings.
    """
    global _settings

    if _settings is not None and _set_global:
        warnings.warn("copyfix already configured, overwriting configuration", ConfigWarning)

    if cfg_dir is not None:
        main_file, local_file = [cfg_dir / f for f in CONFIG_FILES]
    else:
        main_file, local_file = [Path(f) for f in CONFIG_FILES]
    _log.debug("loading configuration", files=[str(main_file), str(local_file)])

    class CopyfixFileSettings(CopyfixSettings):
        @classmethod
        def settings_customise_sources(
            cls, settings_cls, init_settings, env_settings, dotenv_settings, file_secret_settings
        ):
            return (
                init_settings,
                env_settings,
                dotenv_settings,
                file_secret_settings,
                TomlConfigSettingsSource(settings_cls, local_file),
                TomlConfigSettingsSource(settings_cls, main_file),
            )

    settings = CopyfixFileSettings()
    if _set_global:
        _settings = settings

    return settings


def locate_configuration_root(
    *,
    cwd: Path | str | PathLike[str] | None = None,
    abort_at_pyproject: bool = True,
    abort_at_gitroot: bool = True,
) -> Path | None:
    """
    Search for a configuration root containing a ``copyfix.toml`` file.

    This searches for a ``copyfix.toml`` file, beginning in the current working
    directory (or the alternate ``cwd`` if provided), and searching upward until
    one is found.  Search stops if a ``pyproject.toml`` file or ``.git``
    directory is found without encountering ``copyfix.toml``.
    """

    if cwd is None:
        cwd = Path()
    elif not isinstance(cwd, Path):
        cwd = Path(cwd)
    cwd = cwd.resolve()

    log = _log.bind(cwd=str(cwd))
    log.debug("searching for copyfix.toml")
    while cwd is not None:
        log.debug("checking if copyfix.toml exists", dir=str(cwd))
        if (cwd / "copyfix.toml").exists():
            return cwd

        if abort_at_pyproject and (cwd / "pyproject.toml").exists():
            break

        if abort_at_gitroot and (cwd / ".git").exists():
            break

        if cwd.parent == cwd:
            break
        else:
            cwd = cwd.parent

    return None

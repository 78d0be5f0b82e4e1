# This file is part of copyfix.
# Copyright (C) 2026 copyfix contributors.
# Licensed under the MIT license, see LICENSE.md for details.
# SPDX-License-Identifier: MIT

"""
Logging pipeline configuration.
"""

from __future__ import annotations

import logging
import os
import re
import warnings
from pathlib import Path
from typing import Literal, TypeAlias

import structlog
from structlog.dev import RichTracebackFormatter

from ._console import ConsoleHandler
from .processors import format_timestamp, log_warning, remove_internal

CORE_PROCESSORS = [
    structlog.processors.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.MaybeTimeStamper(),
]
LogFormat: TypeAlias = Literal["json", "text"]
LOG_FORMATS: tuple[LogFormat, ...] = ("json", "text")


class LoggingConfig:
    """
    Configuration for copyfix logging.

    Log messages go to standard error through a Rich console; an optional log
    file receives machine-readable records.  If this class is never applied,
    copyfix emits its messages directly to :mod:`structlog` and
    :mod:`logging`, which you can configure in any way you wish.
    """

    level: int = logging.INFO
    file: Path | None = None
    file_level: int | None = None
    file_format: LogFormat = "json"

    def __init__(self):
        # initialize configuration from environment variables
        if ev_level := _env_level("COPYFIX_LOG_LEVEL"):
            self.level = ev_level

        if ev_file := os.environ.get("COPYFIX_LOG_FILE", None):
            self.file = Path(ev_file)

        if ev_level := _env_level("COPYFIX_LOG_FILE_LEVEL"):
            self.file_level = ev_level

    @property
    def effective_level(self) -> int:
        if self.file_level is not None and self.file_level < self.level:
            return self.file_level
        else:
            return self.level

    def set_verbose(self, verbose: bool | int = True):
        """
        Enable verbose logging.

        .. note::

            It is better to only call this method if your application's
            ``verbose`` option is provided, rather than passing your verbose
            option to it, to allow the ``COPYFIX_LOG_LEVEL`` environment
            variable to apply in the absence of a configuration option.
        """
        if verbose:
            self.level = logging.DEBUG
        else:
            self.level = logging.INFO

    def set_log_file(
        self, path: os.PathLike[str], level: int | None = None, format: LogFormat = "json"
    ):
        """
        Configure a log file.  ``level`` defaults to the file level from the
        environment, if set.
        """
        self.file = Path(path)
        if level is not None:
            self.file_level = level
        self.file_format = format

    def apply(self):
        """
        Apply the configuration.
        """
        import click

        root = logging.getLogger()

        term = ConsoleHandler()
        term.setLevel(self.level)
        proc_fmt = structlog.dev.ConsoleRenderer(
            colors=term.supports_color,
            exception_formatter=RichTracebackFormatter(
                show_locals=self.level < logging.INFO, suppress=[click]
            ),
        )

        eff_lvl = self.effective_level
        structlog.configure(
            processors=CORE_PROCESSORS + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            wrapper_class=structlog.make_filtering_bound_logger(eff_lvl),
            logger_factory=structlog.stdlib.LoggerFactory(),
        )
        formatter = structlog.stdlib.ProcessorFormatter(
            processors=[
                remove_internal,
                format_timestamp,
                proc_fmt,
            ],
            foreign_pre_chain=CORE_PROCESSORS,
        )

        term.setFormatter(formatter)
        root.addHandler(term)

        if self.file:
            file_level = self.file_level if self.file_level is not None else self.level
            file = logging.FileHandler(self.file, mode="w", encoding="utf-8")

            if self.file_format == "json":
                proc_fmt = structlog.processors.JSONRenderer()
            else:
                proc_fmt = structlog.processors.KeyValueRenderer(key_order=["event", "timestamp"])

            ffmt = structlog.stdlib.ProcessorFormatter(
                processors=[
                    remove_internal,
                    structlog.processors.ExceptionPrettyPrinter(),
                    proc_fmt,
                ],
                foreign_pre_chain=CORE_PROCESSORS,
            )
            file.setFormatter(ffmt)
            file.setLevel(file_level)
            root.addHandler(file)

        root.setLevel(self.effective_level)

        warnings.showwarning = log_warning


def _env_level(name: str) -> int | None:
    ev_level = os.environ.get(name, None)
    if ev_level:
        ev_level = ev_level.strip().upper()
        lmap = logging.getLevelNamesMapping()
        if re.match(r"^\d+$", ev_level):
            return int(ev_level)
        elif ev_level in lmap:
            return lmap[ev_level]
        else:
            warnings.warn(f"{name} set to invalid value {ev_level}")
    return None

# This file is part of copyfix.
# Copyright (C) 2026 copyfix contributors.
# Licensed under the MIT license, see LICENSE.md for details.
# SPDX-License-Identifier: MIT

"""
Warning and error classes.
"""

from __future__ import annotations


class CopyfixError(Exception):
    """
    Base class for copyfix errors.
    """

    pass


class HistoryLookupError(CopyfixError):
    """
    The version-control log command failed or did not finish in time.

    Attributes:
        command:
            The command line that was run.
        returncode:
            The process exit status, or ``None`` if it was killed on timeout.
        timed_out:
            Whether the command was killed because it exceeded its timeout.
        stderr:
            The tail of the command's error output, if any.
    """

    command: str
    returncode: int | None
    timed_out: bool
    stderr: str | None

    def __init__(
        self,
        command: str,
        returncode: int | None,
        *,
        timed_out: bool = False,
        stderr: str | None = None,
    ):
        if timed_out:
            msg = f"command timed out: {command}"
        else:
            msg = f"command failed with exit status {returncode}: {command}"
        if stderr:
            msg += f" ({stderr.strip()})"
        super().__init__(msg)
        self.command = command
        self.returncode = returncode
        self.timed_out = timed_out
        self.stderr = stderr


class HistoryParseError(CopyfixError, ValueError):
    """
    The commit history output did not contain a parseable commit date.
    """

    snippet: str

    def __init__(self, message: str, snippet: str):
        super().__init__(f"{message}: {snippet!r}")
        self.snippet = snippet


class ConfigWarning(UserWarning):
    """
    Warning raised for detectable problems with the configuration.
    """

    pass

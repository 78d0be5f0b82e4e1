# This file is part of copyfix.
# Copyright (C) 2026 copyfix contributors.
# Licensed under the MIT license, see LICENSE.md for details.
# SPDX-License-Identifier: MIT

"""
Commit years from git history.

The history of each file is read with ``git log``, run through the platform
shell, and the year is taken from the first ``Date:`` line of the output::

    commit a2f1bed088804cdc388d3db73625f06d2efbbbed
    Author: A. Developer <dev@example.com>
    Date:   Thu Feb 27 10:17:03 2020 +0100

With ``--reverse`` the first entry is the oldest commit, giving the year the
file was created; without it, the year it was last modified.
"""

from __future__ import annotations

import os
import shlex
import signal
import subprocess
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import IO, Protocol

from copyfix.config import HistorySettings
from copyfix.diagnostics import HistoryLookupError, HistoryParseError
from copyfix.logging import get_logger

__all__ = [
    "DATE_FORMAT",
    "CommitYears",
    "HistoryOracle",
    "GitHistory",
    "shell_command",
    "git_log_command",
    "run_command",
    "parse_commit_year",
]

DATE_FORMAT = "%a %b %d %H:%M:%S %Y %z"
"Format of git's default commit dates, e.g. ``Thu Feb 27 10:17:03 2020 +0100``."
SNIPPET_LENGTH = 50
STDERR_TAIL = 500
READER_GRACE = 2.0
"Seconds to wait for output readers after a timed-out process is killed."

_log = get_logger(__name__)


@dataclass(frozen=True)
class CommitYears:
    """
    The years of a file's first and most recent commits.
    """

    created: int
    modified: int


class HistoryOracle(Protocol):
    """
    Interface for looking up the commit years of a file.
    """

    def commit_years(self, path: Path) -> CommitYears:  # pragma: nocover
        ...


def _is_windows() -> bool:
    return os.name == "nt"


def shell_command(cmd: str, *, windows: bool | None = None) -> list[str]:
    """
    Wrap a command line so it is run by the platform shell (``cmd.exe`` on
    Windows, ``sh`` elsewhere).
    """
    if windows is None:
        windows = _is_windows()
    if windows:
        return ["cmd.exe", "/c", cmd]
    else:
        return ["sh", "-c", cmd]


def git_log_command(
    path: Path | str | os.PathLike[str],
    *,
    reverse: bool = False,
    git: str = "git",
    windows: bool | None = None,
) -> str:
    """
    Build the ``git log`` command line for a single file.  The file is given
    by its absolute path, quoted for the platform shell.
    """
    if windows is None:
        windows = _is_windows()
    args = [git, "log"]
    if reverse:
        args.append("--reverse")
    args.append(str(Path(path).absolute()))

    if windows:
        return subprocess.list2cmdline(args)
    else:
        return shlex.join(args)


def _drain(stream: IO[str], sink: Callable[[str], None]) -> None:
    with stream:
        for line in stream:
            sink(line)


def _kill_tree(proc: subprocess.Popen[str]) -> None:
    # the shell may have forked children that hold the output pipes open
    if _is_windows():
        subprocess.run(
            ["taskkill", "/F", "/T", "/PID", str(proc.pid)],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    else:
        try:
            os.killpg(proc.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass
    if proc.poll() is None:
        proc.kill()


def run_command(
    argv: Sequence[str],
    *,
    cwd: Path | str | os.PathLike[str] | None = None,
    timeout: float | None = None,
) -> str:
    """
    Run a command and capture its output.

    The output streams are read on background threads while waiting for the
    process to exit, so a command producing more output than the OS pipe
    buffer holds cannot block.  The command runs in its own process group
    (or, on Windows, process tree), which is killed as a whole when the
    timeout expires.

    Args:
        argv:
            The program and its arguments.
        cwd:
            The working directory for the command.
        timeout:
            Seconds to wait for the command; ``None`` waits indefinitely.

    Returns:
        The command's standard output.

    Raises:
        HistoryLookupError:
            if the command exits with a nonzero status or times out.
    """
    command = " ".join(argv)
    log = _log.bind(command=command)
    log.debug("running command", cwd=str(cwd) if cwd is not None else None)

    out: list[str] = []
    err: list[str] = []
    if _is_windows():
        group = {"creationflags": subprocess.CREATE_NEW_PROCESS_GROUP}
    else:
        group = {"start_new_session": True}
    proc = subprocess.Popen(
        list(argv),
        cwd=cwd,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        encoding="utf-8",
        errors="replace",
        **group,
    )
    assert proc.stdout is not None and proc.stderr is not None
    readers = [
        threading.Thread(target=_drain, args=(proc.stdout, out.append), daemon=True),
        threading.Thread(target=_drain, args=(proc.stderr, err.append), daemon=True),
    ]
    for reader in readers:
        reader.start()

    try:
        returncode = proc.wait(timeout)
    except subprocess.TimeoutExpired:
        log.warning("command timed out, killing", timeout=timeout)
        _kill_tree(proc)
        proc.wait()
        # a child that escaped the group must not hold us past the timeout
        for reader in readers:
            reader.join(READER_GRACE)
        raise HistoryLookupError(
            command, None, timed_out=True, stderr="".join(err)[-STDERR_TAIL:]
        )

    for reader in readers:
        reader.join()

    if returncode != 0:
        log.debug("command failed", returncode=returncode)
        raise HistoryLookupError(command, returncode, stderr="".join(err)[-STDERR_TAIL:])

    return "".join(out)


def parse_commit_year(log_text: str) -> int:
    """
    Extract the commit year from the first ``Date:`` line of ``git log``
    output.

    Raises:
        HistoryParseError:
            if there is no ``Date:`` line, or its date cannot be parsed.
    """
    for line in log_text.splitlines():
        if line.startswith("Date:"):
            text = line[len("Date:") :].strip()
            try:
                stamp = datetime.strptime(text, DATE_FORMAT)
            except ValueError as e:
                raise HistoryParseError("cannot parse commit date", text) from e
            return stamp.year

    raise HistoryParseError("no commit date in history", log_text[:SNIPPET_LENGTH])


class GitHistory:
    """
    Look up commit years with ``git log``.

    Every lookup runs ``git`` afresh; nothing is cached.

    Args:
        root:
            The directory ``git`` runs in (the root of the scanned tree).
        settings:
            The history settings (git executable and timeout).
    """

    root: Path
    settings: HistorySettings

    def __init__(
        self, root: Path | str | os.PathLike[str], settings: HistorySettings | None = None
    ):
        self.root = Path(root)
        self.settings = settings if settings is not None else HistorySettings()

    def commit_year(self, path: Path, *, reverse: bool = False) -> int:
        """
        Get the year of the newest commit of a file, or of its oldest commit
        if ``reverse`` is set.
        """
        cmd = git_log_command(path, reverse=reverse, git=self.settings.git)
        output = run_command(shell_command(cmd), cwd=self.root, timeout=self.settings.timeout)
        return parse_commit_year(output)

    def commit_years(self, path: Path) -> CommitYears:
        """
        Get the creation and last-modified years of a file.
        """
        created = self.commit_year(path, reverse=True)
        modified = self.commit_year(path, reverse=False)
        _log.debug("commit years", file=str(path), created=created, modified=modified)
        return CommitYears(created, modified)

# This file is part of copyfix.
# Copyright (C) 2026 copyfix contributors.
# Licensed under the MIT license, see LICENSE.md for details.
# SPDX-License-Identifier: MIT

"""
Checking and fixing the copyright lines of a source tree.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from copyfix.config import CopyfixSettings, copyfix_config
from copyfix.diagnostics import HistoryLookupError, HistoryParseError
from copyfix.headers import locate_header
from copyfix.history import GitHistory, HistoryOracle
from copyfix.logging import get_logger
from copyfix.rewrite import build_replacement, insert_header, replace_line
from copyfix.walker import SourceWalker

__all__ = ["CopyrightFixer", "FixReport", "HeaderChange"]

_log = get_logger(__name__)


@dataclass(frozen=True)
class HeaderChange:
    """
    A copyright line that was (or, in a dry run, would be) rewritten.
    """

    path: Path
    index: int
    old: str
    new: str


@dataclass
class FixReport:
    """
    Summary of a run over a source tree.
    """

    scanned: int = 0
    "Number of source files checked."
    changed: list[HeaderChange] = field(default_factory=list)
    "Copyright lines that were rewritten."
    missing: list[Path] = field(default_factory=list)
    "Files without a copyright line, in the order they were found."
    inserted: list[Path] = field(default_factory=list)
    "Files that had the license block inserted."
    failed: list[tuple[Path, str]] = field(default_factory=list)
    "Files that could not be processed, with the reason."

    @property
    def modified(self) -> bool:
        "Whether any file was (or would be) changed."
        return bool(self.changed or self.inserted)


class CopyrightFixer:
    """
    Check every source file in a tree and bring its copyright line up to date
    with the file's git history.

    Files are processed one at a time.  A file whose history cannot be read,
    or that cannot be read or written, is recorded in
    :attr:`FixReport.failed` and the run continues with the next file; a
    directory that cannot be listed is recorded the same way and skipped.

    Args:
        root:
            The root of the tree to scan.  ``git`` runs in this directory.
        settings:
            The settings to use; defaults to :func:`~copyfix.copyfix_config`.
        history:
            Where to look up commit years; defaults to :class:`GitHistory`.
        dry_run:
            Report what would change without writing any file.
        on_change:
            Called with each :class:`HeaderChange` as soon as it is made.
    """

    root: Path
    settings: CopyfixSettings
    history: HistoryOracle
    dry_run: bool
    on_change: Callable[[HeaderChange], None] | None

    def __init__(
        self,
        root: Path | str | os.PathLike[str],
        settings: CopyfixSettings | None = None,
        *,
        history: HistoryOracle | None = None,
        dry_run: bool = False,
        on_change: Callable[[HeaderChange], None] | None = None,
    ):
        self.root = Path(root)
        self.settings = settings if settings is not None else copyfix_config()
        if history is None:
            history = GitHistory(self.root, self.settings.history)
        self.history = history
        self.dry_run = dry_run
        self.on_change = on_change

    def run(self) -> FixReport:
        """
        Process the whole tree.
        """
        report = FixReport()
        walker = SourceWalker(self.settings.scan)
        log = _log.bind(root=str(self.root), dry_run=self.dry_run)
        log.info("scanning source files")

        def walk_error(e: OSError):
            path = Path(e.filename) if e.filename else self.root
            log.warning("cannot list directory", dir=str(path), error=str(e))
            report.failed.append((path, str(e)))

        for path in walker.walk(self.root, walk_error):
            report.scanned += 1
            try:
                self.check_file(path, report)
            except (HistoryLookupError, HistoryParseError, OSError, ValueError) as e:
                log.warning("cannot process file", file=str(path), error=str(e))
                report.failed.append((path, str(e)))

        for path in report.missing:
            log.info("file has no copyright line", file=str(path))
            if self.settings.header.insert_missing and not self.dry_run:
                try:
                    insert_header(path, self.settings.header.template)
                except (OSError, ValueError) as e:
                    log.warning("cannot insert header", file=str(path), error=str(e))
                    report.failed.append((path, str(e)))
                else:
                    log.info("copyright added", file=str(path))
                    report.inserted.append(path)

        log.info(
            "finished scan",
            scanned=report.scanned,
            changed=len(report.changed),
            missing=len(report.missing),
            failed=len(report.failed),
        )
        return report

    def check_file(self, path: Path, report: FixReport) -> HeaderChange | None:
        """
        Check and, if needed, fix a single file, recording the outcome in
        ``report``.

        Returns:
            The change made to the file, if any.
        """
        hs = self.settings.header
        match = locate_header(path, start=hs.start, end=hs.end, max_lines=hs.scan_lines)
        if match is None:
            report.missing.append(path)
            return None

        years = self.history.commit_years(path)
        new_line = build_replacement(
            match.line, years.created, years.modified, hs.year_range, start=hs.start, end=hs.end
        )
        if new_line == match.line:
            _log.debug("copyright line up to date", file=str(path))
            return None

        if hs.year_range:
            # committing this fix makes the file modified in the current year
            new_line = build_replacement(
                match.line,
                years.created,
                date.today().year,
                hs.year_range,
                start=hs.start,
                end=hs.end,
            )
            if new_line == match.line:
                return None

        change = HeaderChange(path, match.index, match.line, new_line)
        _log.info("updating copyright line", file=str(path), old=match.line, new=new_line)
        if not self.dry_run:
            replace_line(path, match.index, new_line)
        report.changed.append(change)
        if self.on_change is not None:
            self.on_change(change)
        return change

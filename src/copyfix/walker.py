# This file is part of copyfix.
# Copyright (C) 2026 copyfix contributors.
# Licensed under the MIT license, see LICENSE.md for details.
# SPDX-License-Identifier: MIT

"""
Discovery of the source files to check.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import TYPE_CHECKING

from copyfix.logging import get_logger

if TYPE_CHECKING:
    from copyfix.config import ScanSettings

__all__ = ["SOURCE_EXTENSIONS", "EXCLUDED_DIRS", "SOURCE_DIR", "SourceWalker", "is_source_file"]

SOURCE_EXTENSIONS = (".ts",)
"File name suffixes checked by default."
EXCLUDED_DIRS = ("node_modules",)
"Directory names that are never descended into by default."
SOURCE_DIR = "src"
"Name of the directory holding checked sources."

_log = get_logger(__name__)


def is_source_file(path: Path, source_dir: str = SOURCE_DIR) -> bool:
    """
    Check whether a file lives in a source directory: its parent, or its
    parent's parent, is named ``source_dir``.
    """
    parent = path.parent
    return parent.name == source_dir or parent.parent.name == source_dir


class SourceWalker:
    """
    Depth-first walk over a directory tree yielding the source files to check.

    Each call to :meth:`walk` starts a new traversal, and files are yielded
    lazily as the tree is read.  Entries in a directory are visited in sorted
    name order.

    Args:
        settings:
            The scan settings (extensions, excluded directory names, and the
            source directory name).
    """

    extensions: tuple[str, ...]
    exclude: frozenset[str]
    source_dir: str

    def __init__(self, settings: ScanSettings):
        self.extensions = tuple(settings.extensions)
        self.exclude = frozenset(settings.exclude)
        self.source_dir = settings.source_dir

    def walk(
        self,
        root: Path | str | os.PathLike[str],
        onerror: Callable[[OSError], None] | None = None,
    ) -> Iterator[Path]:
        """
        Iterate over the eligible files below ``root``.

        Args:
            root:
                The directory to walk.
            onerror:
                Called with the :class:`OSError` when a directory cannot be
                listed; that directory is skipped and the walk continues.  If
                not provided, the error is raised.
        """
        yield from self._walk(Path(root), set(), onerror)

    def _walk(
        self, folder: Path, seen: set[Path], onerror: Callable[[OSError], None] | None
    ) -> Iterator[Path]:
        # symlinked directories are followed, so remember where we have been
        real = folder.resolve()
        if real in seen:
            _log.debug("skipping already-visited directory", dir=str(folder), target=str(real))
            return
        seen.add(real)

        try:
            with os.scandir(folder) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            if onerror is None:
                raise
            _log.debug("cannot list directory", dir=str(folder), error=str(e))
            onerror(e)
            return

        for entry in entries:
            path = Path(entry.path)
            if entry.is_dir():
                if entry.name in self.exclude:
                    _log.debug("excluding directory", dir=str(path))
                else:
                    yield from self._walk(path, seen, onerror)
            elif self.is_candidate(path):
                yield path

    def is_candidate(self, path: Path) -> bool:
        """
        Check whether a file has a checked extension and lives in a source
        directory.
        """
        if not path.name.endswith(self.extensions):
            return False
        return is_source_file(path, self.source_dir)

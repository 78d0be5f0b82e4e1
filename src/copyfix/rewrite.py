# This file is part of copyfix.
# Copyright (C) 2026 copyfix contributors.
# Licensed under the MIT license, see LICENSE.md for details.
# SPDX-License-Identifier: MIT

"""
Rendering and writing copyright lines.
"""

from __future__ import annotations

import os
from pathlib import Path

from copyfix.headers import COPYRIGHT_END, COPYRIGHT_START, ECLIPSE_HEADER

__all__ = ["build_replacement", "replace_line", "insert_header"]


def build_replacement(
    line: str,
    created: int,
    modified: int,
    year_range: bool = False,
    *,
    start: str = COPYRIGHT_START,
    end: str = COPYRIGHT_END,
) -> str:
    """
    Render the corrected copyright line.

    Everything before the start marker (comment syntax and indentation) is
    kept; the line ends with the end marker.  The years between the markers
    are replaced with either the last-modified year, or, when
    ``year_range`` is set and the years differ, ``<created> - <modified>``::

        >>> line = " * Copyright (c) 2019 Contributors to the Eclipse Foundation"
        >>> build_replacement(line, 2018, 2021)
        ' * Copyright (c) 2021 Contributors to the Eclipse Foundation'
        >>> line = "// Copyright (c) Contributors to the Eclipse Foundation"
        >>> build_replacement(line, 2018, 2021, True)
        '// Copyright (c) 2018 - 2021 Contributors to the Eclipse Foundation'

    Args:
        line:
            The current copyright line.
        created:
            The year of the file's first commit.
        modified:
            The year of the file's most recent commit.
        year_range:
            Whether to render a year range.

    Raises:
        ValueError: if ``line`` does not contain the start marker.
    """
    prefix = line[: line.index(start)]

    if created == modified or not year_range:
        years = str(modified)
    else:
        years = f"{created} - {modified}"

    return f"{prefix}{start} {years} {end}"


def replace_line(path: Path | str | os.PathLike[str], index: int, new_line: str) -> None:
    """
    Replace one line of a file in place.

    The replaced line keeps its original line terminator; all other lines are
    written back unchanged.
    """
    path = Path(path)
    with open(path, "rt", encoding="utf-8", newline="") as f:
        lines = f.readlines()

    old = lines[index]
    ending = old[len(old.rstrip("\r\n")) :]
    lines[index] = new_line + ending

    with open(path, "wt", encoding="utf-8", newline="") as f:
        f.writelines(lines)


def insert_header(path: Path | str | os.PathLike[str], template: str = ECLIPSE_HEADER) -> None:
    """
    Insert a license block at the top of a file.  The template is inserted
    as-is, including its placeholder year.
    """
    path = Path(path)
    with open(path, "rt", encoding="utf-8", newline="") as f:
        content = f.read()

    with open(path, "wt", encoding="utf-8", newline="") as f:
        f.write(template)
        f.write(content)

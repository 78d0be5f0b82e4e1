# This file is part of copyfix.
# Copyright (C) 2026 copyfix contributors.
# Licensed under the MIT license, see LICENSE.md for details.
# SPDX-License-Identifier: MIT

"""
Locating copyright lines in source files.

A copyright line is a line that contains the start marker
(:data:`COPYRIGHT_START`) followed, later on the same line, by the end marker
(:data:`COPYRIGHT_END`), for example::

     * Copyright (c) 2018 - 2021 Contributors to the Eclipse Foundation

Only the first few lines of a file (:data:`HEADER_SCAN_LINES`) are searched.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

__all__ = [
    "COPYRIGHT_START",
    "COPYRIGHT_END",
    "HEADER_SCAN_LINES",
    "ECLIPSE_HEADER",
    "HeaderMatch",
    "is_header_line",
    "locate_header",
]

COPYRIGHT_START = "Copyright (c)"
COPYRIGHT_END = "Contributors to the Eclipse Foundation"
HEADER_SCAN_LINES = 3

ECLIPSE_HEADER = """\
/********************************************************************************
 * Copyright (c) 0000 Contributors to the Eclipse Foundation
 *
 * See the NOTICE file(s) distributed with this work for additional
 * information regarding copyright ownership.
 *
 * This program and the accompanying materials are made available under the
 * terms of the Eclipse Public License v. 2.0 which is available at
 * http://www.eclipse.org/legal/epl-2.0, or the W3C Software Notice and
 * Document License (2015-05-13) which is available at
 * https://www.w3.org/Consortium/Legal/2015/copyright-software-and-document.
 *
 * SPDX-License-Identifier: EPL-2.0 OR W3C-20150513
 ********************************************************************************/

"""
"""
License block inserted into files without a copyright line.  The year
``0000`` is a placeholder that the next run (after the file is committed)
replaces with the commit year.
"""


@dataclass(frozen=True)
class HeaderMatch:
    """
    A copyright line found in a file.
    """

    line: str
    "The line text, without its line terminator."
    index: int
    "The zero-based line number."


def is_header_line(
    line: str | None, start: str = COPYRIGHT_START, end: str = COPYRIGHT_END
) -> bool:
    """
    Check whether a line is a copyright line: it contains ``start`` and
    ``end``, with ``start`` occurring before ``end``.  The markers are
    matched as literal, case-sensitive text.
    """
    if line is None:
        return False
    i = line.find(start)
    j = line.find(end)
    return i >= 0 and j >= 0 and i < j


def locate_header(
    path: Path | str | os.PathLike[str],
    *,
    start: str = COPYRIGHT_START,
    end: str = COPYRIGHT_END,
    max_lines: int = HEADER_SCAN_LINES,
) -> HeaderMatch | None:
    """
    Find the copyright line in a file.

    At most ``max_lines`` lines are read; lines past that are never examined.

    Returns:
        The first matching line and its index, or ``None`` if the file has no
        copyright line in its first ``max_lines`` lines.
    """
    with open(path, "rt", encoding="utf-8", newline="") as f:
        for index in range(max_lines):
            line = f.readline()
            if not line:
                break
            line = line.rstrip("\r\n")
            if is_header_line(line, start, end):
                return HeaderMatch(line, index)

    return None

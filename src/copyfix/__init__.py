# This file is part of copyfix.
# Copyright (C) 2026 copyfix contributors.
# Licensed under the MIT license, see LICENSE.md for details.
# SPDX-License-Identifier: MIT

"""
Copyright header auditing and year normalization.
"""

from ._version import copyfix_version
from .config import configure, copyfix_config
from .fixer import CopyrightFixer, FixReport, HeaderChange

__version__ = copyfix_version()

__all__ = [
    "__version__",
    "configure",
    "copyfix_config",
    "CopyrightFixer",
    "FixReport",
    "HeaderChange",
]

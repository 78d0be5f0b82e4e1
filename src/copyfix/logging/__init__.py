# This file is part of copyfix.
# Copyright (C) 2026 copyfix contributors.
# Licensed under the MIT license, see LICENSE.md for details.
# SPDX-License-Identifier: MIT

"""
Logging and console output.
"""

from ._console import console, stdout_console
from ._proxy import get_logger
from .config import LOG_FORMATS, LoggingConfig
from .stopwatch import Stopwatch

__all__ = [
    "LOG_FORMATS",
    "LoggingConfig",
    "get_logger",
    "console",
    "stdout_console",
    "Stopwatch",
]

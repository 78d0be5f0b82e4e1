# This file is part of copyfix.
# Copyright (C) 2026 copyfix contributors.
# Licensed under the MIT license, see LICENSE.md for details.
# SPDX-License-Identifier: MIT

"""
Console and related logging support
"""

import sys
from logging import Handler, LogRecord

from rich.ansi import AnsiDecoder
from rich.console import Console

console = Console(stderr=True)


class ConsoleHandler(Handler):
    """
    Lightweight Rich log handler for routing StructLog-formatted logs.
    """

    _decoder = AnsiDecoder()

    @property
    def supports_color(self) -> bool:
        return console.is_terminal and not console.no_color

    def emit(self, record: LogRecord) -> None:
        try:
            fmt = self.format(record)
            console.print(self._decoder.decode_line(fmt))
        except Exception:
            self.handleError(record)


def stdout_console():
    """
    Get a console attached to ``stdout``.
    """
    if sys.stdout.isatty():
        return Console(stderr=False)
    else:
        # keep file output free of wrapping and markup escapes
        return Console(stderr=False, soft_wrap=True, highlight=False)

# This file is part of copyfix.
# Copyright (C) 2026 copyfix contributors.
# Licensed under the MIT license, see LICENSE.md for details.
# SPDX-License-Identifier: MIT

"""
Timing support
"""

from __future__ import annotations

import time


class Stopwatch:
    """
    Timer class for recording elapsed wall time in operations.
    """

    start_time: float | None = None
    stop_time: float | None = None

    def __init__(self, start=True):
        if start:
            self.start()

    def start(self):
        self.start_time = time.perf_counter()
        self.stop_time = None

    def stop(self):
        self.stop_time = time.perf_counter()

    def elapsed(self) -> float:
        """
        Get the elapsed time.
        """
        assert self.start_time is not None
        stop = self.stop_time or time.perf_counter()
        return stop - self.start_time

    def __str__(self):
        elapsed = self.elapsed()
        if elapsed < 1:
            return "{:0.0f}ms".format(elapsed * 1000)
        elif elapsed > 60:
            m, s = divmod(elapsed, 60)
            return "{:0.0f}m{:0.2f}s".format(m, s)
        else:
            return "{:0.2f}s".format(elapsed)

    def __repr__(self):
        elapsed = self.elapsed()
        if self.stop_time:
            return "<Stopwatch stopped at {:.3f}s>".format(elapsed)
        else:
            return "<Stopwatch running at {:.3f}s>".format(elapsed)

# This file is part of copyfix.
# Copyright (C) 2026 copyfix contributors.
# Licensed under the MIT license, see LICENSE.md for details.
# SPDX-License-Identifier: MIT

from __future__ import annotations

from typing import Any

import structlog


def get_logger(name: str, **initial_values: Any) -> structlog.stdlib.BoundLogger:
    """
    Get a logger.  The logger is a lazy proxy, so it picks up whatever
    :mod:`structlog` configuration is active when it is first used rather
    than when it is created; modules can create their loggers at import time.

    Args:
        name:
            The logger name (usually ``__name__``).
        initial_values:
            Initial values to bind to the logger.
    """
    return structlog.stdlib.get_logger(name, **initial_values)

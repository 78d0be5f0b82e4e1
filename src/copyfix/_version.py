# This file is part of copyfix.
# Copyright (C) 2026 copyfix contributors.
# Licensed under the MIT license, see LICENSE.md for details.
# SPDX-License-Identifier: MIT

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version


def copyfix_version() -> str:
    try:
        return version("copyfix")
    except PackageNotFoundError:  # pragma: nocover
        return "UNKNOWN"

# This file is part of copyfix.
# Copyright (C) 2026 copyfix contributors.
# Licensed under the MIT license, see LICENSE.md for details.
# SPDX-License-Identifier: MIT

import nox


@nox.session(venv_backend="uv", python=["3.11", "3.12", "3.13"])
def test(session):
    session.install("-e", ".[test]")
    opts = session.posargs
    if not opts:
        opts = ["tests"]
    session.run("pytest", *opts)

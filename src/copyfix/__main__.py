# This file is part of copyfix.
# Copyright (C) 2026 copyfix contributors.
# Licensed under the MIT license, see LICENSE.md for details.
# SPDX-License-Identifier: MIT

from copyfix.cli import main

if __name__ == "__main__":
    main()

# This file is part of copyfix.
# Copyright (C) 2026 copyfix contributors.
# Licensed under the MIT license, see LICENSE.md for details.
# SPDX-License-Identifier: MIT

import logging
import os
import shutil
import subprocess
import warnings
from pathlib import Path

import structlog
from pytest import fixture, skip

import copyfix.config
from copyfix.logging._console import ConsoleHandler

_log = structlog.stdlib.get_logger("copyfix.tests")

structlog.configure(
    [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.MaybeTimeStamper(fmt="iso"),
        structlog.processors.KeyValueRenderer(key_order=["timestamp", "event"]),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


@fixture(autouse=True)
def isolate(monkeypatch):
    # tests configure logging and settings themselves
    monkeypatch.setenv("COPYFIX_SKIP_LOG_SETUP", "1")
    monkeypatch.setattr(copyfix.config, "_settings", None)
    for name in list(os.environ):
        if name.startswith("COPYFIX_") and name != "COPYFIX_SKIP_LOG_SETUP":
            monkeypatch.delenv(name)


class GitRepo:
    """
    Throwaway git repository for history tests.
    """

    path: Path

    def __init__(self, path: Path):
        self.path = path
        self.git("init", "-q")

    def git(self, *args: str, date: str | None = None):
        env = dict(os.environ)
        if date is not None:
            env["GIT_AUTHOR_DATE"] = date
            env["GIT_COMMITTER_DATE"] = date
        cmd = [
            "git",
            "-c",
            "user.name=Copyfix Tests",
            "-c",
            "user.email=tests@example.com",
            "-c",
            "commit.gpgsign=false",
            *args,
        ]
        subprocess.run(cmd, cwd=self.path, env=env, check=True, capture_output=True)

    def commit(self, rel: str, text: str, date: str) -> Path:
        """
        Write a file and commit it with the given date.
        """
        file = self.path / rel
        file.parent.mkdir(parents=True, exist_ok=True)
        file.write_text(text, encoding="utf-8")
        self.git("add", rel)
        self.git("commit", "-q", "-m", f"update {rel}", date=date)
        return file


@fixture
def git_repo(tmp_path: Path, monkeypatch) -> GitRepo:
    if shutil.which("git") is None:
        skip("git is not available")

    # keep the user's git configuration (log.date etc.) out of the tests
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", os.devnull)
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    repo = tmp_path / "repo"
    repo.mkdir()
    _log.debug("creating test repository", path=str(repo))
    return GitRepo(repo)


@fixture
def logging_sandbox(monkeypatch):
    """
    Undo the global logging setup done by applying a ``LoggingConfig``.
    """
    root = logging.getLogger()
    level = root.level
    saved = structlog.get_config()
    monkeypatch.setattr(warnings, "showwarning", warnings.showwarning)
    try:
        yield
    finally:
        for handler in list(root.handlers):
            if isinstance(handler, (ConsoleHandler, logging.FileHandler)):
                root.removeHandler(handler)
                handler.close()
        root.setLevel(level)
        structlog.configure(**saved)

# This file is part of copyfix.
# Copyright (C) 2026 copyfix contributors.
# Licensed under the MIT license, see LICENSE.md for details.
# SPDX-License-Identifier: MIT

import sys
from datetime import date
from pathlib import Path

from click.testing import CliRunner
from pytest import mark, raises

from copyfix import cli as copyfix_cli
from copyfix.cli import EXIT_CHANGED, copyfix, main
from copyfix.headers import ECLIPSE_HEADER

LINE = " * Copyright (c) {} Contributors to the Eclipse Foundation"
BODY = "/**\n{}\n */\nexport const x = 1;\n"


def _missing_tree(root: Path) -> Path:
    file = root / "pkg" / "src" / "a.ts"
    file.parent.mkdir(parents=True)
    file.write_text("export const x = 1;\n", encoding="utf-8")
    return file


def test_requires_root():
    runner = CliRunner()
    result = runner.invoke(copyfix, [])

    assert result.exit_code == 2


def test_rejects_extra_arguments(tmp_path: Path):
    runner = CliRunner()
    result = runner.invoke(copyfix, [str(tmp_path), str(tmp_path)])

    assert result.exit_code == 2


def test_rejects_missing_root(tmp_path: Path):
    runner = CliRunner()
    result = runner.invoke(copyfix, [str(tmp_path / "nonexistent")])

    assert result.exit_code == 2


def test_version():
    runner = CliRunner()
    result = runner.invoke(copyfix, ["--version"])

    assert result.exit_code == 0
    assert "copyfix" in result.output


def test_reports_missing(tmp_path: Path):
    file = _missing_tree(tmp_path)

    runner = CliRunner()
    result = runner.invoke(copyfix, [str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "Start processing files..." in result.output
    assert "Files with missing copyright:" in result.output
    assert str(file.absolute()) in result.output
    assert "copyright added" not in result.output
    assert file.read_text(encoding="utf-8") == "export const x = 1;\n"


def test_insert_missing(tmp_path: Path):
    file = _missing_tree(tmp_path)

    runner = CliRunner()
    result = runner.invoke(copyfix, ["--insert-missing", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "copyright added" in result.output
    assert file.read_text(encoding="utf-8").startswith(ECLIPSE_HEADER)


def test_insert_missing_from_config(tmp_path: Path):
    file = _missing_tree(tmp_path)
    (tmp_path / "copyfix.toml").write_text("[header]\ninsert_missing = true\n")

    runner = CliRunner()
    result = runner.invoke(copyfix, [str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert file.read_text(encoding="utf-8").startswith(ECLIPSE_HEADER)


def test_insert_missing_dry_run(tmp_path: Path):
    file = _missing_tree(tmp_path)

    runner = CliRunner()
    result = runner.invoke(copyfix, ["--insert-missing", "--dry-run", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert file.read_text(encoding="utf-8") == "export const x = 1;\n"


def test_error_on_change(tmp_path: Path):
    _missing_tree(tmp_path)

    runner = CliRunner()
    result = runner.invoke(copyfix, ["--insert-missing", "--error-on-change", str(tmp_path)])

    assert result.exit_code == EXIT_CHANGED


@mark.git
def test_fix_with_git(git_repo):
    old = LINE.format("2017")
    file = git_repo.commit("pkg/src/a.ts", BODY.format(old), "2018-03-01T12:00:00+01:00")
    git_repo.commit("pkg/src/a.ts", BODY.format(old) + "// more\n", "2021-05-01T12:00:00+01:00")
    git_repo.commit("pkg/src/b.ts", "export {};\n", "2021-05-01T12:00:00+01:00")

    runner = CliRunner()
    result = runner.invoke(copyfix, [str(git_repo.path)])

    assert result.exit_code == 0, result.output
    assert str(file) in result.output
    assert f"{old} --> {LINE.format('2021')}" in result.output
    assert result.output.index(str(file)) < result.output.index("Note: Files with missing")
    assert str(git_repo.path / "pkg" / "src" / "b.ts") in result.output
    assert LINE.format("2021") in file.read_text(encoding="utf-8")

    result = runner.invoke(copyfix, ["--error-on-change", str(git_repo.path)])
    assert result.exit_code == 0, result.output


@mark.git
def test_history_failure_exit(tmp_path: Path, git_repo):
    outside = tmp_path / "outside" / "src"
    outside.mkdir(parents=True)
    (outside / "a.ts").write_text(LINE.format("2020") + "\n", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(copyfix, [str(tmp_path / "outside")])

    assert result.exit_code == 1
    assert "could not be processed" in result.output


def test_ignores_config_outside_root(tmp_path: Path, monkeypatch):
    file = _missing_tree(tmp_path / "tree")
    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()
    (elsewhere / "copyfix.toml").write_text("[header]\ninsert_missing = true\n")
    monkeypatch.chdir(elsewhere)

    runner = CliRunner()
    result = runner.invoke(copyfix, [str(tmp_path / "tree")])

    assert result.exit_code == 0, result.output
    assert file.read_text(encoding="utf-8") == "export const x = 1;\n"


def test_log_file(tmp_path: Path, monkeypatch, logging_sandbox):
    _missing_tree(tmp_path / "tree")
    log_file = tmp_path / "copyfix.log"
    monkeypatch.delenv("COPYFIX_SKIP_LOG_SETUP")

    runner = CliRunner()
    result = runner.invoke(copyfix, ["--log-file", str(log_file), str(tmp_path / "tree")])

    assert result.exit_code == 0, result.output
    assert "scanning source files" in log_file.read_text(encoding="utf-8")


def test_main_usage_error(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["copyfix"])

    with raises(SystemExit) as exc:
        main()
    assert exc.value.code == 2


def test_main_unexpected_error(tmp_path: Path, monkeypatch):
    class BrokenFixer:
        def __init__(self, *args, **kwargs):
            raise RuntimeError("broken")

    monkeypatch.setattr(copyfix_cli, "CopyrightFixer", BrokenFixer)
    monkeypatch.setattr(sys, "argv", ["copyfix", str(tmp_path)])

    with raises(SystemExit) as exc:
        main()
    assert exc.value.code == 3


def test_main_exit_status(tmp_path: Path, monkeypatch):
    _missing_tree(tmp_path)
    monkeypatch.setattr(
        sys, "argv", ["copyfix", "--insert-missing", "--error-on-change", str(tmp_path)]
    )

    with raises(SystemExit) as exc:
        main()
    assert exc.value.code == EXIT_CHANGED


def _range_repo(git_repo) -> Path:
    old = LINE.format("2017")
    file = git_repo.commit("pkg/src/a.ts", BODY.format(old), "2018-03-01T12:00:00+01:00")
    git_repo.commit("pkg/src/a.ts", BODY.format(old) + "// more\n", "2021-05-01T12:00:00+01:00")
    return file


@mark.git
def test_year_range_option(git_repo):
    file = _range_repo(git_repo)

    runner = CliRunner()
    result = runner.invoke(copyfix, ["--year-range", str(git_repo.path)])

    assert result.exit_code == 0, result.output
    assert LINE.format(f"2018 - {date.today().year}") in file.read_text(encoding="utf-8")


@mark.git
def test_single_year_overrides_config(git_repo):
    file = _range_repo(git_repo)
    (git_repo.path / "copyfix.toml").write_text("[header]\nyear_range = true\n")

    runner = CliRunner()
    result = runner.invoke(copyfix, ["--single-year", str(git_repo.path)])

    assert result.exit_code == 0, result.output
    assert LINE.format("2021") in file.read_text(encoding="utf-8")


@mark.git
def test_year_range_from_config(git_repo):
    file = _range_repo(git_repo)
    (git_repo.path / "copyfix.toml").write_text("[header]\nyear_range = true\n")

    runner = CliRunner()
    result = runner.invoke(copyfix, [str(git_repo.path)])

    assert result.exit_code == 0, result.output
    assert LINE.format(f"2018 - {date.today().year}") in file.read_text(encoding="utf-8")

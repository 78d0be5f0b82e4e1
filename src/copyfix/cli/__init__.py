# This file is part of copyfix.
# Copyright (C) 2026 copyfix contributors.
# Licensed under the MIT license, see LICENSE.md for details.
# SPDX-License-Identifier: MIT

import sys
from pathlib import Path

import click

from copyfix import __version__
from copyfix.config import configure, locate_configuration_root
from copyfix.fixer import CopyrightFixer, FixReport, HeaderChange
from copyfix.logging import LOG_FORMATS, LoggingConfig, Stopwatch, get_logger, stdout_console

__all__ = ["copyfix", "main"]
_log = get_logger(__name__)

EXIT_FAILED = 1
EXIT_CHANGED = 5


def main():
    """
    Run the copyfix CLI.  This just delegates to :fun:`copyfix`, but pretty-prints errors.
    """
    try:
        ec = copyfix.main(standalone_mode=False)
    except click.ClickException as e:
        _log.error("CLI error, terminating: %s", e)
        e.show()
        sys.exit(2)
    except Exception as e:
        _log.error("copyfix failed", exc_info=e)
        sys.exit(3)

    if isinstance(ec, int):
        sys.exit(ec)


@click.command("copyfix")
@click.version_option(__version__, prog_name="copyfix")
@click.option("-v", "--verbose", "verbosity", count=True, help="Enable verbose logging output")
@click.option("--skip-log-setup", is_flag=True, hidden=True, envvar="COPYFIX_SKIP_LOG_SETUP")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    metavar="FILE",
    help="Write log messages to FILE.",
)
@click.option(
    "--log-format",
    type=click.Choice(LOG_FORMATS),
    default="json",
    show_default=True,
    help="Format of the log file.",
)
@click.option(
    "--config-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    metavar="DIR",
    help="Read copyfix.toml from DIR (default: search upward from ROOT).",
)
@click.option(
    "--year-range/--single-year",
    default=None,
    help="Render the creation and last-modified years as a range.",
)
@click.option(
    "--insert-missing",
    is_flag=True,
    default=None,
    help="Insert the license block into files without a copyright line.",
)
@click.option("-n", "--dry-run", is_flag=True, help="Report changes without writing files.")
@click.option(
    "--error-on-change", is_flag=True, help=f"Exit with status {EXIT_CHANGED} when files change."
)
@click.argument("root", type=click.Path(exists=True, file_okay=False, path_type=Path))
def copyfix(
    root: Path,
    verbosity: int,
    log_file: Path | None,
    log_format: str,
    config_dir: Path | None,
    year_range: bool | None,
    insert_missing: bool | None,
    dry_run: bool,
    error_on_change: bool,
    skip_log_setup: bool = False,
):
    """
    Check and fix the copyright lines of the source files under ROOT.

    The year in each copyright line is set from the git history of the file.
    """
    if not skip_log_setup:
        lc = LoggingConfig()
        if verbosity:
            lc.set_verbose(verbosity)
        if log_file is not None:
            lc.set_log_file(log_file, format=log_format)
        lc.apply()

    if config_dir is None:
        # without a configuration root above ROOT, read ROOT itself
        config_dir = locate_configuration_root(cwd=root) or root
    settings = configure(cfg_dir=config_dir)

    header = settings.header
    if year_range is not None:
        header = header.model_copy(update={"year_range": year_range})
    if insert_missing:
        header = header.model_copy(update={"insert_missing": True})
    settings = settings.model_copy(update={"header": header})

    console = stdout_console()
    console.print("Start processing files...", markup=False)

    timer = Stopwatch()
    fixer = CopyrightFixer(root, settings, dry_run=dry_run, on_change=print_change)
    report = fixer.run()
    timer.stop()

    print_report(report)
    console.print(
        f"Processing finished in {timer}: {report.scanned} files checked,"
        f" {len(report.changed)} updated, {len(report.missing)} without copyright,"
        f" {len(report.failed)} failed.",
        markup=False,
    )

    if report.failed:
        sys.exit(EXIT_FAILED)
    elif error_on_change and report.modified:
        sys.exit(EXIT_CHANGED)


def print_change(change: HeaderChange):
    """
    Print a rewritten copyright line.
    """
    console = stdout_console()
    console.print(str(change.path), markup=False)
    console.print(f"\t change {change.old} --> {change.new}", markup=False)


def print_report(report: FixReport):
    """
    Print the missing and failed files of a run.
    """
    console = stdout_console()

    console.print("Note: Files with missing copyright:", markup=False)
    for path in report.missing:
        console.print(str(path.absolute()), markup=False)
        if path in report.inserted:
            console.print("\tcopyright added", markup=False)

    if report.failed:
        console.print("Files that could not be processed:", markup=False)
        for path, reason in report.failed:
            console.print(f"{path}: {reason}", markup=False)

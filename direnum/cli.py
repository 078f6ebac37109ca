"""CLI interface for direnum."""

import logging
import os
import sys
from dataclasses import replace
from datetime import datetime
from pathlib import Path

import click

from direnum.config import Config
from direnum.diagnostics import (
    format_clock,
    format_duration,
    process_usage,
    verbose_exception_string,
)
from direnum.report import write_report
from direnum.scanner import Scanner
from direnum.scanner.progress import ProgressSnapshot
from direnum.scanner.scanner import normalize_root

USAGE = "Usage: direnum scan <path>"


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="[%(threadName)s] %(levelname)s: %(message)s")


def _timestamp() -> str:
    now = datetime.now()
    return f"{now:%H:%M:%S}"


def _echo_progress(snapshot: ProgressSnapshot) -> None:
    click.echo(
        f"{_timestamp()} File system entries found: {snapshot.entries_found:,}; "
        f"Total tasks: {snapshot.units_created:,}; "
        f"Remaining tasks: {snapshot.units_remaining:,}"
    )
    click.echo(f" Current Path: {snapshot.current_path}")


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
@click.pass_context
def cli(ctx: click.Context, verbose: int) -> None:
    """Enumerate a directory tree concurrently and write an XML inventory."""
    _setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config"] = Config.from_environment()


@cli.command()
@click.argument("source_path", required=False)
@click.option(
    "--exclude",
    "exclusions",
    multiple=True,
    help="Do not descend into directories whose path contains this text",
)
@click.option("--progress-interval", type=float, default=None, help="Seconds between progress lines")
@click.option(
    "--settle-interval",
    type=float,
    default=None,
    help="Seconds to wait before declaring the walk done",
)
@click.option("--max-workers", type=int, default=None, help="Worker threads for directory units")
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for the XML report",
)
@click.option("--stop-on-permission-denied", is_flag=True, help="Abort on permission errors")
@click.option("--stop-on-path-too-long", is_flag=True, help="Abort on over-long paths")
@click.option("--no-progress", is_flag=True, help="Do not print progress lines")
@click.pass_context
def scan(
    ctx: click.Context,
    source_path: str | None,
    exclusions: tuple[str, ...],
    progress_interval: float | None,
    settle_interval: float | None,
    max_workers: int | None,
    output_dir: Path | None,
    stop_on_permission_denied: bool,
    stop_on_path_too_long: bool,
    no_progress: bool,
) -> None:
    """Enumerate SOURCE_PATH and save the inventory report."""
    config: Config = ctx.obj["config"]

    if not source_path or not source_path.strip():
        click.echo(USAGE)
        return

    root = normalize_root(source_path)
    scanner_config = config.scanner.with_exclusions(exclusions)
    scanner_config = replace(
        scanner_config,
        continue_on_permission_denied=not stop_on_permission_denied,
        continue_on_path_too_long=not stop_on_path_too_long,
        max_workers=max_workers,
    )
    if progress_interval is not None:
        scanner_config = replace(scanner_config, progress_interval=progress_interval)
    if settle_interval is not None:
        scanner_config = replace(scanner_config, settle_interval=settle_interval)

    click.echo(f"{_timestamp()} Getting directories and files for path: {root}")

    if scanner_config.exclusions:
        click.echo(f"{_timestamp()} DirectoryExclusions:")
        for exclusion in scanner_config.exclusions:
            click.echo(f" - {exclusion}")

    if not os.path.isdir(root):
        click.echo(f"Directory does not exist: {root}")
        return

    scanner = Scanner(scanner_config, on_progress=None if no_progress else _echo_progress)
    report_dir = output_dir or config.report_dir

    try:
        _scan_and_report(scanner, root, report_dir)
    except KeyboardInterrupt:
        click.echo("\nScan interrupted.", err=True)
        sys.exit(130)
    except Exception as e:
        click.secho(f"Unhandled Exception: {verbose_exception_string(e)}", fg="red", err=True)
        sys.exit(1)


def _scan_and_report(scanner: Scanner, root: str, report_dir: Path) -> None:
    result = scanner.scan(root)

    elapsed = result.elapsed_seconds
    usage = process_usage()
    click.echo(
        f"{_timestamp()} Finished. Time required: {format_clock(elapsed)} "
        f"({format_duration(elapsed)}) "
        f"Total processor time: {format_clock(usage.cpu_seconds)} "
        f"PEAK memory used: {usage.peak_memory_bytes:,}"
    )
    click.echo(
        f"{_timestamp()} Directories: {result.directories:,} "
        f"Files: {result.files:,} Reparse Points: {result.reparse_points:,}"
    )

    click.echo(f"Saving: {result.total:,} file system entries to report file in: {report_dir}")
    report_path = write_report(result.entries, report_dir)
    click.echo(f"Report saved: {report_path}")


def main() -> None:
    """Entry point for the CLI."""
    cli(standalone_mode=True)  # pylint: disable=no-value-for-parameter


if __name__ == "__main__":
    main()

"""Command-line entry point for prsync."""

from __future__ import annotations

from contextlib import nullcontext
from enum import StrEnum

import typer

from prsync.config import (
    DEFAULT_DETECTOR,
    DEFAULT_EXCLUDE_FILE,
    DEFAULT_STAGING_DIR,
    default_cores,
)
from prsync.core.exceptions import ConfigurationError, PrsyncError


app = typer.Typer(
    name="prsync",
    help="Sync files from source to destination with parallel staging.",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
)


class DetectorName(StrEnum):
    """Change detectors selectable with --detector."""

    RSYNC = "rsync"
    WALK = "walk"


def _parse_cores(value: str | None) -> int | None:
    """Validate --cores as a positive integer."""
    from prsync.core.models import parse_core_count

    if value is None:
        return None
    try:
        return parse_core_count(value)
    except ConfigurationError as e:
        raise typer.BadParameter(str(e)) from None


def _show_version(value: bool) -> None:
    if value:
        from prsync import __version__

        typer.echo(f"prsync {__version__}")
        raise typer.Exit()


@app.command()
def sync(
    ctx: typer.Context,
    source: str = typer.Option(
        ...,
        "--source",
        "-s",
        help="Source directory.",
        metavar="DIR",
    ),
    destination: str = typer.Option(
        ...,
        "--destination",
        "-d",
        help="Destination directory.",
        metavar="DIR",
    ),
    cores: str | None = typer.Option(
        None,
        "--cores",
        "-c",
        help="Number of parallel staging workers (default: all cores).",
        metavar="N",
        callback=_parse_cores,
    ),
    staging_dir: str = typer.Option(
        DEFAULT_STAGING_DIR,
        "--staging-dir",
        help="Where old/, new/ and the change list are written.",
        metavar="DIR",
    ),
    exclude_from: str = typer.Option(
        DEFAULT_EXCLUDE_FILE,
        "--exclude-from",
        "-x",
        help="File of patterns to leave out of the comparison.",
        metavar="FILE",
    ),
    detector: DetectorName = typer.Option(
        DetectorName(DEFAULT_DETECTOR),
        "--detector",
        help="How to compare the trees: rsync dry run or an in-process walk.",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Exit with status 1 if any file failed to stage.",
    ),
    no_progress: bool = typer.Option(
        False,
        "--no-progress",
        help="Do not show a progress bar while staging.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log debug details.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the version and exit.",
        callback=_show_version,
        is_eager=True,
    ),
) -> None:
    """Sync files from source to destination with parallel staging.

    Changed files are staged into STAGING/new, the destination versions they
    replace are saved in STAGING/old, and STAGING/new is then copied onto
    the destination.

    Example: prsync -s /path/to/source -d /path/to/dest -c 4
    """
    from prsync import RichProgressReporter, Synchronizer
    from prsync.core.models import SyncConfig
    from prsync.log import configure_logging

    _ = version  # Handled by the eager callback
    try:
        config = SyncConfig.from_args(
            source,
            destination,
            cores=int(cores) if cores is not None else default_cores(),
            staging_dir=staging_dir,
            exclude_file=exclude_from,
        )
    except ConfigurationError as e:
        raise typer.BadParameter(str(e), ctx=ctx) from None

    configure_logging(verbose)
    synchronizer = Synchronizer.from_config(
        config, detector=detector.value, announce=typer.echo
    )

    reporter = nullcontext(None) if no_progress else RichProgressReporter()
    try:
        with reporter as progress:
            result = synchronizer.run(progress=progress)
    except PrsyncError as e:
        typer.echo(f"Error: {e}", err=True)
        if e.recovery_hint:
            typer.echo(f"Hint: {e.recovery_hint}", err=True)
        raise typer.Exit(1) from None

    if result.up_to_date:
        return

    assert result.report is not None  # Set whenever there were changes
    failed = result.report.failed
    if failed:
        typer.echo(f"Error: {len(failed)} file(s) failed to stage:", err=True)
        for path in failed:
            typer.echo(f"  {path}", err=True)

    typer.echo(f"Sync complete: {result.deployed} file(s) deployed")
    typer.echo(f"Old versions stored in: {result.staging.old_dir}")

    if failed and strict:
        raise typer.Exit(1)


def main() -> None:
    """Entry point for the CLI."""
    app(prog_name="prsync")

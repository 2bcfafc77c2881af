"""Info command implementation.

Shows a report for one or all mounted BTRFS filesystems.
"""

import subprocess
from collections.abc import Callable
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from btrfsctl.cli.display import print_classification, print_snapshot
from btrfsctl.cli.types import get_classifier, get_config
from btrfsctl.core.btrfs import BtrfsTool, device_stats_errors, list_btrfs_mounts
from btrfsctl.devices.classifier import DeviceClassifier
from btrfsctl.models.device import DeviceType
from btrfsctl.scrub.monitor import parse_status
from btrfsctl.utils.formatting import (
    console,
    print_bullet,
    print_error,
    print_header,
    print_section,
    print_separator,
)
from btrfsctl.utils.shell import CommandResult


def _run_query(query: Callable[[str], CommandResult], mount_point: str) -> CommandResult | None:
    """Run a btrfs query, returning None if it could not be executed or failed."""
    try:
        result = query(mount_point)
    except (OSError, subprocess.SubprocessError):
        return None
    return result if result.success else None


def _print_output(result: CommandResult | None, error: str, bulleted: bool = True) -> None:
    if result is None:
        print_error(error)
        return
    for line in result.stdout.rstrip().splitlines():
        if bulleted:
            print_bullet(escape(line))
        else:
            console.print(f"  [muted]{escape(line)}[/]", highlight=False)


def show_filesystem_info(
    mount_point: str,
    tool: BtrfsTool,
    classifier: DeviceClassifier,
    verbose: bool = False,
) -> bool:
    """Print the full report for one filesystem.

    Args:
        mount_point: Filesystem mount point.
        tool: Wrapper used for the display-only queries.
        classifier: Classifier used for the device type line.
        verbose: Also list the inspected devices.

    Returns:
        False if the mount point is not accessible, True otherwise.
    """
    if not Path(mount_point).is_dir():
        print_error(f"Mount point '{escape(mount_point)}' not found or not accessible")
        return False

    classification = classifier.classify(mount_point)

    print_header(f"BTRFS FILESYSTEM  {escape(mount_point)}")
    print_classification(classification, verbose=verbose)
    console.print()

    print_section("BASIC INFORMATION")
    _print_output(
        _run_query(tool.filesystem_show, mount_point),
        "Cannot show filesystem information",
        bulleted=False,
    )
    print_separator()

    print_section("STORAGE USAGE")
    console.print("  [bold]Device usage:[/]")
    _print_output(_run_query(tool.device_usage, mount_point), "Cannot show device usage")
    console.print()
    console.print("  [bold]Filesystem usage:[/]")
    _print_output(_run_query(tool.filesystem_usage, mount_point), "Cannot show filesystem usage")
    print_separator()

    print_section("SPACE ALLOCATION")
    _print_output(_run_query(tool.filesystem_df, mount_point), "Cannot show space allocation")
    print_separator()

    print_section("SCRUB STATUS")
    status = _run_query(tool.scrub_status, mount_point)
    if status is None:
        console.print("  [muted]Scrub status unavailable[/]")
    else:
        print_snapshot(parse_status(status.stdout))
        _print_output(status, "")
    print_separator()

    print_section("DEVICE STATISTICS")
    stats = _run_query(tool.device_stats, mount_point)
    if stats is None:
        console.print("  [muted]No device statistics available[/]")
    else:
        errors = set(device_stats_errors(stats.stdout))
        for line in stats.stdout.rstrip().splitlines():
            if line.strip() in errors:
                console.print(f"  [attention]⚠  {escape(line.strip())}[/]", highlight=False)
            else:
                print_bullet(escape(line))

    if classification.device_type in (DeviceType.SSD, DeviceType.MIXED):
        print_separator()
        print_section("OPTIMIZATIONS")
        print_bullet("[accent]SSD-optimized scrub available[/]")
        print_bullet("Use 'btrfsctl scrub --priority' for maximum performance")

    console.print()
    return True


def info_command(
    ctx: typer.Context,
    mount_point: Annotated[
        str | None,
        typer.Argument(help="Mount point to inspect. Defaults to all BTRFS mounts."),
    ] = None,
    show_all: Annotated[
        bool,
        typer.Option(
            "--all",
            "-a",
            help="Show all mounted BTRFS filesystems.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="List the devices used for classification.",
        ),
    ] = False,
) -> None:
    """Show filesystem information.

    Examples:
        btrfsctl info                # All mounted BTRFS filesystems
        btrfsctl info /mnt/data      # A single filesystem
    """
    config = get_config(ctx)
    tool = BtrfsTool(config.btrfs_binary)
    classifier = get_classifier(config)

    if show_all or mount_point is None:
        mounts = list_btrfs_mounts()
        if not mounts:
            print_error("No mounted BTRFS filesystems found")
            console.print("[muted]Usage: btrfsctl info [MOUNT_POINT][/]")
            raise typer.Exit(code=1)
    else:
        mounts = [mount_point]

    ok = True
    for mount in mounts:
        ok = show_filesystem_info(mount, tool, classifier, verbose=verbose) and ok

    if not ok:
        raise typer.Exit(code=1)

"""Benchmark command implementation.

Shows expected scrub throughput and duration for a filesystem.
"""

from typing import Annotated

import typer
from rich.markup import escape

from btrfsctl.cli.types import classify_mount, get_config, require_mount_dir
from btrfsctl.core.benchmark import get_estimate
from btrfsctl.core.btrfs import BtrfsTool
from btrfsctl.utils.formatting import (
    console,
    device_type_markup,
    print_bullet,
    print_header,
    print_section,
)


def benchmark_command(
    ctx: typer.Context,
    mount_point: Annotated[
        str,
        typer.Argument(help="Mount point of the filesystem."),
    ],
) -> None:
    """Show performance estimates for a scrub.

    Examples:
        btrfsctl benchmark /mnt/data
    """
    require_mount_dir(mount_point)

    config = get_config(ctx)
    classification = classify_mount(config, mount_point)
    estimate = get_estimate(classification.device_type)

    print_header("SCRUB SPEED BENCHMARK")
    console.print(f"[muted]Device:[/] [bold]{escape(mount_point)}[/]")
    console.print(f"[muted]Type:[/] {device_type_markup(classification.device_type)}\n")

    print_section("EXPECTED PERFORMANCE")
    for item in estimate.throughput:
        text = f"{item.label}: {item.throughput}" if item.throughput else item.label
        print_bullet(f"[{item.style}]{text}[/]")

    size = BtrfsTool(config.btrfs_binary).device_size(mount_point)
    if size is not None:
        console.print()
        print_section("TIME ESTIMATES")
        print_bullet(f"Estimated time: [{estimate.duration_style}]{estimate.duration}[/]")
        print_bullet(f"Filesystem size: {size}")
    console.print()

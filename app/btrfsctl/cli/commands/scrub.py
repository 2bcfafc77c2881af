"""Scrub command implementation.

Starts a scrub tuned for the filesystem's devices.
"""

import time
from typing import Annotated

import typer
from rich.markup import escape

from btrfsctl.cli.commands.monitor import follow_scrub
from btrfsctl.cli.types import (
    EXIT_INTERRUPTED,
    classify_mount,
    get_config,
    get_task_monitor,
    require_mount_dir,
    shell_exit_code,
)
from btrfsctl.core.errors import LaunchError, TaskError
from btrfsctl.devices.classifier import priority_profile, select_profile
from btrfsctl.utils.formatting import (
    console,
    create_profile_table,
    device_type_markup,
    print_error,
    print_header,
    print_info,
    print_success,
    print_warning,
)


def scrub_command(
    ctx: typer.Context,
    mount_point: Annotated[
        str,
        typer.Argument(help="Mount point of the filesystem to scrub."),
    ],
    priority: Annotated[
        bool,
        typer.Option(
            "--priority",
            "-p",
            help="Maximum performance scrub with elevated I/O priority.",
        ),
    ] = False,
    monitor: Annotated[
        bool,
        typer.Option(
            "--monitor",
            "-m",
            help="Monitor progress after starting.",
        ),
    ] = False,
    wait: Annotated[
        bool,
        typer.Option(
            "--wait",
            "-w",
            help="Block until the scrub exits and return its exit status.",
        ),
    ] = False,
) -> None:
    """Start an optimized scrub in the background.

    The scrub settings are chosen from the device type unless
    --priority is given.

    Examples:
        btrfsctl scrub /mnt/data              # Start and return
        btrfsctl scrub --monitor /mnt/data    # Start and follow progress
        btrfsctl scrub --priority /mnt/data   # Maximum throughput
        btrfsctl scrub --wait /mnt/data       # Block until done
    """
    if monitor and wait:
        print_error("--monitor and --wait cannot be combined")
        raise typer.Exit(code=1)

    require_mount_dir(mount_point)

    config = get_config(ctx)
    classification = classify_mount(config, mount_point)

    if priority:
        profile = priority_profile()
        print_header("STARTING PRIORITY SCRUB")
    else:
        profile = select_profile(classification.device_type)
        print_header("STARTING OPTIMIZED SCRUB")

    console.print(f"[muted]Device:[/] [bold]{escape(mount_point)}[/]")
    console.print(f"[muted]Type:[/] {device_type_markup(classification.device_type)}")
    console.print(create_profile_table(profile))

    task_monitor = get_task_monitor(config)
    try:
        handle = task_monitor.launch(mount_point, profile)
    except LaunchError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    print_success(f"Scrub started (pid {handle.process_id})")

    if wait:
        try:
            task_monitor.await_completion(handle)
        except TaskError as e:
            print_error(escape(str(e)))
            raise typer.Exit(code=shell_exit_code(e.exit_code)) from e
        except KeyboardInterrupt as e:
            print_warning("Stopped waiting; the scrub keeps running in the background")
            raise typer.Exit(code=EXIT_INTERRUPTED) from e
        print_success("Scrub completed successfully")
        return

    if monitor:
        try:
            time.sleep(config.settle_seconds)
        except KeyboardInterrupt as e:
            print_warning("Monitoring cancelled; the scrub keeps running")
            raise typer.Exit(code=EXIT_INTERRUPTED) from e
        follow_scrub(task_monitor, mount_point)
        return

    print_info(f"Use 'btrfsctl monitor {escape(mount_point)}' to monitor progress")

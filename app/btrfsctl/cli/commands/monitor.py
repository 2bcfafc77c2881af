"""Monitor command implementation.

Follows a running scrub until it finishes.
"""

from typing import Annotated

import typer
from rich.markup import escape

from btrfsctl.cli.display import print_snapshot
from btrfsctl.cli.types import EXIT_INTERRUPTED, get_config, get_task_monitor
from btrfsctl.core.errors import MonitorCancelled, MonitorError
from btrfsctl.models.scrub import ScrubState
from btrfsctl.scrub.monitor import TaskMonitor
from btrfsctl.utils.formatting import (
    console,
    print_error,
    print_header,
    print_info,
    print_success,
    print_warning,
)


def follow_scrub(task_monitor: TaskMonitor, mount_point: str) -> None:
    """Run the monitor loop and print each status change.

    Args:
        task_monitor: Monitor used to poll the status.
        mount_point: Filesystem being scrubbed.

    Raises:
        typer.Exit: With code 1 if a status query fails, 130 if interrupted.
    """
    print_header("SCRUB MONITORING")
    console.print(f"[muted]Monitoring:[/] [bold]{escape(mount_point)}[/]")
    console.print("[muted]Press [bold]Ctrl+C[/bold] to exit monitoring[/]\n")

    try:
        final = task_monitor.monitor_loop(mount_point, print_snapshot)
    except MonitorCancelled as e:
        print_warning(escape(str(e)))
        raise typer.Exit(code=EXIT_INTERRUPTED) from e
    except MonitorError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    if final.state == ScrubState.FINISHED:
        print_success("Scrub completed successfully")
    else:
        print_info("Scrub not running")


def monitor_command(
    ctx: typer.Context,
    mount_point: Annotated[
        str,
        typer.Argument(help="Mount point of the filesystem being scrubbed."),
    ],
) -> None:
    """Monitor a running scrub until it stops.

    Examples:
        btrfsctl monitor /mnt/data
    """
    follow_scrub(get_task_monitor(get_config(ctx)), mount_point)

"""Shared Rich display functions for classifications and scrub status.

Used by the info, scrub, monitor and benchmark commands.
"""

from btrfsctl.models.device import ClassificationResult
from btrfsctl.models.scrub import ScrubState, StatusSnapshot
from btrfsctl.utils.formatting import console, device_type_markup, print_bullet


def format_snapshot(snapshot: StatusSnapshot) -> str:
    """Format a status snapshot as a single markup line.

    Args:
        snapshot: Snapshot to format.

    Returns:
        Rich markup describing the state and, when known, progress and speed.
    """
    if snapshot.state == ScrubState.FINISHED:
        return "[scrub_finished]Scrub completed[/]"
    if snapshot.state == ScrubState.NOT_RUNNING:
        return "[scrub_idle]Scrub not running[/]"
    if snapshot.progress_percent is None:
        return "[scrub_running]Scrub in progress...[/]"

    speed = f"{snapshot.speed_mbps} MB/s" if snapshot.speed_mbps is not None else "unknown"
    return (
        f"[scrub_running]Progress:[/] [accent]{snapshot.progress_percent}%[/]"
        f" [muted]|[/] [scrub_running]Speed:[/] [success]{speed}[/]"
    )


def print_snapshot(snapshot: StatusSnapshot) -> None:
    """Print a status snapshot line."""
    console.print(format_snapshot(snapshot), highlight=False)


def print_classification(result: ClassificationResult, verbose: bool = False) -> None:
    """Print the device type line and, in verbose mode, the device counts.

    Args:
        result: Classification to display.
        verbose: Also list the inspected devices.
    """
    console.print(f"[muted]Device type:[/] {device_type_markup(result.device_type)}")
    if not verbose:
        return

    console.print(
        f"[muted]Devices:[/] {result.total_count} inspected "
        f"({result.non_rotational_count} non-rotational, {result.rotational_count} rotational)"
    )
    for device in result.devices:
        print_bullet(device)

"""Scrub task models.

Describes a running background scrub and the snapshots read from
``btrfs scrub status``.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class ScrubState(Enum):
    """State reported by a scrub status query."""

    RUNNING = "running"
    FINISHED = "finished"
    NOT_RUNNING = "not_running"


@dataclass(frozen=True, slots=True)
class StatusSnapshot:
    """A single classified reading of the scrub status text.

    Attributes:
        state: Classified scrub state.
        progress_percent: Completion percentage, if the text reported one.
        speed_mbps: Throughput in MB/s, if the text reported one.
        raw_text: The unparsed status output.
    """

    state: ScrubState
    progress_percent: float | None = None
    speed_mbps: float | None = None
    raw_text: str = field(default="", compare=False)

    @property
    def is_running(self) -> bool:
        """Check if the scrub is still in progress."""
        return self.state == ScrubState.RUNNING

    @property
    def is_terminal(self) -> bool:
        """Check if the snapshot ends monitoring."""
        return self.state in (ScrubState.FINISHED, ScrubState.NOT_RUNNING)

    @property
    def progress_text(self) -> str:
        """Return the short progress text used for display and change detection."""
        if self.state == ScrubState.FINISHED:
            return "finished"
        if self.state == ScrubState.NOT_RUNNING:
            return "not running"
        if self.progress_percent is None:
            return "in progress"
        speed = f"{self.speed_mbps} MB/s" if self.speed_mbps is not None else "unknown speed"
        return f"{self.progress_percent}% @ {speed}"


@dataclass(slots=True)
class BackgroundTaskHandle:
    """Handle on a scrub process started in the background.

    The caller owns the handle and uses it to wait for the process.
    Once the process has been reaped the handle is terminated and cannot
    be waited on again.

    Attributes:
        process_id: Operating system process id.
        started_at: UTC time the process was spawned.
        mount_point: Filesystem being scrubbed.
        command: Full command line used to start the scrub.
    """

    process_id: int
    started_at: datetime
    mount_point: str
    command: tuple[str, ...]
    process: subprocess.Popen[bytes] | None = field(default=None, repr=False, compare=False)

    @property
    def terminated(self) -> bool:
        """Check if the process has already been reaped."""
        return self.process is None or self.process.returncode is not None

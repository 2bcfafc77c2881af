"""Background scrub launching and monitoring.

The scrub runs as a separate process in its own session. This module
starts it, waits on it, and reads its progress through
``btrfs scrub status``.

Two attachment modes are offered to callers:

1. Wait: :meth:`TaskMonitor.await_completion` blocks on process exit.
2. Monitor: :meth:`TaskMonitor.monitor_loop` polls the status text on a
   fixed cadence until the scrub stops.

Interrupting either mode never signals the scrub process.
"""

import logging
import re
import subprocess
import time
from collections.abc import Callable
from datetime import UTC, datetime

from btrfsctl.core.errors import LaunchError, MonitorCancelled, MonitorError, TaskError
from btrfsctl.models.device import TuningProfile
from btrfsctl.models.scrub import BackgroundTaskHandle, ScrubState, StatusSnapshot
from btrfsctl.utils.shell import command_exists, run_command, spawn_detached

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 2.0

# Best-effort class, highest level
IONICE_PREFIX: tuple[str, ...] = ("ionice", "-c2", "-n0")

_RUNNING_PATTERN = re.compile(r"\brunning\b", re.IGNORECASE)
_FINISHED_PATTERN = re.compile(r"\bfinished\b", re.IGNORECASE)
_PROGRESS_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*%")
_SPEED_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*Mi?B/s", re.IGNORECASE)


def parse_status(text: str) -> StatusSnapshot:
    """Classify free-form ``btrfs scrub status`` output.

    Missing progress or speed figures leave the corresponding field as
    None instead of failing.

    Args:
        text: Output of the status command.

    Returns:
        StatusSnapshot for the text.
    """
    if _RUNNING_PATTERN.search(text):
        return StatusSnapshot(
            state=ScrubState.RUNNING,
            progress_percent=_first_number(_PROGRESS_PATTERN, text),
            speed_mbps=_first_number(_SPEED_PATTERN, text),
            raw_text=text,
        )
    if _FINISHED_PATTERN.search(text):
        return StatusSnapshot(state=ScrubState.FINISHED, raw_text=text)
    return StatusSnapshot(state=ScrubState.NOT_RUNNING, raw_text=text)


def _first_number(pattern: re.Pattern[str], text: str) -> float | None:
    match = pattern.search(text)
    return float(match.group(1)) if match else None


class TaskMonitor:
    """Starts a scrub in the background and tracks it.

    Attributes:
        poll_interval: Seconds between status polls in the monitor loop.

    Example:
        >>> monitor = TaskMonitor()
        >>> handle = monitor.launch("/mnt/data", select_profile(DeviceType.SSD))
        >>> monitor.monitor_loop("/mnt/data", print)
    """

    def __init__(
        self,
        btrfs_binary: str = "btrfs",
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        use_ionice: bool = True,
    ) -> None:
        """Initialize the monitor.

        Args:
            btrfs_binary: Name or path of the btrfs executable.
            poll_interval: Seconds between status polls.
            use_ionice: Allow the ionice prefix for priority profiles.
        """
        self._btrfs = btrfs_binary
        self.poll_interval = poll_interval
        self._use_ionice = use_ionice

    def build_command(self, mount_point: str, profile: TuningProfile) -> list[str]:
        """Build the scrub command line for a profile.

        ``-B`` keeps the scrub in the foreground of the spawned process,
        so the process lives exactly as long as the scrub.
        """
        command = [self._btrfs, "scrub", "start", "-B", *profile.to_scrub_args(), mount_point]

        if profile.elevate_io_priority and self._use_ionice:
            if command_exists(IONICE_PREFIX[0]):
                return [*IONICE_PREFIX, *command]
            logger.warning("ionice not available, using standard I/O priority")

        return command

    def launch(self, mount_point: str, profile: TuningProfile) -> BackgroundTaskHandle:
        """Start the scrub without waiting for it.

        Args:
            mount_point: Filesystem to scrub.
            profile: Tuning parameters for the scrub.

        Returns:
            Handle for the running scrub process.

        Raises:
            LaunchError: If the scrub process cannot be spawned.
        """
        if not command_exists(self._btrfs):
            msg = f"{self._btrfs} is not installed or not in PATH"
            raise LaunchError(msg)

        command = self.build_command(mount_point, profile)
        logger.debug("Starting scrub: %s", " ".join(command))

        try:
            process = spawn_detached(command)
        except OSError as e:
            msg = f"Failed to start scrub on {mount_point}: {e}"
            raise LaunchError(msg) from e

        logger.info("Scrub started on %s (pid %d)", mount_point, process.pid)
        return BackgroundTaskHandle(
            process_id=process.pid,
            started_at=datetime.now(UTC),
            mount_point=mount_point,
            command=tuple(command),
            process=process,
        )

    def await_completion(self, handle: BackgroundTaskHandle) -> None:
        """Block until the scrub process exits.

        There is no timeout; a scrub of a large filesystem can run for hours.

        Args:
            handle: Handle returned by :meth:`launch`.

        Raises:
            TaskError: If the scrub exits with a non-zero status.
            RuntimeError: If the handle was already waited on.
        """
        if handle.terminated or handle.process is None:
            msg = f"Scrub process {handle.process_id} has already terminated"
            raise RuntimeError(msg)

        exit_code = handle.process.wait()
        logger.debug("Scrub process %d exited with %d", handle.process_id, exit_code)

        if exit_code != 0:
            raise TaskError(exit_code)

    def poll_status(self, mount_point: str) -> StatusSnapshot:
        """Read and classify the current scrub status.

        Args:
            mount_point: Filesystem being scrubbed.

        Returns:
            StatusSnapshot for the current status text.

        Raises:
            MonitorError: If the status command cannot be run or fails.
        """
        try:
            result = run_command([self._btrfs, "scrub", "status", mount_point], timeout=30.0)
        except (OSError, subprocess.SubprocessError) as e:
            msg = f"Cannot query scrub status for {mount_point}: {e}"
            raise MonitorError(msg) from e

        if not result.success:
            detail = result.stderr.strip() or f"exit code {result.returncode}"
            msg = f"Cannot query scrub status for {mount_point}: {detail}"
            raise MonitorError(msg)

        return parse_status(result.stdout)

    def monitor_loop(
        self,
        mount_point: str,
        on_update: Callable[[StatusSnapshot], None],
    ) -> StatusSnapshot:
        """Poll the scrub status until the scrub stops.

        Polling always happens every :attr:`poll_interval` seconds, but
        ``on_update`` only fires when the state or progress text changed
        since the previous poll.

        Args:
            mount_point: Filesystem being scrubbed.
            on_update: Callback receiving each changed snapshot.

        Returns:
            The final FINISHED or NOT_RUNNING snapshot.

        Raises:
            MonitorError: If a status query fails.
            MonitorCancelled: If interrupted with Ctrl+C.
        """
        previous: tuple[ScrubState, str] | None = None

        try:
            while True:
                snapshot = self.poll_status(mount_point)
                current = (snapshot.state, snapshot.progress_text)

                if current != previous:
                    on_update(snapshot)
                    previous = current

                if snapshot.is_terminal:
                    return snapshot

                time.sleep(self.poll_interval)
        except KeyboardInterrupt as e:
            msg = f"Monitoring of {mount_point} cancelled; the scrub keeps running"
            raise MonitorCancelled(msg) from e

"""Read-only btrfs queries used by the reports.

These wrappers return the raw command result; the output is displayed,
never interpreted, except for the device-stats counters.
"""

import logging
import re
import subprocess
from pathlib import Path

from btrfsctl.utils.shell import CommandResult, run_command

logger = logging.getLogger(__name__)

MOUNTS_FILE = Path("/proc/self/mounts")

_OCTAL_ESCAPE = re.compile(r"\\([0-7]{3})")
_DEVICE_SIZE_PATTERN = re.compile(r"^\s*Device size:\s*(.+?)\s*$", re.MULTILINE)


class BtrfsTool:
    """Display-only access to the btrfs command line tool.

    Example:
        >>> tool = BtrfsTool()
        >>> result = tool.filesystem_df("/mnt/data")
        >>> if result.success:
        ...     print(result.stdout)
    """

    def __init__(self, binary: str = "btrfs") -> None:
        self.binary = binary

    def _run(self, *args: str) -> CommandResult:
        return run_command([self.binary, *args], timeout=60.0)

    def filesystem_show(self, mount_point: str) -> CommandResult:
        return self._run("filesystem", "show", mount_point)

    def filesystem_usage(self, mount_point: str) -> CommandResult:
        return self._run("filesystem", "usage", mount_point)

    def filesystem_df(self, mount_point: str) -> CommandResult:
        return self._run("filesystem", "df", mount_point)

    def device_usage(self, mount_point: str) -> CommandResult:
        return self._run("device", "usage", mount_point)

    def device_stats(self, mount_point: str) -> CommandResult:
        return self._run("device", "stats", mount_point)

    def scrub_status(self, mount_point: str) -> CommandResult:
        return self._run("scrub", "status", mount_point)

    def version(self) -> CommandResult:
        return self._run("version")

    def device_size(self, mount_point: str) -> str | None:
        """Return the "Device size" value from filesystem usage, if any."""
        try:
            result = self.filesystem_usage(mount_point)
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug("filesystem usage failed for %s: %s", mount_point, e)
            return None
        if not result.success:
            return None
        match = _DEVICE_SIZE_PATTERN.search(result.stdout)
        return match.group(1) if match else None


def device_stats_errors(text: str) -> list[str]:
    """Return the device-stats lines whose counter is non-zero.

    Args:
        text: Output of ``btrfs device stats``.

    Returns:
        Lines like ``[/dev/sda].write_io_errs 3``.
    """
    errors: list[str] = []
    for line in text.splitlines():
        parts = line.split()
        if len(parts) < 2:
            continue
        if parts[-1].isdigit() and int(parts[-1]) != 0:
            errors.append(line.strip())
    return errors


def _unescape_mount_field(value: str) -> str:
    """Decode the octal escapes the kernel uses for spaces and tabs."""
    return _OCTAL_ESCAPE.sub(lambda m: chr(int(m.group(1), 8)), value)


def list_btrfs_mounts(mounts_file: Path = MOUNTS_FILE) -> list[str]:
    """List the mount points of all mounted BTRFS filesystems.

    Args:
        mounts_file: Mount table to read, /proc/self/mounts by default.

    Returns:
        Mount points in mount-table order, without duplicates.
    """
    try:
        content = mounts_file.read_text()
    except OSError as e:
        logger.debug("Cannot read %s: %s", mounts_file, e)
        return []

    mounts: list[str] = []
    for line in content.splitlines():
        fields = line.split()
        if len(fields) < 3 or fields[2] != "btrfs":
            continue
        mount_point = _unescape_mount_field(fields[1])
        if mount_point not in mounts:
            mounts.append(mount_point)
    return mounts

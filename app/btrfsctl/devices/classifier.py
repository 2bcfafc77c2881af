"""Device classification for BTRFS mounts.

Determines whether the block devices behind a mount point are
rotational and picks the scrub tuning profile for that mix.
"""

import logging
import os
import re
import stat
import subprocess

from btrfsctl.core.errors import DeviceEnumerationError
from btrfsctl.models.device import ClassificationResult, DeviceType, TuningProfile
from btrfsctl.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)

_DEVICE_PATTERN = re.compile(r"/dev/\S+")

# Fixed per-type scrub parameters
PROFILES: dict[DeviceType, TuningProfile] = {
    DeviceType.SSD: TuningProfile(
        concurrency_level=7, read_ahead_factor=2, rate_limit_bytes_per_sec=500_000_000
    ),
    DeviceType.HDD: TuningProfile(
        concurrency_level=2, read_ahead_factor=2, rate_limit_bytes_per_sec=100_000_000
    ),
    DeviceType.MIXED: TuningProfile(
        concurrency_level=4, read_ahead_factor=2, rate_limit_bytes_per_sec=200_000_000
    ),
    DeviceType.UNKNOWN: TuningProfile(
        concurrency_level=4, read_ahead_factor=2, rate_limit_bytes_per_sec=200_000_000
    ),
}

PRIORITY_PROFILE = TuningProfile(
    concurrency_level=7,
    read_ahead_factor=2,
    rate_limit_bytes_per_sec=800_000_000,
    elevate_io_priority=True,
)


def select_profile(device_type: DeviceType) -> TuningProfile:
    """Return the tuning profile for a device type.

    Args:
        device_type: Classification of the filesystem's devices.

    Returns:
        The fixed TuningProfile for that type.
    """
    return PROFILES[device_type]


def priority_profile() -> TuningProfile:
    """Return the maximum-throughput profile requested with ``--priority``."""
    return PRIORITY_PROFILE


class DeviceClassifier:
    """Classifier for the devices backing a BTRFS filesystem.

    Uses ``btrfs filesystem show`` to list member devices and
    ``lsblk`` to read each device's rotational flag.

    Example:
        >>> classifier = DeviceClassifier()
        >>> result = classifier.classify("/mnt/data")
        >>> profile = select_profile(result.device_type)
    """

    def __init__(self, btrfs_binary: str = "btrfs") -> None:
        """Initialize the classifier.

        Args:
            btrfs_binary: Name or path of the btrfs executable.
        """
        self._btrfs = btrfs_binary

    def is_available(self) -> bool:
        """Check if both btrfs and lsblk are available."""
        return command_exists(self._btrfs) and command_exists("lsblk")

    def classify(self, mount_point: str) -> ClassificationResult:
        """Classify the devices backing a mount point.

        Never raises for enumeration problems: a mount whose devices
        cannot be listed is classified as UNKNOWN with zero counts.

        Args:
            mount_point: Path of a mounted BTRFS filesystem.

        Returns:
            ClassificationResult for the queryable devices.
        """
        try:
            devices = self.devices_backing(mount_point)
        except DeviceEnumerationError as e:
            logger.debug("Cannot enumerate devices for %s: %s", mount_point, e)
            return ClassificationResult.unknown()

        rotational = 0
        non_rotational = 0
        inspected: list[str] = []

        for device in devices:
            if not _is_block_device(device):
                logger.debug("Skipping %s: not a block device", device)
                continue

            is_rotational = self.is_rotational(device)
            if is_rotational is None:
                continue

            inspected.append(device)
            if is_rotational:
                rotational += 1
            else:
                non_rotational += 1

        result = ClassificationResult.from_counts(rotational, non_rotational, tuple(inspected))
        logger.debug(
            "Classified %s as %s (%d rotational, %d non-rotational)",
            mount_point,
            result.device_type.value,
            rotational,
            non_rotational,
        )
        return result

    def devices_backing(self, mount_point: str) -> list[str]:
        """List the device paths that make up the filesystem at a mount point.

        Args:
            mount_point: Path of a mounted BTRFS filesystem.

        Returns:
            Device paths in the order btrfs reports them, without duplicates.

        Raises:
            DeviceEnumerationError: If btrfs cannot be run or reports a failure.
        """
        try:
            result = run_command([self._btrfs, "filesystem", "show", mount_point])
        except (OSError, subprocess.SubprocessError) as e:
            msg = f"{self._btrfs} filesystem show could not be run: {e}"
            raise DeviceEnumerationError(msg) from e

        if not result.success:
            msg = f"{self._btrfs} filesystem show failed: {result.stderr.strip()}"
            raise DeviceEnumerationError(msg)

        return list(dict.fromkeys(_DEVICE_PATTERN.findall(result.stdout)))

    def is_rotational(self, device: str) -> bool | None:
        """Query the rotational flag of a single device.

        Args:
            device: Path of the block device.

        Returns:
            True for spinning media, False for solid state, None if the
            flag could not be read.
        """
        try:
            result = run_command(["lsblk", "-d", "-n", "-o", "ROTA", device], timeout=10.0)
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug("lsblk failed for %s: %s", device, e)
            return None

        if not result.success:
            logger.debug("lsblk failed for %s: %s", device, result.stderr.strip())
            return None

        lines = result.stdout.strip().splitlines()
        flag = lines[-1].strip() if lines else ""
        if flag == "0":
            return False
        if flag == "1":
            return True

        logger.debug("Unexpected ROTA value for %s: %r", device, flag)
        return None


def _is_block_device(path: str) -> bool:
    """Check that a path still exists and is a block special file."""
    try:
        return stat.S_ISBLK(os.stat(path).st_mode)
    except OSError:
        return False

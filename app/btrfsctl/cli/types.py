"""Shared helpers for CLI commands.

Builds the core objects from the configuration stored in the Typer
context by the main callback.
"""

from pathlib import Path

import typer
from rich.markup import escape

from btrfsctl.core.config import BtrfsctlConfig
from btrfsctl.devices.classifier import DeviceClassifier
from btrfsctl.models.device import ClassificationResult
from btrfsctl.scrub.monitor import TaskMonitor
from btrfsctl.utils.formatting import print_error, print_warning

# Conventional exit status for SIGINT
EXIT_INTERRUPTED = 130


def get_config(ctx: typer.Context) -> BtrfsctlConfig:
    """Return the configuration loaded by the main callback.

    Args:
        ctx: Current Typer context.

    Returns:
        The loaded config, or defaults when none was stored.
    """
    obj = ctx.find_root().obj
    if isinstance(obj, dict) and isinstance(obj.get("config"), BtrfsctlConfig):
        return obj["config"]
    return BtrfsctlConfig()


def get_classifier(config: BtrfsctlConfig) -> DeviceClassifier:
    """Create a device classifier for the configured btrfs binary."""
    return DeviceClassifier(btrfs_binary=config.btrfs_binary)


def get_task_monitor(config: BtrfsctlConfig) -> TaskMonitor:
    """Create a task monitor using the configured polling settings."""
    return TaskMonitor(
        btrfs_binary=config.btrfs_binary,
        poll_interval=config.poll_interval_seconds,
        use_ionice=config.use_ionice,
    )


def require_mount_dir(mount_point: str) -> None:
    """Exit with status 1 unless the mount point is an accessible directory.

    Raises:
        typer.Exit: If the path is not a directory.
    """
    if not Path(mount_point).is_dir():
        print_error(f"Mount point '{escape(mount_point)}' not found or not accessible")
        raise typer.Exit(code=1)


def classify_mount(config: BtrfsctlConfig, mount_point: str) -> ClassificationResult:
    """Classify a mount, warning first when the inspection tools are missing.

    Without btrfs or lsblk the classification falls back to UNKNOWN and
    the conservative profile.
    """
    classifier = get_classifier(config)
    if not classifier.is_available():
        print_warning(
            f"{escape(config.btrfs_binary)} or lsblk not found; device type cannot be detected"
        )
    return classifier.classify(mount_point)


def shell_exit_code(code: int) -> int:
    """Map a Popen return code to a shell exit status.

    A process killed by signal N reports -N; shells report that as 128 + N.
    """
    if code < 0:
        return 128 - code
    return code

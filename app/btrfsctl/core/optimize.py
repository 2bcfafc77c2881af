"""System-level tuning for faster scrubs on solid-state storage.

All changes are runtime-only and are lost on reboot.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

RATE_LIMIT_SYSCTL = "dev.btrfs.per_stream_rate_limit"
RATE_LIMIT_VALUE = 800_000_000
SSD_NR_REQUESTS = "1024"
SSD_SCHEDULER = "none"

PROC_SYS = Path("/proc/sys")
SYS_BLOCK = Path("/sys/block")


@dataclass
class OptimizationReport:
    """Outcome of an optimization pass.

    Attributes:
        applied: Human-readable descriptions of successful changes.
        failed: Descriptions of changes that could not be written.
        rate_limit_supported: Whether the kernel exposes the rate-limit sysctl.
        ssd_devices: Names of the non-rotational devices that were tuned.
    """

    applied: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    rate_limit_supported: bool = False
    ssd_devices: list[str] = field(default_factory=list)

    @property
    def optimized(self) -> bool:
        """Check if at least one change was applied."""
        return bool(self.applied)


def is_root() -> bool:
    """Check if the process runs with root privileges."""
    return os.geteuid() == 0


def sysctl_path(key: str, proc_sys: Path = PROC_SYS) -> Path:
    """Map a dotted sysctl key to its /proc/sys file."""
    return proc_sys.joinpath(*key.split("."))


def _write(path: Path, value: str, description: str, report: OptimizationReport) -> None:
    try:
        path.write_text(value)
    except OSError as e:
        logger.debug("Failed to write %s to %s: %s", value, path, e)
        report.failed.append(f"{description} ({e.strerror or e})")
    else:
        report.applied.append(description)


def non_rotational_devices(sys_block: Path = SYS_BLOCK) -> list[str]:
    """List block devices whose queue reports rotational=0."""
    devices: list[str] = []
    try:
        entries = sorted(sys_block.iterdir())
    except OSError as e:
        logger.debug("Cannot list %s: %s", sys_block, e)
        return devices

    for entry in entries:
        rotational = entry / "queue" / "rotational"
        try:
            if rotational.read_text().strip() == "0":
                devices.append(entry.name)
        except OSError:
            continue
    return devices


def apply_optimizations(
    proc_sys: Path = PROC_SYS,
    sys_block: Path = SYS_BLOCK,
) -> OptimizationReport:
    """Raise the BTRFS rate limit and tune SSD request queues.

    Individual write failures are recorded in the report, not raised.
    The caller is responsible for checking root privileges first.

    Args:
        proc_sys: Root of the sysctl tree.
        sys_block: Root of the block device tree.

    Returns:
        OptimizationReport describing what was changed.
    """
    report = OptimizationReport()

    rate_limit = sysctl_path(RATE_LIMIT_SYSCTL, proc_sys)
    if rate_limit.exists():
        report.rate_limit_supported = True
        _write(
            rate_limit,
            str(RATE_LIMIT_VALUE),
            "Set BTRFS per-stream rate limit to 800MB/s",
            report,
        )
    else:
        logger.info("%s not available in this kernel", RATE_LIMIT_SYSCTL)

    for device in non_rotational_devices(sys_block):
        report.ssd_devices.append(device)
        queue = sys_block / device / "queue"
        _write(
            queue / "nr_requests",
            SSD_NR_REQUESTS,
            f"{device}: nr_requests={SSD_NR_REQUESTS}",
            report,
        )
        _write(
            queue / "scheduler",
            SSD_SCHEDULER,
            f"{device}: scheduler={SSD_SCHEDULER}",
            report,
        )

    return report

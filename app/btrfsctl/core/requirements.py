"""Checks for the external tools btrfsctl relies on."""

import logging
import subprocess
from dataclasses import dataclass
from enum import Enum

from btrfsctl.core.btrfs import BtrfsTool, list_btrfs_mounts
from btrfsctl.utils.shell import command_exists

logger = logging.getLogger(__name__)

CORE_TOOLS: tuple[str, ...] = ("lsblk", "mount")
OPTIONAL_TOOLS: tuple[str, ...] = ("ionice", "sysctl", "fio", "hdparm")


class RequirementLevel(Enum):
    """How important a tool is."""

    REQUIRED = "required"
    CORE = "core"
    OPTIONAL = "optional"


@dataclass(frozen=True, slots=True)
class ToolCheck:
    """Availability of a single tool.

    Attributes:
        name: Executable name.
        level: Importance of the tool.
        available: Whether it was found in PATH.
        detail: Extra information such as the version string.
    """

    name: str
    level: RequirementLevel
    available: bool
    detail: str | None = None


@dataclass(frozen=True, slots=True)
class RequirementsReport:
    """Result of a requirements check."""

    tools: tuple[ToolCheck, ...]
    btrfs_mounted: bool

    @property
    def missing_required(self) -> list[ToolCheck]:
        """Return required tools that are not installed."""
        return [
            t for t in self.tools if t.level == RequirementLevel.REQUIRED and not t.available
        ]

    @property
    def satisfied(self) -> bool:
        """Check if every required tool is available."""
        return not self.missing_required


def _btrfs_version(binary: str) -> str | None:
    try:
        result = BtrfsTool(binary).version()
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("btrfs version failed: %s", e)
        return None
    if not result.success:
        return None
    lines = result.stdout.strip().splitlines()
    return lines[0] if lines else None


def check_requirements(btrfs_binary: str = "btrfs") -> RequirementsReport:
    """Check required, core and optional tools.

    Args:
        btrfs_binary: Name or path of the btrfs executable.

    Returns:
        RequirementsReport for the current system.
    """
    tools: list[ToolCheck] = []

    btrfs_available = command_exists(btrfs_binary)
    tools.append(
        ToolCheck(
            name=btrfs_binary,
            level=RequirementLevel.REQUIRED,
            available=btrfs_available,
            detail=_btrfs_version(btrfs_binary) if btrfs_available else None,
        )
    )

    for name in CORE_TOOLS:
        tools.append(ToolCheck(name, RequirementLevel.CORE, command_exists(name)))

    for name in OPTIONAL_TOOLS:
        tools.append(ToolCheck(name, RequirementLevel.OPTIONAL, command_exists(name)))

    return RequirementsReport(tools=tuple(tools), btrfs_mounted=bool(list_btrfs_mounts()))

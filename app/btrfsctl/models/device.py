"""Device classification and scrub tuning models.

This module defines the data structures describing what kind of
storage backs a BTRFS mount and how a scrub is tuned for it.
"""

from dataclasses import dataclass, field
from enum import Enum


class DeviceType(Enum):
    """Classification of the devices backing a filesystem."""

    SSD = "ssd"
    HDD = "hdd"
    MIXED = "mixed"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class ClassificationResult:
    """Outcome of inspecting the devices behind a mount point.

    Devices that could not be queried are excluded from every count,
    so ``rotational_count + non_rotational_count == total_count`` always
    holds.

    Attributes:
        device_type: Derived classification.
        rotational_count: Number of spinning devices.
        non_rotational_count: Number of solid-state devices.
        total_count: Number of devices that were queried successfully.
        devices: Paths of the devices that were queried successfully.
    """

    device_type: DeviceType
    rotational_count: int
    non_rotational_count: int
    total_count: int
    devices: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        """Validate counts and the derived device type."""
        if min(self.rotational_count, self.non_rotational_count) < 0:
            msg = "Device counts cannot be negative"
            raise ValueError(msg)
        if self.rotational_count + self.non_rotational_count != self.total_count:
            msg = (
                f"Counts do not add up: {self.rotational_count} rotational + "
                f"{self.non_rotational_count} non-rotational != {self.total_count} total"
            )
            raise ValueError(msg)
        expected = _derive_type(self.rotational_count, self.non_rotational_count)
        if self.device_type != expected:
            msg = f"Device type {self.device_type.value} does not match counts ({expected.value})"
            raise ValueError(msg)

    @classmethod
    def from_counts(
        cls,
        rotational: int,
        non_rotational: int,
        devices: tuple[str, ...] = (),
    ) -> "ClassificationResult":
        """Build a result, deriving the device type from the counts."""
        return cls(
            device_type=_derive_type(rotational, non_rotational),
            rotational_count=rotational,
            non_rotational_count=non_rotational,
            total_count=rotational + non_rotational,
            devices=devices,
        )

    @classmethod
    def unknown(cls) -> "ClassificationResult":
        """Result used when no device could be inspected."""
        return cls.from_counts(0, 0)


def _derive_type(rotational: int, non_rotational: int) -> DeviceType:
    if rotational and non_rotational:
        return DeviceType.MIXED
    if non_rotational:
        return DeviceType.SSD
    if rotational:
        return DeviceType.HDD
    return DeviceType.UNKNOWN


@dataclass(frozen=True, slots=True)
class TuningProfile:
    """Scrub parameters selected from the device classification.

    Attributes:
        concurrency_level: Value passed to the tool's ``-n`` flag.
        read_ahead_factor: Value passed to the tool's ``-c`` flag.
        rate_limit_bytes_per_sec: Throughput cap in bytes per second.
        elevate_io_priority: Request best-effort I/O priority elevation.
    """

    concurrency_level: int
    read_ahead_factor: int
    rate_limit_bytes_per_sec: int
    elevate_io_priority: bool = False

    @property
    def rate_limit_human(self) -> str:
        """Return the rate limit in decimal megabytes per second."""
        return f"{self.rate_limit_bytes_per_sec // 1_000_000}MB/s"

    def to_scrub_args(self) -> list[str]:
        """Map the profile to ``btrfs scrub start`` flags."""
        return [
            "-c",
            str(self.read_ahead_factor),
            "-n",
            str(self.concurrency_level),
            "--limit",
            str(self.rate_limit_bytes_per_sec),
        ]

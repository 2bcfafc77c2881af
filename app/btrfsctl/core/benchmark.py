"""Expected scrub throughput and duration per device type.

The figures are static reference ranges, not measurements.
"""

from dataclasses import dataclass

from btrfsctl.models.device import DeviceType


@dataclass(frozen=True, slots=True)
class ThroughputEstimate:
    """A labelled throughput range.

    Attributes:
        label: Hardware class, e.g. "NVMe Gen4".
        throughput: Human-readable range, e.g. "1.5-3.0 GB/s".
        style: Rich style used when printing.
    """

    label: str
    throughput: str
    style: str


@dataclass(frozen=True, slots=True)
class BenchmarkEstimate:
    """Reference performance figures for one device type."""

    device_type: DeviceType
    throughput: tuple[ThroughputEstimate, ...]
    duration: str
    duration_style: str


ESTIMATES: dict[DeviceType, BenchmarkEstimate] = {
    DeviceType.SSD: BenchmarkEstimate(
        device_type=DeviceType.SSD,
        throughput=(
            ThroughputEstimate("NVMe Gen4", "1.5-3.0 GB/s", "success"),
            ThroughputEstimate("NVMe Gen3", "0.8-1.5 GB/s", "success"),
            ThroughputEstimate("SATA SSD", "400-550 MB/s", "accent"),
        ),
        duration="10-30 minutes",
        duration_style="success",
    ),
    DeviceType.HDD: BenchmarkEstimate(
        device_type=DeviceType.HDD,
        throughput=(
            ThroughputEstimate("HDD 7200rpm", "150-220 MB/s", "warning"),
            ThroughputEstimate("HDD 5400rpm", "80-120 MB/s", "warning"),
            ThroughputEstimate("RAID HDD", "300-600 MB/s", "attention"),
        ),
        duration="1-4 hours",
        duration_style="warning",
    ),
    DeviceType.MIXED: BenchmarkEstimate(
        device_type=DeviceType.MIXED,
        throughput=(
            ThroughputEstimate("Mixed devices", "200-400 MB/s", "warning"),
            ThroughputEstimate("Performance depends on SSD/HDD ratio", "", "accent"),
        ),
        duration="30-90 minutes",
        duration_style="attention",
    ),
    DeviceType.UNKNOWN: BenchmarkEstimate(
        device_type=DeviceType.UNKNOWN,
        throughput=(
            ThroughputEstimate("Unknown device type: using conservative estimates", "", "muted"),
            ThroughputEstimate("Expected", "100-300 MB/s", "warning"),
        ),
        duration="1-3 hours",
        duration_style="warning",
    ),
}


def get_estimate(device_type: DeviceType) -> BenchmarkEstimate:
    """Return the reference figures for a device type."""
    return ESTIMATES[device_type]

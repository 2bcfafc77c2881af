"""Block device inspection for BTRFS mounts.

This module exports the device classifier and profile selection.
"""

from btrfsctl.devices.classifier import (
    PRIORITY_PROFILE,
    PROFILES,
    DeviceClassifier,
    priority_profile,
    select_profile,
)

__all__ = [
    "PRIORITY_PROFILE",
    "PROFILES",
    "DeviceClassifier",
    "priority_profile",
    "select_profile",
]

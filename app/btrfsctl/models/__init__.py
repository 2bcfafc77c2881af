"""Data models for btrfsctl.

This module exports the device classification and scrub task models.
"""

from btrfsctl.models.device import ClassificationResult, DeviceType, TuningProfile
from btrfsctl.models.scrub import BackgroundTaskHandle, ScrubState, StatusSnapshot

__all__ = [
    "BackgroundTaskHandle",
    "ClassificationResult",
    "DeviceType",
    "ScrubState",
    "StatusSnapshot",
    "TuningProfile",
]

"""Scrub task control.

This module exports the task monitor and status parsing.
"""

from btrfsctl.scrub.monitor import TaskMonitor, parse_status

__all__ = ["TaskMonitor", "parse_status"]

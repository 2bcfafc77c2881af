"""Utility modules for btrfsctl.

This module exports commonly used utility functions.
"""

from btrfsctl.utils.formatting import (
    console,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from btrfsctl.utils.shell import CommandResult, command_exists, run_command, spawn_detached

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
    "spawn_detached",
]

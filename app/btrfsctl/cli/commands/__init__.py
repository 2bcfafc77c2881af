"""CLI commands for btrfsctl.

This package contains all subcommand implementations.
"""

from btrfsctl.cli.commands import benchmark, config, info, monitor, optimize, requirements, scrub

__all__ = ["benchmark", "config", "info", "monitor", "optimize", "requirements", "scrub"]

"""CLI package for btrfsctl.

This package contains the Typer application and all subcommands.
"""

from btrfsctl.cli.main import app

__all__ = ["app"]

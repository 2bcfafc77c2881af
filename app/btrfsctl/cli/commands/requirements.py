"""Check-requirements command implementation."""

import typer

from btrfsctl.cli.types import get_config
from btrfsctl.core.requirements import RequirementLevel, check_requirements
from btrfsctl.utils.formatting import (
    console,
    print_bullet,
    print_error,
    print_header,
    print_info,
    print_success,
    print_warning,
)


def check_requirements_command(ctx: typer.Context) -> None:
    """Check that the required tools are installed.

    Exits with status 1 if a required tool is missing.
    """
    print_header("SYSTEM REQUIREMENTS CHECK")

    report = check_requirements(get_config(ctx).btrfs_binary)

    for tool in report.tools:
        if tool.level == RequirementLevel.REQUIRED:
            if tool.available:
                print_success(f"BTRFS: {tool.detail or tool.name}")
            else:
                print_error("btrfs-progs not installed")
        elif tool.level == RequirementLevel.CORE:
            if tool.available:
                print_success(f"{tool.name} available")
            else:
                print_warning(f"{tool.name} not found (some features limited)")
        elif tool.available:
            print_info(f"{tool.name} available (enhanced features)")
        else:
            print_bullet(f"{tool.name} not found (optional)")

    if report.btrfs_mounted:
        print_success("BTRFS filesystems mounted")
    else:
        print_warning("No BTRFS filesystems currently mounted")

    console.print()
    if not report.satisfied:
        print_error(f"{len(report.missing_required)} critical requirements missing")
        raise typer.Exit(code=1)
    print_success("All requirements satisfied")

"""Optimize command implementation.

Applies runtime kernel and block-queue tuning for SSD scrubs.
"""

from btrfsctl.core.optimize import (
    RATE_LIMIT_SYSCTL,
    RATE_LIMIT_VALUE,
    apply_optimizations,
    is_root,
)
from btrfsctl.utils.formatting import (
    console,
    print_bullet,
    print_header,
    print_info,
    print_section,
    print_success,
    print_warning,
)


def optimize_command() -> None:
    """Apply system optimizations (requires root).

    Examples:
        sudo btrfsctl optimize
    """
    print_header("SYSTEM OPTIMIZATIONS")

    if not is_root():
        print_warning("Root privileges required for system optimizations")
        print_info("To make optimizations persistent, add to /etc/sysctl.conf:")
        print_bullet(f"{RATE_LIMIT_SYSCTL}={RATE_LIMIT_VALUE}")
        print_info("Using application-level optimizations only")
        return

    print_section("APPLYING OPTIMIZATIONS")
    report = apply_optimizations()

    if not report.rate_limit_supported:
        print_info("BTRFS rate limit parameter not available in this kernel")
    for device in report.ssd_devices:
        console.print(f"  Optimizing [accent]{device}[/] (SSD)")
    for change in report.applied:
        print_bullet(f"[success]{change}[/]")
    for failure in report.failed:
        print_warning(f"Failed: {failure}")

    if report.optimized:
        print_success("System optimizations applied successfully")
        print_warning("These are temporary changes. Add to system configuration for persistence.")
    else:
        print_info("Using application-level optimizations only")

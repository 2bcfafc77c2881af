"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table

from btrfsctl.core.theme import get_theme

if TYPE_CHECKING:
    from btrfsctl.models.device import DeviceType, TuningProfile


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def device_type_markup(device_type: DeviceType) -> str:
    """Return the device type in upper case with its theme style."""
    style = f"device_{device_type.value}"
    return f"[{style}]{device_type.value.upper()}[/]"


def print_header(title: str) -> None:
    """Print a boxed section header."""
    console.print(Panel(f"[bold_header]{title}[/]", border_style="border", expand=False))


def print_section(title: str) -> None:
    """Print a sub-section rule."""
    console.print(Rule(f"[section]{title}[/]", style="border", align="left"))


def print_separator() -> None:
    """Print a dim horizontal line."""
    console.print(Rule(style="border"))


def print_bullet(message: str) -> None:
    """Print an indented bullet line."""
    console.print(f"  [dim]•[/] {message}", highlight=False)


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")


def create_profile_table(profile: TuningProfile, title: str = "Scrub Settings") -> Table:
    """Create a two-column table describing a tuning profile.

    Args:
        profile: The profile to display.
        title: Table title.

    Returns:
        Rich Table with one row per setting.
    """
    table = Table(
        title=title,
        show_header=False,
        border_style="border",
        title_style="bold_header",
    )
    table.add_column("Setting", style="muted")
    table.add_column("Value", style="text")
    table.add_row("Concurrency (-n)", str(profile.concurrency_level))
    table.add_row("Read-ahead (-c)", str(profile.read_ahead_factor))
    table.add_row("Rate limit", profile.rate_limit_human)
    table.add_row("I/O priority", "highest" if profile.elevate_io_priority else "default")
    return table

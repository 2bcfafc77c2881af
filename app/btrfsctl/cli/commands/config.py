"""Config command implementation.

Shows and initializes the btrfsctl configuration file.
"""

from typing import Annotated

import typer
from rich.table import Table

from btrfsctl.cli.types import get_config
from btrfsctl.core.config import BtrfsctlConfig, save_config
from btrfsctl.core.errors import ConfigError
from btrfsctl.core.paths import get_config_path
from btrfsctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or create the configuration file.",
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective configuration."""
    config = get_config(ctx)
    path = get_config_path()

    table = Table(
        title="Configuration",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Key", no_wrap=True)
    table.add_column("Value", style="info")
    table.add_column("Description", style="muted")

    for name, field_info in BtrfsctlConfig.model_fields.items():
        table.add_row(name, str(getattr(config, name)), field_info.description or "")

    console.print(table)
    source = str(path) if path.exists() else f"{path} (not found, using defaults)"
    console.print(f"\n[dim]Source: {source}[/]")


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing configuration file.",
        ),
    ] = False,
) -> None:
    """Create a configuration file with default settings."""
    path = get_config_path()

    if path.exists() and not force:
        print_info(f"Configuration already exists: {path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=0)

    try:
        saved = save_config(BtrfsctlConfig(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Configuration written to {saved}")

"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from btrfsctl import __version__
from btrfsctl.cli.commands import benchmark, config, info, monitor, optimize, requirements, scrub
from btrfsctl.core.config import load_config
from btrfsctl.core.errors import ConfigError
from btrfsctl.core.log import setup_logging
from btrfsctl.utils.formatting import print_error

# Create main Typer app
app = typer.Typer(
    name="btrfsctl",
    help="Device-aware scrubbing and reports for BTRFS filesystems.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"btrfsctl version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only log errors.",
        ),
    ] = False,
) -> None:
    """btrfsctl - device-aware scrubbing for BTRFS.

    Classifies the devices behind a filesystem, starts a scrub tuned
    for them, and monitors its progress.
    """
    setup_logging(verbose=verbose, quiet=quiet)

    try:
        loaded = load_config()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config"] = loaded


# Register commands
app.command("info")(info.info_command)
app.command("scrub")(scrub.scrub_command)
app.command("monitor")(monitor.monitor_command)
app.command("benchmark")(benchmark.benchmark_command)
app.command("optimize")(optimize.optimize_command)
app.command("check-requirements")(requirements.check_requirements_command)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()

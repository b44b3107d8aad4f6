"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from pathlib import Path
from typing import Annotated

import typer

from osdpkg import __version__
from osdpkg.cli.commands import config, packages, probe, select

# Create main Typer app
app = typer.Typer(
    name="osdpkg",
    help="Select hardware-specific packages during OS deployment.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"osdpkg version {__version__}")
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
            help="Write debug records to the log.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Config file to read instead of ~/.config/osdpkg/config.toml.",
        ),
    ] = None,
) -> None:
    """osdpkg - Select hardware-specific packages during OS deployment.

    Matches the machine's manufacturer and model against a package catalog
    web service and hands the selected package to the task sequence.
    """
    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config_path


# Register commands
app.add_typer(select.app, name="select")
app.add_typer(probe.app, name="probe")
app.add_typer(packages.app, name="list")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()

"""Config command implementation.

Shows the effective selector configuration and writes config files.
"""

from pathlib import Path
from typing import Annotated

import typer

from osdpkg.cli.types import fail, resolve_config
from osdpkg.config import save_config
from osdpkg.core.paths import get_config_path
from osdpkg.errors import ConfigError
from osdpkg.utils.formatting import console, print_success

app = typer.Typer(
    help="Show or create the selector configuration.",
    no_args_is_help=True,
)


def _mask(secret: str | None) -> str:
    """Hide all but the last four characters of a long secret."""
    if not secret:
        return "-"
    if len(secret) <= 8:
        return "********"
    return "*" * (len(secret) - 4) + secret[-4:]


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective configuration (secret masked)."""
    config = resolve_config(ctx)

    console.print(f"  Endpoint:      [info]{config.endpoint or '-'}[/]")
    console.print(f"  Secret key:    [muted]{_mask(config.secret_key)}[/]")
    console.print(f"  Filter:        [info]{config.filter or '-'}[/]")
    console.print(f"  Variable:      [info]{config.variable_name}[/]")
    console.print(f"  Log file:      [info]{config.log_file_name}[/]")
    console.print(f"  Component:     [info]{config.component}[/]")
    console.print(f"  Timeout:       [info]{config.timeout_seconds}s[/]")


@app.command()
def init(
    ctx: typer.Context,
    endpoint: Annotated[
        str | None,
        typer.Option("--endpoint", "-u", help="Package catalog web service URI."),
    ] = None,
    secret_key: Annotated[
        str | None,
        typer.Option("--secret", "-k", help="Shared secret key for the web service."),
    ] = None,
    filter: Annotated[
        str | None,
        typer.Option("--filter", "-f", help="Server-side package filter."),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output path for the config file."),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with the given settings."""
    obj = ctx.find_root().obj or {}
    target: Path = output or obj.get("config_path") or get_config_path()

    if target.exists() and not force:
        fail(f"Config file already exists: {target} (use --force to overwrite)")

    config = resolve_config(ctx, endpoint=endpoint, secret_key=secret_key, filter=filter)
    try:
        path = save_config(config, target)
    except ConfigError as e:
        fail(e)

    print_success(f"Config written to {path}")

"""Probe command implementation.

Shows the machine facts read from the hardware inventory.
"""

import json
from typing import Annotated

import typer

from osdpkg.cli.types import OutputFormat, fail, get_probe
from osdpkg.errors import OsdpkgError
from osdpkg.probes.manufacturers import SUPPORTED_MANUFACTURERS, is_supported
from osdpkg.utils.formatting import console, print_warning

app = typer.Typer(
    help="Show the hardware facts used for package matching.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def probe_machine(
    ctx: typer.Context,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-F",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Read manufacturer, model and firmware version from the inventory.

    Examples:
        osdpkg probe                 # Show detected facts
        osdpkg probe --format json   # Output as JSON
    """
    if ctx.invoked_subcommand is not None:
        return

    try:
        facts = get_probe().probe()
    except OsdpkgError as e:
        fail(e)

    supported = is_supported(facts.manufacturer)

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps({**facts.to_dict(), "supported": supported}))
        return

    console.print(f"  Manufacturer:     [info]{facts.manufacturer or '-'}[/]")
    console.print(f"  Model:            [info]{facts.model or '-'}[/]")
    console.print(f"  Firmware version: [info]{facts.firmware_version or '-'}[/]")

    if not supported:
        print_warning(
            f"Manufacturer '{facts.manufacturer}' is not supported "
            f"(supported: {', '.join(SUPPORTED_MANUFACTURERS)})"
        )

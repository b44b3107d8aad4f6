"""List command implementation.

Lists the packages known to the catalog web service.
"""

import json
from typing import Annotated

import typer

from osdpkg.cli.types import OutputFormat, fail, get_probe, resolve_config
from osdpkg.core.selector import package_matches
from osdpkg.errors import OsdpkgError, UnsupportedManufacturerError
from osdpkg.models.machine import MachineFacts
from osdpkg.probes.manufacturers import is_supported
from osdpkg.service.client import PackageServiceClient
from osdpkg.utils.formatting import console, create_package_table, format_package_row

app = typer.Typer(
    help="List packages known to the catalog web service.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def list_packages(
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
    match: Annotated[
        bool,
        typer.Option(
            "--match",
            "-m",
            help="Probe this machine and highlight matching packages.",
        ),
    ] = False,
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
    """List catalog packages, newest first.

    Examples:
        osdpkg list -u http://cm01/ConfigMgrWebService/ConfigMgr.asmx -k SECRET
        osdpkg list --filter "BIOS Packages" --match
        osdpkg list --format json
    """
    if ctx.invoked_subcommand is not None:
        return

    config = resolve_config(ctx, endpoint=endpoint, secret_key=secret_key, filter=filter)

    facts: MachineFacts | None = None
    try:
        service_endpoint, secret = config.require_service()
        if match:
            facts = get_probe().probe()
            if not is_supported(facts.manufacturer) or not facts.has_model:
                raise UnsupportedManufacturerError(facts.manufacturer)
        with PackageServiceClient(service_endpoint, timeout=config.timeout_seconds) as client:
            packages = client.list_packages(secret, config.filter)
    except OsdpkgError as e:
        fail(e)

    packages.sort(key=lambda p: p.created, reverse=True)
    matched = {p.package_id for p in packages if facts is not None and package_matches(p, facts)}

    if output_format == OutputFormat.JSON:
        data = [{**p.to_dict(), "matches": p.package_id in matched} for p in packages]
        console.print_json(json.dumps(data))
        return

    table = create_package_table()
    for pkg in packages:
        table.add_row(*format_package_row(pkg, pkg.package_id in matched))
    console.print(table)

    summary = f"{len(packages)} packages"
    if facts is not None:
        summary += f", {len(matched)} matching {facts.manufacturer} {facts.model}"
    console.print(f"\n[dim]{summary}[/]")

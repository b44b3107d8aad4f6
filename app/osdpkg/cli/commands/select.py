"""Select command implementation.

Selects the catalog package matching this machine and publishes its
identifier to the task sequence.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer

from osdpkg.cli.types import fail, get_probe, load_selector_config
from osdpkg.config import SelectorConfig
from osdpkg.core.pipeline import run_selection
from osdpkg.errors import ConfigError, OsdpkgError, TaskSequenceEnvironmentError
from osdpkg.logs.cmtrace import configure_logging, resolve_log_dir
from osdpkg.service.client import PackageServiceClient
from osdpkg.tsenv.base import TaskSequenceEnvironment
from osdpkg.tsenv.com import ComTaskSequenceEnvironment
from osdpkg.tsenv.memory import MemoryTaskSequenceEnvironment
from osdpkg.utils.formatting import console, print_info, print_success, print_warning

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Select the package for this machine.",
    invoke_without_command=True,
)


def _open_environment(dry_run: bool) -> TaskSequenceEnvironment:
    """Open the task sequence environment, or an in-memory one for dry runs.

    Raises:
        TaskSequenceEnvironmentError: If the task sequence environment
            cannot be opened.
    """
    if dry_run:
        return MemoryTaskSequenceEnvironment()
    return ComTaskSequenceEnvironment()


def _start_log(
    config: SelectorConfig,
    environment: TaskSequenceEnvironment | None,
    verbose: bool,
) -> Path | None:
    """Open the CMTrace log file, falling back to the temp directory.

    Returns:
        Path of the log file, or None if no log file could be opened.
    """
    try:
        log_dir = resolve_log_dir(environment)
    except TaskSequenceEnvironmentError as e:
        print_warning(f"{e}; logging to the temporary directory")
        log_dir = resolve_log_dir(None)

    try:
        return configure_logging(
            log_dir,
            file_name=config.log_file_name,
            component=config.component,
            verbose=verbose,
        )
    except OSError as e:
        print_warning(f"Unable to open log file in {log_dir}: {e}")
        return None


@app.callback(invoke_without_command=True)
def select_package(
    ctx: typer.Context,
    endpoint: Annotated[
        str | None,
        typer.Option(
            "--endpoint",
            "-u",
            help="Package catalog web service URI.",
        ),
    ] = None,
    secret_key: Annotated[
        str | None,
        typer.Option(
            "--secret",
            "-k",
            help="Shared secret key for the web service.",
        ),
    ] = None,
    filter: Annotated[
        str | None,
        typer.Option(
            "--filter",
            "-f",
            help="Server-side package filter.",
        ),
    ] = None,
    log_file_name: Annotated[
        str | None,
        typer.Option(
            "--log-file",
            "-l",
            help="Log file name inside the task sequence log directory.",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Select a package without touching the task sequence.",
        ),
    ] = False,
    manufacturer: Annotated[
        str | None,
        typer.Option(
            "--manufacturer",
            help="Use this manufacturer instead of the hardware inventory.",
        ),
    ] = None,
    model: Annotated[
        str | None,
        typer.Option(
            "--model",
            help="Model to use together with --manufacturer.",
        ),
    ] = None,
    firmware_version: Annotated[
        str | None,
        typer.Option(
            "--firmware-version",
            help="Firmware version to use together with --manufacturer.",
        ),
    ] = None,
) -> None:
    """Select the newest catalog package for this machine.

    Reads the manufacturer and model from the hardware inventory, lists the
    packages known to the web service, keeps those whose name contains the
    model and whose manufacturer contains the detected manufacturer, and
    writes the identifier of the newest one to OSDDownloadDownloadPackages.

    Examples:
        osdpkg select -u http://cm01/ConfigMgrWebService/ConfigMgr.asmx -k SECRET
        osdpkg select -f "BIOS Packages"             # With server-side filter
        osdpkg select --dry-run --manufacturer "Dell Inc." --model "Latitude 7490"
    """
    if ctx.invoked_subcommand is not None:
        return

    verbose = bool((ctx.find_root().obj or {}).get("verbose", False))

    # A broken config still has to reach the log, which then uses the defaults
    config_error: ConfigError | None = None
    try:
        config = load_selector_config(
            ctx,
            endpoint=endpoint,
            secret_key=secret_key,
            filter=filter,
            log_file_name=log_file_name,
        )
    except ConfigError as e:
        config_error = e
        config = SelectorConfig()

    environment: TaskSequenceEnvironment | None = None
    environment_error: TaskSequenceEnvironmentError | None = None
    try:
        environment = _open_environment(dry_run)
    except TaskSequenceEnvironmentError as e:
        environment_error = e

    log_path = _start_log(config, environment, verbose)
    logger.info("Package selection started")
    if log_path is not None:
        print_info(f"Logging to {log_path}")

    if config_error is not None:
        fail(config_error)

    if environment is None:
        fail(environment_error or "Task sequence environment is not available")

    try:
        service_endpoint, secret = config.require_service()
    except OsdpkgError as e:
        fail(e)

    probe = get_probe(manufacturer, model, firmware_version)
    logger.debug("Using %s hardware probe", probe.name)

    try:
        with PackageServiceClient(service_endpoint, timeout=config.timeout_seconds) as client:
            result = run_selection(
                probe,
                client,
                environment,
                secret,
                filter=config.filter,
                variable_name=config.variable_name,
            )
    except OsdpkgError as e:
        fail(e)

    if dry_run:
        console.print(
            f"[dim]Dry run: would set {result.variable_name} = {result.package_id}[/]"
        )
    else:
        print_success(f"Set {result.variable_name} to {result.package_id}")
    console.print(
        f"  {result.package.name} [muted]({result.match_count} matching packages)[/]"
    )

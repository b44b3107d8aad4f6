"""Selector configuration and settings.

Settings can live in ~/.config/osdpkg/config.toml so task sequence steps
only need to pass what differs per deployment. Command line options
override file values.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from osdpkg.core.paths import get_config_path
from osdpkg.errors import ConfigError, ConfigParseError
from osdpkg.logs.cmtrace import DEFAULT_COMPONENT, DEFAULT_LOG_FILE_NAME
from osdpkg.tsenv.base import DOWNLOAD_PACKAGES_VARIABLE


class SelectorConfig(BaseModel):
    """Configuration for a selection run.

    Attributes:
        endpoint: URI of the package catalog web service.
        secret_key: Shared secret accepted by the service.
        filter: Server-side catalog filter (empty = all packages).
        variable_name: Task sequence variable receiving the package identifier.
        log_file_name: Name of the CMTrace log file.
        component: Component name written to the log.
        timeout_seconds: HTTP timeout for the catalog call.
    """

    model_config = ConfigDict(extra="forbid")

    endpoint: Annotated[
        str | None,
        Field(description="Package catalog web service URI"),
    ] = None
    secret_key: Annotated[
        str | None,
        Field(description="Shared secret for the web service"),
    ] = None
    filter: Annotated[
        str,
        Field(description="Server-side package filter"),
    ] = ""
    variable_name: Annotated[
        str,
        Field(min_length=1, description="Task sequence variable to publish to"),
    ] = DOWNLOAD_PACKAGES_VARIABLE
    log_file_name: Annotated[
        str,
        Field(min_length=1, description="CMTrace log file name"),
    ] = DEFAULT_LOG_FILE_NAME
    component: Annotated[
        str,
        Field(min_length=1, description="Log component name"),
    ] = DEFAULT_COMPONENT
    timeout_seconds: Annotated[
        int,
        Field(ge=1, le=600, description="HTTP timeout in seconds (1-600)"),
    ] = 30

    def merged(self, **overrides: Any) -> "SelectorConfig":
        """Return a copy with non-None overrides applied."""
        updates = {key: value for key, value in overrides.items() if value is not None}
        return SelectorConfig.model_validate({**self.model_dump(), **updates})

    def require_service(self) -> tuple[str, str]:
        """Return the endpoint and secret key, which a run cannot do without.

        Raises:
            ConfigError: If either is missing.
        """
        if not self.endpoint or not self.secret_key:
            missing = [name for name in ("endpoint", "secret_key") if not getattr(self, name)]
            msg = f"Missing required setting(s): {', '.join(missing)}"
            raise ConfigError(msg)
        return self.endpoint, self.secret_key


def load_config(path: Path | None = None) -> SelectorConfig:
    """Load selector configuration from a TOML file.

    A missing file yields the defaults.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated SelectorConfig object.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return SelectorConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    try:
        return SelectorConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e


def save_config(config: SelectorConfig, path: Path | None = None) -> Path:
    """Save selector configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The SelectorConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    # TOML has no null, so unset values are left out
    data = config.model_dump(exclude_none=True)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path

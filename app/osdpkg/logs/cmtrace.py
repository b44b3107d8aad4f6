"""CMTrace log file output.

Log records are appended in the structured format read by CMTrace and the
task sequence log viewers:

    <![LOG[message]LOG]!><time="HH:MM:SS.mmm+BIAS" date="MM-DD-YYYY"
    component="..." context="..." type="N" thread="PID" file="">

Severity type is 1 (information), 2 (warning) or 3 (error).
"""

from __future__ import annotations

import getpass
import logging
import tempfile
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from osdpkg.tsenv.base import LOG_PATH_VARIABLE

if TYPE_CHECKING:
    from osdpkg.tsenv.base import TaskSequenceEnvironment

DEFAULT_LOG_FILE_NAME = "OSDPackageSelector.log"
DEFAULT_COMPONENT = "OSDPackageSelector"

# Root logger of the application; handlers attach here
PACKAGE_LOGGER = "osdpkg"

SEVERITY_INFO = 1
SEVERITY_WARNING = 2
SEVERITY_ERROR = 3

# Closes the message field; CMTrace has no escape for it
MESSAGE_TERMINATOR = "]LOG]!>"
ESCAPED_TERMINATOR = "]LOG]!&gt;"


def severity_for(levelno: int) -> int:
    """Map a logging level to a CMTrace severity type."""
    if levelno >= logging.ERROR:
        return SEVERITY_ERROR
    if levelno >= logging.WARNING:
        return SEVERITY_WARNING
    return SEVERITY_INFO


def _current_user() -> str:
    try:
        return getpass.getuser()
    except OSError:
        return ""


class CMTraceFormatter(logging.Formatter):
    """Formatter producing CMTrace log lines.

    Args:
        component: Component name shown in the log viewer.
        context: Execution context; defaults to the current user name.
    """

    def __init__(self, component: str = DEFAULT_COMPONENT, context: str | None = None) -> None:
        super().__init__()
        self.component = component
        self.context = _current_user() if context is None else context

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        message = message.replace(MESSAGE_TERMINATOR, ESCAPED_TERMINATOR)

        created = datetime.fromtimestamp(record.created).astimezone()
        offset = created.utcoffset()
        # Bias is UTC minus local time, in minutes
        bias = -int(offset.total_seconds() // 60) if offset is not None else 0
        time_str = f"{created:%H:%M:%S}.{created.microsecond // 1000:03d}{bias:+04d}"

        return (
            f"<![LOG[{message}]LOG]!>"
            f'<time="{time_str}" '
            f'date="{created:%m-%d-%Y}" '
            f'component="{self.component}" '
            f'context="{self.context}" '
            f'type="{severity_for(record.levelno)}" '
            f'thread="{record.process}" '
            f'file="">'
        )


class CMTraceHandler(logging.FileHandler):
    """Appending file handler writing CMTrace lines."""

    def __init__(self, path: Path, component: str = DEFAULT_COMPONENT) -> None:
        super().__init__(path, mode="a", encoding="utf-8")
        self.setFormatter(CMTraceFormatter(component))


def resolve_log_dir(environment: TaskSequenceEnvironment | None = None) -> Path:
    """Determine the directory log files are written to.

    Uses the task sequence log path when a task sequence provides one,
    otherwise the system temporary directory.

    Args:
        environment: Task sequence environment, if one is available.

    Returns:
        Log directory path.
    """
    if environment is not None:
        log_path = environment.get(LOG_PATH_VARIABLE)
        if log_path:
            return Path(log_path)
    return Path(tempfile.gettempdir())


def configure_logging(
    log_dir: Path,
    file_name: str = DEFAULT_LOG_FILE_NAME,
    component: str = DEFAULT_COMPONENT,
    verbose: bool = False,
) -> Path:
    """Attach a CMTrace file handler to the application logger.

    Any handler from an earlier call is replaced.

    Args:
        log_dir: Directory holding the log file.
        file_name: Log file name.
        component: Component name written with every record.
        verbose: Also log debug records.

    Returns:
        Path of the log file.

    Raises:
        OSError: If the log file cannot be opened.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, CMTraceHandler):
            logger.removeHandler(handler)
            handler.close()

    log_dir.mkdir(parents=True, exist_ok=True)
    path = log_dir / file_name
    logger.addHandler(CMTraceHandler(path, component))
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return path

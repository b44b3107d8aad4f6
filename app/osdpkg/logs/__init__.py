"""CMTrace-format logging."""

from osdpkg.logs.cmtrace import (
    DEFAULT_COMPONENT,
    DEFAULT_LOG_FILE_NAME,
    CMTraceFormatter,
    CMTraceHandler,
    configure_logging,
    resolve_log_dir,
)

__all__ = [
    "DEFAULT_COMPONENT",
    "DEFAULT_LOG_FILE_NAME",
    "CMTraceFormatter",
    "CMTraceHandler",
    "configure_logging",
    "resolve_log_dir",
]

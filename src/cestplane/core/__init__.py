"""Core module exports."""

from cestplane.core.errors import (
    CestPlaneError,
    ConfigError,
    CoverageError,
    ErrorCode,
    ExecutionError,
    InternalError,
)
from cestplane.core.logging import (
    bind_run_id,
    clear_run_id,
    configure_logging,
    get_run_id,
)

__all__ = [
    # Errors
    "CestPlaneError",
    "ConfigError",
    "CoverageError",
    "ErrorCode",
    "ExecutionError",
    "InternalError",
    # Logging
    "bind_run_id",
    "clear_run_id",
    "configure_logging",
    "get_run_id",
]

"""Config module exports."""

from cestplane.config.loader import load_config
from cestplane.config.models import (
    CestPlaneConfig,
    DebugSessionConfig,
    DiscoveryConfig,
    ExecutionConfig,
    LoggingConfig,
    RunnerConfig,
)
from cestplane.config.store import ConfigStore

__all__ = [
    "load_config",
    "CestPlaneConfig",
    "ConfigStore",
    "DebugSessionConfig",
    "DiscoveryConfig",
    "ExecutionConfig",
    "LoggingConfig",
    "RunnerConfig",
]

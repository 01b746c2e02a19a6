"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (CESTPLANE__SECTION__KEY)
3. Workspace YAML (.cestplane/config.yaml)
4. Global YAML (~/.config/cestplane/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    CESTPLANE__<SECTION>__<KEY>=<VALUE>

Examples:
    CESTPLANE__LOGGING__LEVEL=DEBUG
    CESTPLANE__RUNNER__CODECEPT=vendor/bin/codecept
    CESTPLANE__RUNNER__VIEW_MODE=directories
    CESTPLANE__DISCOVERY__DEBOUNCE_SEC=1.0
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
ViewMode = Literal["suites", "directories"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        CESTPLANE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ArgsConfig(BaseModel):
    """Extra arguments inserted into the codecept command line.

    Blank entries are dropped when the command is built.
    """

    additional: list[str] = Field(
        default_factory=list,
        description="Always appended after mode arguments.",
    )
    debug: list[str] = Field(
        default_factory=list,
        description="Only in debug or coverage mode.",
    )
    coverage: list[str] = Field(
        default_factory=lambda: ["--coverage", "--coverage-xml", "--coverage-html"],
        description="Only in coverage mode.",
    )
    run: list[str] = Field(
        default_factory=list,
        description="Appended after the -c config flag.",
    )


class PatternConfig(BaseModel):
    """Glob patterns, relative to the workspace root. Brace alternatives allowed."""

    test_file: str = Field(
        default="**/*{Cest,Test}.php",
        description="Files considered for test discovery.",
    )
    config_file: str = Field(
        default="**/codeception*.{yml,yaml}",
        description="Codeception configuration documents.",
    )


class CoverageReportConfig(BaseModel):
    """Coverage report locations. ``${workspaceFolder}`` is substituted."""

    xml_file_path: str = Field(
        default="${workspaceFolder}/tests/_output/coverage.xml",
        description="Clover XML report produced by a coverage run.",
    )
    html_file_path: str = Field(
        default="${workspaceFolder}/tests/_output/coverage/index.html",
        description="HTML report, shown to the user only.",
    )


class RunnerConfig(BaseModel):
    """Codeception runner configuration.

    Env vars:
        CESTPLANE__RUNNER__CODECEPT: Path to the codecept executable
        CESTPLANE__RUNNER__COMMAND: Run command template
        CESTPLANE__RUNNER__DEBUG_COMMAND: Debug/coverage command template
        CESTPLANE__RUNNER__VIEW_MODE: suites | directories
        CESTPLANE__RUNNER__USE_NEAREST_CONFIG_FILE: Walk up for codeception.yml
    """

    codecept: str = Field(
        default="vendor/bin/codecept",
        description="Codeception executable, relative to the workspace or absolute.",
    )
    command: str = Field(
        default="php",
        description="Base command for plain runs. May contain ${workspaceFolder}.",
    )
    debug_command: str = Field(
        default="php -dxdebug.mode=debug,coverage -dxdebug.start_with_request=yes",
        description="Base command for debug and coverage runs. May contain ${workspaceFolder}.",
    )
    args: ArgsConfig = Field(default_factory=ArgsConfig)
    pattern: PatternConfig = Field(default_factory=PatternConfig)
    coverage: CoverageReportConfig = Field(default_factory=CoverageReportConfig)
    path_mapping: dict[str, str] = Field(
        default_factory=dict,
        description="Remote path prefix -> local path. Used to remap coverage report paths.",
    )
    use_nearest_config_file: bool = Field(
        default=False,
        description="Use the codeception.yml closest to each test file instead of the root one.",
    )
    disable_running_single_test_cases: bool = Field(
        default=False,
        description="Only whole classes are run. Partial class results count as passed.",
    )
    view_mode: ViewMode = Field(
        default="suites",
        description="Group tests by Codeception suite or by directory.",
    )


class ExecutionConfig(BaseModel):
    """Subprocess execution configuration.

    Env vars:
        CESTPLANE__EXECUTION__TIMEOUT_SEC: Per-target timeout, unset for none
    """

    env: dict[str, str] = Field(
        default_factory=dict,
        description="Variables layered over the inherited process environment.",
    )
    timeout_sec: float | None = Field(
        default=None,
        description="Kill a target's process after this many seconds.",
    )

    @field_validator("timeout_sec")
    @classmethod
    def validate_timeout(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError(f"timeout_sec must be positive, got {v}")
        return v


class DebugSessionConfig(BaseModel):
    """External debug listener started before debug and coverage runs.

    Env vars:
        CESTPLANE__DEBUG_SESSION__START_COMMAND: Command that starts the listener
        CESTPLANE__DEBUG_SESSION__STOP_COMMAND: Command that stops it
    """

    start_command: str = Field(
        default="",
        description="Listener start command. Empty means no external session is managed.",
    )
    stop_command: str = Field(default="", description="Listener stop command.")
    start_delay_sec: float = Field(
        default=2.0,
        description="Wait after start before the first test command runs.",
    )
    stop_delay_sec: float = Field(
        default=1.0,
        description="Wait after stop for the listener to terminate.",
    )


class DiscoveryConfig(BaseModel):
    """Test discovery configuration.

    Env vars:
        CESTPLANE__DISCOVERY__DEBOUNCE_SEC: Rediscovery debounce window
    """

    debounce_sec: float = Field(
        default=0.5,
        description="Quiet period after the last file change before rediscovery.",
    )


class CestPlaneConfig(BaseModel):
    """Root configuration for CestPlane.

    All settings can be configured via:
    1. Environment variables: CESTPLANE__SECTION__KEY
    2. YAML config files (workspace or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    runner: RunnerConfig = Field(default_factory=RunnerConfig)
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)
    debug_session: DebugSessionConfig = Field(default_factory=DebugSessionConfig)
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)

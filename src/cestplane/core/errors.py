"""CestPlane error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 6xxx: Execution
- 7xxx: Coverage
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_MISSING_REQUIRED = 2003
    CONFIG_FILE_NOT_FOUND = 2004

    # Execution (6xxx)
    EXECUTION_RUN_IN_PROGRESS = 6001

    # Coverage (7xxx)
    COVERAGE_FILE_NOT_FOUND = 7001
    COVERAGE_NOT_A_FILE = 7002
    COVERAGE_FILE_EMPTY = 7003
    COVERAGE_INVALID_FORMAT = 7004

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class CestPlaneError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(CestPlaneError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def missing_required(cls, field: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_MISSING_REQUIRED,
            message=f"Missing required config field: {field}",
            details={"field": field},
        )

    @classmethod
    def missing_executable(cls) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_MISSING_REQUIRED,
            message="Codeception executable path is not configured",
            details={"field": "runner.codecept"},
        )

    @classmethod
    def missing_command(cls, mode: str) -> "ConfigError":
        """Selected command template is empty. ``mode`` is 'Run' or 'Debug'."""
        field = "runner.debug_command" if mode == "Debug" else "runner.command"
        return cls(
            code=ErrorCode.CONFIG_MISSING_REQUIRED,
            message=f"{mode} command is not configured",
            details={"field": field, "mode": mode},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class ExecutionError(CestPlaneError):
    """Test execution errors."""

    @classmethod
    def run_in_progress(cls) -> "ExecutionError":
        return cls(
            code=ErrorCode.EXECUTION_RUN_IN_PROGRESS,
            message="A test run is already in progress",
            retryable=True,
        )


class CoverageError(CestPlaneError):
    """Coverage report loading errors."""

    @classmethod
    def file_not_found(cls, path: str) -> "CoverageError":
        return cls(
            code=ErrorCode.COVERAGE_FILE_NOT_FOUND,
            message=f"Coverage file not found: {path}",
            details={"path": path},
        )

    @classmethod
    def not_a_file(cls, path: str) -> "CoverageError":
        return cls(
            code=ErrorCode.COVERAGE_NOT_A_FILE,
            message=f"Coverage path is not a file: {path}",
            details={"path": path},
        )

    @classmethod
    def file_empty(cls, path: str) -> "CoverageError":
        return cls(
            code=ErrorCode.COVERAGE_FILE_EMPTY,
            message=f"Coverage file is empty: {path}",
            details={"path": path},
        )

    @classmethod
    def invalid_format(cls, path: str, reason: str) -> "CoverageError":
        return cls(
            code=ErrorCode.COVERAGE_INVALID_FORMAT,
            message=f"Invalid coverage file format: {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class InternalError(CestPlaneError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )

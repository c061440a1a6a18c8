"""covwire error types with typed error codes.

Error code ranges:
- 1xxx: Identity
- 2xxx: Config
- 3xxx: Source I/O
- 4xxx: Transport
- 5xxx: Report
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Identity (1xxx)
    IDENTITY_UNDETERMINABLE = 1001

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Source I/O (3xxx)
    SOURCE_UNREADABLE = 3001

    # Transport (4xxx)
    TRANSPORT_REQUEST_FAILED = 4001

    # Report (5xxx)
    REPORT_SEALED = 5001


@dataclass(frozen=True, slots=True)
class CovwireError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class IdentityError(CovwireError):
    """No repo token and no CI environment to attribute the report to."""

    @classmethod
    def undeterminable(cls) -> "IdentityError":
        return cls(
            code=ErrorCode.IDENTITY_UNDETERMINABLE,
            message=(
                "No repo token supplied and no CI service detected; "
                "set COVERALLS_REPO_TOKEN or run inside a supported CI"
            ),
        )


class ConfigError(CovwireError):
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


class SourceReadError(CovwireError):
    """A source file could not be opened or fully read."""

    @classmethod
    def unreadable(cls, path: str, reason: str) -> "SourceReadError":
        return cls(
            code=ErrorCode.SOURCE_UNREADABLE,
            message=f"Cannot read source file {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class TransportError(CovwireError):
    """Submission failed below the HTTP layer (connect, TLS, timeout)."""

    @classmethod
    def request_failed(cls, url: str, reason: str) -> "TransportError":
        return cls(
            code=ErrorCode.TRANSPORT_REQUEST_FAILED,
            message=f"Request to {url} failed: {reason}",
            details={"url": url, "reason": reason},
        )


class ReportSealedError(CovwireError):
    """A report was modified after serialization began."""

    @classmethod
    def sealed(cls, operation: str) -> "ReportSealedError":
        return cls(
            code=ErrorCode.REPORT_SEALED,
            message=f"Cannot {operation}: report has already been serialized",
            details={"operation": operation},
        )

"""Core module exports."""

from covwire.core.errors import (
    ConfigError,
    CovwireError,
    ErrorCode,
    IdentityError,
    ReportSealedError,
    SourceReadError,
    TransportError,
)
from covwire.core.logging import (
    clear_run_id,
    configure_logging,
    get_run_id,
    set_run_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "CovwireError",
    "ErrorCode",
    "IdentityError",
    "ReportSealedError",
    "SourceReadError",
    "TransportError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_run_id",
    "set_run_id",
]

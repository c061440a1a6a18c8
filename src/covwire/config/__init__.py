"""Config module exports."""

from covwire.config.loader import load_config, resolve_repo_token
from covwire.config.models import (
    CovwireConfig,
    LoggingConfig,
    LogOutputConfig,
    ReportConfig,
    UploadConfig,
)

__all__ = [
    "load_config",
    "resolve_repo_token",
    "CovwireConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "ReportConfig",
    "UploadConfig",
]

"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (COVWIRE__SECTION__KEY)
3. Repo YAML (.covwire.yml)
4. Global YAML (~/.config/covwire/config.yaml)
5. Built-in defaults (this file)

Examples:
    COVWIRE__LOGGING__LEVEL=DEBUG
    COVWIRE__UPLOAD__MAX_POLLS=30
    COVWIRE__REPORT__INCLUDE_SOURCE=true
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from covwire.config.constants import DEFAULT_ENDPOINT

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

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
        COVWIRE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(default="INFO", description="Root log level.")
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class UploadConfig(BaseModel):
    """Upload and status polling configuration.

    Env vars:
        COVWIRE__UPLOAD__ENDPOINT: Jobs endpoint URL
        COVWIRE__UPLOAD__TIMEOUT_SEC: HTTP timeout per request
        COVWIRE__UPLOAD__POLL_INTERVAL_SEC: Delay between status polls
        COVWIRE__UPLOAD__MAX_POLLS: Polls before giving up on a terminal status
    """

    endpoint: str = Field(
        default=DEFAULT_ENDPOINT,
        description="Jobs endpoint of the ingestion service.",
    )
    timeout_sec: float = Field(
        default=30.0,
        description="HTTP timeout for the upload request.",
    )
    poll_interval_sec: float = Field(
        default=1.0,
        description="Delay between status polls.",
    )
    max_polls: int = Field(
        default=10,
        description="Maximum status polls. The upload itself is never retried.",
    )

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Endpoint must be an http(s) URL, got {v}")
        return v

    @field_validator("max_polls")
    @classmethod
    def validate_max_polls(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_polls must be at least 1, got {v}")
        return v


class ReportConfig(BaseModel):
    """Report building configuration.

    Env vars:
        COVWIRE__REPORT__INCLUDE_SOURCE: Embed raw file contents in the payload
        COVWIRE__REPORT__SERVICE_NAME: Force a CI service instead of sniffing
    """

    include_source: bool = Field(
        default=False,
        description="Embed raw source text. Only needed for manual repos.",
    )
    service_name: str | None = Field(
        default=None,
        description="CI service literal (travis-ci, circle-ci, ...). "
        "None means autodetect from the environment.",
    )


class CovwireConfig(BaseModel):
    """Root configuration for covwire."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    upload: UploadConfig = Field(default_factory=UploadConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)

"""Upload outcome derived from a transport status code."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from covwire.core.errors import TransportError

HTTP_OK = 200
NO_RESPONSE = 0
"""Status code a transport reports before any response has arrived."""


class UploadState(StrEnum):
    SUCCEEDED = "succeeded"
    PENDING = "pending"
    FAILED = "failed"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class UploadStatus:
    """State of an upload. ``http_code`` is set only for FAILED."""

    state: UploadState
    http_code: int | None = None

    @classmethod
    def succeeded(cls) -> UploadStatus:
        return cls(UploadState.SUCCEEDED)

    @classmethod
    def pending(cls) -> UploadStatus:
        return cls(UploadState.PENDING)

    @classmethod
    def failed(cls, http_code: int) -> UploadStatus:
        return cls(UploadState.FAILED, http_code)

    @classmethod
    def unknown(cls) -> UploadStatus:
        return cls(UploadState.UNKNOWN)

    @property
    def terminal(self) -> bool:
        """Succeeded and Failed end polling; Pending and Unknown do not."""
        return self.state in (UploadState.SUCCEEDED, UploadState.FAILED)

    def __str__(self) -> str:
        if self.state is UploadState.FAILED:
            return f"failed ({self.http_code})"
        return self.state.value


def classify(response_code: int | TransportError) -> UploadStatus:
    """Classify a status code, or a transport failure, into an UploadStatus.

    200 is success, 0 means no response yet, any other code is a failure
    carrying that code. A TransportError leaves the outcome unknown.
    """
    if isinstance(response_code, TransportError):
        return UploadStatus.unknown()
    if response_code == HTTP_OK:
        return UploadStatus.succeeded()
    if response_code == NO_RESPONSE:
        return UploadStatus.pending()
    return UploadStatus.failed(response_code)

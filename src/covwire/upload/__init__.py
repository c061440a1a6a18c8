"""Upload transport, status classification and polling."""

from covwire.upload.ops import poll_status, upload_report
from covwire.upload.status import UploadState, UploadStatus, classify
from covwire.upload.transport import HttpxTransport, Transport

__all__ = [
    "HttpxTransport",
    "Transport",
    "UploadState",
    "UploadStatus",
    "classify",
    "poll_status",
    "upload_report",
]

"""Serialize, submit, then poll until the upload reaches a terminal state."""

from __future__ import annotations

import time
from collections.abc import Callable

import structlog

from covwire.core.errors import TransportError
from covwire.report.models import CoverageReport
from covwire.report.serializer import to_json
from covwire.upload.status import UploadStatus, classify
from covwire.upload.transport import Transport

log = structlog.get_logger(__name__)


def poll_status(transport: Transport) -> UploadStatus:
    """Classify the transport's current status code."""
    try:
        code = transport.last_status_code()
    except TransportError as e:
        return classify(e)
    return classify(code)


def upload_report(
    report: CoverageReport,
    transport: Transport,
    *,
    poll_interval_sec: float = 1.0,
    max_polls: int = 10,
    sleep: Callable[[float], None] = time.sleep,
) -> UploadStatus:
    """Upload a report once and poll its status.

    Polling stops at the first Succeeded or Failed status, or after
    ``max_polls`` polls, in which case the last (Pending or Unknown) status
    is returned. The submission itself is never retried.

    Raises:
        TransportError: If the submission fails.
    """
    payload = to_json(report)
    log.info("upload_started", sources=len(report.sources), size=len(payload))
    transport.submit(payload)

    status = UploadStatus.unknown()
    for attempt in range(1, max_polls + 1):
        status = poll_status(transport)
        log.debug("upload_polled", attempt=attempt, status=str(status))
        if status.terminal:
            break
        if attempt < max_polls:
            sleep(poll_interval_sec)
    else:
        log.warning("upload_unconfirmed", polls=max_polls, status=str(status))
        return status

    log.info("upload_finished", status=str(status))
    return status

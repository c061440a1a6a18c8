"""Transport used to hand a serialized report to the ingestion service."""

from __future__ import annotations

from typing import Protocol

import httpx
import structlog

from covwire.config.constants import DEFAULT_ENDPOINT, UPLOAD_FIELD_NAME, UPLOAD_FILE_NAME
from covwire.core.errors import TransportError
from covwire.upload.status import NO_RESPONSE

log = structlog.get_logger(__name__)


class Transport(Protocol):
    """What the upload driver needs from a transport."""

    def submit(self, payload: bytes) -> None:
        """Send the payload.

        Raises:
            TransportError: If the request could not be completed.
        """
        ...

    def last_status_code(self) -> int:
        """HTTP status of the last submission, 0 if none has arrived.

        Raises:
            TransportError: If the last submission failed at the transport level.
        """
        ...


class HttpxTransport:
    """Multipart upload of the report to the jobs endpoint."""

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        *,
        timeout_sec: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._client = client or httpx.Client(timeout=timeout_sec)
        self._owns_client = client is None
        self._status_code = NO_RESPONSE
        self._error: TransportError | None = None
        self._response_body: str | None = None

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def response_body(self) -> str | None:
        """Body of the last response, for error reporting."""
        return self._response_body

    def submit(self, payload: bytes) -> None:
        self._status_code = NO_RESPONSE
        self._error = None
        self._response_body = None
        files = {UPLOAD_FIELD_NAME: (UPLOAD_FILE_NAME, payload, "application/json")}
        try:
            response = self._client.post(self._endpoint, files=files)
        except httpx.RequestError as e:
            self._error = TransportError.request_failed(self._endpoint, str(e) or type(e).__name__)
            log.warning("upload_request_failed", endpoint=self._endpoint, error=str(self._error))
            raise self._error from e

        self._status_code = response.status_code
        self._response_body = response.text
        log.debug("upload_response", endpoint=self._endpoint, status=response.status_code)

    def last_status_code(self) -> int:
        if self._error is not None:
            raise self._error
        return self._status_code

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpxTransport:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

"""httpx-based submitter for the document creation endpoint."""

from __future__ import annotations

import logging
import time

import httpx

from crpt_client.adapters.submitter.base import AbstractSubmitter
from crpt_client.core.errors import ProtocolError, TransportError
from crpt_client.schemas.submission import CreateDocumentRequest, SubmissionResponse

logger = logging.getLogger(__name__)

SUCCESS_STATUSES = frozenset({200, 201})


class HttpxSubmitter(AbstractSubmitter):
    """Synchronous submitter using a shared httpx.Client.

    The client is safe to share across the threads the admission gate lets
    through.
    """

    def __init__(
        self,
        base_url: str,
        create_document_path: str = "/api/v3/lk/documents/create",
        timeout_seconds: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: Scheme and host of the registry API.
            create_document_path: Path of the creation endpoint.
            timeout_seconds: Timeout for each request in seconds.
            transport: Optional transport override (tests use httpx.MockTransport).
        """
        self.client = httpx.Client(
            base_url=base_url,
            timeout=timeout_seconds,
            transport=transport,
        )
        self.create_document_path = create_document_path

    def send(
        self,
        request: CreateDocumentRequest,
        *,
        token: str,
        product_group: str,
    ) -> SubmissionResponse:
        """POST the request and map the outcome.

        Raises:
            TransportError: On connection errors and timeouts.
            ProtocolError: On any status other than 200 and 201.
        """
        start = time.perf_counter()
        try:
            response = self.client.post(
                self.create_document_path,
                params={"pg": product_group},
                headers={"Authorization": f"Bearer {token}"},
                json=request.model_dump(),
            )
        except httpx.HTTPError as exc:
            logger.warning(
                "submission.transport_error",
                extra={"error_type": type(exc).__name__, "product_group": product_group},
            )
            raise TransportError(
                code="transport_error",
                message=f"Registry request failed: {exc}",
                details={"url": str(exc.request.url) if _has_request(exc) else ""},
            ) from exc

        duration_ms = (time.perf_counter() - start) * 1000

        if response.status_code not in SUCCESS_STATUSES:
            logger.warning(
                "submission.rejected",
                extra={
                    "http_status": response.status_code,
                    "product_group": product_group,
                    "duration_ms": round(duration_ms, 2),
                },
            )
            raise ProtocolError(
                code="protocol_error",
                message=(
                    f"Registry answered with status {response.status_code}. "
                    f"Response body: {response.text}"
                ),
                details={
                    "http_status": response.status_code,
                    "response_body": response.text,
                },
            )

        logger.info(
            "submission.sent",
            extra={
                "http_status": response.status_code,
                "product_group": product_group,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return SubmissionResponse(status_code=response.status_code, body=response.text)

    def close(self) -> None:
        self.client.close()


def _has_request(exc: httpx.HTTPError) -> bool:
    # HTTPError.request raises RuntimeError when the error was built without one.
    try:
        exc.request
    except RuntimeError:
        return False
    return True

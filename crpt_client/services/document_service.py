"""Document submission service.

Submits goods introduction documents to the registry while keeping the
request rate under the configured limit. It handles:
- Admission: every call blocks on the gate until a slot is granted
- Payload building: document JSON and signature are base64-encoded
- Delivery: the submitter performs the HTTP call outside any gate lock
- Correlation: each call gets a submission id for its log lines

Submitter errors reach the caller unchanged. Nothing is retried here.
"""

from __future__ import annotations

import logging
import uuid

from crpt_client.adapters.rate_limit.base import AbstractAdmissionGate
from crpt_client.adapters.rate_limit.factory import create_admission_gate
from crpt_client.adapters.rate_limit.scheduler import ShutdownReport
from crpt_client.adapters.submitter.base import AbstractSubmitter
from crpt_client.adapters.submitter.factory import create_submitter
from crpt_client.core.config import Settings, settings as default_settings
from crpt_client.core.errors import AppError
from crpt_client.core.logging import clear_submission_id, set_submission_id
from crpt_client.schemas.document import Document
from crpt_client.schemas.submission import CreateDocumentRequest, SubmissionResponse

logger = logging.getLogger(__name__)


class DocumentClient:
    """Rate-limited client for the document creation endpoint.

    Safe to share between threads. Up to ``request_limit`` submissions may be
    in flight at once; further callers block in create_document() until the
    gate grants them a slot.
    """

    def __init__(
        self,
        gate: AbstractAdmissionGate,
        submitter: AbstractSubmitter,
        *,
        document_format: str = "MANUAL",
        document_type: str = "LP_INTRODUCE_GOODS",
    ) -> None:
        self.gate = gate
        self.submitter = submitter
        self.document_format = document_format
        self.document_type = document_type

    def create_document(
        self,
        document: Document,
        signature: str,
        token: str,
        product_group: str,
    ) -> SubmissionResponse:
        """Submit a document once the gate admits the call.

        Args:
            document: Document to register.
            signature: Detached signature of the document.
            token: Bearer token of the participant.
            product_group: Product group (sent as the ``pg`` query parameter).

        Returns:
            SubmissionResponse from the registry.

        Raises:
            GateClosedError: If the client was closed before a slot was granted.
            TransportError: If the registry could not be reached.
            ProtocolError: If the registry rejected the document.
        """
        submission_id = str(uuid.uuid4())
        set_submission_id(submission_id)
        try:
            grant = self.gate.acquire()
            logger.debug("submission.admitted", extra={"grant_sequence": grant.sequence})

            request = CreateDocumentRequest.from_document(
                document,
                signature,
                document_format=self.document_format,
                document_type=self.document_type,
            )
            try:
                return self.submitter.send(request, token=token, product_group=product_group)
            except AppError as exc:
                logger.warning(
                    "submission.failed",
                    extra={
                        "grant_sequence": grant.sequence,
                        "error_code": exc.code,
                        "http_status": (exc.details or {}).get("http_status"),
                    },
                )
                raise
        finally:
            clear_submission_id()

    def close(self, grace_seconds: float | None = None) -> ShutdownReport:
        """Close the gate, then the submitter.

        Returns:
            ShutdownReport from the gate; repeated calls return the same report.
        """
        try:
            return self.gate.close(grace_seconds)
        finally:
            self.submitter.close()

    def __enter__(self) -> "DocumentClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def create_document_client(settings: Settings | None = None) -> DocumentClient:
    """Wire a DocumentClient from configuration.

    Args:
        settings: Optional settings container; defaults to the global settings.

    Returns:
        DocumentClient with a fixed-delay gate and an httpx submitter.
    """
    cfg = settings or default_settings
    submitter = create_submitter(cfg.api)
    gate = create_admission_gate(cfg.gate)
    return DocumentClient(
        gate,
        submitter,
        document_format=cfg.api.document_format,
        document_type=cfg.api.document_type,
    )

"""Tests for the concurrent demo driver."""

import itertools
import threading

from crpt_client.adapters.rate_limit import FixedDelayAdmissionGate, GateState
from crpt_client.adapters.submitter import AbstractSubmitter
from crpt_client.core.errors import ProtocolError
from crpt_client.main import run_demo
from crpt_client.schemas import CreateDocumentRequest, SubmissionResponse
from crpt_client.services.document_service import DocumentClient


class AlternatingSubmitter(AbstractSubmitter):
    """Accepts every other submission."""

    def __init__(self) -> None:
        self._counter = itertools.count()
        self._lock = threading.Lock()

    def send(
        self,
        request: CreateDocumentRequest,
        *,
        token: str,
        product_group: str,
    ) -> SubmissionResponse:
        with self._lock:
            n = next(self._counter)
        if n % 2:
            raise ProtocolError(code="protocol_error", message="rejected")
        return SubmissionResponse(status_code=200)


def test_run_demo_submits_everything_and_closes_client() -> None:
    gate = FixedDelayAdmissionGate(request_limit=2, window_seconds=0.05)
    client = DocumentClient(gate, AlternatingSubmitter())

    results = run_demo(client, submissions=6)

    assert len(results) == 6
    assert sum(results) == 3
    assert gate.state is GateState.CLOSED

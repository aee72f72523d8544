"""Tests for the httpx submitter using httpx.MockTransport."""

import json

import httpx
import pytest

from crpt_client.adapters.submitter import HttpxSubmitter, create_submitter
from crpt_client.core.config import ApiSettings
from crpt_client.core.errors import InvalidConfigurationError, ProtocolError, TransportError
from crpt_client.schemas import CreateDocumentRequest, Document


def _request() -> CreateDocumentRequest:
    return CreateDocumentRequest.from_document(Document(doc_id="d-1"), "signature")


def _submitter(handler) -> HttpxSubmitter:
    return HttpxSubmitter(
        base_url="https://registry.test",
        transport=httpx.MockTransport(handler),
    )


class TestHttpxSubmitter:
    @pytest.mark.parametrize("status", [200, 201])
    def test_success_statuses_return_response(self, status: int) -> None:
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(status, text='{"value": "ok"}')

        with _submitter(handler) as submitter:
            response = submitter.send(_request(), token="tok-1", product_group="milk")

        assert response.status_code == status
        assert response.body == '{"value": "ok"}'

        sent = captured[0]
        assert sent.method == "POST"
        assert sent.url.path == "/api/v3/lk/documents/create"
        assert sent.url.params["pg"] == "milk"
        assert sent.headers["Authorization"] == "Bearer tok-1"
        assert sent.headers["Content-Type"] == "application/json"
        body = json.loads(sent.content)
        assert body["document_format"] == "MANUAL"
        assert body["type"] == "LP_INTRODUCE_GOODS"
        assert body["product_document"] == _request().product_document

    def test_other_status_raises_protocol_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403, text="forbidden")

        submitter = _submitter(handler)
        with pytest.raises(ProtocolError) as exc_info:
            submitter.send(_request(), token="t", product_group="pg")

        err = exc_info.value
        assert err.code == "protocol_error"
        assert err.details["http_status"] == 403
        assert err.details["response_body"] == "forbidden"
        assert "403" in str(err)
        submitter.close()

    def test_network_failure_raises_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        submitter = _submitter(handler)
        with pytest.raises(TransportError) as exc_info:
            submitter.send(_request(), token="t", product_group="pg")

        assert exc_info.value.code == "transport_error"
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert exc_info.value.details["url"].startswith("https://registry.test/")
        submitter.close()

    def test_timeout_raises_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        submitter = _submitter(handler)
        with pytest.raises(TransportError):
            submitter.send(_request(), token="t", product_group="pg")
        submitter.close()


class TestCreateSubmitter:
    def test_builds_httpx_submitter_from_settings(self) -> None:
        submitter = create_submitter(
            ApiSettings(
                base_url="https://registry.test",
                create_document_path="/custom/create",
                timeout_seconds=3.0,
            )
        )

        assert isinstance(submitter, HttpxSubmitter)
        assert submitter.create_document_path == "/custom/create"
        assert str(submitter.client.base_url).startswith("https://registry.test")
        submitter.close()

    @pytest.mark.parametrize("base_url", ["", "registry.test", "ftp://registry.test"])
    def test_invalid_base_url_rejected(self, base_url: str) -> None:
        with pytest.raises(InvalidConfigurationError):
            create_submitter(ApiSettings(base_url=base_url))

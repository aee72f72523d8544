"""Pydantic schemas for document creation requests and responses."""

from __future__ import annotations

import base64

from pydantic import BaseModel, Field

from crpt_client.schemas.document import Document


def _b64(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


class CreateDocumentRequest(BaseModel):
    """Body of the document creation call."""

    document_format: str = Field(
        default="MANUAL",
        description="How the document was produced.",
    )
    type: str = Field(
        default="LP_INTRODUCE_GOODS",
        description="Registry document type.",
    )
    product_document: str = Field(
        ...,
        description="Base64 of the document's JSON.",
    )
    signature: str = Field(
        ...,
        description="Base64 of the detached signature.",
    )

    @classmethod
    def from_document(
        cls,
        document: Document,
        signature: str,
        *,
        document_format: str = "MANUAL",
        document_type: str = "LP_INTRODUCE_GOODS",
    ) -> "CreateDocumentRequest":
        """Build a request, base64-encoding the document JSON and the signature.

        Args:
            document: Document to submit.
            signature: Signature string (encoded as UTF-8 before base64).
            document_format: Value of the document_format field.
            document_type: Value of the type field.

        Returns:
            CreateDocumentRequest ready to be sent.
        """
        return cls(
            document_format=document_format,
            type=document_type,
            product_document=_b64(document.to_json_bytes()),
            signature=_b64(signature.encode("utf-8")),
        )


class SubmissionResponse(BaseModel):
    """Successful answer from the registry."""

    status_code: int = Field(..., description="HTTP status (200 or 201).")
    body: str = Field(default="", description="Raw response body.")

"""Data-transfer models for documents and submissions."""

from crpt_client.schemas.document import Description, Document, Product
from crpt_client.schemas.submission import CreateDocumentRequest, SubmissionResponse

__all__ = [
    "CreateDocumentRequest",
    "Description",
    "Document",
    "Product",
    "SubmissionResponse",
]

"""Rate-limited client for the goods registry document API."""

from crpt_client.adapters.rate_limit import FixedDelayAdmissionGate, ShutdownReport
from crpt_client.core.errors import (
    AppError,
    GateClosedError,
    InvalidConfigurationError,
    ProtocolError,
    TransportError,
)
from crpt_client.schemas import Description, Document, Product, SubmissionResponse
from crpt_client.services.document_service import DocumentClient, create_document_client

__version__ = "0.1.0"

__all__ = [
    "AppError",
    "Description",
    "Document",
    "DocumentClient",
    "FixedDelayAdmissionGate",
    "GateClosedError",
    "InvalidConfigurationError",
    "Product",
    "ProtocolError",
    "ShutdownReport",
    "SubmissionResponse",
    "TransportError",
    "create_document_client",
]

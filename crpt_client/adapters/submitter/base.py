from abc import ABC, abstractmethod

from crpt_client.schemas.submission import CreateDocumentRequest, SubmissionResponse


class AbstractSubmitter(ABC):
    """Interface for clients that deliver create-document requests to the registry."""

    @abstractmethod
    def send(
        self,
        request: CreateDocumentRequest,
        *,
        token: str,
        product_group: str,
    ) -> SubmissionResponse:
        """Deliver a single create-document request.

        Args:
            request: Encoded request body.
            token: Bearer token of the participant.
            product_group: Product group the document belongs to.

        Returns:
            SubmissionResponse for a 200/201 answer.

        Raises:
            TransportError: If the endpoint could not be reached.
            ProtocolError: If the endpoint answered with another status.
        """
        ...

    def close(self) -> None:
        """Release underlying resources. No-op by default."""

    def __enter__(self) -> "AbstractSubmitter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

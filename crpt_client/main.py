"""Demo driver: submit a batch of documents concurrently through one client.

Run with ``python -m crpt_client.main``. The gate limit, window and endpoint
come from the usual GATE_* and CRPT_* environment variables.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor

from crpt_client.core.config import settings
from crpt_client.core.errors import AppError
from crpt_client.core.logging import configure_logging
from crpt_client.schemas.document import Document
from crpt_client.services.document_service import DocumentClient, create_document_client

logger = logging.getLogger(__name__)


def _submit_one(client: DocumentClient, index: int, token: str, product_group: str) -> bool:
    try:
        client.create_document(Document(), "signature", token, product_group)
    except AppError as exc:
        logger.info("demo.failed", extra={"index": index, "error_code": exc.code})
        return False
    logger.info("demo.success", extra={"index": index})
    return True


def run_demo(
    client: DocumentClient,
    *,
    submissions: int = 10,
    token: str = "token",
    product_group: str = "pg",
) -> list[bool]:
    """Submit ``submissions`` empty documents concurrently, then close the client.

    Returns:
        One success flag per submission, in submission order.
    """
    with ThreadPoolExecutor(max_workers=submissions, thread_name_prefix="submit") as pool:
        futures = [
            pool.submit(_submit_one, client, i, token, product_group)
            for i in range(submissions)
        ]
        results = [future.result() for future in futures]

    report = client.close()
    logger.info(
        "demo.finished",
        extra={
            "succeeded": sum(results),
            "failed": len(results) - sum(results),
            "clean_shutdown": report.clean,
        },
    )
    return results


def main() -> None:
    configure_logging(settings.log)
    run_demo(
        create_document_client(settings),
        submissions=int(os.getenv("DEMO_SUBMISSIONS", "10")),
        token=os.getenv("CRPT_TOKEN", "token"),
        product_group=os.getenv("CRPT_PRODUCT_GROUP", "pg"),
    )


if __name__ == "__main__":
    main()

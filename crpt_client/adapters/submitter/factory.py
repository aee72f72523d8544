"""Factory pattern for creating submitter instances."""

from urllib.parse import urlparse

from crpt_client.adapters.submitter.base import AbstractSubmitter
from crpt_client.adapters.submitter.httpx_client import HttpxSubmitter
from crpt_client.core.config import ApiSettings, settings
from crpt_client.core.errors import InvalidConfigurationError


def create_submitter(api_settings: ApiSettings | None = None) -> AbstractSubmitter:
    """Instantiate the registry submitter from configuration.

    Args:
        api_settings: Optional API settings; defaults to the global settings.

    Returns:
        AbstractSubmitter: Configured submitter instance.

    Raises:
        InvalidConfigurationError: If the base URL is missing or not http(s).
    """
    cfg = api_settings or settings.api

    parsed = urlparse(cfg.base_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidConfigurationError(
            code="invalid_configuration",
            message="CRPT_BASE_URL must be an absolute http(s) URL",
            details={"field": "base_url"},
        )

    return HttpxSubmitter(
        base_url=cfg.base_url,
        create_document_path=cfg.create_document_path,
        timeout_seconds=cfg.timeout_seconds,
    )

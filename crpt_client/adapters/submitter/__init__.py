"""Submitter adapter layer - delivers encoded documents to the registry."""

from crpt_client.adapters.submitter.base import AbstractSubmitter
from crpt_client.adapters.submitter.factory import create_submitter
from crpt_client.adapters.submitter.httpx_client import HttpxSubmitter

__all__ = [
    "AbstractSubmitter",
    "HttpxSubmitter",
    "create_submitter",
]

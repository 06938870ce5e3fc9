"""Utility functions and helpers for snykclient."""

from snykclient.utils.http_client import (
    create_http_client,
    create_retry_decorator,
    handle_response,
    is_retryable,
)
from snykclient.utils.logger_setup import setup_logging

__all__ = [
    "create_http_client",
    "create_retry_decorator",
    "handle_response",
    "is_retryable",
    "setup_logging",
]

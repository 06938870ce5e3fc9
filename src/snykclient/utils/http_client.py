"""HTTP client utilities for snykclient."""

from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

import httpx
from loguru import logger
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from snykclient.config import RetryPolicy
from snykclient.exceptions import ApiError, SnykError, TransportError

RATE_LIMITED = 429


@asynccontextmanager
async def create_http_client(
    base_url: str,
    headers: dict[str, str] | None = None,
    timeout: int = 30,
    **kwargs: Any,
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Create an async HTTP client bound to the API base URL.

    Args:
        base_url: Base URL that relative request paths are joined to.
        headers: Headers sent with every request.
        timeout: Request timeout in seconds.
        **kwargs: Additional arguments passed to httpx.AsyncClient.

    Yields:
        Configured httpx.AsyncClient instance.
    """
    # Remove timeout from kwargs if accidentally passed there too
    kwargs.pop("timeout", None)

    async with httpx.AsyncClient(
        base_url=base_url,
        headers=headers,
        timeout=httpx.Timeout(timeout),
        follow_redirects=True,
        **kwargs,
    ) as client:
        yield client


def error_message(value: Any) -> str:
    """Render an embedded ``error`` field as an exception message.

    Object-shaped errors such as ``{"code": 401, "message": "..."}`` are
    reported by their message; anything else is stringified.
    """
    if isinstance(value, dict) and isinstance(value.get("message"), str):
        return value["message"]
    return str(value)


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as e:
        raise TransportError(
            f"Invalid JSON in HTTP {response.status_code} response: {e}",
            response.status_code,
        ) from e


async def handle_response(response: httpx.Response) -> Any:
    """Handle HTTP response and raise appropriate exceptions.

    Args:
        response: httpx Response object.

    Returns:
        Decoded JSON response data, or None for an empty body.

    Raises:
        ApiError: Non-2xx response whose body embeds an ``error`` field.
        TransportError: Any other non-2xx response, or an undecodable body.
    """
    if response.is_success:
        return _decode(response)

    status = response.status_code
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict) and data.get("error"):
        logger.debug(f"HTTP {status} with embedded error: {data['error']}")
        raise ApiError(error_message(data["error"]), status)

    error_msg = f"HTTP {status}: {response.text[:200]}"

    if status == RATE_LIMITED:
        logger.warning("Rate limited by server")
    elif status >= 500:
        logger.warning(f"Server error: {error_msg}")
    else:
        logger.error(f"Client error: {error_msg}")

    raise TransportError(error_msg, status)


def is_retryable(exc: BaseException, retry_server_errors: bool = True) -> bool:
    """Classify a failure for the retry loop.

    Only 429 (and 5xx when ``retry_server_errors`` is set) are retried.
    Client errors and failures without a status code abort immediately.
    """
    if not isinstance(exc, SnykError) or exc.status_code is None:
        return False
    if exc.status_code == RATE_LIMITED:
        return True
    return retry_server_errors and exc.status_code >= 500


def _log_retry(retry_state: RetryCallState) -> None:
    wait = retry_state.next_action.sleep if retry_state.next_action else 0
    logger.warning(
        f"Retrying request (attempt {retry_state.attempt_number}) in {wait:.1f}s: "
        f"{retry_state.outcome.exception() if retry_state.outcome else 'unknown error'}"
    )


def create_retry_decorator(
    policy: RetryPolicy,
    sleep: Callable[[float], Awaitable[None]] | None = None,
) -> Any:
    """Create a tenacity retry decorator for retried API operations.

    The n-th wait is ``delay * factor ** (n - 1)``; the last failure is
    re-raised unchanged once the attempt budget is spent.

    Args:
        policy: Attempt budget, backoff shape and classifier switch.
        sleep: Coroutine used to wait between attempts (defaults to asyncio.sleep).

    Returns:
        Configured retry decorator.
    """
    extra: dict[str, Any] = {}
    if sleep is not None:
        extra["sleep"] = sleep

    return retry(
        retry=retry_if_exception(
            lambda exc: is_retryable(exc, policy.retry_server_errors)
        ),
        stop=stop_after_attempt(policy.max_attempts),
        wait=wait_exponential(multiplier=policy.delay, exp_base=policy.factor),
        before_sleep=_log_retry,
        reraise=True,
        **extra,
    )

"""Snyk v1 REST API client.

Wraps the endpoints this library supports with token authentication,
normalizes errors embedded in successful responses, and retries the
read-heavy listing endpoints with exponential backoff.
"""

import warnings
from collections.abc import Awaitable, Callable
from typing import Any

import httpx
from loguru import logger
from pydantic import ValidationError

from snykclient import endpoints
from snykclient.config import RetryPolicy, SnykSettings, get_settings
from snykclient.exceptions import ApiError, ConfigurationError, TransportError
from snykclient.models import RequestDescriptor
from snykclient.utils.http_client import (
    create_http_client,
    create_retry_decorator,
    error_message,
    handle_response,
)


class SnykClient:
    """Async client for the Snyk v1 API.

    Holds no per-call state, so one instance can serve any number of
    concurrent calls. Each call opens its own HTTP connection.

    ``list_all_projects``, ``list_issues`` and ``list_aggregated_issues``
    are retried on 429 (and 5xx unless ``retry_server_errors`` is off);
    every other operation makes exactly one attempt.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        retries: int | None = None,
        settings: SnykSettings | None = None,
        sleep: Callable[[float], Awaitable[None]] | None = None,
        **http_kwargs: Any,
    ):
        """Initialize the client.

        Args:
            api_key: Snyk API token. Falls back to ``settings.api_key``.
            retries: Attempt budget for retried operations (default 5).
            settings: Base settings; loaded from the environment if omitted.
            sleep: Coroutine used for backoff waits (defaults to asyncio.sleep).
            **http_kwargs: Extra arguments for httpx.AsyncClient, e.g. ``transport``.

        Raises:
            ConfigurationError: If no API key is available or an override is invalid.
        """
        overrides: dict[str, Any] = {}
        if api_key is not None:
            overrides["api_key"] = api_key
        if retries is not None:
            overrides["retries"] = retries

        try:
            base = settings or get_settings()
            if overrides:
                base = SnykSettings(**{**base.model_dump(), **overrides})
        except ValidationError as e:
            raise ConfigurationError(f"Invalid client configuration: {e}") from e

        if not base.has_api_key:
            raise ConfigurationError("API key must be defined")

        self._settings = base
        self._retry_policy = RetryPolicy.from_settings(base)
        self._retry = create_retry_decorator(self._retry_policy, sleep=sleep)
        self._http_kwargs = http_kwargs

    def __repr__(self) -> str:
        return f"SnykClient(base_url={self._settings.base_url!r}, retries={self.retries})"

    @property
    def settings(self) -> SnykSettings:
        return self._settings

    @property
    def retries(self) -> int:
        return self._settings.retries

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._retry_policy

    def _headers(self) -> dict[str, str]:
        # has_api_key was checked at construction
        api_key = self._settings.api_key.get_secret_value()  # type: ignore[union-attr]
        return {
            "Authorization": f"token {api_key}",
            "Accept": "application/json",
        }

    async def perform_request(self, request: RequestDescriptor) -> Any:
        """Execute a single request and return the decoded body.

        Args:
            request: Request to send.

        Returns:
            Decoded JSON response, unchanged.

        Raises:
            ApiError: If the body carries a populated ``error`` field.
            TransportError: On HTTP or network failure.
        """
        logger.debug(f"{request.method} {request.path} params={request.params}")

        async with create_http_client(
            base_url=self._settings.base_url,
            headers=self._headers(),
            timeout=self._settings.timeout,
            **self._http_kwargs,
        ) as client:
            try:
                response = await client.request(
                    request.method,
                    request.path,
                    params=request.params,
                    json=request.body,
                )
            except httpx.HTTPError as e:
                raise TransportError(f"{request.method} {request.path} failed: {e}") from e

        data = await handle_response(response)

        # Some failures come back as 200 with an error field in the body
        if isinstance(data, dict) and data.get("error"):
            raise ApiError(error_message(data["error"]))

        return data

    async def _perform_with_retry(self, request: RequestDescriptor) -> Any:
        return await self._retry(self.perform_request)(request)

    async def verify_access(self, org_id: str) -> Any:
        """Check that the token can access an organization.

        Args:
            org_id: Organization ID.

        Returns:
            List of organization members.
        """
        return await self.perform_request(endpoints.verify_access(org_id))

    async def import_project(
        self,
        org_id: str,
        integration_id: str,
        owner: str,
        name: str,
        branch: str,
    ) -> Any:
        """Import a repository into an organization through an integration.

        Args:
            org_id: Organization ID.
            integration_id: Integration ID.
            owner: Repository owner.
            name: Repository name.
            branch: Branch to import.

        Returns:
            API response object.
        """
        return await self.perform_request(
            endpoints.import_project(org_id, integration_id, owner, name, branch)
        )

    async def import_project_results(self, org_id: str, integration_id: str, job_id: str) -> Any:
        """Get the current state of an import job.

        Args:
            org_id: Organization ID.
            integration_id: Integration ID.
            job_id: Import job ID.

        Returns:
            Object representing the job.
        """
        return await self.perform_request(
            endpoints.import_project_results(org_id, integration_id, job_id)
        )

    async def list_all_projects(self, org_id: str) -> Any:
        """List all projects in an organization (retried).

        Args:
            org_id: Organization ID.

        Returns:
            Object with the organization and its projects.
        """
        return await self._perform_with_retry(endpoints.list_all_projects(org_id))

    async def list_orgs(self) -> Any:
        """List all organizations the token's user belongs to."""
        return await self.perform_request(endpoints.list_orgs())

    async def list_issues(
        self,
        org_id: str,
        project_id: str,
        filters: dict[str, Any] | None = None,
    ) -> Any:
        """List all issues of a project (retried).

        Deprecated upstream; use list_aggregated_issues instead.

        Args:
            org_id: Organization ID.
            project_id: Project ID.
            filters: Issue filters sent as the request body.

        Returns:
            Object representing the list of issues.
        """
        warnings.warn(
            "list_issues is deprecated, use list_aggregated_issues",
            DeprecationWarning,
            stacklevel=2,
        )
        return await self._perform_with_retry(endpoints.list_issues(org_id, project_id, filters))

    async def list_aggregated_issues(
        self,
        org_id: str,
        project_id: str,
        filters: dict[str, Any] | None = None,
    ) -> Any:
        """List all aggregated issues of a project (retried).

        Args:
            org_id: Organization ID.
            project_id: Project ID.
            filters: Issue filters sent as the request body.

        Returns:
            Object representing the list of issues.
        """
        return await self._perform_with_retry(
            endpoints.list_aggregated_issues(org_id, project_id, filters)
        )

    async def test_npm_file(self, org_id: str, target: str) -> Any:
        """Test the contents of a package.json file.

        Args:
            org_id: Organization to test the package with.
            target: Contents of the primary manifest.

        Returns:
            Test result with the list of issues.
        """
        return await self.perform_request(endpoints.test_npm_file(org_id, target))

"""Pytest configuration and fixtures for snykclient tests."""

from collections.abc import Callable

import httpx
import pytest

from snykclient import SnykClient
from snykclient.config import SnykSettings, get_settings

TEST_TOKEN = "test-token"


class RecordingSleep:
    """Stand-in for asyncio.sleep that records requested delays."""

    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class RecordingHandler:
    """MockTransport handler replaying a scripted list of responses."""

    def __init__(self, *responses: httpx.Response | Exception):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self.responses)) - 1
        outcome = self.responses[index]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    @property
    def attempts(self) -> int:
        return len(self.requests)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep developer SNYK_* variables out of the tests."""
    for var in (
        "SNYK_API_KEY",
        "SNYK_RETRIES",
        "SNYK_BASE_URL",
        "SNYK_RETRY_SERVER_ERRORS",
        "SNYK_TIMEOUT",
        "SNYK_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mock_settings():
    """Create settings for testing, ignoring any .env file."""
    return SnykSettings(_env_file=None, api_key=TEST_TOKEN)


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def make_client(mock_settings, recording_sleep) -> Callable[..., SnykClient]:
    """Build a client whose requests are served by a scripted handler."""

    def factory(handler: RecordingHandler, **kwargs) -> SnykClient:
        kwargs.setdefault("settings", mock_settings)
        return SnykClient(
            sleep=recording_sleep,
            transport=httpx.MockTransport(handler),
            **kwargs,
        )

    return factory


@pytest.fixture
def sample_projects_response():
    """Sample list-projects response."""
    return {
        "org": {"name": "Example Org", "id": "org-1"},
        "projects": [
            {
                "id": "proj-1",
                "name": "example/api:package.json",
                "type": "npm",
                "origin": "github",
                "issueCountsBySeverity": {"low": 1, "medium": 2, "high": 0, "critical": 0},
            }
        ],
    }


@pytest.fixture
def sample_aggregated_issues_response():
    """Sample aggregated-issues response."""
    return {
        "issues": [
            {
                "id": "SNYK-JS-LODASH-567746",
                "issueType": "vuln",
                "pkgName": "lodash",
                "pkgVersions": ["4.17.15"],
                "issueData": {
                    "title": "Prototype Pollution",
                    "severity": "high",
                    "identifiers": {"CVE": ["CVE-2020-8203"], "CWE": ["CWE-400"]},
                },
                "isPatched": False,
                "isIgnored": False,
            }
        ]
    }

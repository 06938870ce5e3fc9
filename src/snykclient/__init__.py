"""snykclient - Async client for the Snyk v1 REST API.

List organizations and projects, import repositories, list issues and
test manifests, with backoff retries on rate-limited listing calls.
"""

from loguru import logger

__version__ = "1.0.0"

from snykclient.client import SnykClient
from snykclient.config import RetryPolicy, SnykSettings
from snykclient.exceptions import ApiError, ConfigurationError, SnykError, TransportError

# Silent unless the application opts in via setup_logging()
logger.disable("snykclient")

__all__ = [
    "ApiError",
    "ConfigurationError",
    "RetryPolicy",
    "SnykClient",
    "SnykError",
    "SnykSettings",
    "TransportError",
    "__version__",
]

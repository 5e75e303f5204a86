"""
Base provider module for dblp-search.

This module defines the abstract base class for search providers: rate
limiting, retries and HTTP error mapping live here, while subclasses only
translate queries and turn responses into records.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import requests

from dblp_search import __version__
from dblp_search.core.config import ClientConfig
from dblp_search.core.models import Query, Record, RecordKind
from dblp_search.utils.exceptions import NetworkError, ProviderError, RateLimitError
from dblp_search.utils.rate_limit import TokenBucket
from dblp_search.utils.retry import retry_with_backoff

logger = logging.getLogger(__name__)


class BaseProvider(ABC):
    """Abstract base class for search providers.

    Attributes:
        config: Client configuration
        rate_limiter: Token bucket shared by all requests of this instance
        session: HTTP session reused across requests

    Example:
        >>> class MyProvider(BaseProvider):
        ...     def search(self, query, kind):
        ...         envelope = self._make_request(url, self._translate_query(query))
        ...         return self._normalize_response(envelope, kind)
    """

    def __init__(self, config: Optional[ClientConfig] = None, session: Optional[Any] = None):
        """Initialize the provider.

        Args:
            config: Client configuration (defaults if None)
            session: HTTP session; a new ``requests.Session`` if None

        Raises:
            ValueError: If config is not a ClientConfig
        """
        config = config or ClientConfig()
        if not isinstance(config, ClientConfig):
            raise ValueError("config must be a ClientConfig instance")

        self.config = config
        self._owns_session = session is None
        self.session = session or requests.Session()
        self._last_query: Optional[str] = None

        self.rate_limiter = TokenBucket(
            rate=config.rate_limit, capacity=max(1, int(config.rate_limit * 5))  # 5x burst
        )

        logger.info(
            f"Initialized {self.name} provider "
            f"(rate_limit={config.rate_limit}/s, timeout={config.timeout}s)"
        )

    @property
    def name(self) -> str:
        """Get the provider name."""
        return self.__class__.__name__.lower()

    def get_last_query(self) -> Optional[str]:
        """Get the URL (with parameters) of the last request, or None."""
        return self._last_query

    def close(self) -> None:
        """Close the HTTP session if this provider created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @abstractmethod
    def search(self, query: Query, kind: RecordKind) -> List[Record]:
        """Execute a search and return its records in ranking order.

        Raises:
            ProviderError: On transport failures
            MalformedEnvelope: If the response envelope is malformed
            NormalizationError: If a hit cannot be normalized (strict mode)
        """

    @abstractmethod
    def _translate_query(self, query: Query) -> Dict[str, Any]:
        """Translate a Query into request parameters."""

    @abstractmethod
    def _normalize_response(self, raw: Any, kind: RecordKind) -> List[Record]:
        """Convert a decoded response body into records."""

    def _make_request(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Make a GET request with rate limiting and retry.

        Args:
            url: Request URL
            params: Query parameters
            headers: Extra request headers

        Returns:
            Decoded JSON body

        Raises:
            RateLimitError: When no token is available in time or on HTTP 429
            NetworkError: On connection problems, timeouts and 5xx answers
            ProviderError: On other HTTP errors or a body that is not JSON
        """
        self._last_query = f"{url}?{urlencode(params)}" if params else url

        if not self.rate_limiter.wait_for_token(timeout=self.config.timeout):
            raise RateLimitError(self.name, f"Rate limit timeout for {self.name}")

        request_headers = {
            "User-Agent": f"dblp-search/{__version__} ({self.config.mailto or ''})",
            "Accept": "application/json",
        }
        if headers:
            request_headers.update(headers)

        response = self._execute_request(url, params, request_headers)
        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(self.name, f"Invalid JSON response: {e}", url=url)

    @retry_with_backoff(max_retries=3, base_delay=1.0, backoff_factor=2.0)
    def _execute_request(
        self,
        url: str,
        params: Optional[Dict[str, Any]],
        headers: Dict[str, str],
    ) -> Any:
        """Execute the HTTP request; transient failures are retried.

        Raises:
            RateLimitError: On 429 status
            NetworkError: On timeouts, connection errors and 5xx status
            ProviderError: On any other request failure
        """
        try:
            response = self.session.get(
                url,
                params=params,
                headers=headers,
                timeout=self.config.timeout,
            )

            if response.status_code == 429:
                retry_after = response.headers.get("Retry-After", "60")
                raise RateLimitError(
                    self.name,
                    retry_after=int(retry_after) if retry_after.isdigit() else 60,
                )

            if response.status_code >= 500:
                raise NetworkError(
                    self.name,
                    f"Server error: {response.status_code}",
                    status_code=response.status_code,
                )

            response.raise_for_status()
            return response

        except requests.exceptions.Timeout:
            raise NetworkError(self.name, f"Request timeout after {self.config.timeout}s")
        except requests.exceptions.ConnectionError as e:
            raise NetworkError(self.name, f"Connection error: {e}")
        except requests.exceptions.RequestException as e:
            raise ProviderError(self.name, f"Request failed: {e}")

    def __repr__(self) -> str:
        """String representation of provider."""
        return (
            f"{self.__class__.__name__}("
            f"name='{self.name}', "
            f"rate_limit={self.config.rate_limit}"
            ")"
        )

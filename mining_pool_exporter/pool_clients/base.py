"""
Base API client functionality for the mining pool and price APIs.

This module provides common functionality for API clients, including:
- A shared HTTP session with a fixed User-Agent
- Bounded request timeouts and optional retry logic
- Mapping of transport and decoding failures onto client errors
"""

import logging
from typing import Any, Dict, Optional
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from tenacity import (
    Retrying,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    before_sleep_log
)

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "miningpoolhub-exporter"


class APIClientError(Exception):
    """Base exception for upstream API failures."""
    pass


class UpstreamFetchError(APIClientError):
    """Raised when an upstream request fails or returns an error status."""
    pass


class DecodeError(APIClientError):
    """Raised when an upstream response cannot be decoded."""
    pass


class BaseAPIClient:
    """Base class for API clients with common functionality."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10,
        max_retries: int = 0,
        user_agent: str = DEFAULT_USER_AGENT
    ):
        """
        Initialize the base API client.

        Args:
            base_url: Base URL for the API
            timeout: Request timeout in seconds
            max_retries: Maximum number of retries for failed requests (0 disables retries)
            user_agent: Value of the User-Agent header sent with every request
        """
        self.base_url = base_url
        self.timeout = timeout
        self.max_retries = max_retries

        self.session = requests.Session()
        self.session.headers.update({"User-Agent": user_agent})

        # Retries are owned by get(), the adapter makes a single attempt
        no_retries = Retry(total=0, raise_on_status=False)
        self.session.mount('http://', HTTPAdapter(max_retries=no_retries))
        self.session.mount('https://', HTTPAdapter(max_retries=no_retries))

    def _make_request(
        self,
        method: str,
        endpoint: str,
        params: Dict[str, Any] = None,
        headers: Dict[str, str] = None
    ) -> requests.Response:
        """
        Make an HTTP request to the API.

        Args:
            method: HTTP method
            endpoint: API endpoint, relative to the base URL
            params: Query parameters
            headers: Extra HTTP headers

        Returns:
            Response object

        Raises:
            UpstreamFetchError: On transport failure, timeout or a non-2xx status
        """
        url = f"{self.base_url.rstrip('/')}/{endpoint.lstrip('/')}"

        try:
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                headers=headers,
                timeout=self.timeout
            )
            response.raise_for_status()
            return response
        except requests.exceptions.RequestException as e:
            logger.debug(f"Request to {url} failed: {str(e)}")
            raise UpstreamFetchError(str(e)) from e

    def get(
        self,
        endpoint: str,
        params: Dict[str, Any] = None,
        headers: Dict[str, str] = None
    ) -> requests.Response:
        """
        Make a GET request to the API, retrying failures up to ``max_retries`` times.

        Args:
            endpoint: API endpoint
            params: Query parameters
            headers: Extra HTTP headers

        Returns:
            Response object
        """
        retrying = Retrying(
            stop=stop_after_attempt(self.max_retries + 1),
            wait=wait_exponential(multiplier=1, min=2, max=30),
            retry=retry_if_exception_type(UpstreamFetchError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True
        )
        for attempt in retrying:
            with attempt:
                return self._make_request("GET", endpoint, params=params, headers=headers)

    def get_json(
        self,
        endpoint: str,
        params: Dict[str, Any] = None,
        headers: Dict[str, str] = None
    ) -> Any:
        """
        Make a GET request and decode the JSON body.

        Raises:
            UpstreamFetchError: If the request fails
            DecodeError: If the body is not valid JSON
        """
        response = self.get(endpoint, params=params, headers=headers)
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"Invalid JSON from {response.url}: {str(e)}") from e

    def close(self):
        """Close the session."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

"""HTTP client for the Discovery API.

DiscoveryClient is the only place that performs network I/O. It sends one
UpstreamRequest, maps transport and status failures onto the upstream
exception hierarchy and returns the decoded JSON body. It does not retry.
"""

import logging
from typing import Any, Dict

import requests

from gateway.logging import get_logger

from .exceptions import (
    ClientConfigurationError,
    UpstreamHTTPError,
    UpstreamResponseError,
    UpstreamTimeoutError,
)
from .queries import UpstreamRequest

logger = get_logger(__name__, component="upstream")

REDACTED = "***"
SECRET_PARAMS = {"apikey"}


def redact_params(params: Dict[str, str]) -> Dict[str, str]:
    """Copy of params with credentials masked, safe to log."""
    return {key: (REDACTED if key in SECRET_PARAMS else value) for key, value in params.items()}


class DiscoveryClient:
    """Sends requests to the Discovery API over a shared requests.Session.

    Attributes:
        base_url: API root, e.g. https://app.ticketmaster.com/discovery/v2
        timeout: HTTP request timeout in seconds
        user_agent: User-Agent header for every request
    """

    def __init__(
        self,
        base_url: str,
        timeout: int = 10,
        user_agent: str = "EventGateway/1.0",
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API root URL (http or https)
            timeout: Request timeout in seconds (range 1-120)
            user_agent: User-Agent header value

        Raises:
            ClientConfigurationError: If any argument is out of range or empty
        """
        if not base_url or not base_url.startswith(("http://", "https://")):
            raise ClientConfigurationError(f"base_url must be an http(s) URL, got: {base_url!r}")
        if not 1 <= timeout <= 120:
            raise ClientConfigurationError(
                f"Timeout must be between 1 and 120 seconds, got: {timeout}"
            )
        if not user_agent or not user_agent.strip():
            raise ClientConfigurationError("user_agent cannot be empty")

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent.strip()

        self._session = requests.Session()
        self._session.headers.update(
            {"User-Agent": self.user_agent, "Accept": "application/json"}
        )

    def url_for(self, request: UpstreamRequest) -> str:
        """Absolute URL of a request, without its query string."""
        return f"{self.base_url}/{request.endpoint.lstrip('/')}"

    def fetch(self, request: UpstreamRequest) -> Any:
        """Perform a GET for request and return the decoded JSON body.

        Raises:
            UpstreamHTTPError: On 4xx/5xx status, or status_code=0 on connection failure
            UpstreamTimeoutError: On request timeout
            UpstreamResponseError: If the body is not valid JSON
        """
        url = self.url_for(request)
        safe_params = redact_params(request.params)

        try:
            logger.debug(
                f"GET {url}",
                extra={
                    "event": "upstream.fetch.request",
                    "url": url,
                    "params": safe_params,
                    "timeout": self.timeout,
                },
            )

            response = self._session.request(
                method="GET",
                url=url,
                params=request.params,
                timeout=self.timeout,
            )

            if response.status_code >= 400:
                # 404 is an expected outcome for lookups; callers decide what it means
                if response.status_code == 404:
                    log_level = logging.INFO
                elif response.status_code >= 500:
                    log_level = logging.WARNING
                else:
                    log_level = logging.ERROR

                logger.log(
                    log_level,
                    f"HTTP {response.status_code} from {url}",
                    extra={
                        "event": "upstream.fetch.error",
                        "status_code": response.status_code,
                        "url": url,
                    },
                )

                raise UpstreamHTTPError(
                    f"HTTP {response.status_code}: {response.reason}",
                    status_code=response.status_code,
                    url=url,
                )

            try:
                data = response.json()
            except ValueError as e:
                logger.error(
                    f"Failed to parse JSON response from {url}",
                    extra={
                        "event": "upstream.fetch.error",
                        "error_type": "JSONDecodeError",
                        "url": url,
                    },
                )
                raise UpstreamResponseError(f"Failed to parse JSON response from {url}: {e}") from None

            logger.debug(
                "Upstream request succeeded",
                extra={
                    "event": "upstream.fetch.succeeded",
                    "status_code": response.status_code,
                    "url": url,
                },
            )
            return data

        # requests errors embed the full URL, apikey included, so they are never chained
        except requests.exceptions.Timeout:
            logger.warning(
                f"Request to {url} timed out after {self.timeout} seconds",
                extra={
                    "event": "upstream.fetch.timeout",
                    "url": url,
                    "timeout": self.timeout,
                },
            )
            raise UpstreamTimeoutError(
                f"Request to {url} timed out after {self.timeout} seconds",
                url=url,
            ) from None
        except requests.exceptions.RequestException as e:
            logger.error(
                f"Request to {url} failed: {type(e).__name__}",
                extra={
                    "event": "upstream.fetch.error",
                    "error_type": type(e).__name__,
                    "url": url,
                },
            )
            raise UpstreamHTTPError(
                f"Request to {url} failed: {type(e).__name__}",
                status_code=0,
                url=url,
            ) from None

    def close(self) -> None:
        """Release pooled connections."""
        self._session.close()

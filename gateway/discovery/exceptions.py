"""Exceptions raised by the discovery core and its upstream client."""


class DiscoveryError(Exception):
    """Base exception for all discovery errors.

    The HTTP layer catches subclasses it knows how to present (validation,
    not-found); anything else becomes a generic server error.
    """

    pass


class ValidationError(DiscoveryError):
    """A required client parameter is missing or unusable.

    Raised before any upstream request is made.
    """

    pass


class NotFoundError(DiscoveryError):
    """The Discovery API reported that the requested resource does not exist."""

    pass


class UpstreamError(DiscoveryError):
    """The Discovery API call failed or returned something unusable."""

    pass


class UpstreamHTTPError(UpstreamError):
    """Upstream request failed with an HTTP error status or a transport error.

    A status_code of 0 means no HTTP response was received (connection refused,
    DNS failure, and so on).
    """

    def __init__(self, message: str, status_code: int, url: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class UpstreamTimeoutError(UpstreamError):
    """Upstream request did not complete within the configured timeout."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class UpstreamResponseError(UpstreamError):
    """Upstream response could not be decoded or has an unexpected shape."""

    pass


class ClientConfigurationError(DiscoveryError):
    """Invalid Discovery API client configuration (timeout, user agent, base URL)."""

    pass

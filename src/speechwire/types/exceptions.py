"""Exception-related type definitions for the SDK."""

from typing import Optional


class RequestValidationException(ValueError):
    """Exception raised when request parameters fail a local check before dispatch.

    No part of the request has been sent to the provider when this is raised.
    """

    pass


class SerializationException(ValueError):
    """Exception raised when request parameters cannot be encoded as canonical JSON.

    This is also raised when a request converter returns something other than a JSON object.
    """

    pass


class FileResolutionException(OSError):
    """Exception raised when an upload source cannot be turned into file bytes.

    The underlying error (an ``OSError`` or an ``httpx`` error for remote sources) is chained as ``__cause__``.
    """

    pass


class TransportException(Exception):
    """Exception raised when the transport fails to complete a request.

    Attributes:
        status_code: HTTP status returned by the provider, or None when no response was received.
        body: Response text returned by the provider, if any.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None) -> None:
        """Initialize exception.

        Args:
            message: Description of the failure.
            status_code: HTTP status returned by the provider.
            body: Response text returned by the provider.
        """
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class BadRequestException(TransportException):
    """Exception raised when the provider rejects a request as malformed (HTTP 400)."""

    pass


class AuthenticationException(TransportException):
    """Exception raised when the provider rejects the credentials (HTTP 401 or 403)."""

    pass


class NotFoundException(TransportException):
    """Exception raised when the requested endpoint or model does not exist (HTTP 404)."""

    pass


class RateLimitException(TransportException):
    """Exception raised when the provider throttles the request (HTTP 429).

    Callers that want to retry should back off before sending the request again.
    """

    pass

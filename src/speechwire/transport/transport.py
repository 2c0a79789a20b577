"""Transport interface.

A transport moves request bodies to the provider and returns the raw response. It owns connection handling,
authentication headers, and timeouts; everything above it only ever sees bytes, text, or a byte stream.
"""

from typing import Any, AsyncIterator, Protocol

from ..types.media import MultipartForm


class Transport(Protocol):
    """Protocol defining the three request primitives used by the audio endpoints."""

    async def post_json(self, path: str, body: dict[str, Any]) -> bytes:
        """Send a JSON body and return the raw response payload.

        Args:
            path: Endpoint path relative to the base URL (e.g., "/audio/speech").
            body: JSON object to send.

        Returns:
            The raw response bytes.

        Raises:
            TransportException: If the request fails or the provider returns an error status.
        """
        ...

    async def post_multipart(self, path: str, form: MultipartForm) -> str:
        """Send a multipart body and return the decoded response text.

        Args:
            path: Endpoint path relative to the base URL.
            form: Multipart body to send.

        Returns:
            The response text.

        Raises:
            TransportException: If the request fails or the provider returns an error status.
        """
        ...

    async def post_stream(self, path: str, body: dict[str, Any]) -> AsyncIterator[bytes]:
        """Send a JSON body and return the response as a lazy stream of byte chunks.

        Dispatch errors are raised by the awaited call. Errors that occur while reading are raised by the iterator.
        Closing the iterator early releases the underlying connection.

        Args:
            path: Endpoint path relative to the base URL.
            body: JSON object to send.

        Returns:
            An async iterator over the raw response chunks.

        Raises:
            TransportException: If the request fails or the provider returns an error status.
        """
        ...

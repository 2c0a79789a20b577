"""httpx transport.

Sends requests to an OpenAI-compatible audio API.

- Docs: https://platform.openai.com/docs/api-reference/audio
"""

import logging
import os
from contextlib import AsyncExitStack, asynccontextmanager
from typing import Any, AsyncIterator, Optional, Type, TypedDict, Union, cast

import httpx
from typing_extensions import Unpack

from .._validation import validate_config_keys
from ..types.exceptions import (
    AuthenticationException,
    BadRequestException,
    NotFoundException,
    RateLimitException,
    TransportException,
)
from ..types.media import FilePart, MultipartForm

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"

_STATUS_EXCEPTIONS: dict[int, Type[TransportException]] = {
    400: BadRequestException,
    401: AuthenticationException,
    403: AuthenticationException,
    404: NotFoundException,
    429: RateLimitException,
}


def _build_timeout(timeout: Optional[Union[float, tuple[float, ...]]]) -> httpx.Timeout:
    if isinstance(timeout, tuple):
        return httpx.Timeout(
            connect=timeout[0] if len(timeout) > 0 else None,
            read=timeout[1] if len(timeout) > 1 else None,
            write=timeout[2] if len(timeout) > 2 else None,
            pool=timeout[3] if len(timeout) > 3 else None,
        )

    return httpx.Timeout(timeout or 60.0)


def _raise_for_status(path: str, response: httpx.Response) -> None:
    """Raise the transport exception matching an error response.

    The response body must already be read.

    Args:
        path: Endpoint path the request was sent to.
        response: The provider response.

    Raises:
        TransportException: If the response status is 400 or above.
    """
    if response.status_code < 400:
        return

    body = response.text
    try:
        message = str(response.json()["error"]["message"])
    except (ValueError, KeyError, TypeError):
        message = body

    exception_cls = _STATUS_EXCEPTIONS.get(response.status_code, TransportException)
    logger.warning("path=<%s>, status_code=<%d> | provider returned an error", path, response.status_code)
    raise exception_cls(
        f"status_code=<{response.status_code}> | {message}", status_code=response.status_code, body=body
    )


class _ResponseByteStream:
    """Byte chunks of a streamed response.

    Owns the response and, unless one was injected, the client it was sent with. Both are released on exhaustion, on
    error, or on `aclose()`, including when iteration never started.
    """

    def __init__(self, path: str, response: httpx.Response, stack: AsyncExitStack) -> None:
        self._path = path
        self._chunks = response.aiter_bytes()
        self._stack = stack
        self._closed = False

    @property
    def closed(self) -> bool:
        """Whether the response has been released."""
        return self._closed

    def __aiter__(self) -> "_ResponseByteStream":
        return self

    async def __anext__(self) -> bytes:
        if self._closed:
            raise StopAsyncIteration

        try:
            return await self._chunks.__anext__()
        except StopAsyncIteration:
            await self.aclose()
            logger.debug("path=<%s> | finished streaming response", self._path)
            raise
        except httpx.HTTPError as e:
            await self.aclose()
            raise TransportException(f"path=<{self._path}> | {e}") from e
        except BaseException:
            await self.aclose()
            raise

    async def aclose(self) -> None:
        """Release the response and its client."""
        if self._closed:
            return

        self._closed = True
        try:
            await self._chunks.aclose()  # type: ignore[attr-defined]
        finally:
            await self._stack.aclose()


class HttpTransport:
    """Transport implementation backed by `httpx.AsyncClient`.

    Example:
        >>> transport = HttpTransport(api_key="sk-...", timeout=(5.0, 120.0))
        >>> transport.update_config(base_url="http://localhost:8000/v1")
    """

    class HttpConfig(TypedDict, total=False):
        """Configuration options for the HTTP transport.

        Attributes:
            base_url: Base URL of the provider API. Default is "https://api.openai.com/v1".
            api_key: Key sent as a bearer token.
            organization: Value of the OpenAI-Organization header.
            project: Value of the OpenAI-Project header.
            headers: Additional headers sent with every request.
        """

        base_url: str
        api_key: Optional[str]
        organization: Optional[str]
        project: Optional[str]
        headers: Optional[dict[str, str]]

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        client_args: Optional[dict[str, Any]] = None,
        timeout: Optional[Union[float, tuple[float, ...]]] = None,
        **http_config: Unpack[HttpConfig],
    ) -> None:
        """Initialize transport instance.

        Args:
            client: Pre-configured client to reuse across requests.
                When provided, this client will NOT be closed by the transport. The caller is responsible for managing
                the client lifecycle. The client should not be shared across different asyncio event loops.
            client_args: Arguments for the `httpx.AsyncClient` created for each request.
            timeout: Request timeout in seconds. Can be a float or a tuple of (connect, read, write, pool) timeouts.
            **http_config: Configuration options for the transport.

        Raises:
            ValueError: If both `client` and `client_args` are provided.
        """
        validate_config_keys(http_config, self.HttpConfig)

        if client is not None and client_args:
            raise ValueError("Only one of 'client' or 'client_args' should be provided, not both.")

        if "base_url" not in http_config:
            http_config["base_url"] = DEFAULT_BASE_URL

        self.config = dict(http_config)
        self.timeout = _build_timeout(timeout)
        self.client_args = client_args or {}
        self._custom_client = client

        logger.debug("base_url=<%s> | initializing", self.config["base_url"])

    @classmethod
    def from_env(cls, **kwargs: Any) -> "HttpTransport":
        """Create a transport configured from OPENAI_* environment variables.

        Reads OPENAI_API_KEY, OPENAI_BASE_URL, OPENAI_ORGANIZATION, and OPENAI_PROJECT. Explicit keyword arguments take
        precedence over the environment.

        Args:
            **kwargs: Arguments forwarded to the constructor.

        Returns:
            The configured transport.
        """
        env_config: dict[str, Any] = {
            "api_key": os.environ.get("OPENAI_API_KEY"),
            "base_url": os.environ.get("OPENAI_BASE_URL"),
            "organization": os.environ.get("OPENAI_ORGANIZATION"),
            "project": os.environ.get("OPENAI_PROJECT"),
        }
        env_config = {key: value for key, value in env_config.items() if value}

        return cls(**{**env_config, **kwargs})

    def update_config(self, **http_config: Unpack[HttpConfig]) -> None:
        """Update the transport configuration with the provided arguments.

        Args:
            **http_config: Configuration overrides.
        """
        validate_config_keys(http_config, self.HttpConfig)
        self.config.update(http_config)

    def get_config(self) -> HttpConfig:
        """Get the transport configuration.

        Returns:
            The transport configuration.
        """
        return cast(HttpTransport.HttpConfig, self.config)

    def _url(self, path: str) -> str:
        return f"{self.config['base_url'].rstrip('/')}/{path.lstrip('/')}"

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.config.get("api_key"):
            headers["Authorization"] = f"Bearer {self.config['api_key']}"
        if self.config.get("organization"):
            headers["OpenAI-Organization"] = cast(str, self.config["organization"])
        if self.config.get("project"):
            headers["OpenAI-Project"] = cast(str, self.config["project"])

        headers.update(self.config.get("headers") or {})
        return headers

    @asynccontextmanager
    async def _get_client(self) -> AsyncIterator[httpx.AsyncClient]:
        """Get an httpx client for making requests.

        This context manager handles client lifecycle:
        - If a custom client was provided, yields it without closing
        - Otherwise, creates a new client from client_args and closes it on exit

        Yields:
            Client for making requests.
        """
        if self._custom_client is not None:
            yield self._custom_client
        else:
            # A client per request keeps connections from being shared across event loops. For more details, please
            # refer to https://github.com/encode/httpx/discussions/2959.
            async with httpx.AsyncClient(timeout=self.timeout, **self.client_args) as client:
                yield client

    async def post_json(self, path: str, body: dict[str, Any]) -> bytes:
        """Send a JSON body and return the raw response payload.

        Args:
            path: Endpoint path relative to the base URL.
            body: JSON object to send.

        Returns:
            The raw response bytes.

        Raises:
            TransportException: If the request fails or the provider returns an error status.
        """
        logger.debug("path=<%s> | sending json request", path)
        async with self._get_client() as client:
            try:
                response = await client.post(self._url(path), json=body, headers=self._headers())
            except httpx.HTTPError as e:
                raise TransportException(f"path=<{path}> | {e}") from e

        _raise_for_status(path, response)
        return response.content

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
        # Text fields go through `files` without a filename so httpx writes every part in form order.
        files = [
            (name, (value.filename, value.content, value.content_type))
            if isinstance(value, FilePart)
            else (name, (None, value.encode()))
            for name, value in form.parts
        ]

        logger.debug("path=<%s>, parts=<%s> | sending multipart request", path, form.names())
        async with self._get_client() as client:
            try:
                response = await client.post(self._url(path), files=files, headers=self._headers())
            except httpx.HTTPError as e:
                raise TransportException(f"path=<{path}> | {e}") from e

        _raise_for_status(path, response)
        return response.text

    async def post_stream(self, path: str, body: dict[str, Any]) -> AsyncIterator[bytes]:
        """Send a JSON body and return the response as a lazy stream of byte chunks.

        Args:
            path: Endpoint path relative to the base URL.
            body: JSON object to send.

        Returns:
            An async iterator over the raw response chunks. Closing it releases the connection.

        Raises:
            TransportException: If the request fails or the provider returns an error status.
        """
        logger.debug("path=<%s> | sending streaming request", path)

        stack = AsyncExitStack()
        try:
            client = await stack.enter_async_context(self._get_client())
            request = client.build_request("POST", self._url(path), json=body, headers=self._headers())
            try:
                response = await client.send(request, stream=True)
            except httpx.HTTPError as e:
                raise TransportException(f"path=<{path}> | {e}") from e

            stack.push_async_callback(response.aclose)
            if response.status_code >= 400:
                try:
                    await response.aread()
                except httpx.HTTPError as e:
                    raise TransportException(f"path=<{path}> | {e}", status_code=response.status_code) from e
                _raise_for_status(path, response)
        except BaseException:
            await stack.aclose()
            raise

        return _ResponseByteStream(path, response, stack)

"""Provider API client."""

from typing import Optional

from typing_extensions import Unpack

from .audio.audio import Audio
from .audio.converter import RequestConverter
from .files import DefaultFileResolver, FileResolver
from .transport.http_transport import HttpTransport
from .transport.transport import Transport


class Client:
    """Entry point to the provider API.

    Example:
        >>> client = Client(api_key="sk-...")
        >>> response = await client.audio().create_speech(
        ...     AudioSpeechParameters(model="tts-1", input="Hello", voice="alloy")
        ... )
    """

    def __init__(
        self,
        transport: Optional[Transport] = None,
        file_resolver: Optional[FileResolver] = None,
        **http_config: Unpack[HttpTransport.HttpConfig],
    ) -> None:
        """Initialize the client.

        Args:
            transport: Transport to send requests with. Defaults to an `HttpTransport` built from `http_config`.
            file_resolver: Resolver for upload sources. Defaults to `DefaultFileResolver`.
            **http_config: Configuration for the default `HttpTransport`.

        Raises:
            ValueError: If both `transport` and `http_config` are provided.
        """
        if transport is not None and http_config:
            raise ValueError("Only one of 'transport' or transport configuration should be provided, not both.")

        self.transport = transport if transport is not None else HttpTransport(**http_config)
        self.file_resolver = file_resolver or DefaultFileResolver()

    @classmethod
    def from_env(cls, file_resolver: Optional[FileResolver] = None) -> "Client":
        """Create a client whose transport is configured from OPENAI_* environment variables.

        Args:
            file_resolver: Resolver for upload sources.

        Returns:
            The client.
        """
        return cls(transport=HttpTransport.from_env(), file_resolver=file_resolver)

    def audio(self, request_converter: Optional[RequestConverter] = None) -> Audio:
        """Learn how to turn audio into text or text into audio.

        Args:
            request_converter: Converter from the canonical speech request body to the provider's format.

        Returns:
            The audio endpoints.
        """
        return Audio(self.transport, self.file_resolver, request_converter)

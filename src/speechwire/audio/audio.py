"""Audio endpoints.

Turns audio into text (transcription, translation) and text into audio (speech, streamed or not).

- Docs: https://platform.openai.com/docs/api-reference/audio
"""

import logging
from typing import Optional

from ..files import DefaultFileResolver, FileResolver
from ..transport.transport import Transport
from ..types.audio import (
    AudioSpeechParameters,
    AudioSpeechResponse,
    AudioTranscriptionParameters,
    AudioTranslationParameters,
    StreamingSpeechParameters,
)
from .converter import RequestConverter, apply_request_converter, to_canonical_json
from .multipart import encode_transcription_form, encode_translation_form
from .streaming import AudioSpeechStream

logger = logging.getLogger(__name__)

SPEECH_PATH = "/audio/speech"
TRANSCRIPTIONS_PATH = "/audio/transcriptions"
TRANSLATIONS_PATH = "/audio/translations"


class Audio:
    """Audio endpoints of the provider API.

    An `Audio` handle is immutable: its request converter is fixed when the handle is created. Use
    `with_request_converter` to get a handle with a different converter.

    Calls made through the same handle are independent of each other and may run concurrently.
    """

    def __init__(
        self,
        transport: Transport,
        file_resolver: Optional[FileResolver] = None,
        request_converter: Optional[RequestConverter] = None,
    ) -> None:
        """Initialize the audio endpoints.

        Args:
            transport: Transport used to reach the provider.
            file_resolver: Resolver for upload sources. Defaults to `DefaultFileResolver`.
            request_converter: Converter from the canonical speech request body to the provider's format.
                Only applied by `create_speech`.
        """
        self._transport = transport
        self._file_resolver = file_resolver or DefaultFileResolver()
        self._request_converter = request_converter

    @property
    def request_converter(self) -> Optional[RequestConverter]:
        """The request converter installed on this handle, if any."""
        return self._request_converter

    def with_request_converter(self, request_converter: Optional[RequestConverter]) -> "Audio":
        """Create a handle sharing this handle's transport and resolver but using another request converter.

        Args:
            request_converter: The converter to install, or None to send canonical bodies.

        Returns:
            The new handle.
        """
        return Audio(self._transport, self._file_resolver, request_converter)

    async def create_speech(self, parameters: AudioSpeechParameters) -> AudioSpeechResponse:
        """Generate audio from the input text.

        Args:
            parameters: The speech parameters.

        Returns:
            The synthesized audio.

        Raises:
            SerializationException: If the parameters cannot be serialized or the converter result is not an object.
            TransportException: If the request fails.
        """
        logger.debug("formatting request")
        request = to_canonical_json(parameters)
        if self._request_converter is not None:
            request = apply_request_converter(self._request_converter, request)
        logger.debug("formatted request=<%s>", request)

        logger.debug("invoking provider")
        payload = await self._transport.post_json(SPEECH_PATH, request)
        logger.debug("bytes=<%d> | got response from provider", len(payload))

        return AudioSpeechResponse(bytes=payload)

    async def create_transcription(self, parameters: AudioTranscriptionParameters) -> str:
        """Transcribe audio into the input language.

        Args:
            parameters: The transcription parameters.

        Returns:
            The transcript exactly as returned by the provider, in the requested response format.

        Raises:
            RequestValidationException: If `extra_body` is not a flat JSON object.
            FileResolutionException: If the upload source cannot be read.
            TransportException: If the request fails.
        """
        logger.debug("formatting request")
        form = await encode_transcription_form(parameters, self._file_resolver)

        logger.debug("invoking provider")
        return await self._transport.post_multipart(TRANSCRIPTIONS_PATH, form)

    async def create_translation(self, parameters: AudioTranslationParameters) -> str:
        """Translate audio into English.

        Args:
            parameters: The translation parameters.

        Returns:
            The translation exactly as returned by the provider, in the requested response format.

        Raises:
            FileResolutionException: If the upload source cannot be read.
            TransportException: If the request fails.
        """
        logger.debug("formatting request")
        form = await encode_translation_form(parameters, self._file_resolver)

        logger.debug("invoking provider")
        return await self._transport.post_multipart(TRANSLATIONS_PATH, form)

    async def create_speech_stream(self, parameters: AudioSpeechParameters) -> AudioSpeechStream:
        """Generate audio from the input text as a stream of chunks.

        The request always has `stream` set and never carries `voice_text`. The request converter is not applied.

        Args:
            parameters: The speech parameters.

        Returns:
            A single-use stream of audio chunks.

        Raises:
            SerializationException: If the parameters cannot be serialized.
            TransportException: If the request cannot be dispatched.
        """
        logger.debug("formatting request")
        request = to_canonical_json(StreamingSpeechParameters.from_speech_parameters(parameters))
        logger.debug("formatted request=<%s>", request)

        logger.debug("invoking provider")
        source = await self._transport.post_stream(SPEECH_PATH, request)

        return AudioSpeechStream(source)

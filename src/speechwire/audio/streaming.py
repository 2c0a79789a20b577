"""Streaming speech response decoding.

Wraps the raw byte stream returned by the transport into a lazy stream of typed audio chunks.
"""

import asyncio
import logging
from types import TracebackType
from typing import AsyncIterator, Optional, Type

from ..types.audio import AudioSpeechChunkResponse, StreamState

logger = logging.getLogger(__name__)

_TERMINAL_STATES = (StreamState.CLOSED, StreamState.ERRORED)


class AudioSpeechStream:
    """A lazy, single-use stream of synthesized audio chunks.

    Chunks are pulled from the underlying source only when the consumer asks for the next one; nothing is buffered here,
    so a slow consumer slows the source down. An error raised by the source is re-raised unchanged at the point it
    occurs, and the stream ends there.

    The stream moves from `OPEN` to `CONSUMING` on the first pull, then to `CLOSED` when the source is exhausted or the
    stream is closed, or to `ERRORED` when the source fails. Once in a terminal state the stream yields nothing more;
    a new request is needed to read the audio again.

    Example:
        >>> async with await audio.create_speech_stream(parameters) as stream:
        ...     async for chunk in stream:
        ...         player.write(chunk.bytes)
    """

    def __init__(self, source: AsyncIterator[bytes]) -> None:
        """Initialize the stream.

        Args:
            source: Raw byte chunks returned by the transport.
        """
        self._source = source
        self._state = StreamState.OPEN
        self._chunk_count = 0

    @property
    def state(self) -> StreamState:
        """Current lifecycle state of the stream."""
        return self._state

    def __aiter__(self) -> "AudioSpeechStream":
        return self

    async def __anext__(self) -> AudioSpeechChunkResponse:
        if self._state in _TERMINAL_STATES:
            raise StopAsyncIteration

        self._state = StreamState.CONSUMING
        try:
            chunk = await self._source.__anext__()
        except StopAsyncIteration:
            logger.debug("chunks=<%d> | finished streaming response", self._chunk_count)
            await self._finish(StreamState.CLOSED)
            raise
        except asyncio.CancelledError:
            await self._finish(StreamState.CLOSED)
            raise
        except Exception:
            logger.debug("chunks=<%d> | stream source failed", self._chunk_count)
            await self._finish(StreamState.ERRORED)
            raise

        self._chunk_count += 1
        return AudioSpeechChunkResponse(bytes=chunk)

    async def aclose(self) -> None:
        """Stop consuming the stream and release the underlying connection.

        Closing a stream that already reached a terminal state does nothing.
        """
        if self._state not in _TERMINAL_STATES:
            await self._finish(StreamState.CLOSED)

    async def __aenter__(self) -> "AudioSpeechStream":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()

    async def _finish(self, state: StreamState) -> None:
        self._state = state

        aclose = getattr(self._source, "aclose", None)
        if aclose is not None:
            await aclose()

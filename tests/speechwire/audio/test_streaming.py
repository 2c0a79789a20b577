"""Unit tests for the streaming speech decoder."""

import pytest

from speechwire.audio.streaming import AudioSpeechStream
from speechwire.types.audio import AudioSpeechChunkResponse, StreamState
from speechwire.types.exceptions import TransportException


@pytest.fixture
def closed_sources():
    return []


@pytest.fixture
def tracked_source(closed_sources):
    def _tracked_source(items):
        async def gen():
            try:
                for item in items:
                    yield item
            finally:
                closed_sources.append(True)

        return gen()

    return _tracked_source


@pytest.mark.asyncio
async def test_stream_yields_typed_chunks(agenerator, alist):
    stream = AudioSpeechStream(agenerator([b"chunk1", b"chunk2"]))

    tru_chunks = await alist(stream)
    exp_chunks = [AudioSpeechChunkResponse(bytes=b"chunk1"), AudioSpeechChunkResponse(bytes=b"chunk2")]

    assert tru_chunks == exp_chunks
    assert stream.state == StreamState.CLOSED


@pytest.mark.asyncio
async def test_stream_forwards_source_error():
    error = TransportException("connection reset")

    async def source():
        yield b"chunk1"
        yield b"chunk2"
        raise error

    stream = AudioSpeechStream(source())

    chunks = []
    with pytest.raises(TransportException) as exc_info:
        async for chunk in stream:
            chunks.append(chunk)

    assert chunks == [AudioSpeechChunkResponse(bytes=b"chunk1"), AudioSpeechChunkResponse(bytes=b"chunk2")]
    assert exc_info.value is error
    assert stream.state == StreamState.ERRORED


@pytest.mark.asyncio
async def test_stream_ends_after_error(alist):
    async def source():
        raise TransportException("connection reset")
        yield b"unreachable"

    stream = AudioSpeechStream(source())

    with pytest.raises(TransportException):
        await alist(stream)

    assert await alist(stream) == []


@pytest.mark.asyncio
async def test_stream_state_transitions(agenerator):
    stream = AudioSpeechStream(agenerator([b"chunk1"]))
    assert stream.state == StreamState.OPEN

    await stream.__anext__()
    assert stream.state == StreamState.CONSUMING

    with pytest.raises(StopAsyncIteration):
        await stream.__anext__()
    assert stream.state == StreamState.CLOSED


@pytest.mark.asyncio
async def test_stream_is_not_restartable(agenerator, alist):
    stream = AudioSpeechStream(agenerator([b"chunk1", b"chunk2"]))

    await alist(stream)

    assert await alist(stream) == []


@pytest.mark.asyncio
async def test_stream_empty_source(agenerator, alist):
    stream = AudioSpeechStream(agenerator([]))

    assert await alist(stream) == []
    assert stream.state == StreamState.CLOSED


@pytest.mark.asyncio
async def test_stream_aclose_releases_source(tracked_source, closed_sources, alist):
    stream = AudioSpeechStream(tracked_source([b"chunk1", b"chunk2", b"chunk3"]))

    chunk = await stream.__anext__()
    await stream.aclose()

    assert chunk == AudioSpeechChunkResponse(bytes=b"chunk1")
    assert closed_sources == [True]
    assert stream.state == StreamState.CLOSED
    assert await alist(stream) == []


@pytest.mark.asyncio
async def test_stream_context_manager_releases_source(tracked_source, closed_sources):
    async with AudioSpeechStream(tracked_source([b"chunk1", b"chunk2"])) as stream:
        async for _ in stream:
            break

    assert closed_sources == [True]
    assert stream.state == StreamState.CLOSED


@pytest.mark.asyncio
async def test_stream_aclose_after_error_keeps_errored_state():
    async def source():
        raise TransportException("connection reset")
        yield b"unreachable"

    stream = AudioSpeechStream(source())
    with pytest.raises(TransportException):
        await stream.__anext__()

    await stream.aclose()

    assert stream.state == StreamState.ERRORED

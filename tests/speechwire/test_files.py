"""Unit tests for upload source resolution."""

import httpx
import pytest

from speechwire.files import DefaultFileResolver, guess_content_type
from speechwire.types.exceptions import FileResolutionException
from speechwire.types.media import BytesUpload, FilePart, UrlUpload


@pytest.fixture
def resolver():
    return DefaultFileResolver()


@pytest.mark.parametrize(
    "filename, exp_content_type",
    [
        ("speech.mp3", "audio/mpeg"),
        ("notes.txt", "text/plain"),
        ("blob.unknownext", "application/octet-stream"),
        ("no_extension", "application/octet-stream"),
    ],
)
def test_guess_content_type(filename, exp_content_type):
    assert guess_content_type(filename) == exp_content_type


@pytest.mark.asyncio
async def test_resolve_bytes_upload(resolver):
    tru_part = await resolver.resolve(BytesUpload(content=b"ID3", filename="speech.mp3"))
    exp_part = FilePart(filename="speech.mp3", content=b"ID3", content_type="audio/mpeg")

    assert tru_part == exp_part


@pytest.mark.asyncio
async def test_resolve_bytes_upload_explicit_content_type(resolver):
    part = await resolver.resolve(BytesUpload(content=b"OggS", filename="clip", content_type="audio/ogg"))

    assert part.content_type == "audio/ogg"


@pytest.mark.asyncio
async def test_resolve_path(resolver, tmp_path):
    path = tmp_path / "speech.mp3"
    path.write_bytes(b"ID3audio")

    tru_part = await resolver.resolve(path)
    exp_part = FilePart(filename="speech.mp3", content=b"ID3audio", content_type="audio/mpeg")

    assert tru_part == exp_part


@pytest.mark.asyncio
async def test_resolve_str_path(resolver, tmp_path):
    path = tmp_path / "speech.mp3"
    path.write_bytes(b"ID3audio")

    part = await resolver.resolve(str(path))

    assert part.content == b"ID3audio"


@pytest.mark.asyncio
async def test_resolve_missing_path(resolver, tmp_path):
    with pytest.raises(FileResolutionException) as exc_info:
        await resolver.resolve(tmp_path / "missing.wav")

    assert isinstance(exc_info.value.__cause__, FileNotFoundError)


@pytest.mark.asyncio
async def test_resolve_url():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, content=b"OggS", headers={"content-type": "audio/ogg; codecs=opus"})

    resolver = DefaultFileResolver(client_args={"transport": httpx.MockTransport(handler)})

    tru_part = await resolver.resolve(UrlUpload(url="https://example.com/media/clip.ogg"))
    exp_part = FilePart(filename="clip.ogg", content=b"OggS", content_type="audio/ogg")

    assert tru_part == exp_part
    assert str(requests[0].url) == "https://example.com/media/clip.ogg"


@pytest.mark.asyncio
async def test_resolve_url_explicit_filename():
    def handler(request):
        return httpx.Response(200, content=b"ID3")

    resolver = DefaultFileResolver(client_args={"transport": httpx.MockTransport(handler)})

    part = await resolver.resolve(UrlUpload(url="https://example.com/download?id=1", filename="speech.mp3"))

    assert part.filename == "speech.mp3"
    assert part.content_type == "audio/mpeg"


@pytest.mark.asyncio
async def test_resolve_url_error_status():
    def handler(request):
        return httpx.Response(404)

    resolver = DefaultFileResolver(client_args={"transport": httpx.MockTransport(handler)})

    with pytest.raises(FileResolutionException) as exc_info:
        await resolver.resolve(UrlUpload(url="https://example.com/missing.mp3"))

    assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)


@pytest.mark.asyncio
async def test_resolve_url_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    resolver = DefaultFileResolver(client_args={"transport": httpx.MockTransport(handler)})

    with pytest.raises(FileResolutionException):
        await resolver.resolve(UrlUpload(url="https://example.com/clip.mp3"))


@pytest.mark.asyncio
async def test_resolve_unsupported_source(resolver):
    with pytest.raises(TypeError, match="unsupported upload source"):
        await resolver.resolve(b"raw bytes")

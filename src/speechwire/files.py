"""Upload source resolution.

Turns a `FileSource` into a `FilePart` (filename, bytes, content type) right before a multipart body is built.
"""

import asyncio
import logging
import mimetypes
import os
from pathlib import Path, PurePosixPath
from typing import Any, Optional, Protocol, Union
from urllib.parse import urlparse

import httpx

from .types.exceptions import FileResolutionException
from .types.media import BytesUpload, FilePart, UrlUpload

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class FileResolver(Protocol):
    """Protocol for turning upload sources into file parts."""

    async def resolve(self, source: Union[str, os.PathLike[str], BytesUpload, UrlUpload]) -> FilePart:
        """Resolve an upload source.

        Args:
            source: The upload source.

        Returns:
            The resolved file part.

        Raises:
            FileResolutionException: If the source cannot be read.
        """
        ...


def guess_content_type(filename: str) -> str:
    """Guess the MIME type of a file from its name.

    Args:
        filename: Name of the file.

    Returns:
        The guessed MIME type, or "application/octet-stream" when unknown.
    """
    content_type, _ = mimetypes.guess_type(filename)
    return content_type or DEFAULT_CONTENT_TYPE


class DefaultFileResolver:
    """Resolves filesystem paths, in-memory buffers, and remote URLs.

    Paths are read in a worker thread so the event loop is never blocked. URLs are downloaded with a short-lived
    `httpx.AsyncClient`.
    """

    def __init__(self, client_args: Optional[dict[str, Any]] = None) -> None:
        """Initialize the resolver.

        Args:
            client_args: Arguments for the `httpx.AsyncClient` used to download remote sources.
        """
        self.client_args = {"follow_redirects": True, "timeout": 30.0, **(client_args or {})}

    async def resolve(self, source: Union[str, os.PathLike[str], BytesUpload, UrlUpload]) -> FilePart:
        """Resolve an upload source.

        Args:
            source: The upload source.

        Returns:
            The resolved file part.

        Raises:
            FileResolutionException: If the file cannot be read or downloaded.
            TypeError: If the source is not a supported upload source.
        """
        if isinstance(source, BytesUpload):
            return FilePart(
                filename=source.filename,
                content=source.content,
                content_type=source.content_type or guess_content_type(source.filename),
            )

        if isinstance(source, UrlUpload):
            return await self._download(source)

        if isinstance(source, (str, os.PathLike)):
            return await self._read(Path(source))

        raise TypeError(f"source_type=<{type(source).__name__}> | unsupported upload source")

    async def _read(self, path: Path) -> FilePart:
        logger.debug("path=<%s> | reading upload source", path)
        try:
            content = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise FileResolutionException(f"path=<{path}> | failed to read upload source") from e

        return FilePart(filename=path.name, content=content, content_type=guess_content_type(path.name))

    async def _download(self, source: UrlUpload) -> FilePart:
        filename = source.filename or PurePosixPath(urlparse(source.url).path).name or "file"

        logger.debug("url=<%s> | downloading upload source", source.url)
        try:
            async with httpx.AsyncClient(**self.client_args) as client:
                response = await client.get(source.url)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise FileResolutionException(f"url=<{source.url}> | failed to download upload source") from e

        content_type = response.headers.get("content-type", "").split(";")[0].strip()
        return FilePart(
            filename=filename,
            content=response.content,
            content_type=content_type or guess_content_type(filename),
        )

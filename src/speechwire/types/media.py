"""Upload source type definitions for the SDK.

An upload source is anything that can be turned into the bytes of an audio file: a path on the local filesystem, an
in-memory buffer, or a remote URL. Sources are resolved into a `FilePart` right before a multipart request is built.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, TypeAlias, Union


@dataclass(frozen=True)
class BytesUpload:
    """An audio file already held in memory.

    Attributes:
        content: The binary content of the file.
        filename: Name reported to the provider. Providers commonly infer the audio format from the extension.
        content_type: MIME type of the content. Guessed from the filename when not set.
    """

    content: bytes
    filename: str = "file"
    content_type: Optional[str] = None


@dataclass(frozen=True)
class UrlUpload:
    """An audio file hosted at a remote URL.

    The file is downloaded when the request is built; the provider never sees the URL.

    Attributes:
        url: HTTP(S) URL of the file.
        filename: Name reported to the provider. Defaults to the last segment of the URL path.
    """

    url: str
    filename: Optional[str] = None


FileSource: TypeAlias = Union[Path, BytesUpload, UrlUpload]
"""Supported upload sources. Plain strings are accepted wherever a `FileSource` is expected and treated as paths."""


@dataclass(frozen=True)
class FilePart:
    """A resolved file ready to be attached to a multipart body.

    Attributes:
        filename: Name of the file part.
        content: The binary content of the file.
        content_type: MIME type of the content.
    """

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


@dataclass
class MultipartForm:
    """An ordered multipart body made of text fields and file parts.

    Attributes:
        parts: The parts in the order they were added. Text fields hold a `str`, file parts a `FilePart`.
    """

    parts: list[tuple[str, Union[str, FilePart]]] = field(default_factory=list)

    def text(self, name: str, value: str) -> "MultipartForm":
        """Add a text field.

        Args:
            name: Field name.
            value: Field value.

        Returns:
            The form, to allow chaining.
        """
        self.parts.append((name, value))
        return self

    def part(self, name: str, file: FilePart) -> "MultipartForm":
        """Add a file part.

        Args:
            name: Field name.
            file: The resolved file.

        Returns:
            The form, to allow chaining.
        """
        self.parts.append((name, file))
        return self

    @property
    def fields(self) -> list[tuple[str, str]]:
        """Text fields in insertion order."""
        return [(name, value) for name, value in self.parts if isinstance(value, str)]

    @property
    def files(self) -> list[tuple[str, FilePart]]:
        """File parts in insertion order."""
        return [(name, value) for name, value in self.parts if isinstance(value, FilePart)]

    def names(self) -> list[str]:
        """Names of all parts in insertion order."""
        return [name for name, _ in self.parts]

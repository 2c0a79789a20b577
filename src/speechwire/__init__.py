"""A client for OpenAI-compatible audio APIs with pluggable request encoding."""

from . import audio, transport, types
from .audio import Audio, AudioSpeechStream, RequestConverter
from .client import Client
from .files import DefaultFileResolver, FileResolver
from .transport import HttpTransport, Transport

__all__ = [
    "Audio",
    "AudioSpeechStream",
    "audio",
    "Client",
    "DefaultFileResolver",
    "FileResolver",
    "HttpTransport",
    "RequestConverter",
    "Transport",
    "transport",
    "types",
]

"""SDK type definitions."""

from .audio import (
    AudioSpeechChunkResponse,
    AudioSpeechParameters,
    AudioSpeechResponse,
    AudioTranscriptionParameters,
    AudioTranslationParameters,
    StreamingSpeechParameters,
    StreamState,
    VadChunkingStrategy,
)
from .media import BytesUpload, FilePart, FileSource, MultipartForm, UrlUpload

__all__ = [
    "AudioSpeechChunkResponse",
    "AudioSpeechParameters",
    "AudioSpeechResponse",
    "AudioTranscriptionParameters",
    "AudioTranslationParameters",
    "BytesUpload",
    "FilePart",
    "FileSource",
    "MultipartForm",
    "StreamingSpeechParameters",
    "StreamState",
    "UrlUpload",
    "VadChunkingStrategy",
]

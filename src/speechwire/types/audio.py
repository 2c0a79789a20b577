"""Audio request and response type definitions for the SDK.

These types are modeled after the OpenAI audio API.

- Docs: https://platform.openai.com/docs/api-reference/audio
"""

import asyncio
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .media import FileSource

AudioVoice = Literal["alloy", "ash", "ballad", "coral", "echo", "fable", "onyx", "nova", "sage", "shimmer", "verse"]
"""Built-in voices. Providers with custom voices accept any other string as well."""

AudioSpeechResponseFormat = Literal["mp3", "opus", "aac", "flac", "wav", "pcm"]
"""Supported synthesized audio formats."""

AudioOutputFormat = Literal["json", "text", "srt", "verbose_json", "vtt"]
"""Supported transcript formats."""

TimestampGranularity = Literal["word", "segment"]
"""Supported timestamp granularities for `verbose_json` transcripts."""


class VadChunkingStrategy(BaseModel):
    """Server-side voice activity detection used to split the audio into chunks.

    Attributes:
        type: Always "server_vad".
        prefix_padding_ms: Audio to include before detected speech, in milliseconds.
        silence_duration_ms: Silence that ends a chunk, in milliseconds.
        threshold: Sensitivity of the detector (0.0 to 1.0).
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["server_vad"] = "server_vad"
    prefix_padding_ms: Optional[int] = Field(default=None, ge=0)
    silence_duration_ms: Optional[int] = Field(default=None, ge=0)
    threshold: Optional[float] = Field(default=None, ge=0.0, le=1.0)


ChunkingStrategy = Union[Literal["auto"], VadChunkingStrategy]
"""Either "auto" or an explicit voice activity detection configuration."""


class AudioSpeechParameters(BaseModel):
    """Parameters for generating audio from text.

    Attributes:
        model: Model ID (e.g., "tts-1").
        input: Text to synthesize.
        voice: Voice to synthesize with.
        response_format: Format of the returned audio.
        speed: Playback speed of the generated audio (0.25 to 4.0).
        voice_text: Provider-specific transcript of a reference voice sample. Never sent on streaming requests.
    """

    model_config = ConfigDict(frozen=True)

    model: str
    input: str
    voice: Union[AudioVoice, str]
    response_format: Optional[AudioSpeechResponseFormat] = None
    speed: Optional[float] = Field(default=None, ge=0.25, le=4.0)
    voice_text: Optional[str] = None


class StreamingSpeechParameters(AudioSpeechParameters):
    """Parameters for generating audio from text as a stream of chunks.

    Attributes:
        stream: Always True.
    """

    stream: Literal[True] = True

    @classmethod
    def from_speech_parameters(cls, parameters: AudioSpeechParameters) -> "StreamingSpeechParameters":
        """Derive streaming parameters from non-streaming ones.

        `voice_text` is dropped whatever its value, and `stream` is forced on.

        Args:
            parameters: The non-streaming speech parameters.

        Returns:
            The streaming speech parameters.
        """
        return cls(**parameters.model_dump(exclude={"voice_text", "stream"}), stream=True)


class AudioTranscriptionParameters(BaseModel):
    """Parameters for transcribing audio into text in the language of the audio.

    Attributes:
        file: The audio to transcribe. Strings are treated as filesystem paths.
        model: Model ID (e.g., "whisper-1").
        prompt: Text to guide the model's style or continue a previous segment.
        language: Language of the audio in ISO-639-1 format.
        chunking_strategy: How the provider splits the audio into chunks.
        response_format: Format of the transcript.
        stream: Whether the provider should stream the transcript back.
        temperature: Sampling temperature (0.0 to 1.0).
        timestamp_granularities: Timestamp granularities to populate, in order.
        extra_body: Additional provider-specific fields. Must be a flat JSON object; each key is sent as its own field.
    """

    model_config = ConfigDict(frozen=True)

    file: FileSource
    model: str
    prompt: Optional[str] = None
    language: Optional[str] = None
    chunking_strategy: Optional[ChunkingStrategy] = None
    response_format: Optional[AudioOutputFormat] = None
    stream: Optional[bool] = None
    temperature: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    timestamp_granularities: Optional[list[TimestampGranularity]] = None
    extra_body: Optional[Any] = None


class AudioTranslationParameters(BaseModel):
    """Parameters for translating audio into English text.

    Attributes:
        file: The audio to translate. Strings are treated as filesystem paths.
        model: Model ID (e.g., "whisper-1").
        prompt: English text to guide the model's style or continue a previous segment.
        response_format: Format of the transcript.
        temperature: Sampling temperature (0.0 to 1.0).
    """

    model_config = ConfigDict(frozen=True)

    file: FileSource
    model: str
    prompt: Optional[str] = None
    response_format: Optional[AudioOutputFormat] = None
    temperature: Optional[float] = Field(default=None, ge=0.0, le=1.0)


@dataclass(frozen=True)
class AudioSpeechResponse:
    """Synthesized audio returned by the provider.

    Attributes:
        bytes: The raw audio, encoded in the requested response format.
    """

    bytes: bytes

    async def save(self, file_path: Union[str, os.PathLike[str]]) -> None:
        """Write the audio to a file, replacing it if it exists.

        Args:
            file_path: Destination path.
        """
        await asyncio.to_thread(Path(file_path).write_bytes, self.bytes)


@dataclass(frozen=True)
class AudioSpeechChunkResponse:
    """One chunk of a synthesized audio stream.

    Attributes:
        bytes: The raw audio chunk.
    """

    bytes: bytes


class StreamState(str, Enum):
    """Lifecycle states of an audio stream.

    `CLOSED` and `ERRORED` are terminal.
    """

    OPEN = "OPEN"
    CONSUMING = "CONSUMING"
    CLOSED = "CLOSED"
    ERRORED = "ERRORED"

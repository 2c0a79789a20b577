from pathlib import Path

import pydantic
import pytest

from speechwire.types.audio import (
    AudioSpeechParameters,
    AudioSpeechResponse,
    AudioTranscriptionParameters,
    AudioTranslationParameters,
    StreamingSpeechParameters,
    VadChunkingStrategy,
)
from speechwire.types.media import BytesUpload, UrlUpload


@pytest.fixture
def speech_parameters():
    return AudioSpeechParameters(
        model="tts-1",
        input="Hello there",
        voice="alloy",
        response_format="mp3",
        speed=1.5,
        voice_text="reference transcript",
    )


def test_streaming_parameters_from_speech_parameters(speech_parameters):
    tru_parameters = StreamingSpeechParameters.from_speech_parameters(speech_parameters)
    exp_parameters = StreamingSpeechParameters(
        model="tts-1",
        input="Hello there",
        voice="alloy",
        response_format="mp3",
        speed=1.5,
        stream=True,
    )

    assert tru_parameters == exp_parameters
    assert tru_parameters.voice_text is None
    assert tru_parameters.stream is True


def test_streaming_parameters_leave_source_untouched(speech_parameters):
    StreamingSpeechParameters.from_speech_parameters(speech_parameters)

    assert speech_parameters.voice_text == "reference transcript"


def test_speech_parameters_accept_custom_voice():
    parameters = AudioSpeechParameters(model="tts-1", input="hi", voice="my-cloned-voice")

    assert parameters.voice == "my-cloned-voice"


@pytest.mark.parametrize("speed", [0.1, 4.5])
def test_speech_parameters_speed_out_of_range(speed):
    with pytest.raises(pydantic.ValidationError):
        AudioSpeechParameters(model="tts-1", input="hi", voice="alloy", speed=speed)


def test_speech_parameters_unknown_response_format():
    with pytest.raises(pydantic.ValidationError):
        AudioSpeechParameters(model="tts-1", input="hi", voice="alloy", response_format="ogg")


def test_speech_parameters_are_frozen(speech_parameters):
    with pytest.raises(pydantic.ValidationError):
        speech_parameters.input = "changed"


@pytest.mark.parametrize(
    "file, exp_file",
    [
        ("audio.wav", Path("audio.wav")),
        (Path("/tmp/audio.mp3"), Path("/tmp/audio.mp3")),
        (BytesUpload(content=b"RIFF", filename="audio.wav"), BytesUpload(content=b"RIFF", filename="audio.wav")),
        (UrlUpload(url="https://example.com/a.mp3"), UrlUpload(url="https://example.com/a.mp3")),
    ],
)
def test_transcription_parameters_file_sources(file, exp_file):
    parameters = AudioTranscriptionParameters(file=file, model="whisper-1")

    assert parameters.file == exp_file


def test_transcription_parameters_defaults():
    parameters = AudioTranscriptionParameters(file="audio.wav", model="whisper-1")

    assert parameters.prompt is None
    assert parameters.language is None
    assert parameters.chunking_strategy is None
    assert parameters.response_format is None
    assert parameters.stream is None
    assert parameters.temperature is None
    assert parameters.timestamp_granularities is None
    assert parameters.extra_body is None


def test_transcription_parameters_chunking_strategy():
    parameters = AudioTranscriptionParameters(
        file="audio.wav",
        model="whisper-1",
        chunking_strategy={"type": "server_vad", "threshold": 0.4},
    )

    assert parameters.chunking_strategy == VadChunkingStrategy(threshold=0.4)


def test_transcription_parameters_unknown_granularity():
    with pytest.raises(pydantic.ValidationError):
        AudioTranscriptionParameters(file="audio.wav", model="whisper-1", timestamp_granularities=["sentence"])


def test_translation_parameters_temperature_out_of_range():
    with pytest.raises(pydantic.ValidationError):
        AudioTranslationParameters(file="audio.wav", model="whisper-1", temperature=1.5)


@pytest.mark.asyncio
async def test_speech_response_save(tmp_path):
    response = AudioSpeechResponse(bytes=b"ID3audio")
    path = tmp_path / "speech.mp3"

    await response.save(path)

    assert path.read_bytes() == b"ID3audio"


def test_streaming_parameters_from_streaming_parameters():
    parameters = StreamingSpeechParameters(model="tts-1", input="hi", voice="alloy", voice_text="reference")

    tru_parameters = StreamingSpeechParameters.from_speech_parameters(parameters)

    assert tru_parameters.voice_text is None
    assert tru_parameters.stream is True

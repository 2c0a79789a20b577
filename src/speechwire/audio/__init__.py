"""Audio endpoints.

This package includes the `Audio` request orchestrator along with the request converter hook, the multipart encoder,
and the streaming response decoder it relies on.
"""

from .audio import Audio
from .converter import RequestConverter
from .streaming import AudioSpeechStream

__all__ = ["Audio", "AudioSpeechStream", "RequestConverter"]

"""语音合成模块."""

from articlecast.speech.base import SpeechProvider, VoiceSettings
from articlecast.speech.elevenlabs import ElevenLabsProvider
from articlecast.speech.synthesizer import SpeechSynthesizer

__all__ = [
    "ElevenLabsProvider",
    "SpeechProvider",
    "SpeechSynthesizer",
    "VoiceSettings",
]

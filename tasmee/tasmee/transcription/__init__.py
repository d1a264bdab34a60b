"""
Speech recognition adapters.

Usage:
    from tasmee.transcription import WhisperTranscriber

    with WhisperTranscriber() as transcriber:
        transcript = transcriber.transcribe(sample)
"""

from tasmee.transcription.base import BaseTranscriber
from tasmee.transcription.whisper import WhisperTranscriber

__all__ = [
    "BaseTranscriber",
    "WhisperTranscriber",
]

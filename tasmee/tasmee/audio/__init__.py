"""
Audio decoding and silence utilities.
"""

from tasmee.audio.decoder import AudioDecoder, decode_audio
from tasmee.audio.silence import (
    detect_non_silent_chunks,
    detect_silences,
    extract_segment,
)

__all__ = [
    "AudioDecoder",
    "decode_audio",
    "detect_non_silent_chunks",
    "detect_silences",
    "extract_segment",
]

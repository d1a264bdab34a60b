"""
Decode captured audio bytes into a Waveform.

pydub parses the container (WAV natively, other formats through ffmpeg);
librosa resamples to the sample rate the AudioSample asks for, falling back to
the configured sample_rate and channels.
"""

import io
import logging

import numpy as np

from tasmee.config import TasmeeSettings, get_settings
from tasmee.exceptions import DecodeError
from tasmee.models import AudioSample, Waveform

logger = logging.getLogger(__name__)


class AudioDecoder:
    """
    Converts an AudioSample into a float32 Waveform.

    Example:
        decoder = AudioDecoder()
        waveform = decoder.decode(AudioSample(data=wav_bytes))
    """

    def __init__(self, settings: TasmeeSettings | None = None):
        self._settings = settings or get_settings()

    def decode(self, sample: AudioSample) -> Waveform:
        """
        Decode, convert channels and resample one audio sample.

        Args:
            sample: Encoded audio plus its target rate and channel count

        Returns:
            Waveform at sample.sample_rate with sample.channels channels (the
            configured values where the sample leaves them unset)

        Raises:
            DecodeError: If the bytes are not decodable audio
        """
        if not sample.data:
            raise DecodeError("Cannot decode audio", "empty audio sample")

        sample_rate = sample.sample_rate or self._settings.sample_rate
        channels = sample.channels or self._settings.channels

        segment = self._parse(sample)
        samples = self._to_float(segment)
        samples = self._convert_channels(samples, segment.channels, channels)

        if segment.frame_rate != sample_rate and samples.shape[0] > 0:
            samples = self._resample(samples, segment.frame_rate, sample_rate)

        waveform = Waveform(samples=samples, sample_rate=sample_rate)
        logger.debug("Decoded %s into %s", sample, waveform)
        return waveform

    def _parse(self, sample: AudioSample):
        from pydub import AudioSegment

        try:
            return AudioSegment.from_file(io.BytesIO(sample.data), format=sample.format)
        except Exception as e:
            raise DecodeError(f"Cannot decode {sample.format} audio", str(e) or type(e).__name__) from e

    @staticmethod
    def _to_float(segment) -> np.ndarray:
        """Integer PCM from pydub to float32 in [-1, 1], shaped (frames, channels)."""
        pcm = np.array(segment.get_array_of_samples(), dtype=np.float32)
        full_scale = float(1 << (8 * segment.sample_width - 1))
        pcm /= full_scale
        return pcm.reshape(-1, segment.channels)

    @staticmethod
    def _convert_channels(samples: np.ndarray, source: int, target: int) -> np.ndarray:
        if source == target:
            pass
        elif target == 1:
            samples = samples.mean(axis=1, keepdims=True)
        elif source == 1:
            samples = np.repeat(samples, target, axis=1)
        else:
            raise DecodeError("Cannot decode audio", f"unsupported channel conversion {source} -> {target}")

        return samples[:, 0] if target == 1 else samples

    @staticmethod
    def _resample(samples: np.ndarray, orig_sr: int, target_sr: int) -> np.ndarray:
        import librosa

        # librosa resamples along the last axis
        resampled = librosa.resample(np.ascontiguousarray(samples.T), orig_sr=orig_sr, target_sr=target_sr)
        return resampled.T


def decode_audio(sample: AudioSample, settings: TasmeeSettings | None = None) -> Waveform:
    """Convenience wrapper around AudioDecoder(settings).decode()."""
    return AudioDecoder(settings).decode(sample)

"""
Frame-level signal features shared by the Tajweed rule analyzers.

Frames are frame_ms long with a hop_ms step, derived from the waveform's own
sample rate. RMS is normalized to the loudest frame so thresholds are relative.
"""

from dataclasses import dataclass

import numpy as np

from tasmee.config import TasmeeSettings, get_settings
from tasmee.exceptions import AnalysisFault
from tasmee.models import RuleCategory, Waveform

# Nasal murmur band for Ghunnah
GHUNNAH_LOW_HZ = 150
GHUNNAH_HIGH_HZ = 800

# Peak RMS below this is treated as digital silence
SILENT_PEAK = 1e-6


def contiguous_regions(mask: np.ndarray) -> list[tuple[int, int]]:
    """
    Runs of True in a boolean mask as (start, end) frame indices, end exclusive.

    Examples:
        >>> contiguous_regions(np.array([False, True, True, False, True]))
        [(1, 3), (4, 5)]
    """
    regions = []
    start = None
    for i, flag in enumerate(mask):
        if flag and start is None:
            start = i
        elif not flag and start is not None:
            regions.append((start, i))
            start = None
    if start is not None:
        regions.append((start, len(mask)))
    return regions


@dataclass(frozen=True)
class SignalFeatures:
    """
    Per-frame measurements of one waveform.

    Attributes:
        rms: RMS energy normalized to the loudest frame (0-1)
        voiced: Frames whose RMS is above the silence threshold
        flux: Spectral flux normalized to its maximum (0-1); low means sustained
        nasal_ratio: Share of spectral energy inside the nasal band (0-1)
        hop_seconds: Time between frames
        duration: Length of the analysed audio in seconds
    """

    rms: np.ndarray
    voiced: np.ndarray
    flux: np.ndarray
    nasal_ratio: np.ndarray
    hop_seconds: float
    duration: float

    @classmethod
    def from_waveform(
        cls,
        waveform: Waveform,
        settings: TasmeeSettings | None = None,
        category: RuleCategory | None = None,
    ) -> "SignalFeatures":
        """
        Extract frame features.

        Raises:
            AnalysisFault: If the waveform is empty, shorter than one frame or silent
        """
        import librosa
        from librosa.util.exceptions import ParameterError

        settings = settings or get_settings()

        if waveform.is_empty:
            raise AnalysisFault(category, "empty waveform")

        sr = waveform.sample_rate
        y = np.array(waveform.mono(), dtype=np.float32)
        frame_length = max(2, int(round(sr * settings.frame_ms / 1000)))
        hop_length = max(1, int(round(sr * settings.hop_ms / 1000)))

        if len(y) < frame_length:
            raise AnalysisFault(category, f"clip shorter than one {settings.frame_ms:g} ms frame")

        rms = librosa.feature.rms(y=y, frame_length=frame_length, hop_length=hop_length)[0]
        peak = float(np.max(rms))
        if peak < SILENT_PEAK:
            raise AnalysisFault(category, "no signal (silent clip)")
        rms = rms / peak

        n_fft = 1 << (frame_length - 1).bit_length()
        try:
            magnitude = np.abs(
                librosa.stft(y, n_fft=n_fft, hop_length=hop_length, win_length=frame_length)
            )
        except ParameterError as e:
            raise AnalysisFault(category, f"spectral analysis failed: {e}") from e

        # Spectral flux: magnitude change between consecutive frames
        flux = np.sqrt(np.sum(np.diff(magnitude, axis=1) ** 2, axis=0))
        flux = np.concatenate([[0.0], flux])
        max_flux = float(np.max(flux))
        flux = flux / max_flux if max_flux > 0 else np.zeros_like(flux)

        power = magnitude ** 2
        freqs = librosa.fft_frequencies(sr=sr, n_fft=n_fft)
        band = (freqs >= GHUNNAH_LOW_HZ) & (freqs <= GHUNNAH_HIGH_HZ)
        total = power.sum(axis=0)
        nasal_ratio = power[band].sum(axis=0) / np.maximum(total, 1e-12)

        # rms and stft frame counts can differ by one
        n = min(len(rms), len(flux))
        rms = rms[:n]
        threshold = 10 ** (settings.silence_threshold_db / 20)

        return cls(
            rms=rms,
            voiced=rms >= threshold,
            flux=flux[:n],
            nasal_ratio=nasal_ratio[:n],
            hop_seconds=hop_length / sr,
            duration=waveform.duration,
        )

    @property
    def num_frames(self) -> int:
        return len(self.rms)

    def frame_time(self, index: int) -> float:
        """Centre time of frame `index` in seconds."""
        return index * self.hop_seconds

    def seconds(self, num_frames: int) -> float:
        return num_frames * self.hop_seconds

    def voiced_regions(self) -> list[tuple[int, int]]:
        return contiguous_regions(self.voiced)

    def pauses(self) -> list[tuple[int, int]]:
        """Unvoiced regions that have voiced frames on both sides."""
        return [
            (start, end)
            for start, end in contiguous_regions(~self.voiced)
            if start > 0 and end < self.num_frames
        ]

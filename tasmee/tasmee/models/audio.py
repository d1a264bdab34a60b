"""
Audio sample and decoded waveform models.
"""

from dataclasses import dataclass

import numpy as np
from pydantic import BaseModel, Field


class AudioSample(BaseModel):
    """
    One captured recitation attempt, as handed over by the capture boundary.

    Attributes:
        data: Encoded audio bytes (WAV, MP3, OGG, ...)
        format: Container hint used by the decoder
        sample_rate: Sample rate the audio is decoded to (None: configured rate)
        channels: Channel count the audio is decoded to (None: configured count)
    """

    data: bytes = Field(
        ...,
        description="Encoded audio bytes",
        repr=False,
    )
    format: str = Field(
        default="wav",
        description="Container format hint (wav, mp3, ogg, webm, ...)",
    )
    sample_rate: int | None = Field(
        default=None,
        description="Target sample rate in Hz; None uses the configured sample_rate",
        ge=1000,
    )
    channels: int | None = Field(
        default=None,
        description="Target channel count; None uses the configured channels",
        ge=1,
        le=2,
    )

    model_config = {"frozen": True}

    @property
    def size(self) -> int:
        """Number of encoded bytes."""
        return len(self.data)

    def __str__(self) -> str:
        target = f"{self.sample_rate or 'default'}Hz/{self.channels or 'default'}ch"
        return f"AudioSample({self.format}, {self.size} bytes -> {target})"


@dataclass(frozen=True)
class Waveform:
    """
    Decoded audio: float32 amplitudes in [-1, 1] plus their sample rate.

    `samples` has shape (n,) for mono audio and (n, channels) otherwise. The
    array is made read-only on construction so analyzers cannot modify it.
    """

    samples: np.ndarray
    sample_rate: int

    def __post_init__(self):
        if self.sample_rate <= 0:
            raise ValueError("sample_rate must be positive")
        samples = np.array(self.samples, dtype=np.float32, copy=True)
        if samples.ndim not in (1, 2):
            raise ValueError("samples must be 1-D (mono) or 2-D (frames, channels)")
        samples.setflags(write=False)
        object.__setattr__(self, "samples", samples)

    @property
    def channels(self) -> int:
        return 1 if self.samples.ndim == 1 else self.samples.shape[1]

    @property
    def num_samples(self) -> int:
        """Number of frames (samples per channel)."""
        return self.samples.shape[0]

    @property
    def duration(self) -> float:
        """Duration in seconds."""
        return self.num_samples / self.sample_rate

    @property
    def is_empty(self) -> bool:
        return self.num_samples == 0

    def mono(self) -> np.ndarray:
        """Single-channel view of the samples (channel average)."""
        if self.samples.ndim == 1:
            return self.samples
        return self.samples.mean(axis=1)

    def __str__(self) -> str:
        return f"Waveform({self.duration:.2f}s, {self.sample_rate}Hz, {self.channels}ch)"

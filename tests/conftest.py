"""
Shared fixtures and test configuration for Tasmee tests.
"""

import asyncio
import io
import threading
import time
from types import SimpleNamespace

import numpy as np
import pytest
from pydub import AudioSegment

from tasmee.config import TasmeeSettings
from tasmee.exceptions import TranscriptionError
from tasmee.models import AudioSample, ReferenceText, Transcript, Waveform
from tasmee.transcription.base import BaseTranscriber

SAMPLE_RATE = 16000


def tone(seconds: float, freq: float = 300.0, amplitude: float = 0.5, sr: int = SAMPLE_RATE) -> np.ndarray:
    """Pure sine tone."""
    t = np.arange(int(round(seconds * sr))) / sr
    return (amplitude * np.sin(2 * np.pi * freq * t)).astype(np.float32)


def silence(seconds: float, sr: int = SAMPLE_RATE) -> np.ndarray:
    return np.zeros(int(round(seconds * sr)), dtype=np.float32)


def concat(*parts: np.ndarray) -> np.ndarray:
    return np.concatenate(parts).astype(np.float32)


def wav_bytes(samples: np.ndarray, sr: int = SAMPLE_RATE) -> bytes:
    """Encode float samples ((n,) or (n, channels)) as 16-bit PCM WAV."""
    samples = np.asarray(samples, dtype=np.float32)
    channels = 1 if samples.ndim == 1 else samples.shape[1]
    pcm = (np.clip(samples, -1.0, 1.0) * 32767).astype("<i2")
    segment = AudioSegment(data=pcm.tobytes(), sample_width=2, frame_rate=sr, channels=channels)
    buffer = io.BytesIO()
    segment.export(buffer, format="wav")
    return buffer.getvalue()


class FakeTranscriber(BaseTranscriber):
    """Transcriber returning a scripted result (or raising a scripted error)."""

    def __init__(self, result=None, error: Exception | None = None, delay: float = 0.0):
        self.result = Transcript.coerce(result)
        self.error = error
        self.delay = delay
        self.calls = 0
        self.loaded = False
        self.cancelled = False

    @property
    def is_loaded(self) -> bool:
        return self.loaded

    def load(self) -> None:
        self.loaded = True

    def unload(self) -> None:
        self.loaded = False

    def transcribe(self, sample: AudioSample) -> Transcript:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.result

    async def transcribe_async(self, sample: AudioSample, executor=None) -> Transcript:
        if self.delay:
            try:
                await asyncio.sleep(self.delay)
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        return self.transcribe(sample)


class BlockingTranscriber(FakeTranscriber):
    """Transcriber whose synchronous transcribe() blocks its worker thread."""

    def __init__(self, result=None, error: Exception | None = None, delay: float = 0.0):
        super().__init__(result=result, error=error, delay=delay)
        self.finished = threading.Event()

    def transcribe(self, sample: AudioSample) -> Transcript:
        time.sleep(self.delay)
        try:
            return super().transcribe(sample)
        finally:
            self.finished.set()

    transcribe_async = BaseTranscriber.transcribe_async


@pytest.fixture
def settings():
    """Settings isolated from the environment's defaults."""
    return TasmeeSettings(transcription_timeout=5.0)


@pytest.fixture
def reference_lines():
    """First two ayahs of Al-Fatiha."""
    return [
        "بِسْمِ اللَّهِ الرَّحْمَٰنِ الرَّحِيمِ",
        "الْحَمْدُ لِلَّهِ رَبِّ الْعَالَمِينَ",
    ]


@pytest.fixture
def reference(reference_lines):
    return ReferenceText(lines=reference_lines, title="الفاتحة")


@pytest.fixture
def recitation_samples():
    """
    Synthetic recitation that satisfies every rule check.

    A long low tone (elongated, nasal), a short gap (silent letter), a short
    burst (bounce) and a closing pause (stop).
    """
    return concat(
        silence(0.2),
        tone(0.8, freq=300.0),
        silence(0.1),
        tone(0.06, freq=300.0),
        silence(0.5),
    )


@pytest.fixture
def recitation_sample(recitation_samples):
    return AudioSample(data=wav_bytes(recitation_samples))


@pytest.fixture
def make_waveform():
    """Build a Waveform from float samples."""

    def _make(samples, sr: int = SAMPLE_RATE) -> Waveform:
        return Waveform(samples=samples, sample_rate=sr)

    return _make


@pytest.fixture
def make_transcriber():
    return FakeTranscriber


@pytest.fixture
def make_blocking_transcriber():
    return BlockingTranscriber


@pytest.fixture
def failing_transcriber():
    return FakeTranscriber(error=TranscriptionError("no speech recognized"))


@pytest.fixture
def normalization_test_cases():
    """Test cases for Arabic normalization."""
    return [
        ("بِسْمِ اللَّهِ الرَّحْمَٰنِ الرَّحِيمِ", "بسم الله الرحمن الرحيم"),
        ("أَعُوذُ بِاللَّهِ مِنَ الشَّيْطَانِ الرَّجِيمِ", "اعوذ بالله من الشيطان الرجيم"),
        ("ٱلۡحَمۡدُ لِلَّهِ رَبِّ ٱلۡعَٰلَمِينَ", "الحمد لله رب العلمين"),
    ]


@pytest.fixture
def signals():
    """Synthetic signal builders: tone, silence, concat, wav_bytes."""
    return SimpleNamespace(tone=tone, silence=silence, concat=concat, wav_bytes=wav_bytes, sr=SAMPLE_RATE)

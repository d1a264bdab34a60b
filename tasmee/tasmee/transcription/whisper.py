"""
Hugging Face speech recognition for Quran recitation.

Supports the Transformers ASR pipeline (Whisper or wav2vec2 CTC models) and the
Faster Whisper backend.
"""

import logging
from typing import Literal

from tasmee.audio import AudioDecoder, detect_non_silent_chunks, extract_segment
from tasmee.config import TasmeeSettings, get_settings
from tasmee.exceptions import (
    ConfigurationError,
    DecodeError,
    ModelNotLoadedError,
    TranscriptionError,
)
from tasmee.models import AudioSample, Transcript, Waveform
from tasmee.transcription.base import BaseTranscriber

logger = logging.getLogger(__name__)

MODEL_TYPES = ("transformers", "faster-whisper")


class WhisperTranscriber(BaseTranscriber):
    """
    Transcriber backed by a Hugging Face model.

    With split_on_silence enabled, the recitation is cut at pauses and every
    non-silent chunk becomes one transcript line, so lines follow the reciter's
    stops.

    Example:
        transcriber = WhisperTranscriber()
        transcriber.load()

        transcript = transcriber.transcribe(sample)

        transcriber.unload()

    Or using context manager:
        with WhisperTranscriber() as transcriber:
            transcript = transcriber.transcribe(sample)
    """

    def __init__(
        self,
        model_id: str | None = None,
        device: Literal["auto", "cpu", "cuda", "mps"] | None = None,
        model_type: Literal["transformers", "faster-whisper"] | None = None,
        settings: TasmeeSettings | None = None,
    ):
        """
        Initialize the transcriber.

        Args:
            model_id: HuggingFace model ID (overrides settings)
            device: Device for inference (overrides settings)
            model_type: Model backend type (overrides settings)
            settings: Settings instance to use
        """
        self._settings = settings or get_settings()

        self._model_id = model_id or self._settings.model_id
        self._device = device or self._settings.device
        self._model_type = model_type or self._settings.model_type

        if self._model_type not in MODEL_TYPES:
            raise ConfigurationError(
                f"Unknown model_type {self._model_type!r}; expected one of {', '.join(MODEL_TYPES)}"
            )

        self._decoder = AudioDecoder(self._settings)

        # Model state
        self._model = None
        self._resolved_device: str | None = None

    @property
    def is_loaded(self) -> bool:
        """Whether the model is loaded."""
        return self._model is not None

    @property
    def model_id(self) -> str:
        """Current model ID."""
        return self._model_id

    @property
    def model_type(self) -> str:
        return self._model_type

    @property
    def device(self) -> str:
        """Resolved device."""
        if self._resolved_device:
            return self._resolved_device
        return self._settings.get_resolved_device(self._device)

    def load(self) -> None:
        """Load the model into memory."""
        if self._model is not None:
            return  # Already loaded

        self._resolved_device = self._settings.get_resolved_device(self._device)

        logger.info(
            "Loading model %s (backend: %s, device: %s)",
            self._model_id, self._model_type, self._resolved_device,
        )

        if self._model_type == "faster-whisper":
            self._load_faster_whisper()
        else:
            self._load_transformers()

        logger.info("Model loaded")

    def _load_transformers(self) -> None:
        """Load a Transformers ASR pipeline."""
        import warnings

        try:
            from transformers import pipeline
            from transformers.utils import logging as transformers_logging
        except ImportError as e:
            raise TranscriptionError(
                "transformers not installed. Install with: pip install tasmee[transformers]",
                model_id=self._model_id,
            ) from e

        # Temporarily suppress warnings during model loading
        transformers_logging.set_verbosity_error()
        try:
            with warnings.catch_warnings():
                warnings.simplefilter("ignore", UserWarning)
                self._model = pipeline(
                    "automatic-speech-recognition",
                    model=self._model_id,
                    device=self._resolved_device,
                )
        except Exception as e:
            raise TranscriptionError(f"Failed to load {self._model_id}: {e}", model_id=self._model_id) from e
        finally:
            transformers_logging.set_verbosity_warning()

    def _load_faster_whisper(self) -> None:
        """Load Faster Whisper model."""
        try:
            from faster_whisper import WhisperModel
        except ImportError as e:
            raise TranscriptionError(
                "faster-whisper not installed. Install with: pip install tasmee[faster-whisper]",
                model_id=self._model_id,
            ) from e

        device = self._resolved_device
        if device == "mps":
            device = "cpu"  # Faster Whisper doesn't support MPS
            logger.info("Faster Whisper doesn't support MPS, using CPU instead")

        compute_type = "float16" if device == "cuda" else "int8"

        try:
            self._model = WhisperModel(
                self._model_id,
                device=device,
                compute_type=compute_type,
            )
        except Exception as e:
            raise TranscriptionError(f"Failed to load {self._model_id}: {e}", model_id=self._model_id) from e

    def unload(self) -> None:
        """Unload the model from memory."""
        self._model = None
        self._resolved_device = None

        import gc

        gc.collect()

        try:
            import torch

            if torch.cuda.is_available():
                torch.cuda.empty_cache()
        except ImportError:
            pass

    def transcribe(self, sample: AudioSample) -> Transcript:
        """
        Transcribe an audio sample.

        Args:
            sample: Captured audio

        Returns:
            Transcript with one line per non-silent chunk (or per recognizer line)

        Raises:
            ModelNotLoadedError: If load() was not called
            TranscriptionError: If the audio cannot be read or nothing was recognized
        """
        if not self.is_loaded:
            raise ModelNotLoadedError(self._model_id)

        # Recognizers expect mono audio at the configured rate
        target = sample.model_copy(update={"sample_rate": self._settings.sample_rate, "channels": 1})
        try:
            waveform = self._decoder.decode(target)
        except DecodeError as e:
            raise TranscriptionError(f"Cannot read audio: {e}", model_id=self._model_id) from e

        if waveform.is_empty:
            raise TranscriptionError("Audio is empty", model_id=self._model_id)

        if self._settings.split_on_silence:
            chunks = detect_non_silent_chunks(
                waveform,
                min_silence_len=self._settings.min_silence_ms,
                silence_thresh=self._settings.silence_threshold_db,
            )
        else:
            chunks = [(0, int(waveform.duration * 1000))]

        lines: list[str] = []
        for start_ms, end_ms in chunks:
            segment = extract_segment(waveform, start_ms, end_ms)
            if segment.is_empty:
                continue

            try:
                text = self._transcribe_segment(segment)
            except Exception as e:
                raise TranscriptionError(
                    f"Failed to transcribe segment at {start_ms}ms-{end_ms}ms: {e}",
                    model_id=self._model_id,
                ) from e

            lines.extend(line.strip() for line in text.split("\n") if line.strip())

        if not lines:
            raise TranscriptionError("Recognizer produced no text", model_id=self._model_id)

        logger.info("Transcribed %d line(s) from %s", len(lines), waveform)
        return Transcript(lines=tuple(lines))

    def _transcribe_segment(self, segment: Waveform) -> str:
        """Transcribe a single audio segment."""
        if self._model_type == "faster-whisper":
            return self._transcribe_faster_whisper(segment)
        return self._transcribe_transformers(segment)

    def _transcribe_transformers(self, segment: Waveform) -> str:
        """Transcribe using the Transformers pipeline."""
        import numpy as np

        result = self._model(
            {"raw": np.array(segment.mono()), "sampling_rate": segment.sample_rate}
        )
        return result.get("text", "") if isinstance(result, dict) else str(result)

    def _transcribe_faster_whisper(self, segment: Waveform) -> str:
        """Transcribe using Faster Whisper."""
        import os
        import tempfile

        try:
            import soundfile as sf
        except ImportError as e:
            raise TranscriptionError(
                "soundfile not installed. Install with: pip install tasmee[faster-whisper]",
                model_id=self._model_id,
            ) from e

        # Faster Whisper reads from a path; close the file before writing to it
        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile(suffix=".wav", delete=False) as tmp:
                tmp_path = tmp.name

            sf.write(tmp_path, segment.mono(), segment.sample_rate)

            segments_result, _ = self._model.transcribe(
                tmp_path,
                beam_size=1,
                language=self._settings.language,
            )
            return " ".join(seg.text.strip() for seg in segments_result)

        finally:
            if tmp_path and os.path.exists(tmp_path):
                try:
                    os.unlink(tmp_path)
                except OSError:
                    logger.debug("Could not remove temp file %s", tmp_path)

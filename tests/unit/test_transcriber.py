"""
Unit tests for the Whisper transcriber adapter.

A stub pipeline stands in for the model so no weights are downloaded.
"""

import pytest
from tasmee.exceptions import ConfigurationError, ModelNotLoadedError, TranscriptionError
from tasmee.models import AudioSample
from tasmee.transcription import WhisperTranscriber


class StubPipeline:
    """Callable with the shape of a transformers ASR pipeline."""

    def __init__(self, text="بسم الله"):
        self.text = text
        self.calls = []

    def __call__(self, inputs):
        self.calls.append(inputs)
        return {"text": self.text}


@pytest.fixture
def transcriber(settings):
    transcriber = WhisperTranscriber(model_type="transformers", device="cpu", settings=settings)
    transcriber._model = StubPipeline()
    return transcriber


class TestWhisperTranscriber:
    def test_unknown_backend(self, settings):
        with pytest.raises(ConfigurationError):
            WhisperTranscriber(model_type="onnx", settings=settings)

    def test_defaults_from_settings(self, settings):
        transcriber = WhisperTranscriber(settings=settings)

        assert transcriber.model_id == settings.model_id
        assert transcriber.model_type == settings.model_type
        assert not transcriber.is_loaded

    def test_device_resolved_through_settings(self, settings):
        configured = settings.model_copy(update={"device": "cpu"})

        assert WhisperTranscriber(settings=configured).device == "cpu"
        assert WhisperTranscriber(device="mps", settings=configured).device == "mps"

    def test_transcribe_before_load(self, settings, signals):
        transcriber = WhisperTranscriber(settings=settings)
        sample = AudioSample(data=signals.wav_bytes(signals.tone(0.5)))

        with pytest.raises(ModelNotLoadedError):
            transcriber.transcribe(sample)

    def test_model_not_loaded_is_transcription_error(self):
        assert issubclass(ModelNotLoadedError, TranscriptionError)

    def test_one_line_per_chunk(self, transcriber, signals):
        """Test every stretch of speech between pauses becomes a transcript line."""
        samples = signals.concat(signals.tone(0.5), signals.silence(0.6), signals.tone(0.5))
        transcript = transcriber.transcribe(AudioSample(data=signals.wav_bytes(samples)))

        assert transcript.lines == ("بسم الله", "بسم الله")
        assert len(transcriber._model.calls) == 2
        assert transcriber._model.calls[0]["sampling_rate"] == 16000

    def test_single_line_without_splitting(self, settings, signals):
        settings = settings.model_copy(update={"split_on_silence": False})
        transcriber = WhisperTranscriber(model_type="transformers", settings=settings)
        transcriber._model = StubPipeline("الحمد لله")

        samples = signals.concat(signals.tone(0.5), signals.silence(0.6), signals.tone(0.5))
        transcript = transcriber.transcribe(AudioSample(data=signals.wav_bytes(samples)))

        assert transcript.lines == ("الحمد لله",)

    def test_silent_audio(self, transcriber, signals):
        with pytest.raises(TranscriptionError):
            transcriber.transcribe(AudioSample(data=signals.wav_bytes(signals.silence(1.0))))

    def test_undecodable_audio(self, transcriber):
        with pytest.raises(TranscriptionError):
            transcriber.transcribe(AudioSample(data=b"garbage"))

    def test_blank_recognition(self, transcriber, signals):
        transcriber._model = StubPipeline("   ")
        with pytest.raises(TranscriptionError):
            transcriber.transcribe(AudioSample(data=signals.wav_bytes(signals.tone(0.5))))

    def test_unload(self, transcriber):
        transcriber.unload()
        assert not transcriber.is_loaded

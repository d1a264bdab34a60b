"""
Integration tests for Tasmee.

These tests load a real speech recognition model and need a recording of
Al-Fatiha: set TASMEE_TEST_AUDIO to its path. They are slow and skipped
otherwise.
"""

import os
from pathlib import Path

import pytest
from tasmee import AudioSample, PipelineState, Verifier
from tasmee.data import load_al_fatiha
from tasmee.transcription import WhisperTranscriber

TEST_AUDIO = os.environ.get("TASMEE_TEST_AUDIO")

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(not TEST_AUDIO, reason="TASMEE_TEST_AUDIO not set"),
]


@pytest.fixture(scope="module")
def sample():
    path = Path(TEST_AUDIO)
    return AudioSample(data=path.read_bytes(), format=path.suffix.lstrip(".").lower() or "wav")


@pytest.fixture(scope="module")
def transcriber():
    pytest.importorskip("faster_whisper")
    with WhisperTranscriber(model_type="faster-whisper", device="cpu") as transcriber:
        yield transcriber


class TestRealRecitation:
    """End-to-end verification of a real recitation."""

    def test_transcribes_lines(self, transcriber, sample):
        transcript = transcriber.transcribe(sample)

        assert not transcript.is_empty
        assert len(transcript) >= 1

    def test_full_verification(self, transcriber, sample):
        reference = load_al_fatiha()
        report = Verifier(reference, transcriber).verify(sample)

        assert report.state is PipelineState.DONE
        assert len(report.diffs) == 7
        assert 0.0 <= report.score.final_score <= 100.0
        assert len(report.feedback.messages()) == 5

"""
تسميع (Tasmee): Check a Quran recitation against its reference text.

Usage:
    from tasmee import AudioSample, Verifier
    from tasmee.data import load_al_fatiha
    from tasmee.transcription import WhisperTranscriber

    with Verifier(load_al_fatiha(), WhisperTranscriber()) as verifier:
        report = verifier.verify(AudioSample(data=wav_bytes))

    print(report.score.display)          # e.g. "87.50"
    print(report.feedback.messages())    # ["Correct Madd", "Incorrect Ghunnah", ...]
    for line in report.diffs:
        print(line.index, [(s.status.value, s.text) for s in line.segments])
"""

from tasmee.models import (
    AudioSample,
    DiffSegment,
    DiffStatus,
    FeatureVerdicts,
    LineDiff,
    PipelineState,
    ReferenceText,
    RuleCategory,
    ScoreReport,
    Transcript,
    Verdict,
    VerificationReport,
    Waveform,
)
from tasmee.config import TasmeeSettings, get_settings, configure
from tasmee.exceptions import (
    TasmeeError,
    DecodeError,
    TranscriptionError,
    ModelNotLoadedError,
    AnalysisFault,
    ConfigurationError,
    ReferenceDataError,
)
from tasmee.core import Verifier, align, score, verify

__version__ = "1.0.0"
__all__ = [
    # Version
    "__version__",
    # Models
    "AudioSample",
    "Waveform",
    "ReferenceText",
    "Transcript",
    "RuleCategory",
    "Verdict",
    "FeatureVerdicts",
    "DiffStatus",
    "DiffSegment",
    "LineDiff",
    "ScoreReport",
    "PipelineState",
    "VerificationReport",
    # Pipeline
    "Verifier",
    "verify",
    "align",
    "score",
    # Config
    "TasmeeSettings",
    "get_settings",
    "configure",
    # Exceptions
    "TasmeeError",
    "DecodeError",
    "TranscriptionError",
    "ModelNotLoadedError",
    "AnalysisFault",
    "ConfigurationError",
    "ReferenceDataError",
]

"""
Pydantic data models for Tasmee.

These models represent the core data structures used throughout the library:
- ReferenceText: The verses a recitation is checked against
- AudioSample / Waveform: Captured audio before and after decoding
- FeatureVerdicts: Tajweed rule outcomes
- Transcript: Recognized text
- LineDiff: Word-level comparison of one line
- ScoreReport / VerificationReport: Results of an attempt
"""

from tasmee.models.reference import ReferenceText
from tasmee.models.audio import AudioSample, Waveform
from tasmee.models.verdict import FeatureVerdicts, RuleCategory, Verdict
from tasmee.models.transcript import Transcript
from tasmee.models.diff import DiffSegment, DiffStatus, LineDiff
from tasmee.models.report import PipelineState, ScoreReport, VerificationReport

__all__ = [
    "ReferenceText",
    "AudioSample",
    "Waveform",
    "FeatureVerdicts",
    "RuleCategory",
    "Verdict",
    "Transcript",
    "DiffSegment",
    "DiffStatus",
    "LineDiff",
    "PipelineState",
    "ScoreReport",
    "VerificationReport",
]

"""
Core modules for Tasmee.

This package contains the core business logic for:
- Word-level diffing of recited lines against the reference
- Composite scoring (edit distance + Tajweed penalties)
- The verification pipeline that ties decoding, analysis and transcription together
- Arabic text normalization and similarity

Primary API:
    from tasmee.core import Verifier

    verifier = Verifier(reference, transcriber)
    report = verifier.verify(sample)

    # Building blocks
    diffs = align(reference, transcript)
    report = score(reference, transcript, verdicts)
"""

# Primary API - what most users need
from tasmee.core.verifier import Verifier, verify
from tasmee.core.diff import align, diff_words
from tasmee.core.scoring import ScoreCalculator, score

# Text utilities - commonly used
from tasmee.core.arabic import normalize_arabic, remove_diacritics, word_count
from tasmee.core.matcher import edit_distance, similarity

__all__ = [
    # Primary API
    "Verifier",
    "verify",
    "align",
    "diff_words",
    "score",
    "ScoreCalculator",
    # Text utilities
    "normalize_arabic",
    "remove_diacritics",
    "word_count",
    "edit_distance",
    "similarity",
]

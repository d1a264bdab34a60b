"""
Tajweed rule analysis on decoded audio.

Primary API:
    from tasmee.analysis import analyze_features

    verdicts = analyze_features(waveform)
    verdicts.is_correct(RuleCategory.MADD)
"""

from tasmee.analysis.features import SignalFeatures, contiguous_regions
from tasmee.analysis.rules import (
    ANALYZERS,
    GhunnahAnalyzer,
    MaddAnalyzer,
    QalqalahAnalyzer,
    RuleAnalyzer,
    RuleCheck,
    SakinahAnalyzer,
    WaqfAnalyzer,
    analyze_features,
    build_analyzers,
    verdicts_from_checks,
)

__all__ = [
    "ANALYZERS",
    "RuleAnalyzer",
    "RuleCheck",
    "MaddAnalyzer",
    "GhunnahAnalyzer",
    "WaqfAnalyzer",
    "QalqalahAnalyzer",
    "SakinahAnalyzer",
    "SignalFeatures",
    "analyze_features",
    "build_analyzers",
    "contiguous_regions",
    "verdicts_from_checks",
]

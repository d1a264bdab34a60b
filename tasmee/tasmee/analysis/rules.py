"""
Tajweed rule analyzers.

Five heuristic checks on the decoded waveform, one per RuleCategory. Each is a
binary gate: the verdict is Correct or Incorrect, never a graded score. The set
is closed; ANALYZERS lists every analyzer class.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from tasmee.analysis.features import SignalFeatures, contiguous_regions
from tasmee.config import TasmeeSettings, get_settings
from tasmee.exceptions import AnalysisFault
from tasmee.models import FeatureVerdicts, RuleCategory, Verdict, Waveform

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleCheck:
    """Verdict of one analyzer plus a short note on what was measured."""

    category: RuleCategory
    verdict: Verdict
    note: str = ""

    @property
    def passed(self) -> bool:
        return self.verdict is Verdict.CORRECT


class RuleAnalyzer(ABC):
    """
    Base class for the rule analyzers.

    Subclasses implement _judge() on precomputed SignalFeatures. check() and
    judge() never raise for unusable audio: an AnalysisFault turns into
    Incorrect. Callers running several analyzers on one waveform extract the
    features once and hand them to judge().
    """

    category: ClassVar[RuleCategory]
    # Letters the rule governs; descriptive only, the checks never read them
    letters: ClassVar[tuple[str, ...]] = ()

    def __init__(self, settings: TasmeeSettings | None = None):
        self._settings = settings or get_settings()

    def evaluate(self, waveform: Waveform) -> Verdict:
        """Verdict for this rule on the given waveform."""
        return self.check(waveform).verdict

    def check(self, waveform: Waveform) -> RuleCheck:
        """Run the rule and keep the measurement note alongside the verdict."""
        try:
            features = SignalFeatures.from_waveform(waveform, self._settings, self.category)
        except AnalysisFault as e:
            return self.fail(e)
        return self.judge(features)

    def judge(self, features: SignalFeatures) -> RuleCheck:
        """Run the rule on features already extracted from the waveform."""
        try:
            passed, note = self._judge(features)
        except AnalysisFault as e:
            return self.fail(e)

        verdict = Verdict.CORRECT if passed else Verdict.INCORRECT
        logger.debug("%s -> %s (%s)", self.category.value, verdict.value, note)
        return RuleCheck(self.category, verdict, note)

    def fail(self, error: AnalysisFault) -> RuleCheck:
        """Fail closed: the rule could not be judged, so it is Incorrect."""
        logger.warning("%s check failed closed: %s", self.category.value, error)
        return RuleCheck(self.category, Verdict.INCORRECT, str(error))

    @abstractmethod
    def _judge(self, features: SignalFeatures) -> tuple[bool, str]:
        """Return (passed, note)."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class MaddAnalyzer(RuleAnalyzer):
    """Elongation: some sustained vowel must outlast madd_min_duration."""

    category = RuleCategory.MADD
    letters = ("ا", "و", "ي")

    def _judge(self, features):
        sustained = features.voiced & (features.flux < self._settings.madd_flux_threshold)
        durations = [
            features.seconds(end - start)
            for start, end in contiguous_regions(sustained)
        ]
        if not durations:
            raise AnalysisFault(self.category, "no vowel segment found")

        longest = max(durations)
        return longest > self._settings.madd_min_duration, f"longest vowel {longest:.2f}s"


class GhunnahAnalyzer(RuleAnalyzer):
    """Nasalization: enough voiced time dominated by the nasal band."""

    category = RuleCategory.GHUNNAH
    letters = ("م", "ن")

    def _judge(self, features):
        nasal = features.voiced & (features.nasal_ratio >= self._settings.ghunnah_band_ratio)
        total = features.seconds(int(np.count_nonzero(nasal)))
        return total > self._settings.ghunnah_min_duration, f"nasal duration {total:.2f}s"


class WaqfAnalyzer(RuleAnalyzer):
    """
    Stop: the recitation must come to rest before the clip ends.

    A clip that is still voiced (or only just went quiet) at its end is the
    stop-error artifact: the reciter was cut off rather than pausing.
    """

    category = RuleCategory.WAQF

    def _judge(self, features):
        regions = features.voiced_regions()
        if not regions:
            raise AnalysisFault(self.category, "no voiced audio")

        _, last_end = regions[-1]
        trailing = max(0.0, features.duration - features.frame_time(last_end - 1))
        return trailing >= self._settings.waqf_min_pause, f"terminal pause {trailing:.2f}s"


class QalqalahAnalyzer(RuleAnalyzer):
    """
    Echo: a short, strong burst with a sharp onset (the bounce after a closure).
    """

    category = RuleCategory.QALQALAH
    letters = ("ق", "ط", "ب", "ج", "د")

    def _judge(self, features):
        settings = self._settings
        bursts = 0
        for start, end in features.voiced_regions():
            if features.seconds(end - start) > settings.qalqalah_max_burst:
                continue
            if float(np.max(features.rms[start:end])) < settings.qalqalah_min_peak:
                continue
            onset = features.rms[max(start - 1, 0):end]
            if len(onset) > 1 and float(np.max(np.diff(onset))) >= settings.qalqalah_min_rise:
                bursts += 1
        return bursts > 0, f"{bursts} bounce(s)"


class SakinahAnalyzer(RuleAnalyzer):
    """Silent letter: a brief unvoiced gap inside the recitation."""

    category = RuleCategory.SAKINAH
    letters = ("ه", "ء")

    def _judge(self, features):
        settings = self._settings
        gaps = [
            features.seconds(end - start)
            for start, end in features.pauses()
        ]
        silent = [g for g in gaps if settings.sakinah_min_gap <= g <= settings.sakinah_max_gap]
        return bool(silent), f"{len(silent)} silent gap(s)"


ANALYZERS: tuple[type[RuleAnalyzer], ...] = (
    MaddAnalyzer,
    GhunnahAnalyzer,
    WaqfAnalyzer,
    QalqalahAnalyzer,
    SakinahAnalyzer,
)


def build_analyzers(settings: TasmeeSettings | None = None) -> list[RuleAnalyzer]:
    """One instance of every rule analyzer, in canonical order."""
    return [analyzer_cls(settings) for analyzer_cls in ANALYZERS]


def verdicts_from_checks(checks: list[RuleCheck]) -> FeatureVerdicts:
    """Collect rule checks into FeatureVerdicts; missing categories are Incorrect."""
    verdicts = {c: Verdict.INCORRECT for c in RuleCategory}
    notes = {}
    for check in checks:
        verdicts[check.category] = check.verdict
        if check.note:
            notes[check.category] = check.note
    return FeatureVerdicts(verdicts=verdicts, notes=notes)


def analyze_features(
    waveform: Waveform,
    settings: TasmeeSettings | None = None,
) -> FeatureVerdicts:
    """
    Run all five rule analyzers sequentially on one feature extraction.

    The verifier runs them concurrently instead; this is the simple entry point.
    """
    settings = settings or get_settings()
    analyzers = build_analyzers(settings)
    try:
        features = SignalFeatures.from_waveform(waveform, settings)
    except AnalysisFault as e:
        return verdicts_from_checks([a.fail(e) for a in analyzers])
    return verdicts_from_checks([a.judge(features) for a in analyzers])

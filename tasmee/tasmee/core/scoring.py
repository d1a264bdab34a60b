"""
Composite recitation score.

raw accuracy = 100 * (reference words - character edit distance) / reference words
final score  = max(0, raw accuracy - flat penalty per incorrect rule)

Penalties are flat and do not scale with the length of the recitation.
"""

import logging
from collections.abc import Sequence

from tasmee.config import TasmeeSettings, get_settings
from tasmee.core.arabic import word_count
from tasmee.core.matcher import edit_distance
from tasmee.models import FeatureVerdicts, ReferenceText, RuleCategory, ScoreReport, Transcript

logger = logging.getLogger(__name__)


def score(
    reference: ReferenceText | Sequence[str],
    transcript: Transcript | str | Sequence[str] | None,
    verdicts: FeatureVerdicts,
    penalty: float = 5.0,
    normalize: bool = False,
) -> ScoreReport:
    """
    Score one recitation attempt.

    Args:
        reference: Reference lines
        transcript: Recognized lines (missing lines count as empty)
        verdicts: Rule verdicts of the same attempt
        penalty: Points deducted per incorrect rule
        normalize: Normalize Arabic text before measuring edit distance

    Returns:
        ScoreReport; final_score is clamped to [0, 100] and rounded to two decimals

    Examples:
        >>> score(["بسم الله"], "بسم الله", FeatureVerdicts.uniform(Verdict.CORRECT)).display
        '100.00'
    """
    reference = ReferenceText.coerce(reference)
    transcript = Transcript.coerce(transcript)

    total_errors = 0
    total_words = 0
    for i, line in enumerate(reference):
        total_errors += edit_distance(line, transcript.line(i), normalize=normalize)
        total_words += word_count(line)

    if total_words == 0:
        raw_accuracy = 0.0
    else:
        raw_accuracy = 100.0 * (total_words - total_errors) / total_words

    penalties = {
        category: 0.0 if verdicts.is_correct(category) else float(penalty)
        for category in RuleCategory
    }
    final_score = round(max(0.0, raw_accuracy - sum(penalties.values())), 2)

    logger.debug(
        "errors=%d words=%d raw=%.2f penalty=%.1f final=%.2f",
        total_errors, total_words, raw_accuracy, sum(penalties.values()), final_score,
    )

    return ScoreReport(
        total_errors=total_errors,
        total_words=total_words,
        raw_accuracy=raw_accuracy,
        penalties=penalties,
        final_score=final_score,
    )


class ScoreCalculator:
    """
    score() bound to settings (penalty per rule, text normalization).

    Example:
        calculator = ScoreCalculator()
        report = calculator.score(reference, transcript, verdicts)
        print(report.display)
    """

    def __init__(self, settings: TasmeeSettings | None = None):
        self._settings = settings or get_settings()

    @property
    def penalty(self) -> float:
        return self._settings.rule_penalty

    def score(
        self,
        reference: ReferenceText | Sequence[str],
        transcript: Transcript | str | Sequence[str] | None,
        verdicts: FeatureVerdicts,
    ) -> ScoreReport:
        return score(
            reference,
            transcript,
            verdicts,
            penalty=self._settings.rule_penalty,
            normalize=self._settings.normalize_text,
        )

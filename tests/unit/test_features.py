"""
Unit tests for frame-level signal features.
"""

import numpy as np
import pytest
from tasmee.analysis import SignalFeatures, contiguous_regions
from tasmee.exceptions import AnalysisFault
from tasmee.models import RuleCategory


class TestContiguousRegions:
    @pytest.mark.parametrize("mask,expected", [
        ([False, True, True, False, True], [(1, 3), (4, 5)]),
        ([True, True], [(0, 2)]),
        ([False, False], []),
        ([], []),
    ])
    def test_regions(self, mask, expected):
        assert contiguous_regions(np.array(mask, dtype=bool)) == expected


class TestSignalFeatures:
    """Test feature extraction on synthetic tones."""

    def test_low_tone_is_nasal(self, signals, make_waveform, settings):
        features = SignalFeatures.from_waveform(make_waveform(signals.tone(0.5, freq=300.0)), settings)

        assert features.num_frames > 0
        assert features.hop_seconds == pytest.approx(0.01)
        assert float(np.median(features.nasal_ratio)) > 0.9
        assert features.voiced.mean() > 0.9

    def test_high_tone_is_not_nasal(self, signals, make_waveform, settings):
        features = SignalFeatures.from_waveform(make_waveform(signals.tone(0.5, freq=3000.0)), settings)
        assert float(np.median(features.nasal_ratio)) < 0.1

    def test_rms_normalized(self, signals, make_waveform, settings):
        features = SignalFeatures.from_waveform(make_waveform(signals.tone(0.3, amplitude=0.1)), settings)
        assert float(np.max(features.rms)) == pytest.approx(1.0)

    def test_pauses_exclude_edges(self, signals, make_waveform, settings):
        """Test leading and trailing silence are not counted as pauses."""
        samples = signals.concat(
            signals.silence(0.2), signals.tone(0.3), signals.silence(0.2), signals.tone(0.3), signals.silence(0.2)
        )
        features = SignalFeatures.from_waveform(make_waveform(samples), settings)

        assert len(features.voiced_regions()) == 2
        assert len(features.pauses()) == 1

    def test_empty_waveform_faults(self, make_waveform, settings):
        with pytest.raises(AnalysisFault) as exc_info:
            SignalFeatures.from_waveform(make_waveform([]), settings, RuleCategory.MADD)
        assert exc_info.value.category is RuleCategory.MADD
        assert str(exc_info.value) == "madd: empty waveform"

    def test_fault_without_category(self, make_waveform, settings):
        """Test a shared extraction fault carries no rule prefix."""
        with pytest.raises(AnalysisFault) as exc_info:
            SignalFeatures.from_waveform(make_waveform([]), settings)
        assert exc_info.value.category is None
        assert str(exc_info.value) == "empty waveform"

    def test_silent_waveform_faults(self, signals, make_waveform, settings):
        with pytest.raises(AnalysisFault, match="silent"):
            SignalFeatures.from_waveform(make_waveform(signals.silence(0.5)), settings)

    def test_too_short_waveform_faults(self, signals, make_waveform, settings):
        """Test a clip shorter than one analysis frame cannot be analysed."""
        with pytest.raises(AnalysisFault, match="shorter"):
            SignalFeatures.from_waveform(make_waveform(signals.tone(0.01)), settings)

"""
Unit tests for word-level diffing.
"""

import pytest
from tasmee.core import align, diff_words
from tasmee.models import DiffStatus, Transcript


def _pairs(segments):
    return [(s.status.value, s.text) for s in segments]


def _rebuild(segments, *statuses):
    return "".join(s.text for s in segments if s.status in statuses)


class TestDiffWords:
    """Test diff_words on single lines."""

    def test_identical_lines(self):
        assert _pairs(diff_words("بسم الله", "بسم الله")) == [("unchanged", "بسم الله")]

    def test_missing_word(self):
        assert _pairs(diff_words("بسم الله", "بسم")) == [("unchanged", "بسم"), ("removed", " الله")]

    def test_extra_word(self):
        assert _pairs(diff_words("بسم الله", "بسم الله الرحمن")) == [
            ("unchanged", "بسم الله"),
            ("added", " الرحمن"),
        ]

    def test_replaced_word_removed_first(self):
        """Test a substitution lists the reference word before the recited one."""
        assert _pairs(diff_words("بسم الله", "بسم اللة")) == [
            ("unchanged", "بسم "),
            ("removed", "الله"),
            ("added", "اللة"),
        ]

    def test_empty_transcript_line(self):
        assert _pairs(diff_words("مالك يوم الدين", "")) == [("removed", "مالك يوم الدين")]

    def test_both_empty(self):
        assert diff_words("", "") == []

    def test_swapped_words_match_leftmost(self):
        """Test ties between equally short scripts keep the earliest match."""
        assert _pairs(diff_words("رب العالمين", "العالمين رب")) == [
            ("removed", "رب "),
            ("unchanged", "العالمين"),
            ("added", " رب"),
        ]

    @pytest.mark.parametrize("reference,transcript", [
        ("بسم الله الرحمن الرحيم", "بسم الرحمن الرحيم"),
        ("الحمد لله رب العالمين", "الحمد لله رب العلمين"),
        ("إياك نعبد وإياك نستعين", "اياك نعبد و اياك نستعين"),
        ("اهدنا الصراط المستقيم", "  اهدنا   الصراط"),
        ("مالك يوم الدين", ""),
        ("", "صراط الذين"),
    ])
    def test_segments_rebuild_both_lines(self, reference, transcript):
        segments = diff_words(reference, transcript)

        assert _rebuild(segments, DiffStatus.UNCHANGED, DiffStatus.REMOVED) == reference
        assert _rebuild(segments, DiffStatus.UNCHANGED, DiffStatus.ADDED) == transcript

    def test_neighbouring_segments_differ(self):
        segments = diff_words("صراط الذين انعمت عليهم", "صراط الذي انعمت عليهم غير")
        for left, right in zip(segments, segments[1:]):
            assert left.status is not right.status


class TestAlign:
    """Test line-by-line alignment."""

    def test_one_diff_per_reference_line(self, reference_lines):
        diffs = align(reference_lines, Transcript(lines=(reference_lines[0],)))

        assert len(diffs) == len(reference_lines)
        assert [d.index for d in diffs] == [0, 1]
        assert not diffs[0].has_mistakes
        assert diffs[1].transcript == ""
        assert diffs[1].has_mistakes

    def test_extra_transcript_lines_ignored(self):
        diffs = align(["بسم الله"], "بسم الله\nالحمد لله")

        assert len(diffs) == 1
        assert not diffs[0].has_mistakes

    def test_empty_transcript(self, reference):
        diffs = align(reference, None)

        assert len(diffs) == len(reference)
        for diff in diffs:
            assert _pairs(diff.segments) == [("removed", diff.reference)]

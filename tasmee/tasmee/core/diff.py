"""
Word-level diff between reference lines and recited lines.

The edit script is the longest common subsequence of word tokens. When several
minimal scripts exist, words are matched as early as possible (leftmost
greedy), and inside a run of changes removed words come before added ones.
Whitespace travels with the words, so the segments always rebuild both lines
exactly.
"""

from collections.abc import Sequence

from tasmee.core.arabic import split_words
from tasmee.models import DiffSegment, DiffStatus, LineDiff, ReferenceText, Transcript


class _SegmentBuilder:
    """Accumulates runs, merging neighbours with the same status."""

    def __init__(self):
        self._runs: list[tuple[DiffStatus, str]] = []

    def add(self, status: DiffStatus, text: str) -> None:
        if not text:
            return
        if self._runs and self._runs[-1][0] is status:
            self._runs[-1] = (status, self._runs[-1][1] + text)
        else:
            self._runs.append((status, text))

    def add_whitespace(self, reference_ws: str, transcript_ws: str) -> None:
        if reference_ws == transcript_ws:
            self.add(DiffStatus.UNCHANGED, reference_ws)
        else:
            self.add(DiffStatus.REMOVED, reference_ws)
            self.add(DiffStatus.ADDED, transcript_ws)

    @property
    def segments(self) -> list[DiffSegment]:
        return [DiffSegment(text=text, status=status) for status, text in self._runs]


def _edit_script(reference: Sequence[str], transcript: Sequence[str]) -> list[tuple[str, int, int]]:
    """
    LCS edit script as (op, ref_index, transcript_index) with op in equal/delete/insert.

    Unused indices are -1.
    """
    n, m = len(reference), len(transcript)

    # lcs[i][j] = LCS length of reference[i:] and transcript[j:]
    lcs = [[0] * (m + 1) for _ in range(n + 1)]
    for i in range(n - 1, -1, -1):
        for j in range(m - 1, -1, -1):
            if reference[i] == transcript[j]:
                lcs[i][j] = lcs[i + 1][j + 1] + 1
            else:
                lcs[i][j] = max(lcs[i + 1][j], lcs[i][j + 1])

    ops = []
    i = j = 0
    while i < n and j < m:
        if reference[i] == transcript[j]:
            ops.append(("equal", i, j))
            i += 1
            j += 1
        elif lcs[i + 1][j] >= lcs[i][j + 1]:
            ops.append(("delete", i, -1))
            i += 1
        else:
            ops.append(("insert", -1, j))
            j += 1
    ops.extend(("delete", k, -1) for k in range(i, n))
    ops.extend(("insert", -1, k) for k in range(j, m))
    return ops


def diff_words(reference_line: str, transcript_line: str) -> list[DiffSegment]:
    """
    Diff two lines word by word.

    Args:
        reference_line: The expected text
        transcript_line: The recognized text

    Returns:
        Ordered DiffSegments. Joining UNCHANGED+REMOVED texts gives
        reference_line; joining UNCHANGED+ADDED gives transcript_line.

    Examples:
        >>> [(s.status.value, s.text) for s in diff_words("بسم الله", "بسم")]
        [('unchanged', 'بسم'), ('removed', ' الله')]
    """
    ref_lead, ref_words = split_words(reference_line)
    hyp_lead, hyp_words = split_words(transcript_line)

    builder = _SegmentBuilder()
    builder.add_whitespace(ref_lead, hyp_lead)

    removed: list[str] = []
    added: list[str] = []

    def flush_changes():
        for text in removed:
            builder.add(DiffStatus.REMOVED, text)
        for text in added:
            builder.add(DiffStatus.ADDED, text)
        removed.clear()
        added.clear()

    script = _edit_script([w for w, _ in ref_words], [w for w, _ in hyp_words])
    for op, i, j in script:
        if op == "equal":
            flush_changes()
            word, ref_ws = ref_words[i]
            _, hyp_ws = hyp_words[j]
            builder.add(DiffStatus.UNCHANGED, word)
            builder.add_whitespace(ref_ws, hyp_ws)
        elif op == "delete":
            removed.append("".join(ref_words[i]))
        else:
            added.append("".join(hyp_words[j]))
    flush_changes()

    return builder.segments


def align(
    reference: ReferenceText | Sequence[str],
    transcript: Transcript | str | Sequence[str] | None,
) -> list[LineDiff]:
    """
    Diff every reference line against the transcript line with the same index.

    Missing transcript lines count as empty strings; the result always has
    exactly one LineDiff per reference line.
    """
    reference = ReferenceText.coerce(reference)
    transcript = Transcript.coerce(transcript)

    diffs = []
    for i, reference_line in enumerate(reference):
        transcript_line = transcript.line(i)
        diffs.append(
            LineDiff(
                index=i,
                reference=reference_line,
                transcript=transcript_line,
                segments=tuple(diff_words(reference_line, transcript_line)),
            )
        )
    return diffs

"""
Similarity and edit distance between recited and reference text.

Uses SIMD-accelerated rapidfuzz for fast string matching.
"""

from rapidfuzz.distance import Indel as _rapidfuzz_indel
from rapidfuzz.distance import Levenshtein as _rapidfuzz_levenshtein

from tasmee.core.arabic import normalize_arabic


def edit_distance(text1: str, text2: str, normalize: bool = False) -> int:
    """
    Character-level Levenshtein distance between two strings.

    Args:
        text1: First string
        text2: Second string
        normalize: Whether to normalize Arabic text before comparison

    Returns:
        Minimum number of single-character insertions, deletions and
        substitutions turning text1 into text2

    Examples:
        >>> edit_distance("بسم الله", "بسم الله")
        0
        >>> edit_distance("بسم", "")
        3
    """
    if normalize:
        text1 = normalize_arabic(text1)
        text2 = normalize_arabic(text2)

    return _rapidfuzz_levenshtein.distance(text1 or "", text2 or "")


def similarity(text1: str, text2: str, normalize: bool = True) -> float:
    """
    Compute similarity ratio between two strings.

    Returns a ratio between 0.0 (no similarity) and 1.0 (identical strings).

    Args:
        text1: First string to compare
        text2: Second string to compare
        normalize: Whether to normalize Arabic text before comparison

    Returns:
        Similarity ratio between 0.0 and 1.0

    Examples:
        >>> similarity("بسم الله الرحمن الرحيم", "بسم الله الرحمن الرحيم")
        1.0
        >>> similarity("بِسْمِ اللَّهِ", "بسم الله", normalize=True)
        1.0
    """
    if normalize:
        text1 = normalize_arabic(text1)
        text2 = normalize_arabic(text2)

    return _rapidfuzz_indel.normalized_similarity(text1 or "", text2 or "")

"""
Arabic text normalization utilities.

Recognizers usually drop tashkeel and spell alef/ya/ta variants loosely, so
comparisons that should ignore those differences go through normalize_arabic.
"""

import re


# Alef variants including alef wasla (U+0671)
ALEF_PATTERN = re.compile(r"[أإآاٱ]")

# Tashkeel: U+064B-U+065F and superscript alef U+0670
DIACRITICS_PATTERN = re.compile(r"[\u064B-\u065F\u0670]")

# Tokens for word diffs: a word or a run of whitespace
TOKEN_PATTERN = re.compile(r"\S+|\s+")


def normalize_arabic(text: str) -> str:
    """
    Normalize Arabic text for comparison.

    Performs the following normalizations:
    - Replace all alef variants (أ إ آ ا ٱ) with plain alef (ا)
    - Replace alef maqsura (ى) with ya (ي)
    - Replace ta marbuta (ة) with ha (ه)
    - Replace hamza carriers (ؤ ئ) with their base letters
    - Remove diacritics and punctuation
    - Collapse multiple spaces

    Args:
        text: Arabic text to normalize

    Returns:
        Normalized text string

    Examples:
        >>> normalize_arabic("بِسْمِ اللَّهِ الرَّحْمَٰنِ الرَّحِيمِ")
        'بسم الله الرحمن الرحيم'
        >>> normalize_arabic("أَعُوذُ")
        'اعوذ'
    """
    if not text:
        return ""

    text = ALEF_PATTERN.sub("ا", text)
    text = text.replace("ى", "ي")
    text = text.replace("ة", "ه")
    text = text.replace("ؤ", "و")
    text = text.replace("ئ", "ي")
    text = DIACRITICS_PATTERN.sub("", text)

    # Remove punctuation (keeping letters and spaces)
    text = re.sub(r"[^\w\s]", "", text)

    return re.sub(r"\s+", " ", text).strip()


def remove_diacritics(text: str) -> str:
    """
    Remove Arabic diacritics (tashkeel) from text, leaving letters untouched.

    Args:
        text: Arabic text with diacritics

    Returns:
        Text without diacritics
    """
    return DIACRITICS_PATTERN.sub("", text)


def word_count(text: str) -> int:
    """
    Count space-separated words in text.

    Args:
        text: Arabic text

    Returns:
        Number of words (0 for empty or whitespace-only text)
    """
    if not text:
        return 0
    return len(text.split())


def split_words(text: str) -> tuple[str, list[tuple[str, str]]]:
    """
    Split a line into its leading whitespace and (word, trailing whitespace) pairs.

    Joining the parts gives back the input exactly.

    Examples:
        >>> split_words(" بسم  الله")
        (' ', [('بسم', '  '), ('الله', '')])
    """
    leading = ""
    words: list[tuple[str, str]] = []
    for token in TOKEN_PATTERN.findall(text or ""):
        if token.isspace():
            if words:
                word, _ = words[-1]
                words[-1] = (word, token)
            else:
                leading = token
        else:
            words.append((token, ""))
    return leading, words

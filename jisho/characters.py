"""
Character classification for jisho.

Decides which dictionary index a query term belongs to by looking at the
Unicode blocks of its characters.
"""

from enum import Enum


# ============================================================================
# Unicode Ranges
# ============================================================================

CJK_UNIFIED = (0x4E00, 0x9FFF)
CJK_COMPATIBILITY = (0xF900, 0xFAFF)
HIRAGANA = (0x3040, 0x309F)
KATAKANA = (0x30A0, 0x30FF)


class Script(Enum):
    """Script of a query term, one per dictionary index."""
    KANJI = "kanji"
    KANA = "kana"
    OTHER = "other"


def _in_range(char: str, bounds) -> bool:
    return bounds[0] <= ord(char) <= bounds[1]


def is_kanji(char: str) -> bool:
    """Check if a single character is a CJK ideograph."""
    return _in_range(char, CJK_UNIFIED) or _in_range(char, CJK_COMPATIBILITY)


def is_hiragana(char: str) -> bool:
    return _in_range(char, HIRAGANA)


def is_katakana(char: str) -> bool:
    return _in_range(char, KATAKANA)


def is_kana_char(char: str) -> bool:
    """Check if a single character is hiragana or katakana."""
    return is_hiragana(char) or is_katakana(char)


def has_kanji(text: str) -> bool:
    """True if any character of text is a kanji."""
    return any(is_kanji(char) for char in text)


def is_kana(text: str) -> bool:
    """Check if text is entirely kana."""
    return all(is_kana_char(char) for char in text)


def classify(text: str) -> Script:
    """
    Classify a query term by script.

    Kanji wins over everything else: a single ideograph anywhere in the
    text makes it KANJI, even when mixed with kana or latin. Text made only
    of kana is KANA. Anything else is treated as an English gloss.

    Args:
        text: Query term with match-mode sigils already removed

    Returns:
        The Script that selects the index to search

    Example:
        >>> classify("食べる")
        <Script.KANJI: 'kanji'>
        >>> classify("たべる")
        <Script.KANA: 'kana'>
        >>> classify("eat")
        <Script.OTHER: 'other'>
    """
    if has_kanji(text):
        return Script.KANJI
    if is_kana(text):
        return Script.KANA
    return Script.OTHER

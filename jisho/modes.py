"""
Match-mode selection for jisho queries.

A query may carry a sigil that changes how keys are matched:

    =緑     exact match only
    緑*     keys starting with 緑
    *緑     keys ending with 緑
    緑      exact, then prefix, then postfix

The full-width asterisk ＊ works the same as *.
"""

from enum import Enum
from typing import Tuple


EXACT_SIGIL = "="
WILDCARD_SIGILS = ("*", "＊")


class MatchMode(Enum):
    """How a cleaned query term is matched against index keys."""
    DEFAULT = "default"
    EXACT = "exact"
    PREFIX = "prefix"
    POSTFIX = "postfix"


def select_mode(raw: str) -> Tuple[MatchMode, str]:
    """
    Pick the match mode for raw user input and strip its sigil.

    Rules are checked in order and the first one that applies wins, so
    "=緑*" is an exact search for "緑*".

    Args:
        raw: Query as typed by the user

    Returns:
        Tuple of (mode, term with the sigil removed)
    """
    if raw.startswith(EXACT_SIGIL):
        return MatchMode.EXACT, raw[1:]
    if raw.endswith(WILDCARD_SIGILS):
        return MatchMode.PREFIX, raw[:-1]
    if raw.startswith(WILDCARD_SIGILS):
        return MatchMode.POSTFIX, raw[1:]
    return MatchMode.DEFAULT, raw

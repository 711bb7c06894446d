"""
Lookup engine for jisho.

LookupEngine ties the pieces together for a single query:

    raw input -> select_mode -> classify -> execute on the chosen index

A process-wide default engine is also provided. It is loaded from the index
store on first use, exactly once, even when several threads ask for it at
the same time.
"""

import logging
import threading
from pathlib import Path
from typing import List, Optional

from jisho.characters import classify
from jisho.dictionary import Dictionary, Entry
from jisho.modes import select_mode
from jisho.query import execute
from jisho.store import load_dictionary

logger = logging.getLogger(__name__)


class LookupEngine:
    """
    Answers single-term queries against a built Dictionary.

    Example:
        >>> engine = LookupEngine(load_dictionary())
        >>> engine.lookup("緑")[0].reading
        'みどり'
    """

    def __init__(self, dictionary: Dictionary):
        self.dictionary = dictionary

    def lookup(self, raw_input: str) -> List[Entry]:
        """
        Look up a query term.

        The term may carry a match-mode sigil (=term, term*, *term). Its
        script picks the index: kanji -> written forms, kana -> readings,
        anything else -> English glosses.

        Args:
            raw_input: Query as typed by the user (must be non-empty)

        Returns:
            Matching entries sorted by frequency; empty if nothing matched

        Raises:
            ValueError: If raw_input is empty
        """
        if not raw_input:
            raise ValueError("query must be non-empty")

        mode, term = select_mode(raw_input)
        script = classify(term)
        results = execute(self.dictionary.index_for(script), mode, term)

        logger.debug(
            f"lookup {raw_input!r}: mode={mode.value} script={script.value} "
            f"results={len(results)}"
        )
        return results

    def dictionary_version(self) -> str:
        """JMdict version the dictionary was built from."""
        return self.dictionary.version


# =============================================================================
# Default Engine
# =============================================================================

_ENGINE: Optional[LookupEngine] = None
_ENGINE_LOCK = threading.Lock()


def get_engine(path: Optional[Path] = None) -> LookupEngine:
    """
    Get the default engine, loading the index store on first call.

    Args:
        path: Store directory. Only used by the call that does the loading.

    Raises:
        FileNotFoundError: If the index store has not been built
    """
    global _ENGINE

    if _ENGINE is not None:
        return _ENGINE

    with _ENGINE_LOCK:
        if _ENGINE is None:
            _ENGINE = LookupEngine(load_dictionary(path))
            logger.info(
                f"Loaded JMdict {_ENGINE.dictionary_version()} "
                f"({len(_ENGINE.dictionary):,} entries)"
            )

    return _ENGINE


def set_engine(engine: Optional[LookupEngine]):
    """Install engine as the default (None resets it)."""
    global _ENGINE
    with _ENGINE_LOCK:
        _ENGINE = engine


def is_engine_loaded() -> bool:
    """Check if the default engine is loaded."""
    return _ENGINE is not None


def reset_engine():
    """Drop the default engine to free memory."""
    set_engine(None)

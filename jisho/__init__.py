"""
jisho: Japanese-English dictionary lookup

Looks up JMdict entries by kanji, kana reading, or English gloss.
Uses a prebuilt, memory-mapped index store for instant startup.

Basic Usage:
    import jisho

    for entry in jisho.lookup("緑"):
        print(f"{entry.kanji}【{entry.reading}】- {', '.join(entry.meanings)}")

Match modes:
    jisho.lookup("=緑")    # exact match only
    jisho.lookup("緑*")    # words starting with 緑
    jisho.lookup("*緑")    # words ending with 緑
"""

import time
from contextlib import contextmanager
from typing import List, Tuple

from jisho.dictionary import Dictionary, DictionaryIndex, Entry
from jisho.engine import LookupEngine, get_engine

__version__ = "0.1.0"


# =============================================================================
# Main API
# =============================================================================

def lookup(text: str) -> List[Entry]:
    """
    Look up a single term in the default dictionary.

    Args:
        text: Kanji, kana, or English term, optionally with a match-mode
            sigil (must be non-empty)

    Returns:
        Matching entries, most common first

    Raises:
        ValueError: If text is empty
        FileNotFoundError: If the index store has not been built

    Example:
        >>> import jisho
        >>> entry = jisho.lookup("みどり")[0]
        >>> entry.kanji, entry.meanings
        ('緑', ('green', 'greenery', 'verdure'))
    """
    return get_engine().lookup(text)


def dictionary_version() -> str:
    """Get the JMdict version of the default dictionary."""
    return get_engine().dictionary_version()


def warm_up(verbose: bool = False) -> Tuple[float, dict]:
    """
    Pre-load the dictionary so the first lookup is fast.

    Args:
        verbose: If True, print timing information

    Returns:
        Tuple of (total_time_seconds, timing_details_dict)
    """
    timings = {}
    total_start = time.perf_counter()

    if verbose:
        print("Loading jisho dictionary...")

    t0 = time.perf_counter()
    engine = get_engine()
    timings['dictionary'] = (time.perf_counter() - t0) * 1000

    if verbose:
        print(f"  Dictionary:     {timings['dictionary']:>7.1f}ms ({len(engine.dictionary):,} entries)")

    total_time = time.perf_counter() - total_start
    timings['total'] = total_time * 1000

    if verbose:
        print(f"Total warm-up:    {timings['total']:>7.1f}ms")

    return total_time, timings


def get_version() -> str:
    """Get the library version."""
    return __version__


@contextmanager
def session_context():
    """
    Context manager for batch lookups.

    Loads the dictionary up front and yields the engine.

    Example:
        >>> with jisho.session_context() as engine:
        ...     for word in words:
        ...         results = engine.lookup(word)
    """
    yield get_engine()


# =============================================================================
# Module-level exports
# =============================================================================

__all__ = [
    # Data classes
    "Entry",
    "Dictionary",
    "DictionaryIndex",
    "LookupEngine",
    # API
    "lookup",
    "dictionary_version",
    "warm_up",
    "get_version",
    "session_context",
    # Version
    "__version__",
]

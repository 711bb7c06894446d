"""
Query execution for jisho.

Runs one match mode against one DictionaryIndex. Every collector returns
entries without structural duplicates, sorted by frequency (most common
first). The sort is stable, so entries of equal frequency keep the order in
which they were collected.
"""

from typing import Callable, Dict, Iterable, List

from jisho.dictionary import DictionaryIndex, Entry
from jisho.modes import MatchMode


def _by_frequency(entries: Iterable[Entry]) -> List[Entry]:
    return sorted(entries, key=lambda e: e.frequency)


def _collect_keys(index: DictionaryIndex, keys: Iterable[str]) -> List[Entry]:
    # dict keeps first-seen order and drops structurally equal entries
    results: Dict[Entry, None] = {}
    for key in keys:
        for entry in index.get(key):
            results.setdefault(entry, None)
    return list(results)


def collect_exact(index: DictionaryIndex, term: str) -> List[Entry]:
    """Entries stored under exactly term."""
    return _by_frequency(index.get(term))


def collect_prefix(index: DictionaryIndex, term: str) -> List[Entry]:
    """Entries under every key that starts with term."""
    return _by_frequency(_collect_keys(index, index.keys(term)))


def collect_postfix(index: DictionaryIndex, term: str) -> List[Entry]:
    """
    Entries under every key that ends with term.

    The trie cannot walk suffixes, so this scans every key of the index.
    """
    keys = (key for key in index if key.endswith(term))
    return _by_frequency(_collect_keys(index, keys))


def collect_cascade(index: DictionaryIndex, term: str) -> List[Entry]:
    """
    Try exact, then prefix, then postfix matching.

    The first tier that finds anything wins; results of different tiers
    are never merged.
    """
    for collect in (collect_exact, collect_prefix, collect_postfix):
        results = collect(index, term)
        if results:
            return results
    return []


COLLECTORS: Dict[MatchMode, Callable[[DictionaryIndex, str], List[Entry]]] = {
    MatchMode.DEFAULT: collect_cascade,
    MatchMode.EXACT: collect_exact,
    MatchMode.PREFIX: collect_prefix,
    MatchMode.POSTFIX: collect_postfix,
}


def execute(index: DictionaryIndex, mode: MatchMode, term: str) -> List[Entry]:
    """
    Search index for term using the given match mode.

    Args:
        index: Index chosen by the script classifier
        mode: Match mode chosen from the query's sigil
        term: Query term with the sigil removed

    Returns:
        De-duplicated entries sorted by frequency; empty if nothing matched
    """
    return COLLECTORS[mode](index, term)

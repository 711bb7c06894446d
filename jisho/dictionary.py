"""
Dictionary data structures for jisho.

This module holds the three lookup indices built from JMdict:
- written: keyed by every written (kanji) form
- reading: keyed by every kana reading
- gloss: keyed by every normalized English gloss

Every distinct Entry is stored once in a shared entry table. Each index is a
marisa_trie.RecordTrie mapping a key to (position, entry_id) records, where
position keeps the order in which entries were added under that key.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import marisa_trie

from jisho.characters import Script

# ============================================================================
# Record Schema
# ============================================================================
# Each index record stores:
#   - position: uint32 - insertion order of the entry under its key
#   - entry_id: uint32 - offset into the shared entry table
#
# Big-endian so byte order matches numeric order.

RECORD_FORMAT = ">II"

DEFAULT_FREQUENCY = 999
UNKNOWN_VERSION = "unknown"


@dataclass(frozen=True, slots=True)
class Entry:
    """
    A dictionary entry as returned to callers.

    Two entries are equal when all four fields are equal. Entries are
    hashable and shared between indices.

    Attributes:
        kanji: Primary written form ("" for kana-only words)
        reading: Primary kana reading
        meanings: English glosses of all senses, in order
        frequency: Frequency rank (lower = more common, 999 if unranked)
    """
    kanji: str
    reading: str
    meanings: Tuple[str, ...]
    frequency: int = DEFAULT_FREQUENCY

    def __post_init__(self):
        if not isinstance(self.meanings, tuple):
            object.__setattr__(self, "meanings", tuple(self.meanings))

    @property
    def headword(self) -> str:
        """Written form if there is one, otherwise the reading."""
        return self.kanji or self.reading

    def to_dict(self) -> dict:
        return {
            "kanji": self.kanji,
            "reading": self.reading,
            "meanings": list(self.meanings),
            "frequency": self.frequency,
        }


# ============================================================================
# Index
# ============================================================================

class DictionaryIndex:
    """
    Read-only mapping from a lookup key to the entries stored under it.

    Entries under one key come back in the order they were added at build
    time. The index is never modified after construction, so it can be read
    from any number of threads.
    """

    __slots__ = ("_trie", "_entries", "_keys")

    def __init__(self, trie: marisa_trie.RecordTrie, entries: Sequence[Entry]):
        self._trie = trie
        self._entries = entries
        self._keys: Optional[List[str]] = None

    @classmethod
    def from_mapping(
        cls,
        mapping: Dict[str, List[Entry]],
        entry_ids: Dict[Entry, int],
        entries: Sequence[Entry],
    ) -> "DictionaryIndex":
        """
        Freeze a draft mapping into an index.

        Args:
            mapping: key -> entries in insertion order
            entry_ids: Entry -> offset into entries
            entries: The shared entry table
        """
        def generate_items():
            for key, bucket in mapping.items():
                for position, entry in enumerate(bucket):
                    yield key, (position, entry_ids[entry])

        trie = marisa_trie.RecordTrie(RECORD_FORMAT, generate_items())
        return cls(trie, entries)

    @property
    def trie(self) -> marisa_trie.RecordTrie:
        """The underlying RecordTrie (used by the index store)."""
        return self._trie

    def get(self, key: str, default: Tuple[Entry, ...] = ()) -> Tuple[Entry, ...]:
        """
        Look up the entries stored under key.

        Args:
            key: Exact key to look up

        Returns:
            Entries in insertion order, or default if key is absent
        """
        records = self._trie.get(key)
        if not records:
            return default
        return tuple(self._entries[entry_id] for _, entry_id in sorted(records))

    def __getitem__(self, key: str) -> Tuple[Entry, ...]:
        entries = self.get(key)
        if not entries:
            raise KeyError(key)
        return entries

    def __contains__(self, key: str) -> bool:
        return bool(self._trie.get(key))

    def keys(self, prefix: str = "") -> List[str]:
        """
        Distinct keys starting with prefix, in trie order.

        The trie holds one record per (key, entry) pair, so keys are
        de-duplicated here.
        """
        if not prefix:
            return list(self._all_keys())
        return list(dict.fromkeys(self._trie.keys(prefix)))

    def _all_keys(self) -> List[str]:
        if self._keys is None:
            self._keys = list(dict.fromkeys(self._trie.keys()))
        return self._keys

    def __iter__(self) -> Iterator[str]:
        return iter(self._all_keys())

    def __len__(self) -> int:
        return len(self._all_keys())

    def __repr__(self) -> str:
        return f"DictionaryIndex({len(self)} keys)"


# ============================================================================
# Dictionary
# ============================================================================

@dataclass(frozen=True)
class Dictionary:
    """
    The three lookup indices plus the shared entry table and version.

    Attributes:
        written: Index keyed by written (kanji) form
        reading: Index keyed by kana reading
        gloss: Index keyed by normalized English gloss
        entries: Shared entry table referenced by all three indices
        version: JMdict creation date, or "unknown"
    """
    written: DictionaryIndex
    reading: DictionaryIndex
    gloss: DictionaryIndex
    entries: Tuple[Entry, ...]
    version: str = UNKNOWN_VERSION

    @classmethod
    def from_mappings(
        cls,
        written: Dict[str, List[Entry]],
        reading: Dict[str, List[Entry]],
        gloss: Dict[str, List[Entry]],
        version: str = UNKNOWN_VERSION,
    ) -> "Dictionary":
        """
        Freeze three draft mappings into a Dictionary.

        Structurally equal entries collapse to a single slot in the shared
        entry table.
        """
        entry_ids: Dict[Entry, int] = {}
        for mapping in (written, reading, gloss):
            for bucket in mapping.values():
                for entry in bucket:
                    entry_ids.setdefault(entry, len(entry_ids))

        entries = tuple(entry_ids)
        return cls(
            written=DictionaryIndex.from_mapping(written, entry_ids, entries),
            reading=DictionaryIndex.from_mapping(reading, entry_ids, entries),
            gloss=DictionaryIndex.from_mapping(gloss, entry_ids, entries),
            entries=entries,
            version=version,
        )

    @classmethod
    def empty(cls, version: str = UNKNOWN_VERSION) -> "Dictionary":
        """A dictionary with no entries; every query returns nothing."""
        return cls.from_mappings({}, {}, {}, version=version)

    def index_for(self, script: Script) -> DictionaryIndex:
        """Select the index searched for terms of the given script."""
        if script is Script.KANJI:
            return self.written
        if script is Script.KANA:
            return self.reading
        return self.gloss

    def __len__(self) -> int:
        return len(self.entries)

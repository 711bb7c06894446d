"""
Lightweight data structures for records read from JMdict.

These are produced by the source loader and consumed once by the index
builder. They are never stored in the index.
"""

from typing import NamedTuple, Optional, Tuple


class RawSense(NamedTuple):
    """One sense of a JMdict entry with its English glosses."""
    glosses: Tuple[str, ...]


class RawRecord(NamedTuple):
    """
    One JMdict <entry> as flat data.

    Attributes:
        written_forms: Every <keb> (may be empty for kana-only words)
        readings: Every <reb> (at least one)
        senses: Senses in document order
        priority: First <re_pri> starting with "nf" (e.g. "nf03"), if any
    """
    written_forms: Tuple[str, ...]
    readings: Tuple[str, ...]
    senses: Tuple[RawSense, ...]
    priority: Optional[str] = None

    @property
    def glosses(self) -> Tuple[str, ...]:
        """All glosses of all senses, flattened in order."""
        return tuple(gloss for sense in self.senses for gloss in sense.glosses)

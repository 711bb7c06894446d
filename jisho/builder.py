"""
Index builder for jisho.

Turns RawRecords from the source loader into a Dictionary. This is the only
phase where the indices are mutable: records are upserted into plain dicts,
which are then frozen into marisa tries.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from jisho.dictionary import DEFAULT_FREQUENCY, UNKNOWN_VERSION, Dictionary, Entry
from jisho.raw_types import RawRecord
from jisho.source import SourceError, load_records

logger = logging.getLogger(__name__)

# Length of the "nf" prefix on JMdict frequency markers
PRIORITY_PREFIX_LENGTH = 2


# ============================================================================
# Gloss Normalization
# ============================================================================

def normalize_gloss(gloss: str) -> str:
    """
    Reduce an English gloss to its lookup headword.

    JMdict often adds parenthetical explanations to glosses
    ("to depart (from)"). A trailing parenthetical is cut off so that
    lookups hit the bare headword.

    Glosses that *begin* with a parenthetical ("(archaic) to depart") are
    not special-cased and keep the parenthetical text in their key.

    Example:
        >>> normalize_gloss("Green (colour)")
        'green'
        >>> normalize_gloss("Greenery")
        'greenery'
    """
    if gloss.endswith(")"):
        open_paren = gloss.find("(")
        if open_paren != -1:
            return gloss[:open_paren].strip().lower()
    return gloss.lower()


def parse_frequency(marker: Optional[str]) -> int:
    """
    Parse a JMdict "nfXX" priority marker into a frequency rank.

    Returns 999 when the marker is missing or its number is unreadable.
    """
    if not marker:
        return DEFAULT_FREQUENCY
    try:
        return int(marker[PRIORITY_PREFIX_LENGTH:])
    except ValueError:
        return DEFAULT_FREQUENCY


# ============================================================================
# Entry Building
# ============================================================================

def build_entry(record: RawRecord) -> Entry:
    """Create the Entry that represents a RawRecord in every index."""
    return Entry(
        kanji=record.written_forms[0] if record.written_forms else "",
        reading=record.readings[0] if record.readings else "",
        meanings=record.glosses,
        frequency=parse_frequency(record.priority),
    )


def upsert(index: Dict[str, List[Entry]], key: str, entry: Entry) -> None:
    """
    Add entry under key unless an equal entry is already there.

    Repeated glosses of one word all point at the same entry, so this keeps
    each key's bucket free of duplicates.
    """
    entries = index.get(key)
    if entries is None:
        index[key] = [entry]
    elif entry not in entries:
        entries.append(entry)


def build_dictionary(
    records: Iterable[RawRecord],
    version: str = UNKNOWN_VERSION,
) -> Dictionary:
    """
    Build the three indices from raw records.

    Each record's entry is added under every written form, every
    normalized gloss of every sense, and every reading.

    Args:
        records: RawRecords from the source loader
        version: JMdict version marker

    Returns:
        A frozen Dictionary
    """
    written: Dict[str, List[Entry]] = {}
    gloss: Dict[str, List[Entry]] = {}
    reading: Dict[str, List[Entry]] = {}

    count = 0
    for record in records:
        entry = build_entry(record)

        for form in record.written_forms:
            upsert(written, form, entry)

        for sense in record.senses:
            for text in sense.glosses:
                upsert(gloss, normalize_gloss(text), entry)

        for form in record.readings:
            upsert(reading, form, entry)

        count += 1
        if count % 10000 == 0:
            logger.info(f"  Indexed {count} records...")

    dictionary = Dictionary.from_mappings(written, reading, gloss, version=version)
    logger.info(
        f"Indexed {count} records into {len(dictionary.entries)} entries "
        f"({len(written)} written forms, {len(reading)} readings, {len(gloss)} glosses)"
    )
    return dictionary


def build_from_source(path: Path) -> Dictionary:
    """
    Load JMdict from path and build a Dictionary from it.

    A source that cannot be read or parsed does not abort the build: the
    failure is logged and an empty dictionary with version "unknown" is
    returned, so every lookup simply finds nothing.
    """
    try:
        records, version = load_records(path)
    except SourceError as e:
        logger.error(f"Could not load JMdict from {path}: {e}")
        return Dictionary.empty()

    return build_dictionary(records, version=version)

"""
On-disk index store for jisho.

A built Dictionary is saved as a directory of five files:

    written.dic    marisa_trie.RecordTrie, written form -> (position, entry_id)
    reading.dic    marisa_trie.RecordTrie, reading -> (position, entry_id)
    gloss.dic      marisa_trie.RecordTrie, gloss -> (position, entry_id)
    entries.bin    packed entry table
    version.txt    JMdict version marker

Loading memory-maps the tries, so startup does not depend on dictionary
size. The format is only meant to be read back by this module.
"""

import logging
import struct
from pathlib import Path
from typing import BinaryIO, List, Optional, Sequence

import marisa_trie

from jisho.dictionary import (
    RECORD_FORMAT,
    UNKNOWN_VERSION,
    Dictionary,
    DictionaryIndex,
    Entry,
)

logger = logging.getLogger(__name__)

INDEX_FILES = {
    "written": "written.dic",
    "reading": "reading.dic",
    "gloss": "gloss.dic",
}
ENTRIES_FILE = "entries.bin"
VERSION_FILE = "version.txt"

# ============================================================================
# Entry Table Schema
# ============================================================================
# Header: count (uint32)
# Per entry:
#   - frequency: int32
#   - kanji: uint16 length + UTF-8 bytes
#   - reading: uint16 length + UTF-8 bytes
#   - meaning count: uint16, then uint16 length + UTF-8 bytes per meaning

COUNT_FORMAT = "<I"
FREQUENCY_FORMAT = "<i"
LENGTH_FORMAT = "<H"


class IndexStoreError(Exception):
    """Raised when a stored index is corrupt."""
    pass


def get_data_dir() -> Path:
    """Get the default index store directory."""
    return Path(__file__).parent / "data"


def has_index_store(directory: Optional[Path] = None) -> bool:
    """Check if every store file exists in directory."""
    directory = Path(directory) if directory is not None else get_data_dir()
    names = list(INDEX_FILES.values()) + [ENTRIES_FILE, VERSION_FILE]
    return all((directory / name).exists() for name in names)


# ============================================================================
# Entry Table
# ============================================================================

def _write_text(f: BinaryIO, text: str):
    data = text.encode('utf-8')
    f.write(struct.pack(LENGTH_FORMAT, len(data)))
    f.write(data)


def _read(f: BinaryIO, fmt: str):
    size = struct.calcsize(fmt)
    data = f.read(size)
    if len(data) != size:
        raise IndexStoreError("Entry table is truncated")
    return struct.unpack(fmt, data)[0]


def _read_text(f: BinaryIO) -> str:
    length = _read(f, LENGTH_FORMAT)
    data = f.read(length)
    if len(data) != length:
        raise IndexStoreError("Entry table is truncated")
    return data.decode('utf-8')


def write_entries(entries: Sequence[Entry], output_path: Path):
    """Save the shared entry table to a binary file."""
    with open(output_path, 'wb') as f:
        f.write(struct.pack(COUNT_FORMAT, len(entries)))
        for entry in entries:
            f.write(struct.pack(FREQUENCY_FORMAT, entry.frequency))
            _write_text(f, entry.kanji)
            _write_text(f, entry.reading)
            f.write(struct.pack(LENGTH_FORMAT, len(entry.meanings)))
            for meaning in entry.meanings:
                _write_text(f, meaning)


def read_entries(path: Path) -> List[Entry]:
    """Load the shared entry table from a binary file."""
    entries = []
    with open(path, 'rb') as f:
        count = _read(f, COUNT_FORMAT)
        for _ in range(count):
            frequency = _read(f, FREQUENCY_FORMAT)
            kanji = _read_text(f)
            reading = _read_text(f)
            meanings = tuple(_read_text(f) for _ in range(_read(f, LENGTH_FORMAT)))
            entries.append(Entry(kanji, reading, meanings, frequency))
        if f.read(1):
            raise IndexStoreError(f"Unexpected data after {count} entries in {path}")
    return entries


# ============================================================================
# Save / Load
# ============================================================================

def save_dictionary(dictionary: Dictionary, directory: Path):
    """
    Save a built Dictionary to directory.

    Args:
        dictionary: The Dictionary to persist
        directory: Target directory (created if missing)
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    for name, filename in INDEX_FILES.items():
        path = directory / filename
        getattr(dictionary, name).trie.save(str(path))
        file_size = path.stat().st_size / (1024 * 1024)
        logger.info(f"Saved {name} index to {path} ({file_size:.1f} MB)")

    entries_path = directory / ENTRIES_FILE
    write_entries(dictionary.entries, entries_path)
    file_size = entries_path.stat().st_size / (1024 * 1024)
    logger.info(f"Saved {len(dictionary.entries)} entries to {entries_path} ({file_size:.1f} MB)")

    (directory / VERSION_FILE).write_text(dictionary.version, encoding='utf-8')


def load_dictionary(directory: Optional[Path] = None, mmap: bool = True) -> Dictionary:
    """
    Load a Dictionary saved by save_dictionary.

    Args:
        directory: Store directory. Uses the default if not specified.
        mmap: Memory-map the tries instead of reading them into memory

    Returns:
        The loaded Dictionary

    Raises:
        FileNotFoundError: If any store file doesn't exist
        IndexStoreError: If the entry table is corrupt
    """
    directory = Path(directory) if directory is not None else get_data_dir()

    if not has_index_store(directory):
        raise FileNotFoundError(
            f"Dictionary not found at {directory}. "
            "Run 'python scripts/build_dictionary.py' to build it."
        )

    entries = tuple(read_entries(directory / ENTRIES_FILE))

    indices = {}
    for name, filename in INDEX_FILES.items():
        trie = marisa_trie.RecordTrie(RECORD_FORMAT)
        if mmap:
            trie.mmap(str(directory / filename))
        else:
            trie.load(str(directory / filename))
        indices[name] = DictionaryIndex(trie, entries)

    version = (directory / VERSION_FILE).read_text(encoding='utf-8').strip()

    return Dictionary(
        written=indices["written"],
        reading=indices["reading"],
        gloss=indices["gloss"],
        entries=entries,
        version=version or UNKNOWN_VERSION,
    )

"""
JMdict source loader for jisho.

Streams a JMdict XML file (plain or gzip-compressed) with lxml and turns
every <entry> into a RawRecord. Only the parts the indices need are kept:
written forms, readings, the "nf" frequency marker and English glosses.
"""

import gzip
import logging
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from lxml import etree

from jisho.dictionary import UNKNOWN_VERSION
from jisho.raw_types import RawRecord, RawSense

logger = logging.getLogger(__name__)

# Version comment has the format "JMdict created: 2024-07-15"
VERSION_COMMENT_PREFIX = "JMdict created:"

FREQUENCY_MARKER_PREFIX = "nf"
XML_LANG = "{http://www.w3.org/XML/1998/namespace}lang"
ENGLISH = "eng"


# ============================================================================
# Errors
# ============================================================================

class SourceError(Exception):
    """Raised when JMdict records cannot be produced."""
    pass


class SourceUnavailableError(SourceError):
    """Raised when the JMdict file is missing or unreadable."""
    pass


class SourceParseError(SourceError):
    """Raised when the JMdict file is not parseable XML."""
    pass


# ============================================================================
# Entry Parsing
# ============================================================================

def node_text(elem) -> str:
    """Get all text from element."""
    return ''.join(elem.itertext())


def parse_version(comment: str) -> Optional[str]:
    """Extract the creation date from a JMdict version comment."""
    text = comment.strip()
    if not text.startswith(VERSION_COMMENT_PREFIX):
        return None
    return text[len(VERSION_COMMENT_PREFIX):].strip() or None


def parse_entry(elem) -> Optional[RawRecord]:
    """
    Convert one <entry> element into a RawRecord.

    Returns None for entries without any reading.
    """
    readings = tuple(node_text(reb) for reb in elem.iter('reb'))
    if not readings:
        return None

    written_forms = tuple(node_text(keb) for keb in elem.iter('keb'))

    priority = None
    for pri in elem.iter('re_pri'):
        text = node_text(pri)
        if text.startswith(FREQUENCY_MARKER_PREFIX):
            priority = text
            break

    senses = []
    for sense in elem.iter('sense'):
        glosses = tuple(
            node_text(gloss)
            for gloss in sense.iter('gloss')
            if gloss.get(XML_LANG, ENGLISH) == ENGLISH and node_text(gloss)
        )
        senses.append(RawSense(glosses))

    return RawRecord(
        written_forms=written_forms,
        readings=readings,
        senses=tuple(senses),
        priority=priority,
    )


# ============================================================================
# Loading
# ============================================================================

class JMdictSource:
    """
    Iterable over the RawRecords of a JMdict file.

    The version marker is filled in while iterating, since the version
    comment sits inside the document.

    Example:
        >>> source = JMdictSource(Path("JMdict_e.gz"))
        >>> records = list(source)
        >>> source.version
        '2024-07-15'
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self.version = UNKNOWN_VERSION

    def _open(self):
        if not self.path.exists():
            raise SourceUnavailableError(f"JMdict file not found: {self.path}")
        if self.path.suffix == '.gz':
            return gzip.open(self.path, 'rb')
        return open(self.path, 'rb')

    def __iter__(self) -> Iterator[RawRecord]:
        try:
            with self._open() as stream:
                yield from self._parse(stream)
        except etree.XMLSyntaxError as e:
            raise SourceParseError(f"Could not parse {self.path}: {e}") from e
        except OSError as e:
            raise SourceUnavailableError(f"Could not read {self.path}: {e}") from e

    def _parse(self, stream) -> Iterator[RawRecord]:
        context = etree.iterparse(
            stream,
            events=('end', 'comment'),
            load_dtd=True,
            no_network=True,
        )

        count = 0
        for event, elem in context:
            if event == 'comment':
                version = parse_version(elem.text or '')
                if version is not None:
                    self.version = version
                continue

            if elem.tag != 'entry':
                continue

            record = parse_entry(elem)
            if record is not None:
                yield record
                count += 1
                if count % 10000 == 0:
                    logger.info(f"  Parsed {count} entries...")

            elem.clear()
            while elem.getprevious() is not None:
                del elem.getparent()[0]

        logger.info(f"Parsed {count} entries (JMdict {self.version})")


def iter_records(path: Path) -> Iterator[RawRecord]:
    """Stream RawRecords from a JMdict file."""
    return iter(JMdictSource(path))


def load_records(path: Path) -> Tuple[List[RawRecord], str]:
    """
    Read every record of a JMdict file.

    Args:
        path: Path to JMdict XML (.xml or .gz)

    Returns:
        Tuple of (records, version marker)

    Raises:
        SourceUnavailableError: If the file is missing or unreadable
        SourceParseError: If the file is not parseable XML
    """
    source = JMdictSource(path)
    logger.info(f"Parsing JMdict entries from {path}...")
    records = list(source)
    return records, source.version

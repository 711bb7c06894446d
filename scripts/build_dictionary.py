#!/usr/bin/env python3
"""
Dictionary Builder for jisho.

This script builds the index store from JMdict XML.
It parses the XML, builds the written-form, reading and gloss indices,
and saves them as memory-mappable marisa_trie.RecordTrie files.

Usage:
    python scripts/build_dictionary.py [--jmdict PATH] [--output DIR]

JMdict_e.gz can be downloaded from https://www.edrdg.org/jmdict/j_jmdict.html
"""

import argparse
import logging
import sys
import time
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from jisho.builder import build_from_source
from jisho.store import get_data_dir, save_dictionary

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


# ============================================================================
# Paths
# ============================================================================

DEFAULT_JMDICT = Path(__file__).parent.parent / "data" / "JMdict_e.gz"
DEFAULT_OUTPUT = get_data_dir()


# ============================================================================
# Main
# ============================================================================

def main():
    parser = argparse.ArgumentParser(
        description="Build jisho index store from JMdict XML"
    )
    parser.add_argument(
        '--jmdict', '-j',
        type=Path,
        default=DEFAULT_JMDICT,
        help=f"Path to JMdict XML file, plain or gzipped (default: {DEFAULT_JMDICT})"
    )
    parser.add_argument(
        '--output', '-o',
        type=Path,
        default=DEFAULT_OUTPUT,
        help=f"Output index store directory (default: {DEFAULT_OUTPUT})"
    )

    args = parser.parse_args()

    if not args.jmdict.exists():
        logger.error(f"JMdict file not found: {args.jmdict}")
        sys.exit(1)

    start_time = time.time()

    dictionary = build_from_source(args.jmdict)
    if not dictionary.entries:
        logger.warning("No entries were indexed; saving an empty dictionary")

    save_dictionary(dictionary, args.output)

    elapsed = time.time() - start_time
    logger.info(f"Build of JMdict {dictionary.version} completed in {elapsed:.1f} seconds")


if __name__ == '__main__':
    main()

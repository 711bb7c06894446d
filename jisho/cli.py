"""
CLI interface for jisho.

Usage:
    jisho 緑
    jisho "green*"
    jisho --json みどり
    jisho                  # interactive prompt
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from jisho import __version__
from jisho.dictionary import Entry
from jisho.engine import LookupEngine
from jisho.store import load_dictionary

PROMPT = "> "


# ============================================================================
# Output Formatting
# ============================================================================

def format_entry(entry: Entry) -> str:
    """
    Format one entry on a single line.

    Kana-only words:  みどり - green, greenery
    Words with kanji: 緑【みどり】- green, greenery
    """
    meanings = ", ".join(entry.meanings)
    if not entry.kanji:
        return f"{entry.reading} - {meanings}"
    return f"{entry.kanji}【{entry.reading}】- {meanings}"


def format_default(results: List[Entry]) -> str:
    return "\n".join(format_entry(entry) for entry in results)


def format_json(results: List[Entry]) -> str:
    """Format results as a JSON list."""
    return json.dumps([entry.to_dict() for entry in results], ensure_ascii=False, indent=2)


def print_results(results: List[Entry], as_json: bool = False):
    # No matches prints nothing in plain mode
    if as_json:
        print(format_json(results))
    elif results:
        print(format_default(results))


# ============================================================================
# Interactive Prompt
# ============================================================================

def run_interactive(engine: LookupEngine, as_json: bool = False):
    """Read queries from stdin until EOF or Ctrl-C."""
    while True:
        try:
            line = input(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print()
            return

        text = line.strip()
        if not text:
            continue

        print_results(engine.lookup(text), as_json=as_json)


# ============================================================================
# Main
# ============================================================================

def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        prog="jisho",
        description="Japanese-English dictionary lookup",
        epilog="Prefix with = for exact match, end with * for prefix match, "
               "start with * for suffix match.",
    )
    parser.add_argument(
        "term",
        nargs="*",
        help="Kanji, kana, or English term (omit for an interactive prompt)",
    )
    parser.add_argument(
        "--data", "-d",
        type=Path,
        default=None,
        help="Index store directory (default: bundled data directory)",
    )
    parser.add_argument(
        "--json", "-j",
        action="store_true",
        help="Output as JSON",
    )
    parser.add_argument(
        "--dictionary-version",
        action="store_true",
        help="Print the JMdict version and exit",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log lookup details to stderr",
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"jisho {__version__}",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    try:
        engine = LookupEngine(load_dictionary(args.data))

        if args.dictionary_version:
            print(engine.dictionary_version())
            return

        text = " ".join(args.term).strip()
        if not text:
            run_interactive(engine, as_json=args.json)
            return

        print_results(engine.lookup(text), as_json=args.json)

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

# tests/conftest.py
"""Shared fixtures: a small hand-made JMdict sample."""

import pytest

from jisho import engine as engine_module
from jisho.builder import build_dictionary
from jisho.dictionary import Entry
from jisho.engine import LookupEngine
from jisho.raw_types import RawRecord, RawSense
from jisho.store import save_dictionary

VERSION = "2024-07-15"

MIDORI = Entry("緑", "みどり", ("green", "greenery", "verdure"), 3)


def make_record(written, readings, senses, priority=None):
    return RawRecord(
        written_forms=tuple(written),
        readings=tuple(readings),
        senses=tuple(RawSense(tuple(glosses)) for glosses in senses),
        priority=priority,
    )


@pytest.fixture
def records():
    return [
        make_record(["緑"], ["みどり"], [["green", "greenery", "verdure"]], "nf03"),
        make_record(["緑茶"], ["りょくちゃ"], [["green tea"]], "nf10"),
        make_record(["緑色"], ["みどりいろ"], [["green (colour)"]], "nf20"),
        make_record(["新緑"], ["しんりょく"], [["fresh verdure", "new green leaves"]]),
        make_record([], ["ありがとう"], [["thank you"], ["thanks"]], "nf01"),
        make_record([], ["グリーン"], [["green"], ["golf green"]], "nf30"),
        make_record(["効く", "利く"], ["きく"], [["to be effective"], ["to work (e.g. a drug)"]], "nf05"),
    ]


@pytest.fixture
def dictionary(records):
    return build_dictionary(records, version=VERSION)


@pytest.fixture
def engine(dictionary):
    return LookupEngine(dictionary)


@pytest.fixture
def store_dir(dictionary, tmp_path):
    path = tmp_path / "store"
    save_dictionary(dictionary, path)
    return path


@pytest.fixture
def default_engine():
    # make sure every test starts and ends without a cached default engine
    engine_module.reset_engine()
    yield
    engine_module.reset_engine()

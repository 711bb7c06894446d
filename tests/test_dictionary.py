# tests/test_dictionary.py
"""Tests for Entry and DictionaryIndex."""

import pytest

from jisho.dictionary import Dictionary, Entry

from conftest import MIDORI


def test_entry_equality_is_structural():
    same = Entry("緑", "みどり", ["green", "greenery", "verdure"], 3)
    assert same == MIDORI
    assert hash(same) == hash(MIDORI)
    assert Entry("緑", "みどり", ("green",), 3) != MIDORI


def test_entry_is_immutable():
    with pytest.raises(AttributeError):
        MIDORI.frequency = 1


def test_entry_defaults_to_unranked():
    assert Entry("", "ね", ("sleep",)).frequency == 999


def test_entry_headword():
    assert MIDORI.headword == "緑"
    assert Entry("", "ありがとう", ("thank you",)).headword == "ありがとう"


def test_entry_to_dict():
    assert MIDORI.to_dict() == {
        "kanji": "緑",
        "reading": "みどり",
        "meanings": ["green", "greenery", "verdure"],
        "frequency": 3,
    }


def test_index_keeps_insertion_order_per_key():
    first = Entry("", "グリーン", ("green",), 30)
    second = Entry("緑", "みどり", ("green",), 3)
    third = Entry("翠", "みどり", ("green",), 50)
    dictionary = Dictionary.from_mappings({}, {}, {"green": [first, second, third]})
    assert dictionary.gloss.get("green") == (first, second, third)


def test_index_lookup(dictionary):
    assert dictionary.written.get("緑") == (MIDORI,)
    assert dictionary.written["緑"] == (MIDORI,)
    assert "緑" in dictionary.written
    assert "猫" not in dictionary.written
    assert dictionary.written.get("猫") == ()


def test_index_missing_key_raises(dictionary):
    with pytest.raises(KeyError):
        dictionary.written["猫"]


def test_index_keys_are_distinct(dictionary):
    keys = dictionary.gloss.keys()
    assert len(keys) == len(set(keys))
    assert "green" in keys
    assert len(dictionary.gloss) == len(keys)


def test_index_keys_with_prefix(dictionary):
    assert sorted(dictionary.written.keys("緑")) == sorted(["緑", "緑色", "緑茶"])
    assert dictionary.written.keys("猫") == []


def test_index_iterates_over_keys(dictionary):
    assert sorted(dictionary.reading) == sorted([
        "みどり", "りょくちゃ", "みどりいろ", "しんりょく", "ありがとう", "グリーン", "きく",
    ])


def test_dictionary_length_counts_entries(dictionary, records):
    assert len(dictionary) == len(records)

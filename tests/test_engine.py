# tests/test_engine.py
"""End-to-end lookups through the engine and the package API."""

import threading

import pytest

import jisho
from jisho import engine as engine_module
from jisho.builder import build_dictionary
from jisho.engine import LookupEngine, get_engine, is_engine_loaded, set_engine

from conftest import MIDORI, VERSION, make_record


# ============================================================================
# LookupEngine
# ============================================================================

def test_kanji_lookup(engine):
    assert engine.lookup("緑")[0] == MIDORI


def test_reading_lookup(engine):
    assert engine.lookup("みどり")[0] == MIDORI


def test_meaning_lookup(engine):
    results = engine.lookup("green")
    assert results.count(MIDORI) == 1
    assert len(results) == len(set(results))


def test_exact_mode_does_not_fall_back():
    dictionary = build_dictionary([
        make_record(["緑茶"], ["りょくちゃ"], [["green tea"]], "nf10"),
    ])
    engine = LookupEngine(dictionary)
    assert engine.lookup("=緑") == []
    assert [e.kanji for e in engine.lookup("緑")] == ["緑茶"]


def test_prefix_mode(engine):
    results = engine.lookup("緑*")
    assert [e.kanji for e in results] == ["緑", "緑茶", "緑色"]
    assert all(e.kanji.startswith("緑") for e in results)


def test_full_width_prefix_mode(engine):
    assert engine.lookup("緑＊") == engine.lookup("緑*")


def test_postfix_mode(engine):
    assert [e.kanji for e in engine.lookup("*緑")] == ["緑", "新緑"]


def test_postfix_searches_the_reading_index(engine):
    assert [e.reading for e in engine.lookup("*りょく")] == ["しんりょく"]
    assert [e.reading for e in engine.lookup("*ーン")] == ["グリーン"]


def test_gloss_lookup_uses_normalized_key(engine):
    assert [e.kanji for e in engine.lookup("to work")] == ["効く"]


def test_gloss_lookup_is_case_sensitive_on_input(engine):
    # keys are lowercased at build time, queries are not
    assert engine.lookup("Green") == []


def test_mixed_script_routes_to_written_index(engine):
    # no written form contains みどり, so nothing is found even though the
    # reading index has it
    assert engine.lookup("緑みどり") == []


def test_no_match_is_empty(engine):
    assert engine.lookup("猫") == []
    assert engine.lookup("ねこ") == []
    assert engine.lookup("cat") == []


def test_sigil_only_query_matches_everything(engine, dictionary):
    results = engine.lookup("*")
    assert len(results) == len(dictionary.entries)


def test_empty_query_is_rejected(engine):
    with pytest.raises(ValueError):
        engine.lookup("")


def test_dictionary_version(engine):
    assert engine.dictionary_version() == VERSION


def test_empty_dictionary_answers_nothing():
    engine = LookupEngine(build_dictionary([]))
    assert engine.lookup("緑") == []
    assert engine.lookup("green*") == []
    assert engine.dictionary_version() == "unknown"


# ============================================================================
# Default engine
# ============================================================================

def test_get_engine_loads_once(default_engine, store_dir):
    assert not is_engine_loaded()
    first = get_engine(store_dir)
    second = get_engine()
    assert first is second
    assert is_engine_loaded()
    assert first.lookup("緑")[0] == MIDORI


def test_get_engine_is_shared_between_threads(default_engine, store_dir):
    engines = []

    def load():
        engines.append(get_engine(store_dir))

    threads = [threading.Thread(target=load) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(engines) == 8
    assert all(e is engines[0] for e in engines)


def test_get_engine_without_store(default_engine, tmp_path):
    with pytest.raises(FileNotFoundError):
        get_engine(tmp_path / "missing")
    assert not is_engine_loaded()


def test_package_api(default_engine, engine):
    set_engine(engine)
    assert jisho.lookup("みどり")[0] == MIDORI
    assert jisho.dictionary_version() == VERSION

    with jisho.session_context() as session:
        assert session is engine

    total, timings = jisho.warm_up()
    assert total >= 0
    assert set(timings) == {"dictionary", "total"}


def test_reset_engine(default_engine, engine):
    set_engine(engine)
    engine_module.reset_engine()
    assert not is_engine_loaded()


def test_library_version():
    assert jisho.get_version() == jisho.__version__

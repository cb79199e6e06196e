"""Tests for the bundled autocomplete engine."""
import sys
import os
import json
import tempfile
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from suggestpad.engine import AutocompleteEngine, EngineConfig, levenshtein, tokenize
from suggestpad.errors import DictionaryError, EngineFault

SAMPLE = "The world works. The word worth a world, the_end."


def make_engine(config=None):
    engine = AutocompleteEngine(config)
    engine.add_text(SAMPLE)
    return engine


def words(candidates):
    return [c.word for c in candidates]


def test_tokenize_alnum_runs():
    assert tokenize("the_end, don't 42x") == ["the", "end", "don", "t", "42x"]


def test_levenshtein():
    assert levenshtein("kitten", "sitting") == 3
    assert levenshtein("", "abc") == 3
    assert levenshtein("wor", "wor") == 0
    assert levenshtein("wir", "wor") == 1


def test_prefix_ranked_by_frequency_then_alpha():
    engine = make_engine()
    assert words(engine.query("wor", 10)) == ["world", "word", "works", "worth"]


def test_limit_truncates():
    engine = make_engine()
    assert words(engine.query("wor", 2)) == ["world", "word"]
    assert engine.query("wor", 0) == []
    assert engine.query("", 5) == []


def test_exact_word_not_suggested():
    engine = make_engine()
    assert "world" not in words(engine.query("world", 10))
    assert words(engine.query("the", 10)) == []


def test_case_insensitive_with_leading_capital_kept():
    engine = make_engine()
    assert words(engine.query("WOR", 1)) == ["World"]
    assert words(engine.query("Wor", 1)) == ["World"]
    assert engine.frequency("THE") == 3


def test_tolerance_allows_typos_in_prefix():
    engine = make_engine(EngineConfig(tolerance=1, tolerance_threshold=2))
    result = engine.query("wir", 10)
    assert words(result)[0] == "world"
    assert set(words(result)) == {"world", "word", "works", "worth"}
    assert result[0].score == pytest.approx(2 * 0.5 / 2)


def test_exact_prefix_outranks_similar():
    engine = make_engine(EngineConfig(tolerance=1))
    engine.add_text("wire")
    result = words(engine.query("wir", 10))
    assert result[0] == "wire"


def test_tolerance_threshold_blocks_short_prefixes():
    engine = make_engine(EngineConfig(tolerance=1, tolerance_threshold=4))
    assert engine.query("wir", 10) == []


def test_zero_tolerance_means_prefix_only():
    engine = make_engine()
    assert engine.query("wir", 10) == []


def test_configure_applies_to_next_query():
    engine = make_engine()
    engine.configure(EngineConfig(original_weight=0.0, tolerance=0))
    assert all(c.score == 0 for c in engine.query("wor", 10))


def test_invalid_configuration_rejected():
    engine = make_engine()
    with pytest.raises(EngineFault):
        engine.configure(EngineConfig(tolerance=-1))
    with pytest.raises(EngineFault):
        engine.configure(EngineConfig(max_suggestions=0))
    assert engine.config == EngineConfig()


def test_clear_empties_store():
    engine = make_engine()
    engine.clear()
    assert engine.word_count == 0
    assert engine.query("wor", 10) == []


def test_save_and_load_dictionary():
    engine = make_engine()
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "dict.json")
        engine.save_dictionary(path)
        with open(path, encoding="utf-8") as f:
            assert json.load(f)["world"] == 2

        other = AutocompleteEngine()
        other.load_dictionary(path)
        assert other.frequency("world") == 2
        assert words(other.query("wor", 10)) == words(engine.query("wor", 10))


def test_load_plain_text_dictionary():
    engine = AutocompleteEngine()
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "dict")
        with open(path, "w", encoding="utf-8") as f:
            f.write("alpha beta\nalpha gamma\n")
        engine.load_dictionary(path)
    assert engine.frequency("alpha") == 2
    assert words(engine.query("al", 5)) == ["alpha"]


def test_load_missing_dictionary_raises():
    engine = make_engine()
    with tempfile.TemporaryDirectory() as tmp:
        with pytest.raises(DictionaryError) as info:
            engine.load_dictionary(os.path.join(tmp, "missing.json"))
    assert isinstance(info.value, OSError)
    assert engine.frequency("world") == 2


def test_save_to_bad_location_raises():
    engine = make_engine()
    with tempfile.TemporaryDirectory() as tmp:
        with pytest.raises(DictionaryError):
            engine.save_dictionary(os.path.join(tmp, "no", "such", "dir", "dict.json"))


if __name__ == '__main__':
    for name, fn in sorted(globals().items()):
        if name.startswith('test_') and callable(fn):
            fn()
    print("All engine tests passed.")

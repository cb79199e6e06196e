"""Tests for JSON configuration."""
import sys
import os
import json
import tempfile
from pathlib import Path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from suggestpad.config import Config, DEFAULT_CONFIG
from suggestpad.engine import EngineConfig
from suggestpad.main import build_engine


def test_defaults_without_file():
    with tempfile.TemporaryDirectory() as tmp:
        config = Config(Path(tmp) / "config.json")
        assert config.max_suggestions == 10
        assert config.cooldown_ms == 300
        assert config.default_dictionary == "dict"
        assert not config.query_in_background
        assert config.engine_config() == EngineConfig()


def test_set_persists():
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "sub" / "config.json"
        config = Config(path)
        config.set("cooldown_ms", 500)
        assert json.loads(path.read_text(encoding="utf-8"))["cooldown_ms"] == 500
        assert Config(path).cooldown_ms == 500


def test_malformed_file_ignored():
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "config.json"
        path.write_text("{not json", encoding="utf-8")
        assert Config(path).max_suggestions == DEFAULT_CONFIG["max_suggestions"]

        path.write_text("[1, 2]", encoding="utf-8")
        assert Config(path).max_suggestions == DEFAULT_CONFIG["max_suggestions"]


def test_apply_engine_config():
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "config.json"
        engine_config = EngineConfig(max_suggestions=5, tolerance_threshold=3, tolerance=1,
                                     similar_weight=0.3, original_weight=1.5)
        Config(path).apply_engine_config(engine_config)
        reloaded = Config(path)
        assert reloaded.engine_config() == engine_config
        assert reloaded.max_suggestions == 5


def test_invalid_saved_settings_fall_back_to_defaults():
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "config.json"
        path.write_text(json.dumps({"tolerance": -4}), encoding="utf-8")
        engine = build_engine(Config(path))
        assert engine.config == EngineConfig()


if __name__ == '__main__':
    test_defaults_without_file()
    test_set_persists()
    test_malformed_file_ignored()
    test_apply_engine_config()
    test_invalid_saved_settings_fall_back_to_defaults()
    print("All config tests passed.")

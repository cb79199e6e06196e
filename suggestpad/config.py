"""Configuration management: JSON-based, stored in ~/.config/suggestpad/."""
import json
import logging
from pathlib import Path

from suggestpad.engine import EngineConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "max_suggestions": 10,
    "tolerance_threshold": 0,
    "tolerance": 0,
    "similar_weight": 0.5,
    "original_weight": 1.0,
    "cooldown_ms": 300,
    "default_dictionary": "dict",  # loaded on startup if it exists
    "seed_language": "",  # e.g. "en" to preload pyspellchecker's word list
    "query_in_background": False,
    "debug_logging": False,
}

CONFIG_DIR = Path.home() / ".config" / "suggestpad"
CONFIG_FILE = CONFIG_DIR / "config.json"


class Config:
    def __init__(self, path: Path = None):
        self._path = Path(path) if path is not None else CONFIG_FILE
        self._data = dict(DEFAULT_CONFIG)
        self.load()

    @property
    def path(self) -> Path:
        return self._path

    def load(self):
        if self._path.exists():
            try:
                with open(self._path, "r", encoding="utf-8") as f:
                    stored = json.load(f)
                if isinstance(stored, dict):
                    self._data.update(stored)
                else:
                    logger.warning("Ignoring config %s: not a JSON object", self._path)
            except (json.JSONDecodeError, IOError) as e:
                logger.warning("Ignoring unreadable config %s: %s", self._path, e)

    def save(self):
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2, ensure_ascii=False)

    def get(self, key, default=None):
        return self._data.get(key, default)

    def set(self, key, value):
        self._data[key] = value
        self.save()

    @property
    def max_suggestions(self) -> int:
        return int(self._data["max_suggestions"])

    @property
    def cooldown_ms(self) -> int:
        return int(self._data.get("cooldown_ms", 300))

    @property
    def default_dictionary(self) -> str:
        return self._data.get("default_dictionary", "dict")

    @property
    def seed_language(self) -> str:
        return self._data.get("seed_language", "")

    @property
    def query_in_background(self) -> bool:
        return bool(self._data.get("query_in_background", False))

    @property
    def debug_logging(self) -> bool:
        return bool(self._data["debug_logging"])

    def engine_config(self) -> EngineConfig:
        return EngineConfig(
            max_suggestions=int(self._data["max_suggestions"]),
            tolerance_threshold=int(self._data["tolerance_threshold"]),
            tolerance=int(self._data["tolerance"]),
            similar_weight=float(self._data["similar_weight"]),
            original_weight=float(self._data["original_weight"]),
        )

    def apply_engine_config(self, engine_config: EngineConfig):
        self._data.update({
            "max_suggestions": engine_config.max_suggestions,
            "tolerance_threshold": engine_config.tolerance_threshold,
            "tolerance": engine_config.tolerance,
            "similar_weight": engine_config.similar_weight,
            "original_weight": engine_config.original_weight,
        })
        self.save()

"""Bundled autocomplete engine: word-frequency store plus prefix ranking.

The suggestion controller only relies on ``query(prefix, limit)``; this module
is the default in-process implementation of that contract. Words are counted
in a pyspellchecker ``WordFrequency`` table, which also provides the JSON
dictionary import/export.
"""
import logging
import re
import threading
from dataclasses import dataclass
from typing import List, Optional

from spellchecker import SpellChecker

from suggestpad.errors import DictionaryError, EngineFault

logger = logging.getLogger(__name__)

_WORD_RE = re.compile(r"[^\W_]+")


def tokenize(text: str) -> List[str]:
    """Split text into alphanumeric runs (same boundaries as the caret scanner)."""
    return _WORD_RE.findall(text)


def levenshtein(s1: str, s2: str) -> int:
    """Classic Levenshtein edit distance."""
    if len(s1) < len(s2):
        s1, s2 = s2, s1
    if not s2:
        return len(s1)
    previous = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1, 1):
        current = [i]
        for j, c2 in enumerate(s2, 1):
            current.append(min(
                previous[j] + 1,             # deletion
                current[j - 1] + 1,          # insertion
                previous[j - 1] + (c1 != c2),  # substitution
            ))
        previous = current
    return previous[-1]


@dataclass(frozen=True)
class Candidate:
    word: str
    score: float = 0.0


@dataclass(frozen=True)
class EngineConfig:
    """Tuning knobs. Only the engine interprets them."""
    max_suggestions: int = 10
    tolerance_threshold: int = 0
    tolerance: int = 0
    similar_weight: float = 0.5
    original_weight: float = 1.0

    def validate(self):
        if self.max_suggestions < 1:
            raise EngineFault(f"max_suggestions must be >= 1, got {self.max_suggestions}")
        if self.tolerance < 0 or self.tolerance_threshold < 0:
            raise EngineFault("tolerance and tolerance_threshold must be >= 0")
        if self.similar_weight < 0 or self.original_weight < 0:
            raise EngineFault("weights must be >= 0")


class AutocompleteEngine:
    """Frequency-ranked word completion with optional typo tolerance.

    All mutating calls come from the UI thread; ``query`` may also run on a
    worker thread, so the table is snapshotted under a lock.
    """

    def __init__(self, config: Optional[EngineConfig] = None, seed_language: str = ""):
        self._config = config or EngineConfig()
        self._config.validate()
        self._lock = threading.Lock()
        self._spell = self._new_store(None)
        if seed_language:
            self._seed(seed_language)

    def _seed(self, language: str):
        try:
            store = self._new_store(language)
        except ValueError as e:
            logger.warning("Cannot seed word store for %r: %s", language, e)
            return
        self._spell = store
        logger.info("Seeded word store from %r frequency list (%d words)",
                    language, self.word_count)

    @staticmethod
    def _new_store(language: Optional[str]) -> SpellChecker:
        return SpellChecker(language=language, tokenizer=tokenize)

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def word_count(self) -> int:
        return len(self._spell.word_frequency.dictionary)

    def configure(self, config: EngineConfig):
        """Replace tuning for subsequent queries. Raises EngineFault if invalid."""
        config.validate()
        self._config = config
        logger.debug("Engine reconfigured: %s", config)

    def frequency(self, word: str) -> int:
        return self._spell.word_frequency.dictionary.get(word.lower(), 0)

    def add_text(self, text: str):
        if not text:
            return
        with self._lock:
            self._spell.word_frequency.load_text(text)

    def clear(self):
        with self._lock:
            self._spell = self._new_store(None)

    def load_dictionary(self, path):
        """Merge a dictionary file: JSON ``{word: count}`` (.gz ok) or plain text."""
        path = str(path)
        with self._lock:
            try:
                try:
                    self._spell.word_frequency.load_dictionary(path)
                except ValueError:
                    # Not JSON: count the words of a plain text file
                    self._spell.word_frequency.load_text_file(path)
            except (OSError, ValueError, TypeError) as e:
                raise DictionaryError(f"Cannot load dictionary {path}: {e}") from e
        logger.info("Dictionary loaded from %s (%d words)", path, self.word_count)

    def save_dictionary(self, path):
        """Write the word table as JSON, gzipped when ``path`` ends with .gz."""
        path = str(path)
        gzipped = path.lower().endswith(".gz")
        try:
            with self._lock:
                self._spell.export(path, gzipped=gzipped)
        except OSError as e:
            raise DictionaryError(f"Cannot save dictionary {path}: {e}") from e
        logger.info("Dictionary saved to %s", path)

    def query(self, prefix: str, limit: int) -> List[Candidate]:
        """Up to ``limit`` completions for ``prefix``, best first."""
        if not prefix or limit <= 0:
            return []
        config = self._config
        needle = prefix.lower()
        fuzzy = config.tolerance > 0 and len(needle) >= config.tolerance_threshold

        with self._lock:
            entries = list(self._spell.word_frequency.dictionary.items())

        scored = []
        for word, count in entries:
            if word == needle or len(word) < len(needle):
                continue
            if word.startswith(needle):
                scored.append((count * config.original_weight, word))
            elif fuzzy:
                distance = levenshtein(needle, word[:len(needle)])
                if distance <= config.tolerance:
                    scored.append((count * config.similar_weight / (1 + distance), word))

        scored.sort(key=lambda item: (-item[0], item[1]))
        capitalize = prefix[:1].isupper()
        return [
            Candidate(word.capitalize() if capitalize else word, score)
            for score, word in scored[:limit]
        ]


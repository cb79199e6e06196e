"""Word boundary scanning: finds the token being typed left of the caret."""
from dataclasses import dataclass


@dataclass(frozen=True)
class WordSpan:
    """Half-open interval [start, end) of the buffer; end is always the caret."""
    start: int
    end: int

    @property
    def empty(self) -> bool:
        return self.start >= self.end

    def __len__(self):
        return self.end - self.start

    def slice(self, text: str) -> str:
        return text[self.start:self.end]


def is_word_char(char: str) -> bool:
    """Letter-or-digit test, Unicode aware (no underscore, no apostrophe)."""
    return char.isalnum()


def scan_word(text: str, caret: int) -> WordSpan:
    """Return the alphanumeric run ending exactly at ``caret``.

    Scans backward from ``caret - 1`` and stops at the first character that is
    not a letter or digit. The span is empty when ``caret == 0`` or when the
    character right before the caret is not alphanumeric.
    """
    if caret < 0 or caret > len(text):
        raise ValueError(f"caret {caret} outside text of length {len(text)}")

    start = caret
    while start > 0 and is_word_char(text[start - 1]):
        start -= 1
    return WordSpan(start, caret)

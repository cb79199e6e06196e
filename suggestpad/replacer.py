"""Suggestion acceptance: splices a chosen word over the word being typed."""
from typing import Optional, Tuple

from suggestpad.words import scan_word


def accept_suggestion(text: str, caret: int, word: str) -> Optional[Tuple[str, int]]:
    """Replace the word left of ``caret`` with ``word``.

    The span is re-scanned from the current buffer rather than reused from
    the query, so edits made in between are respected.

    Returns (new_text, new_caret), or None when ``word`` is empty.
    """
    if not word:
        return None
    span = scan_word(text, caret)
    new_text = text[:span.start] + word + text[span.end:]
    return new_text, span.start + len(word)

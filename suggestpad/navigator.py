"""Keyboard/mouse selection over the candidate list while the popup is shown."""
from typing import List, Optional, Sequence


class SelectionNavigator:
    """Active row over an ordered candidate list. Movement clamps, never wraps."""

    def __init__(self):
        self._items: List[str] = []
        self._index: int = -1

    @property
    def items(self) -> List[str]:
        return list(self._items)

    @property
    def index(self) -> int:
        return self._index

    def reset(self, items: Sequence[str]):
        """Mirror ``items`` in order and select the first entry."""
        self._items = list(items)
        self._index = 0 if self._items else -1

    def clear(self):
        self._items = []
        self._index = -1

    def move(self, delta: int) -> int:
        if not self._items:
            return self._index
        self._index = max(0, min(len(self._items) - 1, self._index + delta))
        return self._index

    def move_up(self) -> int:
        return self.move(-1)

    def move_down(self) -> int:
        return self.move(1)

    def select(self, row: int) -> bool:
        if 0 <= row < len(self._items):
            self._index = row
            return True
        return False

    def current(self) -> Optional[str]:
        if 0 <= self._index < len(self._items):
            return self._items[self._index]
        return None

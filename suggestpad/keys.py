"""Key categories: which key events may refresh or drive the popup."""
import enum
from typing import Optional

from PyQt5.QtCore import Qt


class KeyKind(enum.Enum):
    NAVIGATION = "navigation"
    FUNCTION = "function"
    EDIT = "edit"


class NavKey(enum.Enum):
    """Keys the popup claims while it is shown."""
    UP = "up"
    DOWN = "down"
    TAB = "tab"
    ESCAPE = "escape"


NAVIGATION_KEYS = frozenset({
    Qt.Key_Left, Qt.Key_Right, Qt.Key_Up, Qt.Key_Down,
    Qt.Key_Home, Qt.Key_End, Qt.Key_PageUp, Qt.Key_PageDown,
})

_NAV_KEYS = {
    Qt.Key_Up: NavKey.UP,
    Qt.Key_Down: NavKey.DOWN,
    Qt.Key_Tab: NavKey.TAB,
    Qt.Key_Escape: NavKey.ESCAPE,
}


def classify_key(qt_key: int) -> KeyKind:
    """Categorise a Qt key code. Anything not navigation/function is an edit."""
    if qt_key in NAVIGATION_KEYS:
        return KeyKind.NAVIGATION
    if Qt.Key_F1 <= qt_key <= Qt.Key_F35:
        return KeyKind.FUNCTION
    return KeyKind.EDIT


def nav_key(qt_key: int) -> Optional[NavKey]:
    return _NAV_KEYS.get(qt_key)

"""Main editor window (Qt): text area, suggestion popup, menus, file handling."""
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional

from PyQt5.QtWidgets import (
    QMainWindow, QPlainTextEdit, QListWidget, QMessageBox,
    QFileDialog, QAction, QAbstractItemView,
)
from PyQt5.QtGui import QTextCursor
from PyQt5.QtCore import Qt, QEvent, QPoint, QTimer

from suggestpad.controller import SuggestionController
from suggestpad.dispatch import TaskQueue, ThreadedScheduler
from suggestpad.errors import DictionaryError
from suggestpad.gate import VisibilityGate
from suggestpad.keys import classify_key, nav_key
from suggestpad.placement import DEFAULT_GEOMETRY, Rect

logger = logging.getLogger(__name__)

APP_TITLE = "Autocomplete Text Editor"
TEXT_FILTER = "Text Files (*.txt);;All Files (*)"
DICT_FILTER = "Dictionaries (*.json *.gz *.txt);;All Files (*)"


class SuggestionPopup(QListWidget):
    """Frameless list shown next to the caret. Never takes keyboard focus."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowFlags(Qt.ToolTip | Qt.FramelessWindowHint)
        self.setAttribute(Qt.WA_ShowWithoutActivating)
        self.setFocusPolicy(Qt.NoFocus)
        self.setMouseTracking(True)
        self.setSelectionMode(QAbstractItemView.SingleSelection)
        self.setFixedSize(int(DEFAULT_GEOMETRY.popup_width), int(DEFAULT_GEOMETRY.popup_height))
        self.setStyleSheet(
            "QListWidget { background: white; border: 1px solid #ccc; }"
            "QListWidget::item:selected { background: #e0e0e0; color: black; }"
        )

    def show_at(self, point, items, current_row: int):
        self.clear()
        self.addItems(items)
        self.set_current_row(current_row)
        self.move(int(point.x), int(point.y))
        self.show()
        self.raise_()

    def set_current_row(self, row: int):
        self.setCurrentRow(row)
        item = self.item(row)
        if item is not None:
            self.scrollToItem(item)


def utf16_to_index(text: str, units: int) -> int:
    """Code-point index for a Qt (UTF-16) position; a split pair rounds down."""
    encoded = text.encode("utf-16-le")[:2 * max(units, 0)]
    return len(encoded.decode("utf-16-le", errors="ignore"))


def index_to_utf16(text: str, index: int) -> int:
    """Qt (UTF-16) position for a code-point index into ``text``."""
    return len(text[:max(index, 0)].encode("utf-16-le")) // 2


class EditorHost:
    """Adapts a QPlainTextEdit to the controller's host interface.

    Qt positions count UTF-16 code units; offsets crossing this adapter are
    Python string indices.
    """

    def __init__(self, editor: QPlainTextEdit):
        self._editor = editor

    def get_text(self) -> str:
        return self._editor.toPlainText()

    def get_caret_offset(self) -> int:
        return utf16_to_index(self.get_text(), self._editor.textCursor().position())

    def replace_text_and_move_caret(self, new_text: str, new_caret: int):
        """Apply the change as one undoable edit covering only what differs."""
        old_text = self.get_text()
        prefix = 0
        limit = min(len(old_text), len(new_text))
        while prefix < limit and old_text[prefix] == new_text[prefix]:
            prefix += 1
        suffix = 0
        while (suffix < limit - prefix
               and old_text[-1 - suffix] == new_text[-1 - suffix]):
            suffix += 1

        cursor = self._editor.textCursor()
        cursor.beginEditBlock()
        cursor.setPosition(index_to_utf16(old_text, prefix))
        cursor.setPosition(index_to_utf16(old_text, len(old_text) - suffix),
                           QTextCursor.KeepAnchor)
        cursor.insertText(new_text[prefix:len(new_text) - suffix])
        cursor.endEditBlock()
        cursor.setPosition(index_to_utf16(new_text, min(new_caret, len(new_text))))
        self._editor.setTextCursor(cursor)

    def get_container_screen_bounds(self) -> Optional[Rect]:
        viewport = self._editor.viewport()
        if not self._editor.isVisible() or viewport.width() <= 0 or viewport.height() <= 0:
            return None
        top_left = viewport.mapToGlobal(QPoint(0, 0))
        return Rect(top_left.x(), top_left.y(), viewport.width(), viewport.height())


class EditorWindow(QMainWindow):
    """Single-document editor with inline word suggestions."""

    def __init__(self, config, engine, parent=None):
        super().__init__(parent)
        self.config = config
        self.engine = engine
        self._current_file: Optional[Path] = None
        self._modified = False

        self._editor = QPlainTextEdit()
        self._editor.setPlaceholderText("Start typing to see autocomplete suggestions...")
        self._editor.setLineWrapMode(QPlainTextEdit.WidgetWidth)
        self.setCentralWidget(self._editor)

        self._popup = SuggestionPopup()

        # Timer and worker threads post here; drained on the Qt main thread.
        self._tasks = TaskQueue()
        self._task_pump = QTimer(self)
        self._task_pump.setInterval(20)
        self._task_pump.timeout.connect(self._tasks.drain)
        self._task_pump.start()

        executor = None
        if config.query_in_background:
            executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="suggest-query")
        gate = VisibilityGate(ThreadedScheduler(self._tasks), cooldown_ms=config.cooldown_ms)
        self.controller = SuggestionController(
            EditorHost(self._editor), self._popup, engine, gate,
            max_suggestions=engine.config.max_suggestions,
            tasks=self._tasks,
            executor=executor,
        )

        self._popup.itemEntered.connect(
            lambda item: self.controller.on_popup_hovered(self._popup.row(item)))
        self._popup.itemClicked.connect(
            lambda item: self.controller.on_popup_clicked(self._popup.row(item)))

        self._editor.installEventFilter(self)
        self._editor.textChanged.connect(self._on_text_changed)

        self._build_menu()
        self._update_status()
        self._update_title()
        self.resize(800, 600)

    @property
    def editor(self) -> QPlainTextEdit:
        return self._editor

    def _build_menu(self):
        menubar = self.menuBar()

        file_menu = menubar.addMenu("File")
        self._add_action(file_menu, "New", self.new_file, "Ctrl+N")
        self._add_action(file_menu, "Open...", self.open_file, "Ctrl+O")
        self._add_action(file_menu, "Save", self.save_file, "Ctrl+S")
        self._add_action(file_menu, "Save As...", self.save_file_as, "Ctrl+Shift+S")
        file_menu.addSeparator()
        self._add_action(file_menu, "Exit", self.close)

        dict_menu = menubar.addMenu("Dictionary")
        self._add_action(dict_menu, "Load Dictionary...", self.load_dictionary)
        self._add_action(dict_menu, "Save Dictionary...", self.save_dictionary)
        self._add_action(dict_menu, "Clear Dictionary", self.clear_dictionary)
        self._add_action(dict_menu, "Add Current Text to Dictionary", self.add_text_to_dictionary)

        settings_menu = menubar.addMenu("Settings")
        self._add_action(settings_menu, "Autocomplete Settings...", self.show_settings)

        help_menu = menubar.addMenu("Help")
        self._add_action(help_menu, "About", self.show_about)

    def _add_action(self, menu, text, slot, shortcut=None) -> QAction:
        action = QAction(text, self)
        if shortcut:
            action.setShortcut(shortcut)
        action.triggered.connect(slot)
        menu.addAction(action)
        return action

    # === Event plumbing ===

    def eventFilter(self, obj, event):
        if obj is self._editor:
            etype = event.type()
            if etype == QEvent.KeyPress:
                if self.controller.on_key_press(nav_key(event.key())):
                    return True
            elif etype == QEvent.KeyRelease:
                self.controller.on_key_release(classify_key(event.key()))
            elif etype == QEvent.FocusOut and not self._popup.underMouse():
                self.controller.on_focus_lost()
        return super().eventFilter(obj, event)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.controller.on_container_resized()

    def moveEvent(self, event):
        super().moveEvent(event)
        self.controller.on_container_resized()

    def closeEvent(self, event):
        if not self._confirm_discard("Do you want to save your changes before closing?"):
            event.ignore()
            return
        self._task_pump.stop()
        self.controller.shutdown()
        event.accept()

    def _on_text_changed(self):
        if not self._modified:
            self._modified = True
            self._update_status()
            self._update_title()

    # === Status / title ===

    def _update_status(self):
        status = "Ready"
        if self._current_file is not None:
            status = f"File: {self._current_file.name}"
        if self._modified:
            status += " (Modified)"
        self.statusBar().showMessage(status)

    def _update_title(self):
        name = self._current_file.name if self._current_file is not None else "Untitled"
        title = f"{name} - {APP_TITLE}"
        if self._modified:
            title += " *"
        self.setWindowTitle(title)

    def _set_document(self, text: str, path: Optional[Path]):
        self.controller.dismiss("document replaced")
        self._editor.setPlainText(text)
        self._current_file = path
        self._modified = False
        self._update_status()
        self._update_title()

    def _show_error(self, title: str, message: str):
        logger.error("%s: %s", title, message)
        QMessageBox.critical(self, title, message)

    # === File operations ===

    def _confirm_discard(self, question: str) -> bool:
        """Ask about unsaved changes. True means it is fine to drop the buffer."""
        if not self._modified:
            return True
        box = QMessageBox(self)
        box.setIcon(QMessageBox.Question)
        box.setWindowTitle("Save Changes")
        box.setText("Document has been modified")
        box.setInformativeText(question)
        box.setStandardButtons(QMessageBox.Save | QMessageBox.Discard | QMessageBox.Cancel)
        box.setDefaultButton(QMessageBox.Save)
        answer = box.exec_()
        if answer == QMessageBox.Save:
            return self.save_file()
        return answer == QMessageBox.Discard

    def new_file(self):
        if self._confirm_discard("Do you want to save your changes before creating a new file?"):
            self._set_document("", None)

    def open_file(self):
        filename, _ = QFileDialog.getOpenFileName(self, "Open File", "", TEXT_FILTER)
        if filename:
            self.open_path(filename)

    def open_path(self, filename) -> bool:
        path = Path(filename)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self._show_error("Error opening file", str(e))
            return False
        self._set_document(text, path)
        logger.info("Opened %s", path)
        return True

    def save_file(self) -> bool:
        if self._current_file is None:
            return self.save_file_as()
        return self._write_to(self._current_file)

    def save_file_as(self) -> bool:
        filename, _ = QFileDialog.getSaveFileName(self, "Save File", "", TEXT_FILTER)
        if not filename:
            return False
        return self._write_to(Path(filename))

    def _write_to(self, path: Path) -> bool:
        try:
            path.write_text(self._editor.toPlainText(), encoding="utf-8")
        except OSError as e:
            self._show_error("Error saving file", str(e))
            return False
        self._current_file = path
        self._modified = False
        self._update_status()
        self._update_title()
        logger.info("Saved %s", path)
        return True

    # === Dictionary operations ===

    def load_default_dictionary(self):
        path = Path(self.config.default_dictionary)
        if not path.is_file():
            self.statusBar().showMessage(f"Default dictionary file '{path}' not found.")
            return
        try:
            self.engine.load_dictionary(path)
        except DictionaryError as e:
            self._show_error("Error loading default dictionary", str(e))
            return
        self.statusBar().showMessage(f"Default dictionary loaded from: {path}")

    def load_dictionary(self):
        filename, _ = QFileDialog.getOpenFileName(self, "Load Dictionary", "", DICT_FILTER)
        if not filename:
            return
        try:
            self.engine.load_dictionary(filename)
        except DictionaryError as e:
            self._show_error("Error loading dictionary", str(e))
            return
        self.statusBar().showMessage(f"Dictionary loaded from: {Path(filename).name}")

    def save_dictionary(self):
        filename, _ = QFileDialog.getSaveFileName(self, "Save Dictionary", "", DICT_FILTER)
        if not filename:
            return
        try:
            self.engine.save_dictionary(filename)
        except DictionaryError as e:
            self._show_error("Error saving dictionary", str(e))
            return
        self.statusBar().showMessage(f"Dictionary saved to: {Path(filename).name}")

    def clear_dictionary(self):
        answer = QMessageBox.question(
            self, "Clear Dictionary", "Are you sure you want to clear the dictionary?",
            QMessageBox.Ok | QMessageBox.Cancel, QMessageBox.Cancel,
        )
        if answer == QMessageBox.Ok:
            self.engine.clear()
            self.statusBar().showMessage("Dictionary cleared")

    def add_text_to_dictionary(self):
        text = self._editor.toPlainText()
        if text:
            self.engine.add_text(text)
            self.statusBar().showMessage("Current text added to dictionary")

    # === Dialogs ===

    def show_settings(self):
        from suggestpad.settings_ui import SettingsDialog
        dialog = SettingsDialog(self.engine.config, self)
        if not dialog.exec_():
            return
        engine_config = dialog.engine_config()
        if not self.controller.configure(engine_config):
            self.statusBar().showMessage("Autocomplete settings rejected", 5000)
            return
        self.config.apply_engine_config(engine_config)
        logger.info("Autocomplete settings updated: %s", engine_config)
        self.statusBar().showMessage("Autocomplete settings updated", 3000)

    def show_about(self):
        QMessageBox.about(
            self, "About",
            f"<b>{APP_TITLE}</b><br><br>"
            "A plain text editor with real-time word completion.<br><br>"
            "• Suggestions while typing (Up/Down to choose, Tab to insert, Esc to close)<br>"
            "• Dictionary management<br>"
            "• Configurable autocomplete parameters<br>"
            "• File operations (New, Open, Save)",
        )

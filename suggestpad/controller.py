"""Suggestion controller: ties caret/key events to the engine and the popup.

Collaborators are duck-typed:

host
    ``get_text()``, ``get_caret_offset()``,
    ``replace_text_and_move_caret(new_text, new_caret)``,
    ``get_container_screen_bounds() -> Rect | None``
popup
    ``show_at(point, items, current_row)``, ``set_current_row(row)``, ``hide()``
engine
    ``query(prefix, limit) -> [Candidate]``, ``configure(EngineConfig)``

Every method here runs on the UI thread. Background query results arrive
through the TaskQueue, never directly from the worker.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from suggestpad.dispatch import TaskQueue
from suggestpad.errors import EngineFault
from suggestpad.gate import VisibilityGate
from suggestpad.keys import KeyKind, NavKey
from suggestpad.navigator import SelectionNavigator
from suggestpad.placement import DEFAULT_GEOMETRY, PopupGeometry, map_caret
from suggestpad.replacer import accept_suggestion
from suggestpad.words import scan_word

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Query:
    """What a query was issued for; used to fence stale results."""
    seq: int
    word: str
    start: int
    caret: int


class SuggestionController:
    """Top-level suggestion state machine for one editor."""

    def __init__(self, host, popup, engine, gate: VisibilityGate,
                 max_suggestions: int = 10,
                 tasks: Optional[TaskQueue] = None,
                 executor=None,
                 geometry: PopupGeometry = DEFAULT_GEOMETRY):
        if executor is not None and tasks is None:
            raise ValueError("background queries need a TaskQueue to report into")
        self._host = host
        self._popup = popup
        self._engine = engine
        self._gate = gate
        self._tasks = tasks
        self._executor = executor
        self._geometry = geometry
        self._navigator = SelectionNavigator()
        self._seq = 0
        self.max_suggestions = max_suggestions

    @property
    def gate(self) -> VisibilityGate:
        return self._gate

    @property
    def navigator(self) -> SelectionNavigator:
        return self._navigator

    @property
    def suggestions(self) -> List[str]:
        return self._navigator.items

    # -- host events ---------------------------------------------------

    def on_key_release(self, kind: KeyKind):
        if kind is KeyKind.EDIT:
            self.refresh()

    def on_key_press(self, key: Optional[NavKey]) -> bool:
        """Handle popup keys. Returns True if the key was consumed."""
        if key is None or not self._gate.is_shown:
            return False
        try:
            if key is NavKey.UP:
                self._popup.set_current_row(self._navigator.move_up())
            elif key is NavKey.DOWN:
                self._popup.set_current_row(self._navigator.move_down())
            elif key is NavKey.TAB:
                self.accept()
            elif key is NavKey.ESCAPE:
                self.dismiss("escape")
        except Exception:
            logger.exception("Popup key %s failed", key.value)
            self._dismiss_safely()
        return True

    def on_focus_lost(self):
        self._dismiss_safely("focus lost")

    def on_container_resized(self):
        self._dismiss_safely("resized")

    def on_popup_hovered(self, row: int):
        if self._gate.is_shown and self._navigator.select(row):
            self._popup.set_current_row(row)

    def on_popup_clicked(self, row: int):
        if not (self._gate.is_shown and self._navigator.select(row)):
            return
        try:
            self.accept()
        except Exception:
            logger.exception("Accepting suggestion failed")
            self._dismiss_safely()

    # -- pipeline ------------------------------------------------------

    def refresh(self):
        """Run the update pipeline for one qualifying edit event."""
        if self._gate.is_cooling_down:
            logger.debug("Cooling down, update skipped")
            return
        try:
            self._refresh()
        except EngineFault as e:
            logger.warning("%s", e)
            self._dismiss_safely("engine fault")
        except Exception:
            logger.exception("Suggestion update failed")
            self._dismiss_safely()

    def _refresh(self):
        text = self._host.get_text()
        caret = self._host.get_caret_offset()
        span = scan_word(text, caret)
        if span.empty:
            self.dismiss("no word")
            return

        self._seq += 1
        request = _Query(self._seq, span.slice(text), span.start, caret)

        if self._executor is None:
            self._deliver(request, self._run_query(request))
            return

        future = self._executor.submit(self._run_query, request)
        future.add_done_callback(
            lambda f: self._tasks.post(lambda: self._deliver_future(request, f)))

    def _run_query(self, request: _Query) -> list:
        """Engine call; may run on a worker thread, so touches no state."""
        try:
            return list(self._engine.query(request.word, self.max_suggestions))
        except Exception as e:
            raise EngineFault(f"Engine query failed for {request.word!r}: {e}") from e

    def _deliver_future(self, request: _Query, future):
        if request.seq != self._seq:
            logger.debug("Discarding superseded result for %r", request.word)
            return
        try:
            candidates = future.result()
        except EngineFault as e:
            logger.warning("%s", e)
            self._dismiss_safely("engine fault")
            return
        try:
            self._deliver(request, candidates)
        except Exception:
            logger.exception("Applying suggestions failed")
            self._dismiss_safely()

    def _deliver(self, request: _Query, candidates: list):
        if request.seq != self._seq:
            logger.debug("Discarding superseded result for %r", request.word)
            return
        if self._gate.is_cooling_down:
            logger.debug("Discarding result for %r during cooldown", request.word)
            return

        text = self._host.get_text()
        caret = self._host.get_caret_offset()
        span = scan_word(text, caret)
        if (span.start, caret, span.slice(text)) != (request.start, request.caret, request.word):
            logger.debug("Discarding stale result for %r (buffer changed)", request.word)
            return

        words = [c.word for c in candidates if c.word]
        if not words:
            self.dismiss("no candidates")
            return

        anchor = map_caret(text, caret, self._host.get_container_screen_bounds(),
                           self._geometry)
        if anchor is None:
            self.dismiss("no anchor")
            return

        self._navigator.reset(words)
        self._gate.show()
        self._popup.show_at(anchor, words, self._navigator.index)

    # -- acceptance / dismissal ----------------------------------------

    def accept(self, word: Optional[str] = None) -> bool:
        """Commit ``word`` (default: the active selection) into the buffer."""
        if word is None:
            word = self._navigator.current()
        if not word:
            return False
        try:
            text = self._host.get_text()
            caret = self._host.get_caret_offset()
            new_text, new_caret = accept_suggestion(text, caret, word)
            self._host.replace_text_and_move_caret(new_text, new_caret)
            logger.debug("Accepted %r", word)
            return True
        finally:
            self.dismiss("accepted")

    def dismiss(self, reason: str = ""):
        """Leave Shown (arming the cooldown) and drop any in-flight query."""
        self._seq += 1
        if self._gate.hide():
            logger.debug("Popup hidden (%s)", reason)
        self._navigator.clear()
        self._popup.hide()

    def _dismiss_safely(self, reason: str = "error"):
        try:
            self.dismiss(reason)
        except Exception:
            logger.exception("Hiding popup failed")
            self._gate.hide()
            self._navigator.clear()

    # -- configuration -------------------------------------------------

    def configure(self, engine_config) -> bool:
        """Forward new tuning to the engine; in-flight queries are not fenced."""
        try:
            self._engine.configure(engine_config)
        except Exception as e:
            logger.warning("Engine rejected configuration: %s", e)
            return False
        self.max_suggestions = engine_config.max_suggestions
        return True

    def shutdown(self):
        self._seq += 1
        self._gate.cancel_cooldown()
        self._popup.hide()
        if self._executor is not None:
            self._executor.shutdown(wait=False)

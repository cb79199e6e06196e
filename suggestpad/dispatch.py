"""Serialized UI execution context.

Worker threads (cooldown timers, background engine queries) never touch
controller state. They post callables into a ``TaskQueue``; the UI thread
drains it (the Qt shell polls ``drain`` from a QTimer), so every state
mutation happens on one thread.
"""
import logging
import queue
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class TaskQueue:
    """Thread-safe FIFO of callables, executed only by whoever calls drain()."""

    def __init__(self):
        self._queue: "queue.SimpleQueue[Callable[[], None]]" = queue.SimpleQueue()

    def post(self, task: Callable[[], None]):
        """Enqueue a task. Safe from any thread."""
        self._queue.put(task)

    def drain(self, max_tasks: Optional[int] = None) -> int:
        """Run pending tasks on the calling thread. Returns how many ran.

        A failing task is logged and does not stop the remaining ones.
        """
        ran = 0
        while max_tasks is None or ran < max_tasks:
            try:
                task = self._queue.get_nowait()
            except queue.Empty:
                break
            ran += 1
            try:
                task()
            except Exception:
                logger.exception("Posted task failed")
        return ran

    def empty(self) -> bool:
        return self._queue.empty()


class TimerHandle:
    """Handle for a scheduled callback; cancel() is idempotent."""

    def __init__(self, timer: threading.Timer):
        self._timer = timer
        self._cancelled = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self):
        self._cancelled.set()
        self._timer.cancel()


class ThreadedScheduler:
    """One-shot timers on background threads, completing into a TaskQueue."""

    def __init__(self, tasks: TaskQueue):
        self._tasks = tasks

    def call_later(self, delay_sec: float, callback: Callable[[], None]) -> TimerHandle:
        handle: Optional[TimerHandle] = None

        def _fire():
            # Runs on the timer thread: hand over to the UI context.
            if handle is not None and handle.cancelled:
                return
            self._tasks.post(callback)

        timer = threading.Timer(delay_sec, _fire)
        timer.daemon = True
        handle = TimerHandle(timer)
        timer.start()
        return handle

"""Visibility gate: Hidden / Shown / CoolingDown state machine for the popup."""
import enum
import logging

logger = logging.getLogger(__name__)

DEFAULT_COOLDOWN_MS = 300


class Visibility(enum.Enum):
    HIDDEN = "hidden"
    SHOWN = "shown"
    COOLING_DOWN = "cooling_down"


class VisibilityGate:
    """Owns the popup visibility state and the post-hide cooldown.

    Hiding always moves Shown → CoolingDown and arms a cooldown timer.
    Arming cancels any pending cooldown (cancel-and-replace); a completion
    from a replaced timer is recognised by its generation and ignored.
    The completion must be delivered on the same thread that drives the
    gate (see dispatch.ThreadedScheduler).
    """

    def __init__(self, scheduler, cooldown_ms: int = DEFAULT_COOLDOWN_MS):
        self._scheduler = scheduler
        self.cooldown_ms = cooldown_ms
        self._state = Visibility.HIDDEN
        self._generation = 0
        self._pending = None

    @property
    def state(self) -> Visibility:
        return self._state

    @property
    def is_shown(self) -> bool:
        return self._state is Visibility.SHOWN

    @property
    def is_cooling_down(self) -> bool:
        return self._state is Visibility.COOLING_DOWN

    def show(self) -> bool:
        """Enter Shown. Refused while cooling down."""
        if self._state is Visibility.COOLING_DOWN:
            return False
        self._set_state(Visibility.SHOWN)
        return True

    def hide(self) -> bool:
        """Shown → CoolingDown. No-op (returns False) in any other state."""
        if self._state is not Visibility.SHOWN:
            return False
        self._set_state(Visibility.COOLING_DOWN)
        self._arm_cooldown()
        return True

    def cancel_cooldown(self):
        """Drop any pending cooldown timer (editor shutdown)."""
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self._generation += 1
        if self._state is Visibility.COOLING_DOWN:
            self._set_state(Visibility.HIDDEN)

    def _arm_cooldown(self):
        if self._pending is not None:
            self._pending.cancel()
        self._generation += 1
        generation = self._generation
        self._pending = self._scheduler.call_later(
            self.cooldown_ms / 1000.0,
            lambda: self._cooldown_elapsed(generation),
        )

    def _cooldown_elapsed(self, generation: int):
        if generation != self._generation:
            logger.debug("Ignoring replaced cooldown timer #%d", generation)
            return
        self._pending = None
        if self._state is Visibility.COOLING_DOWN:
            self._set_state(Visibility.HIDDEN)

    def _set_state(self, new_state: Visibility):
        old_state = self._state
        if old_state is new_state:
            return
        self._state = new_state
        logger.debug("Visibility: %s → %s", old_state.value, new_state.value)

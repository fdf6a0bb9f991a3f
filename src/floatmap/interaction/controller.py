# src/floatmap/interaction/controller.py
import logging
import threading
from dataclasses import dataclass, replace
from typing import Optional

from ..config import MapSettings
from ..telemetry.models import Float
from ..telemetry.store import TelemetryStore

logger = logging.getLogger(__name__)


@dataclass
class InteractionState:
    """
    Transient UI state of the map.
    Hover and selection are independent; neither affects the other.
    """
    hovered_id: Optional[str] = None
    selected_float: Optional[Float] = None
    animation_phase: int = 0
    # Never wraps; time-based animations derive from it
    elapsed_ticks: int = 0

    @property
    def selected_id(self) -> Optional[str]:
        return self.selected_float.id if self.selected_float is not None else None

    def is_hovered(self, float_id: str) -> bool:
        return self.hovered_id == float_id

    def is_selected(self, float_id: str) -> bool:
        return self.selected_id == float_id


class InteractionController:
    """Owns the interaction state and applies pointer events and ticks.

    Pointer events and timer ticks may arrive from different threads; each
    one is applied atomically under a single lock.
    """

    def __init__(self, store: TelemetryStore, settings: Optional[MapSettings] = None):
        self.store = store
        self.settings = settings or MapSettings()
        self._state = InteractionState()
        self._lock = threading.RLock()

    @property
    def state(self) -> InteractionState:
        """Copy of the current state, safe to read while ticks continue"""
        with self._lock:
            return replace(self._state)

    @property
    def hovered_id(self) -> Optional[str]:
        return self._state.hovered_id

    @property
    def selected_float(self) -> Optional[Float]:
        return self._state.selected_float

    @property
    def animation_phase(self) -> int:
        return self._state.animation_phase

    @property
    def elapsed_ticks(self) -> int:
        return self._state.elapsed_ticks

    # Hover axis

    def pointer_enter(self, float_id: str):
        self.store.get(float_id)
        with self._lock:
            self._state.hovered_id = float_id
        logger.debug(f"Hover enter {float_id}")

    def pointer_leave(self, float_id: Optional[str] = None):
        """Clear the hover; a leave for a float that is not hovered is ignored"""
        with self._lock:
            if float_id is None or self._state.hovered_id == float_id:
                self._state.hovered_id = None
        logger.debug(f"Hover leave {float_id}")

    # Selection axis

    def click(self, float_: Float):
        """Select a float, or clear the selection if it is already selected"""
        with self._lock:
            current = self._state.selected_float
            if current is not None and current.id == float_.id:
                self._state.selected_float = None
                logger.debug(f"Deselected {float_.id}")
            else:
                self._state.selected_float = float_
                logger.debug(f"Selected {float_.id}")

    def click_id(self, float_id: str):
        self.click(self.store.get(float_id))

    def dismiss(self):
        with self._lock:
            self._state.selected_float = None

    # Animation axis

    def tick(self):
        self.advance(1)

    def advance(self, ticks: int):
        if ticks < 0:
            raise ValueError(f"Cannot advance by negative ticks: {ticks}")
        with self._lock:
            modulus = self.settings.phase_modulus
            self._state.animation_phase = (self._state.animation_phase + ticks) % modulus
            self._state.elapsed_ticks += ticks

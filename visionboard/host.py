"""Fixed-cadence host loop driving the layout stepper."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional, Tuple

from .board import DragController
from .model import Card, CardId, PhysicsConfig, QuadraticCurve
from .paths import connection_path, iter_links
from .physics import step

logger = logging.getLogger(__name__)

BOTTOM_PANEL_HEIGHT = 120.0
FRAME_INTERVAL_MS = 16.0

ChangeCallback = Callable[[List[Card]], None]


def simulation_viewport(window_width: float, window_height: float) -> Tuple[float, float]:
    """Return the simulated area, excluding the fixed bottom toolbar."""

    return (float(window_width), float(window_height) - BOTTOM_PANEL_HEIGHT)


class FrameThrottle:
    """Accept at most one tick per ``interval_ms``; faster ticks are dropped."""

    def __init__(self, interval_ms: float = FRAME_INTERVAL_MS, start_ms: float = 0.0) -> None:
        self.interval_ms = interval_ms
        self._last_ms = start_ms

    def ready(self, now_ms: float) -> bool:
        if now_ms - self._last_ms > self.interval_ms:
            self._last_ms = now_ms
            return True
        return False


class BoardSession:
    """Holds the authoritative card collection and replaces it after each step.

    ``on_change`` is called with the new collection after every change and is
    where a host plugs in persistence.
    """

    def __init__(
        self,
        cards: Iterable[Card],
        width: float,
        height: float,
        config: Optional[PhysicsConfig] = None,
        *,
        on_change: Optional[ChangeCallback] = None,
        start_ms: float = 0.0,
    ) -> None:
        self.cards: List[Card] = list(cards)
        self.width = float(width)
        self.height = float(height)
        self.config = config
        self.on_change = on_change
        self.drag = DragController()
        self.throttle = FrameThrottle(start_ms=start_ms)
        self.steps = 0

    @classmethod
    def from_window(
        cls, cards: Iterable[Card], window_width: float, window_height: float, **kwargs
    ) -> "BoardSession":
        width, height = simulation_viewport(window_width, window_height)
        return cls(cards, width, height, **kwargs)

    def _commit(self, cards: List[Card]) -> None:
        self.cards = cards
        if self.on_change is not None:
            self.on_change(cards)

    def tick(self, now_ms: float) -> bool:
        """Step once if the frame interval has elapsed; return whether it did."""

        if not self.throttle.ready(now_ms):
            return False
        self._commit(
            step(
                self.cards,
                self.width,
                self.height,
                self.config,
                self.drag.dragged_id,
                time_ms=now_ms,
            )
        )
        self.steps += 1
        return True

    def resize(self, width: float, height: float) -> None:
        logger.info("Viewport resized to %.0fx%.0f", width, height)
        self.width = float(width)
        self.height = float(height)

    def replace_cards(self, cards: Iterable[Card]) -> None:
        self._commit(list(cards))

    def begin_drag(self, card_id: CardId) -> None:
        self.drag.begin(card_id)

    def drag_to(self, x: float, y: float) -> None:
        self._commit(self.drag.move(self.cards, x, y, self.width, self.height))

    def end_drag(self) -> None:
        self._commit(self.drag.end(self.cards))

    def links(self, now_ms: float) -> List[Tuple[Card, Card, QuadraticCurve]]:
        return [(a, b, connection_path(a, b, now_ms)) for a, b in iter_links(self.cards)]


__all__ = [
    "BOTTOM_PANEL_HEIGHT",
    "BoardSession",
    "FrameThrottle",
    "simulation_viewport",
]

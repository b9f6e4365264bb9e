"""Curved connection geometry for drawing links between cards."""

from __future__ import annotations

import math
from typing import Dict, Iterable, Iterator, Set, Tuple

from .model import Card, CardId, QuadraticCurve

BEND_RATIO = 0.05
WAVE_FREQUENCY = 0.0006  # radians per millisecond
WAVE_AMPLITUDE = 8.0


def connection_path(frm: Card, to: Card, time_ms: float) -> QuadraticCurve:
    """Return the breathing quadratic curve joining the centers of two cards.

    The control point sits on the perpendicular bisector of the segment, offset
    by 5% of its length plus a slow sine wave.  Coincident cards get a straight
    (zero offset) curve.
    """

    dx = to.x - frm.x
    dy = to.y - frm.y
    distance = math.hypot(dx, dy)
    mid_x = (frm.x + to.x) * 0.5
    mid_y = (frm.y + to.y) * 0.5

    if distance <= 1e-12:
        return QuadraticCurve((frm.x, frm.y), (mid_x, mid_y), (to.x, to.y))

    normal_x = -dy / distance
    normal_y = dx / distance
    offset = distance * BEND_RATIO + math.sin(time_ms * WAVE_FREQUENCY) * WAVE_AMPLITUDE
    control = (mid_x + normal_x * offset, mid_y + normal_y * offset)
    return QuadraticCurve((frm.x, frm.y), control, (to.x, to.y))


def _link_key(a: CardId, b: CardId) -> Tuple[CardId, CardId]:
    return (a, b) if a <= b else (b, a)


def iter_links(cards: Iterable[Card]) -> Iterator[Tuple[Card, Card]]:
    """Yield every resolvable relationship once, in collection order."""

    snapshot = list(cards)
    by_id: Dict[CardId, Card] = {}
    for card in snapshot:
        by_id.setdefault(card.id, card)

    seen: Set[Tuple[CardId, CardId]] = set()
    for card in snapshot:
        for other_id in card.connections:
            other = by_id.get(other_id)
            if other is None or other.id == card.id:
                continue
            key = _link_key(card.id, other.id)
            if key in seen:
                continue
            seen.add(key)
            yield card, other


__all__ = ["connection_path", "iter_links"]

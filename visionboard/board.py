"""Board editing helpers used by hosts around the layout stepper.

The stepper never creates, links or deletes cards.  These helpers do, and they
keep relationship sets symmetric on both endpoints.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Iterable, List, Optional

import numpy as np

from .logging_utils import apply_debug_logging
from .model import CARD_KINDS, BoardFormatError, Card, CardId, DragError
from .physics import layout_bounds

logger = logging.getLogger(__name__)

SPAWN_SPREAD_X = 200.0
SPAWN_SPREAD_Y = 150.0
SPAWN_VELOCITY = 1.0
SPAWN_ROTATION = 8.0
RELEASE_DAMPING = 0.5


def _index_of(cards: List[Card], card_id: CardId) -> int:
    for idx, card in enumerate(cards):
        if card.id == card_id:
            return idx
    raise BoardFormatError(f"unknown card id {card_id!r}")


def create_card(
    kind: str,
    label: str,
    width: float,
    height: float,
    *,
    description: Optional[str] = None,
    rng: Optional[np.random.Generator] = None,
) -> Card:
    """Create a new card near the viewport center with a small random drift."""

    if kind not in CARD_KINDS:
        raise BoardFormatError(f"card kind must be one of {', '.join(CARD_KINDS)}, got {kind!r}")
    label = label.strip()
    if not label:
        raise BoardFormatError("card label must not be empty")

    rng = rng if rng is not None else np.random.default_rng()
    jitter = rng.random(5) - 0.5
    card = Card(
        id=str(uuid.uuid4()),
        kind=kind,
        label=label,
        description=description or None,
        x=float(width / 2.0 + jitter[0] * SPAWN_SPREAD_X),
        y=float(height / 2.0 + jitter[1] * SPAWN_SPREAD_Y),
        vx=float(jitter[2] * SPAWN_VELOCITY),
        vy=float(jitter[3] * SPAWN_VELOCITY),
        rotation=float(jitter[4] * SPAWN_ROTATION),
        strength=float(0.6 + rng.random() * 0.4),
    )
    logger.info("Created %s card %s (%r)", kind, card.id, label)
    return card


def connect(cards: Iterable[Card], a_id: CardId, b_id: CardId) -> List[Card]:
    """Link two cards on both endpoints; linking an existing pair is a no-op."""

    updated = list(cards)
    if a_id == b_id:
        raise BoardFormatError(f"card {a_id!r} cannot be linked to itself")
    a_idx = _index_of(updated, a_id)
    b_idx = _index_of(updated, b_id)

    for idx, other in ((a_idx, b_id), (b_idx, a_id)):
        card = updated[idx]
        if other not in card.connections:
            updated[idx] = replace(card, connections=[*card.connections, other])
    return updated


def disconnect(cards: Iterable[Card], a_id: CardId, b_id: CardId) -> List[Card]:
    updated = list(cards)
    if a_id == b_id:
        raise BoardFormatError(f"card {a_id!r} cannot be linked to itself")
    a_idx = _index_of(updated, a_id)
    b_idx = _index_of(updated, b_id)

    for idx, other in ((a_idx, b_id), (b_idx, a_id)):
        card = updated[idx]
        if other in card.connections:
            updated[idx] = replace(card, connections=[c for c in card.connections if c != other])
    return updated


def remove_card(cards: Iterable[Card], card_id: CardId) -> List[Card]:
    """Drop ``card_id`` and purge it from every remaining relationship set."""

    snapshot = list(cards)
    _index_of(snapshot, card_id)
    remaining: List[Card] = []
    for card in snapshot:
        if card.id == card_id:
            continue
        if card_id in card.connections:
            card = replace(card, connections=[c for c in card.connections if c != card_id])
        remaining.append(card)
    logger.info("Removed card %s, %d card(s) remain", card_id, len(remaining))
    return remaining


def update_card(cards: Iterable[Card], card_id: CardId, **changes: object) -> List[Card]:
    if "id" in changes:
        raise BoardFormatError("card ids are immutable")
    if "connections" in changes:
        raise BoardFormatError("relationships are edited with connect() and disconnect()")
    if "kind" in changes and changes["kind"] not in CARD_KINDS:
        raise BoardFormatError(f"unknown card kind {changes['kind']!r}")
    updated = list(cards)
    idx = _index_of(updated, card_id)
    try:
        updated[idx] = replace(updated[idx], **changes)  # type: ignore[arg-type]
    except TypeError as exc:
        raise BoardFormatError(str(exc)) from exc
    return updated


def add_goal(cards: Iterable[Card], card_id: CardId, goal: str) -> List[Card]:
    goal = goal.strip()
    if not goal:
        raise BoardFormatError("goal text must not be empty")
    updated = list(cards)
    idx = _index_of(updated, card_id)
    card = updated[idx]
    updated[idx] = replace(card, goals=[*card.goals, goal])
    return updated


class DragController:
    """Pointer drag state machine: idle -> dragging -> idle.

    While dragging, positions come straight from the pointer (clamped to the
    layout bounds) and the stepper is told to leave the card alone.  On
    release the residual velocity is halved so the card keeps a little drift.
    """

    def __init__(self) -> None:
        self._dragged_id: Optional[CardId] = None

    @property
    def dragged_id(self) -> Optional[CardId]:
        return self._dragged_id

    @property
    def is_dragging(self) -> bool:
        return self._dragged_id is not None

    def begin(self, card_id: CardId) -> None:
        if self._dragged_id is not None and self._dragged_id != card_id:
            raise DragError(f"card {self._dragged_id!r} is already being dragged")
        self._dragged_id = card_id

    def move(
        self, cards: Iterable[Card], x: float, y: float, width: float, height: float
    ) -> List[Card]:
        if self._dragged_id is None:
            raise DragError("move() called while no card is being dragged")
        bounds = layout_bounds(width, height)
        target_x, target_y = bounds.clamp(x, y)
        return [
            replace(card, x=target_x, y=target_y, vx=0.0, vy=0.0)
            if card.id == self._dragged_id
            else card
            for card in cards
        ]

    def end(self, cards: Iterable[Card]) -> List[Card]:
        if self._dragged_id is None:
            raise DragError("end() called while no card is being dragged")
        released = self._dragged_id
        self._dragged_id = None
        return [
            replace(card, vx=card.vx * RELEASE_DAMPING, vy=card.vy * RELEASE_DAMPING)
            if card.id == released
            else card
            for card in cards
        ]


apply_debug_logging(globals(), logger=logger)

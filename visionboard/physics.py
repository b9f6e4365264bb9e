"""Force-directed layout stepper for vision cards.

Every call advances the board by exactly one fixed-size step.  Forces for all
cards are evaluated against a single snapshot of the incoming positions, so the
order of the collection never influences the physics (only the cosmetic sway
when it is seeded by index).
"""

from __future__ import annotations

import hashlib
import logging
import math
import time
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np
from scipy.spatial.distance import pdist, squareform

from .config import get_physics_config
from .logging_utils import debug_log_call
from .model import Card, CardId, LayoutBounds, PhysicsConfig, Point2D

logger = logging.getLogger(__name__)

NOMINAL_SEPARATION = 320.0
REPULSION_CUTOFF = NOMINAL_SEPARATION * 2.5
IDEAL_LINK_DISTANCE = 380.0
MIN_DISTANCE = 1.0

FOCAL_HEIGHT_RATIO = 0.45
RUBBER_BAND_RADIUS = 250.0
RUBBER_BAND_GAIN = 0.6

PADDING_X_RATIO = 0.18
PADDING_TOP = 120.0
PADDING_BOTTOM = 180.0
BOUNCE_RETENTION = 0.2

SWAY_FREQUENCY = 0.00025  # radians per millisecond
SWAY_INDEX_PHASE = 1.8
SWAY_AMPLITUDE = 4.0
SWAY_EASING = 0.015


@dataclass
class SettleResult:
    cards: List[Card]
    steps: int
    settled: bool
    energy: float


def focal_point(width: float, height: float) -> Point2D:
    """Return the centering target, placed above the geometric center."""

    return (width / 2.0, height * FOCAL_HEIGHT_RATIO)


def layout_bounds(width: float, height: float) -> LayoutBounds:
    padding_x = width * PADDING_X_RATIO
    return LayoutBounds(
        min_x=padding_x,
        max_x=width - padding_x,
        min_y=PADDING_TOP,
        max_y=height - PADDING_BOTTOM,
    )


def _identity_phase(card_id: CardId) -> float:
    digest = hashlib.md5(card_id.encode("utf-8")).hexdigest()
    return int(digest[:8], 16) / 0xFFFFFFFF * 2.0 * math.pi


def _repulsion_forces(positions: np.ndarray, strength: float) -> np.ndarray:
    count = positions.shape[0]
    if count < 2 or strength == 0.0:
        return np.zeros_like(positions)

    distances = np.maximum(squareform(pdist(positions)), MIN_DISTANCE)
    deltas = positions[:, None, :] - positions[None, :, :]
    within = distances < REPULSION_CUTOFF
    np.fill_diagonal(within, False)

    magnitude = np.where(within, strength / (distances * distances), 0.0)
    directions = deltas / distances[..., None]
    return (directions * magnitude[..., None]).sum(axis=1)


def _attraction_forces(
    cards: Sequence[Card], positions: np.ndarray, stiffness: float
) -> np.ndarray:
    forces = np.zeros_like(positions)
    index: Dict[CardId, int] = {}
    for idx, card in enumerate(cards):
        index.setdefault(card.id, idx)

    for idx, card in enumerate(cards):
        for other_id in card.connections:
            other = index.get(other_id)
            if other is None:
                continue
            delta = positions[other] - positions[idx]
            distance = max(math.hypot(delta[0], delta[1]), MIN_DISTANCE)
            magnitude = (distance - IDEAL_LINK_DISTANCE) * stiffness
            forces[idx] += delta / distance * magnitude
    return forces


def _gravity_forces(
    positions: np.ndarray, width: float, height: float, strength: float
) -> np.ndarray:
    offsets = np.asarray(focal_point(width, height), dtype=float) - positions
    distances = np.hypot(offsets[:, 0], offsets[:, 1])
    multiplier = 1.0 + (distances / RUBBER_BAND_RADIUS) * RUBBER_BAND_GAIN
    return offsets * (strength * multiplier)[:, None]


def _clamp_speed(velocities: np.ndarray, max_velocity: float) -> np.ndarray:
    speeds = np.hypot(velocities[:, 0], velocities[:, 1])
    scale = np.ones_like(speeds)
    too_fast = speeds > max_velocity
    scale[too_fast] = max_velocity / speeds[too_fast]
    return velocities * scale[:, None]


def _apply_bounds(
    positions: np.ndarray, velocities: np.ndarray, bounds: LayoutBounds
) -> Tuple[np.ndarray, np.ndarray]:
    positions = positions.copy()
    velocities = velocities.copy()
    axes = ((bounds.min_x, bounds.max_x), (bounds.min_y, bounds.max_y))
    for axis, (low, high) in enumerate(axes):
        below = positions[:, axis] < low
        positions[below, axis] = low
        velocities[below, axis] = np.abs(velocities[below, axis]) * BOUNCE_RETENTION

        # checked after the low clamp so an inverted range settles on ``high``
        above = positions[:, axis] > high
        positions[above, axis] = high
        velocities[above, axis] = -np.abs(velocities[above, axis]) * BOUNCE_RETENTION
    return positions, velocities


def _sway_rotations(cards: Sequence[Card], time_ms: float, mode: str) -> np.ndarray:
    if mode == "identity":
        phases = np.array([_identity_phase(card.id) for card in cards], dtype=float)
    else:
        phases = np.arange(len(cards), dtype=float) * SWAY_INDEX_PHASE
    current = np.array([card.rotation for card in cards], dtype=float)
    target = np.sin(time_ms * SWAY_FREQUENCY + phases) * SWAY_AMPLITUDE
    return current + (target - current) * SWAY_EASING


def step(
    cards: Iterable[Card],
    width: float,
    height: float,
    config: Optional[PhysicsConfig] = None,
    dragged_id: Optional[CardId] = None,
    *,
    time_ms: Optional[float] = None,
) -> List[Card]:
    """Advance ``cards`` by one simulation step and return the new collection.

    ``time_ms`` only drives the cosmetic rotation sway; when omitted the
    wall clock is used.  The card whose id equals ``dragged_id`` keeps its
    position and rotation and has its velocity zeroed.
    """

    snapshot = list(cards)
    if not snapshot:
        return []

    cfg = config if config is not None else get_physics_config()
    if time_ms is None:
        time_ms = time.time() * 1000.0

    positions = np.array([[card.x, card.y] for card in snapshot], dtype=float)
    velocities = np.array([[card.vx, card.vy] for card in snapshot], dtype=float)

    forces = (
        _repulsion_forces(positions, cfg.repulsion)
        + _attraction_forces(snapshot, positions, cfg.attraction)
        + _gravity_forces(positions, width, height, cfg.center_gravity)
    )

    new_velocities = _clamp_speed((velocities + forces) * cfg.friction, cfg.max_velocity)
    new_positions, new_velocities = _apply_bounds(
        positions + new_velocities, new_velocities, layout_bounds(width, height)
    )
    rotations = _sway_rotations(snapshot, time_ms, cfg.sway_phase)

    stepped: List[Card] = []
    for idx, card in enumerate(snapshot):
        if dragged_id is not None and card.id == dragged_id:
            stepped.append(replace(card, vx=0.0, vy=0.0))
            continue
        stepped.append(
            replace(
                card,
                x=float(new_positions[idx, 0]),
                y=float(new_positions[idx, 1]),
                vx=float(new_velocities[idx, 0]),
                vy=float(new_velocities[idx, 1]),
                rotation=float(rotations[idx]),
            )
        )

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Stepped %d card(s) at t=%.1fms dragged=%s energy=%.6f",
            len(stepped),
            time_ms,
            dragged_id,
            kinetic_energy(stepped),
        )
    return stepped


def kinetic_energy(cards: Iterable[Card]) -> float:
    return float(sum(0.5 * (card.vx * card.vx + card.vy * card.vy) for card in cards))


def is_settled(cards: Iterable[Card], tol: float = 1e-2) -> bool:
    """Return ``True`` when no card moves faster than ``tol`` per step."""

    return all(card.speed <= tol for card in cards)


@debug_log_call(logger, log_result=False)
def settle(
    cards: Iterable[Card],
    width: float,
    height: float,
    config: Optional[PhysicsConfig] = None,
    *,
    max_steps: int = 2000,
    tol: float = 1e-2,
    patience: int = 10,
    time_ms: float = 0.0,
    frame_ms: float = 16.0,
) -> SettleResult:
    """Step ``cards`` until every speed stays below ``tol`` or ``max_steps`` is hit.

    The board counts as settled once it has been still for ``patience``
    consecutive steps; a single slow step is usually an oscillation turning
    point rather than rest.
    """

    current = list(cards)
    steps = 0
    still = 0
    while steps < max_steps and still < patience:
        current = step(current, width, height, config, time_ms=time_ms + steps * frame_ms)
        steps += 1
        still = still + 1 if is_settled(current, tol) else 0

    settled = still >= patience
    energy = kinetic_energy(current)
    logger.info(
        "Settle finished after %d step(s): settled=%s energy=%.6f", steps, settled, energy
    )
    return SettleResult(cards=current, steps=steps, settled=settled, energy=energy)


__all__ = [
    "IDEAL_LINK_DISTANCE",
    "REPULSION_CUTOFF",
    "SettleResult",
    "focal_point",
    "is_settled",
    "kinetic_energy",
    "layout_bounds",
    "settle",
    "step",
]

"""Core data structures for the vision board layout engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

CardId = str
Point2D = Tuple[float, float]

CARD_KINDS: Tuple[str, ...] = ("state", "identity")
SWAY_PHASES: Tuple[str, ...] = ("index", "identity")


class BoardError(Exception):
    """Base class for board level errors."""


class ConfigError(BoardError, ValueError):
    """Raised when a physics configuration is out of range."""


class BoardFormatError(BoardError, ValueError):
    """Raised when card data or an edit request is malformed."""


class DragError(BoardError, RuntimeError):
    """Raised when the drag state machine receives an invalid transition."""


@dataclass
class Card:
    """A positioned vision card on the board."""

    id: CardId
    kind: str
    label: str
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    rotation: float = 0.0
    scale: float = 1.0
    connections: List[CardId] = field(default_factory=list)
    strength: float = 1.0
    description: Optional[str] = None
    goals: List[str] = field(default_factory=list)
    color: Optional[str] = None

    @property
    def position(self) -> Point2D:
        return (self.x, self.y)

    @property
    def speed(self) -> float:
        return (self.vx * self.vx + self.vy * self.vy) ** 0.5

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "type": self.kind,
            "label": self.label,
            "x": self.x,
            "y": self.y,
            "vx": self.vx,
            "vy": self.vy,
            "rotation": self.rotation,
            "scale": self.scale,
            "connections": list(self.connections),
            "strength": self.strength,
            "goals": list(self.goals),
        }
        if self.description is not None:
            data["description"] = self.description
        if self.color is not None:
            data["bgColor"] = self.color
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Card":
        """Build a card from plain data using the persisted key names."""

        try:
            card_id = data["id"]
            kind = data["type"]
        except KeyError as exc:
            raise BoardFormatError(f"card entry is missing {exc.args[0]!r}") from exc
        if not isinstance(card_id, str) or not card_id:
            raise BoardFormatError(f"card id must be a non-empty string, got {card_id!r}")
        try:
            return cls(
                id=card_id,
                kind=str(kind),
                label=str(data.get("label", "")),
                x=float(data.get("x", 0.0)),
                y=float(data.get("y", 0.0)),
                vx=float(data.get("vx", 0.0)),
                vy=float(data.get("vy", 0.0)),
                rotation=float(data.get("rotation", 0.0)),
                scale=float(data.get("scale", 1.0)),
                connections=[str(item) for item in data.get("connections", []) or []],
                strength=float(data.get("strength", 1.0)),
                description=data.get("description"),
                goals=[str(item) for item in data.get("goals", []) or []],
                color=data.get("bgColor"),
            )
        except (TypeError, ValueError) as exc:
            raise BoardFormatError(f"card {card_id!r} has malformed fields: {exc}") from exc


@dataclass
class PhysicsConfig:
    """Tunable constants for the layout stepper."""

    friction: float = 0.96
    repulsion: float = 22000.0
    attraction: float = 0.002
    center_gravity: float = 0.0015
    max_velocity: float = 1.0
    sway_phase: str = "index"

    def __post_init__(self) -> None:
        if not 0.0 < self.friction < 1.0:
            raise ConfigError(f"friction must lie in (0, 1), got {self.friction}")
        for name in ("repulsion", "attraction", "center_gravity"):
            if getattr(self, name) < 0.0:
                raise ConfigError(f"{name} must be non-negative, got {getattr(self, name)}")
        if self.max_velocity <= 0.0:
            raise ConfigError(f"max_velocity must be positive, got {self.max_velocity}")
        if self.sway_phase not in SWAY_PHASES:
            raise ConfigError(
                f"sway_phase must be one of {', '.join(SWAY_PHASES)}, got {self.sway_phase!r}"
            )


@dataclass(frozen=True)
class LayoutBounds:
    """Padded rectangle the simulated cards are kept inside."""

    min_x: float
    max_x: float
    min_y: float
    max_y: float

    def contains(self, x: float, y: float, tol: float = 1e-9) -> bool:
        return (
            self.min_x - tol <= x <= self.max_x + tol
            and self.min_y - tol <= y <= self.max_y + tol
        )

    def clamp(self, x: float, y: float) -> Point2D:
        return (
            max(self.min_x, min(x, self.max_x)),
            max(self.min_y, min(y, self.max_y)),
        )


@dataclass(frozen=True)
class QuadraticCurve:
    """Quadratic Bézier from ``start`` to ``end`` bending through ``control``."""

    start: Point2D
    control: Point2D
    end: Point2D

    def points(self) -> Tuple[Point2D, Point2D, Point2D]:
        return (self.start, self.control, self.end)

    def to_svg_path(self) -> str:
        (x0, y0), (cx, cy), (x1, y1) = self.points()
        return f"M {x0:g} {y0:g} Q {cx:g} {cy:g} {x1:g} {y1:g}"


__all__ = [
    "BoardError",
    "BoardFormatError",
    "CARD_KINDS",
    "Card",
    "CardId",
    "ConfigError",
    "DragError",
    "LayoutBounds",
    "PhysicsConfig",
    "Point2D",
    "QuadraticCurve",
    "SWAY_PHASES",
]

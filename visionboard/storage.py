"""JSON persistence for board snapshots."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, List, Set, Union

from .logging_utils import apply_debug_logging
from .model import CARD_KINDS, BoardFormatError, Card

logger = logging.getLogger(__name__)

_EXAMPLE_CARDS = [
    ("1", "state", "Calm Authority", "Speaking with conviction", 300, 200, -3, 0.9),
    ("2", "identity", "Builder", "Creating systems that last", 550, 180, 4, 0.85),
    ("3", "state", "Creative Flow", "Deep immersion in work", 800, 220, -2, 0.75),
    ("4", "identity", "Visionary", "Seeing what others miss", 400, 380, 2, 0.8),
    ("5", "state", "Inner Peace", "Grounded and centered", 650, 400, -4, 0.7),
    ("6", "identity", "Leader", "Inspiring others forward", 250, 350, 3, 0.85),
    ("7", "state", "Abundance", "Wealth in all forms", 750, 350, -1, 0.9),
    ("8", "identity", "Creator", "Making beautiful things", 500, 300, 2, 0.8),
]


def example_board() -> List[Card]:
    """Return a fresh copy of the starter board shown on first launch."""

    return [
        Card(
            id=card_id,
            kind=kind,
            label=label,
            description=description,
            x=float(x),
            y=float(y),
            rotation=float(rotation),
            strength=strength,
        )
        for card_id, kind, label, description, x, y, rotation, strength in _EXAMPLE_CARDS
    ]


def dump_board(cards: Iterable[Card]) -> str:
    return json.dumps([card.to_dict() for card in cards], indent=2, ensure_ascii=False)


def parse_board(text: str) -> List[Card]:
    """Restore cards from JSON text.

    Undecodable text, or a payload that is not a list, falls back to the
    example board.  Entries whose kind is not a recognised card kind, entries
    that cannot be turned into a card, and repeated ids are dropped; the
    first card with a given id is kept.
    """

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning("Board data is not valid JSON (%s); using example board", exc)
        return example_board()

    if not isinstance(payload, list):
        logger.warning("Board data is a %s, not a list of cards; using example board", type(payload).__name__)
        return example_board()

    cards: List[Card] = []
    seen: Set[str] = set()
    for entry in payload:
        if not isinstance(entry, dict) or entry.get("type") not in CARD_KINDS:
            logger.warning("Dropping unrecognised board entry: %r", entry)
            continue
        try:
            card = Card.from_dict(entry)
        except BoardFormatError as exc:
            logger.warning("Dropping malformed board entry %r: %s", entry, exc)
            continue
        if card.id in seen:
            logger.warning("Dropping board entry with duplicate id %r", card.id)
            continue
        seen.add(card.id)
        cards.append(card)
    logger.info("Parsed %d card(s) from board data", len(cards))
    return cards


def save_board(cards: Iterable[Card], path: Union[str, Path]) -> Path:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dump_board(cards), encoding="utf-8")
    logger.info("Saved board to %s", output_path)
    return output_path


def load_board(path: Union[str, Path]) -> List[Card]:
    input_path = Path(path)
    if not input_path.exists():
        logger.info("No board stored at %s; using example board", input_path)
        return example_board()
    logger.info("Loading board from %s", input_path)
    return parse_board(input_path.read_text(encoding="utf-8"))


apply_debug_logging(globals(), logger=logger, skip={"example_board"})

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from visionboard import (
    Card,
    PhysicsConfig,
    connection_path,
    example_board,
    generate_tikz_document,
    iter_links,
    kinetic_energy,
    load_board,
    save_board,
    settle,
    step,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _run_steps(
    cards: List[Card], width: float, height: float, config: PhysicsConfig, steps: int, time_ms: float
) -> List[Card]:
    for idx in range(steps):
        cards = step(cards, width, height, config, time_ms=time_ms + idx * 16.0)
    return cards


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Lay out a vision board")
    parser.add_argument(
        "path",
        nargs="?",
        help="Path to a saved board JSON file (default: the example board)",
    )
    parser.add_argument("--width", type=float, default=1280.0, help="Simulated width in px (default: 1280)")
    parser.add_argument("--height", type=float, default=680.0, help="Simulated height in px (default: 680)")
    parser.add_argument("--steps", type=int, default=600, help="Number of steps to run (default: 600)")
    parser.add_argument(
        "--settle",
        action="store_true",
        help="Step until the board comes to rest instead of a fixed step count",
    )
    parser.add_argument(
        "--time-ms",
        type=float,
        default=0.0,
        help="Clock value of the first step, drives the cosmetic sway (default: 0)",
    )
    parser.add_argument(
        "--sway-phase",
        choices=["index", "identity"],
        default="index",
        help="Seed the rotation sway by collection index or by card id",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument("--save", help="Write the resulting board JSON to the given path")
    parser.add_argument(
        "--tikz-output-path",
        help="Write a standalone TikZ document of the resulting board to the given path",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    if args.path:
        cards = load_board(args.path)
    else:
        logger.info("No board given, using the example board")
        cards = example_board()

    config = PhysicsConfig(sway_phase=args.sway_phase)
    end_time = args.time_ms
    if args.settle:
        result = settle(
            cards, args.width, args.height, config, max_steps=max(args.steps, 1), time_ms=args.time_ms
        )
        cards = result.cards
        end_time = args.time_ms + result.steps * 16.0
        print(f"Settled: {result.settled} after {result.steps} step(s)")
    else:
        cards = _run_steps(cards, args.width, args.height, config, args.steps, args.time_ms)
        end_time = args.time_ms + args.steps * 16.0
        print(f"Ran {args.steps} step(s)")

    print(f"Kinetic energy: {kinetic_energy(cards):.6f}")
    print("Cards:")
    for card in cards:
        print(
            f"  {card.id} [{card.kind}] {card.label}: "
            f"({card.x:.2f}, {card.y:.2f}) v=({card.vx:.4f}, {card.vy:.4f}) rot={card.rotation:.2f}"
        )

    links = list(iter_links(cards))
    print("Links:")
    if links:
        for frm, to in links:
            print(f"  {frm.id} -> {to.id}: {connection_path(frm, to, end_time).to_svg_path()}")
    else:
        print("  (none)")

    if args.save:
        save_board(cards, args.save)
        print(f"Board written to {args.save}")

    if args.tikz_output_path:
        output_path = Path(args.tikz_output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Writing TikZ document to %s", output_path)
        output_path.write_text(generate_tikz_document(cards, time_ms=end_time), encoding="utf-8")
        print(f"TikZ document written to {output_path}")


if __name__ == "__main__":
    main(sys.argv[1:])

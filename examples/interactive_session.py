"""Example: drive a board session with a simulated 60 Hz clock and one drag gesture."""

import numpy as np

from visionboard import BoardSession, connect, create_card, example_board

rng = np.random.default_rng(11)
cards = example_board()
cards.append(create_card("state", "Deep Focus", 1280, 680, rng=rng))
cards = connect(cards, "8", cards[-1].id)

session = BoardSession.from_window(cards, 1280, 800)

now = 0.0
for frame in range(600):
    now += 8.0  # render callback fires at ~120 Hz, physics runs at most every 16 ms
    if frame == 200:
        session.begin_drag("3")
    if 200 <= frame < 260:
        session.drag_to(300.0 + frame, 200.0)
    if frame == 260:
        session.end_drag()
    session.tick(now)

print(f"Physics steps: {session.steps}")
for card in session.cards:
    print(f"{card.label:<16} ({card.x:7.1f}, {card.y:7.1f})")
for frm, to, curve in session.links(now):
    print(f"{frm.label} -> {to.label}: {curve.to_svg_path()}")

from . import connect, connection_path, example_board, iter_links, settle

WIDTH = 1280.0
HEIGHT = 680.0


def run():
    cards = example_board()
    cards = connect(cards, "2", "8")
    cards = connect(cards, "4", "6")
    cards = connect(cards, "1", "5")

    result = settle(cards, WIDTH, HEIGHT, max_steps=3000)
    print(f"Settled: {result.settled} after {result.steps} steps (energy={result.energy:.6f})\n")

    for card in result.cards:
        print(f"  {card.label:<16} ({card.x:7.1f}, {card.y:7.1f})  rot={card.rotation:+.2f}")

    print("\nLinks:")
    for frm, to in iter_links(result.cards):
        print(f"  {frm.label} -> {to.label}: {connection_path(frm, to, 0.0).to_svg_path()}")


if __name__ == "__main__":
    run()

from __future__ import annotations

from visionboard import Card, connect
from visionboard.tikz_codegen import generate_tikz_code, generate_tikz_document, latex_escape


def _board() -> list:
    return connect(
        [
            Card(id="a", kind="state", label="R&D focus", x=100.0, y=50.0, rotation=2.0),
            Card(id="b", kind="identity", label="Builder", x=300.0, y=50.0),
        ],
        "a",
        "b",
    )


def test_generate_tikz_document_preamble() -> None:
    document = generate_tikz_document(_board(), title="My board_1")

    assert document.startswith("\\documentclass[border=4pt]{standalone}")
    assert "\\tikzset{" in document
    assert "\\textbf{My board\\_1}" in document
    assert document.rstrip().endswith("\\end{document}")


def test_generate_tikz_code_draws_each_link_once_below_cards() -> None:
    tikz = generate_tikz_code(_board(), scale=0.01)

    lines = tikz.splitlines()
    assert lines[0] == "\\begin{tikzpicture}"
    assert lines[-1] == "\\end{tikzpicture}"
    assert tikz.count(".. controls") == 1
    assert lines[1].startswith("  \\draw[link] (1,-0.5) .. controls")
    assert lines[1].endswith(".. (3,-0.5);")


def test_cards_become_styled_nodes() -> None:
    tikz = generate_tikz_code(_board(), scale=0.01)

    assert "\\node[card state, rotate=-2] (card0) at (1,-0.5) {R\\&D focus};" in tikz
    assert "\\node[card identity] (card1) at (3,-0.5) {Builder};" in tikz


def test_latex_escape() -> None:
    assert latex_escape("50% of $ & #1_a") == "50\\% of \\$ \\& \\#1\\_a"

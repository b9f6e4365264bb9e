"""TikZ renderer for board snapshots."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from .utils import format_float, latex_escape
from ..model import Card, Point2D, QuadraticCurve
from ..paths import connection_path, iter_links

DEFAULT_SCALE = 0.02  # centimetres per board pixel

KIND_STYLES: Dict[str, str] = {
    "state": "card state",
    "identity": "card identity",
}

standalone_tpl = r"""\documentclass[border=4pt]{standalone}
\usepackage[utf8]{inputenc}
\usepackage{tikz}
\tikzset{
  card/.style={draw, rounded corners=3pt, inner sep=4pt, font=\footnotesize, align=center},
  state/.style={fill=teal!15},
  identity/.style={fill=violet!15},
  link/.style={line width=0.6pt, draw=black!45},
}
\begin{document}
%s
%s
\end{document}
"""


def _to_tikz(point: Point2D, scale: float) -> str:
    # board y grows downwards, TikZ y grows upwards
    x, y = point
    return f"({format_float(x * scale)},{format_float(-y * scale)})"


def _cubic_controls(curve: QuadraticCurve) -> Sequence[Point2D]:
    (x0, y0), (cx, cy), (x1, y1) = curve.points()
    return (
        (x0 + 2.0 / 3.0 * (cx - x0), y0 + 2.0 / 3.0 * (cy - y0)),
        (x1 + 2.0 / 3.0 * (cx - x1), y1 + 2.0 / 3.0 * (cy - y1)),
    )


def _emit_link(curve: QuadraticCurve, scale: float) -> str:
    c1, c2 = _cubic_controls(curve)
    return (
        f"\\draw[link] {_to_tikz(curve.start, scale)} .. controls "
        f"{_to_tikz(c1, scale)} and {_to_tikz(c2, scale)} .. {_to_tikz(curve.end, scale)};"
    )


def _emit_card(card: Card, name: str, scale: float) -> str:
    style = KIND_STYLES.get(card.kind, "card")
    options = [style]
    if abs(card.rotation) > 1e-9:
        # screen rotation is clockwise, TikZ rotation is counter-clockwise
        options.append(f"rotate={format_float(-card.rotation)}")
    if abs(card.scale - 1.0) > 1e-9:
        options.append(f"scale={format_float(card.scale)}")
    return (
        f"\\node[{', '.join(options)}] ({name}) at {_to_tikz(card.position, scale)} "
        f"{{{latex_escape(card.label)}}};"
    )


def generate_tikz_code(
    cards: Iterable[Card],
    *,
    time_ms: float = 0.0,
    scale: float = DEFAULT_SCALE,
) -> str:
    """Draw every link as a curve beneath every card node."""

    snapshot = list(cards)
    lines: List[str] = ["\\begin{tikzpicture}"]
    for frm, to in iter_links(snapshot):
        lines.append("  " + _emit_link(connection_path(frm, to, time_ms), scale))
    for idx, card in enumerate(snapshot):
        lines.append("  " + _emit_card(card, f"card{idx}", scale))
    lines.append("\\end{tikzpicture}")
    return "\n".join(lines)


def generate_tikz_document(
    cards: Iterable[Card],
    *,
    title: Optional[str] = None,
    time_ms: float = 0.0,
    scale: float = DEFAULT_SCALE,
) -> str:
    """Render a standalone document for a board snapshot."""

    header = ""
    if title:
        header = "\\noindent\\textbf{" + latex_escape(title.strip()) + "}\\par\\vspace{4pt}"
    return standalone_tpl % (header, generate_tikz_code(cards, time_ms=time_ms, scale=scale))

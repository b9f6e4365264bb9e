"""Board snapshot → TikZ code generation helpers."""

from .generator import (
    generate_tikz_code,
    generate_tikz_document,
)
from .utils import latex_escape

__all__ = [
    "generate_tikz_code",
    "generate_tikz_document",
    "latex_escape",
]

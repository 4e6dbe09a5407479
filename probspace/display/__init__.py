"""Text and LaTeX rendering for probspace distributions."""

from .text import render, render_lines
from .latex import to_latex

__all__ = ["render", "render_lines", "to_latex"]

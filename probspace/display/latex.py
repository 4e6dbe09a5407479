"""LaTeX rendering of distributions as piecewise ``cases`` definitions."""

from __future__ import annotations

from typing import Any, Optional

from probspace.core.context import DisplayOptions
from probspace.core.types import Distribution, DistributionKind
from probspace.display.text import (
    select_rows,
    sorted_keys,
    split_conditional_key,
)

_ESCAPES = str.maketrans({
    "\\": r"\textbackslash{}",
    "^": r"\textasciicircum{}",
    "~": r"\textasciitilde{}",
    "_": r"\_",
    "%": r"\%",
    "&": r"\&",
    "#": r"\#",
    "$": r"\$",
    "{": r"\{",
    "}": r"\}",
})

_LHS = {
    DistributionKind.MARGINAL: r"p_X(x)",
    DistributionKind.JOINT: r"p(x_1^n)",
    DistributionKind.PARTIAL: r"p(x \mid y)",
    DistributionKind.CONDITIONAL: r"p(x \mid y)",
}

_LAST_INDEX = {"x": "n", "y": "m"}


def escape(value: Any) -> str:
    """Escape characters that LaTeX would interpret in *value*'s text."""
    return str(value).translate(_ESCAPES)


def _tuple_latex(var: str, values: Any, arity_threshold: int) -> str:
    values = values if isinstance(values, tuple) else (values,)
    n = len(values)
    if n == 1:
        return f"{var} = {escape(values[0])}"
    if n <= arity_threshold:
        names = ", ".join(f"{var}_{i}" for i in range(1, n + 1))
        shown = ", ".join(escape(v) for v in values)
    else:
        names = rf"{var}_1, \dots, {var}_{_LAST_INDEX.get(var, 'n')}"
        shown = rf"{escape(values[0])}, \dots, {escape(values[-1])}"
    return f"({names}) = ({shown})"


def _condition(dist: Distribution, key: Any, arity_threshold: int) -> str:
    kind = dist.kind
    if kind is DistributionKind.MARGINAL:
        return f"x = {escape(key)}"
    elif kind is DistributionKind.JOINT:
        values = key if isinstance(key, tuple) else (key,)
        if len(values) == 1:
            return f"(x_1) = ({escape(values[0])})"
        return _tuple_latex("x", values, arity_threshold)
    elif kind in (DistributionKind.PARTIAL, DistributionKind.CONDITIONAL):
        x, y = split_conditional_key(key)
        return (
            rf"{_tuple_latex('x', x, arity_threshold)} \mid "
            rf"{_tuple_latex('y', y, arity_threshold)}"
        )
    raise ValueError(f"Unknown distribution kind {kind!r}")


def to_latex(dist: Distribution, options: Optional[DisplayOptions] = None) -> str:
    """Render *dist* as a LaTeX ``cases`` expression (without ``$`` delimiters).

    Truncation follows the same rules as the text rendering, with a
    ``\\vdots`` row standing in for the omitted entries.
    """
    options = options or DisplayOptions.current()
    head, tail = select_rows(sorted_keys(dist), options)

    def row(key):
        condition = _condition(dist, key, options.arity_threshold)
        return f"{escape(dist[key])}, & {condition}"

    rows = [row(k) for k in head]
    if tail or len(dist) > len(head):
        rows.append(r"& \vdots")
        rows.extend(row(k) for k in tail)
    body = r" \\ ".join(rows)
    return rf"{_LHS[dist.kind]} = \begin{{cases}} {body} \end{{cases}}"

"""Plain-text rendering of distributions.

Long distributions are truncated to a head, an ellipsis line and a tail so
that printing a large table stays readable::

    Marginal distribution:
       θ₁, x = a₁
       θ₂, x = a₂
       ...
       θₘ, x = aₘ

The format is a display convention only; it is not meant to be parsed.
"""

from __future__ import annotations

from typing import Any, Hashable, List, Optional, Sequence, Tuple

from probspace.core.context import DisplayOptions
from probspace.core.types import Distribution, DistributionKind

ELLIPSIS = "..."

_SUBSCRIPTS = str.maketrans("0123456789", "₀₁₂₃₄₅₆₇₈₉")

# Subscript letters used for the last component of an abbreviated tuple.
_LAST_INDEX = {"x": "ₙ", "y": "ₘ"}


# ---------------------------------------------------------------------------
# Row selection
# ---------------------------------------------------------------------------


def sorted_keys(dist: Distribution) -> List[Hashable]:
    """Return the keys of *dist* in sorted order.

    Keys that cannot be compared with each other are ordered by ``repr``.
    """
    keys = list(dist.keys())
    try:
        return sorted(keys)
    except TypeError:
        return sorted(keys, key=repr)


def select_rows(
    keys: Sequence[Hashable],
    options: Optional[DisplayOptions] = None,
) -> Tuple[List[Hashable], List[Hashable]]:
    """Split sorted *keys* into the rows shown before and after the ellipsis.

    The second list is empty when every key fits, in which case no ellipsis
    is drawn.
    """
    options = options or DisplayOptions.current()
    keys = list(keys)
    if len(keys) <= options.threshold:
        return keys, []
    return keys[:options.head], keys[len(keys) - options.tail:]


# ---------------------------------------------------------------------------
# Outcome expressions
# ---------------------------------------------------------------------------


def _as_tuple(key: Any) -> tuple:
    return key if isinstance(key, tuple) else (key,)


def _subscript(i: int) -> str:
    return str(i).translate(_SUBSCRIPTS)


def _tuple_expression(
    var: str, values: tuple, arity_threshold: int
) -> Tuple[str, str]:
    n = len(values)
    if n <= arity_threshold:
        names = ", ".join(f"{var}{_subscript(i)}" for i in range(1, n + 1))
        shown = ", ".join(str(v) for v in values)
    else:
        names = f"{var}₁, ..., {var}{_LAST_INDEX.get(var, 'ₙ')}"
        shown = f"{values[0]}, ..., {values[-1]}"
    return f"({names})", f"({shown})"


def _side_expression(var: str, values: Any, arity_threshold: int) -> str:
    values = _as_tuple(values)
    if len(values) == 1:
        return f"{var} = {values[0]}"
    names, shown = _tuple_expression(var, values, arity_threshold)
    return f"{names} = {shown}"


def split_conditional_key(key: Any) -> Tuple[Any, Any]:
    """Split a partial/conditional key into its X and Y components.

    Raises
    ------
    ValueError
        If *key* is not a pair.
    """
    if not isinstance(key, tuple) or len(key) != 2:
        raise ValueError(
            f"Conditional keys must be (x_outcome, y_outcome) pairs, got {key!r}"
        )
    return key


def key_expression(
    dist: Distribution,
    key: Hashable,
    options: Optional[DisplayOptions] = None,
) -> str:
    """Format *key* as the outcome expression for the kind of *dist*."""
    options = options or DisplayOptions.current()
    kind = dist.kind
    if kind is DistributionKind.MARGINAL:
        return f"x = {key}"
    elif kind is DistributionKind.JOINT:
        names, shown = _tuple_expression(
            "x", _as_tuple(key), options.arity_threshold
        )
        return f"{names} = {shown}"
    elif kind in (DistributionKind.PARTIAL, DistributionKind.CONDITIONAL):
        x, y = split_conditional_key(key)
        return (
            f"{_side_expression('x', x, options.arity_threshold)} | "
            f"{_side_expression('y', y, options.arity_threshold)}"
        )
    else:
        raise ValueError(f"Unknown distribution kind {kind!r}")


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def render_lines(
    dist: Distribution, options: Optional[DisplayOptions] = None
) -> List[str]:
    """Return the title line followed by the (unindented) entry lines."""
    options = options or DisplayOptions.current()
    head, tail = select_rows(sorted_keys(dist), options)

    def entry(key):
        return f"{dist[key]}, {key_expression(dist, key, options)}"

    lines = [f"{dist.kind.title} distribution:"]
    lines.extend(entry(k) for k in head)
    if tail or len(dist) > len(head):
        lines.append(ELLIPSIS)
        lines.extend(entry(k) for k in tail)
    return lines


def render(dist: Distribution, options: Optional[DisplayOptions] = None) -> str:
    """Render *dist* as human-readable, length-truncated text.

    Each kind is titled with its own name: conditional distributions read
    "Conditional distribution:" rather than sharing the "Partial
    distribution:" title.
    """
    options = options or DisplayOptions.current()
    title, *body = render_lines(dist, options)
    pad = " " * options.indent
    return "\n".join([title] + [pad + line for line in body])

"""Distribution visualization utilities.

Provides ``plot_distribution``, a bar chart of the probability mass stored
at each outcome of a distribution with numeric labels.
"""

from __future__ import annotations

import numbers
from typing import Any, List, Optional, Tuple

import numpy as np

from probspace.core.types import Distribution
from probspace.display.text import key_expression, sorted_keys

# ---------------------------------------------------------------------------
# Colorblind-safe palette (Wong 2011, widely recommended for accessibility)
# ---------------------------------------------------------------------------
COLORBLIND_SAFE_PALETTE: List[str] = [
    "#0072B2",  # blue
    "#E69F00",  # orange
    "#009E73",  # green
    "#CC79A7",  # pink
    "#56B4E9",  # sky blue
    "#D55E00",  # vermilion
    "#F0E442",  # yellow
    "#000000",  # black
]


def _get_color(index: int) -> str:
    """Return a color from the colorblind-safe palette (wraps around)."""
    return COLORBLIND_SAFE_PALETTE[index % len(COLORBLIND_SAFE_PALETTE)]


def _masses(dist: Distribution, keys: List[Any]) -> np.ndarray:
    values = [dist[k] for k in keys]
    for key, value in zip(keys, values):
        if not isinstance(value, numbers.Real) or isinstance(value, bool):
            raise TypeError(
                f"Cannot plot symbolic label {value!r} at outcome {key!r}; "
                "plotting requires numeric probabilities"
            )
    return np.asarray(values, dtype=float)


def plot_distribution(
    dist: Distribution,
    *,
    ax: Optional[Any] = None,
    title: Optional[str] = None,
    xlabel: Optional[str] = None,
    ylabel: Optional[str] = None,
    figsize: Tuple[float, float] = (8, 5),
    color: Optional[str] = None,
    save_path: Optional[str] = None,
) -> Any:
    """Plot the probability mass at each outcome of *dist* as a bar chart.

    Parameters
    ----------
    dist : Distribution
        A distribution whose labels are all real numbers.
    ax : matplotlib Axes, optional
        Pre-existing axes to draw on.
    title, xlabel, ylabel : str, optional
        Axis labels / title.  The title defaults to the kind of *dist*.
    figsize : tuple
        Figure size when creating a new matplotlib figure.
    color : str, optional
        Bar color.  Defaults to the first palette color.
    save_path : str, optional
        If given, save the figure to this path.

    Returns
    -------
    matplotlib Figure if one was created, otherwise the given Axes.

    Raises
    ------
    ValueError
        If *dist* has no outcomes.
    TypeError
        If any label is not numeric.
    """
    if len(dist) == 0:
        raise ValueError("Cannot plot an empty distribution")

    keys = sorted_keys(dist)
    heights = _masses(dist, keys)
    # every outcome gets a tick, so no truncation here
    labels = [key_expression(dist, k) for k in keys]

    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    created_fig = False
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
        created_fig = True
    else:
        fig = ax.figure

    positions = np.arange(len(keys))
    ax.bar(positions, heights, color=color or _get_color(0), width=0.6)
    ax.set_xticks(positions)
    if len(keys) > 6:
        ax.set_xticklabels(labels, rotation=45, ha="right")
    else:
        ax.set_xticklabels(labels)
    ax.set_ylim(0, max(1.0, float(heights.max()) * 1.05))
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)

    ax.set_xlabel(xlabel or "Outcome")
    ax.set_ylabel(ylabel or "Probability")
    ax.set_title(title or f"{dist.kind.title} distribution")

    fig.tight_layout()

    if save_path is not None:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")

    if created_fig:
        return fig
    return ax

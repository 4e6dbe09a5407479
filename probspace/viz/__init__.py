"""Visualization helpers for probspace distributions."""

from probspace.viz.distributions import COLORBLIND_SAFE_PALETTE, plot_distribution

__all__ = ["COLORBLIND_SAFE_PALETTE", "plot_distribution"]

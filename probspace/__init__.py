"""probspace: finite probability distributions as keyed containers.

This package provides marginal, joint, partial and conditional distributions
backed by plain outcome-to-probability mappings, together with text and
LaTeX display, JSON persistence and simple plotting.
"""

try:
    from probspace._version import version as __version__
except ImportError:
    __version__ = "0.1.0"

from .core.types import (
    Conditional,
    Distribution,
    DistributionKind,
    Joint,
    Marginal,
    Partial,
)
from .core.context import DisplayOptions
from .display import render, to_latex
from .integration.serialization import load_distribution, save_distribution

__all__ = [
    "Conditional",
    "DisplayOptions",
    "Distribution",
    "DistributionKind",
    "Joint",
    "Marginal",
    "Partial",
    "load_distribution",
    "render",
    "save_distribution",
    "to_latex",
]

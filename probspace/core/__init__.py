"""Core module for probspace.

This module contains the distribution containers and the display settings
shared by the rendering modules.
"""

from .types import (
    Conditional,
    Distribution,
    DistributionKind,
    Joint,
    Marginal,
    Partial,
)
from .context import DisplayOptions

__all__ = [
    "Conditional",
    "DisplayOptions",
    "Distribution",
    "DistributionKind",
    "Joint",
    "Marginal",
    "Partial",
]

"""Core types for probspace distributions.

Every distribution is a thin container around a mapping from outcome keys to
probability labels.  The four kinds share one set of accessors, implemented
here once, and differ only by their ``kind`` tag, which the display modules
dispatch on.
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from typing import Any, Dict, Hashable, Iterator, KeysView, Mapping, Optional, Tuple


class DistributionKind(enum.Enum):
    """Tag identifying which kind of distribution a container holds."""

    MARGINAL = "marginal"
    JOINT = "joint"
    PARTIAL = "partial"
    CONDITIONAL = "conditional"

    @property
    def title(self) -> str:
        return self.value.capitalize()


# ---------------------------------------------------------------------------
# Distribution base
# ---------------------------------------------------------------------------

class Distribution(ABC):
    """Base container for a distribution over a finite outcome space.

    Parameters
    ----------
    p : mapping, optional
        Maps outcome keys to probability labels.  Labels may be numbers or
        symbolic placeholders; nothing is validated.  The mapping is copied
        so the container owns its data.

    Iterating a distribution yields ``(key, value)`` pairs, and indexing a
    missing key returns ``0`` instead of raising.  The base class is
    abstract; construct one of the concrete kinds.
    """

    @property
    @abstractmethod
    def kind(self) -> DistributionKind:
        """Tag used to dispatch rendering."""

    def __init__(self, p: Optional[Mapping[Hashable, Any]] = None) -> None:
        self.p: Dict[Hashable, Any] = dict(p) if p is not None else {}

    # --------------------------------------------------------------------- #
    #  Accessors
    # --------------------------------------------------------------------- #

    def iterate(self) -> Iterator[Tuple[Hashable, Any]]:
        """Iterate over ``(key, value)`` pairs in insertion order."""
        return iter(self.p.items())

    def length(self) -> int:
        """Number of outcomes stored."""
        return len(self.p)

    def lookup(self, key: Hashable) -> Any:
        """Return the label stored at *key*, or ``0`` if *key* is absent."""
        return self.p.get(key, 0)

    def keys(self) -> KeysView:
        return self.p.keys()

    def __iter__(self) -> Iterator[Tuple[Hashable, Any]]:
        return self.iterate()

    def __len__(self) -> int:
        return self.length()

    def __getitem__(self, key: Hashable) -> Any:
        return self.lookup(key)

    def __contains__(self, key: object) -> bool:
        return key in self.p

    # --------------------------------------------------------------------- #
    #  Comparison and display
    # --------------------------------------------------------------------- #

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Distribution):
            return NotImplemented
        return self.kind is other.kind and self.p == other.p

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(p={self.p!r})"

    def __str__(self) -> str:
        from probspace.display.text import render

        return render(self)

    def _repr_pretty_(self, printer: Any, cycle: bool) -> None:
        """IPython ``text/plain`` hook."""
        if cycle:
            printer.text(f"{type(self).__name__}(...)")
        else:
            printer.text(str(self))

    def _repr_latex_(self) -> str:
        """Jupyter rich-display hook."""
        from probspace.display.latex import to_latex

        return f"$${to_latex(self)}$$"


# ---------------------------------------------------------------------------
# Distribution kinds
# ---------------------------------------------------------------------------

class Marginal(Distribution):
    """Distribution of a single random variable, keyed by scalar outcomes."""

    kind = DistributionKind.MARGINAL


class Joint(Distribution):
    """Distribution of a tuple of random variables, keyed by outcome tuples."""

    kind = DistributionKind.JOINT


class Partial(Distribution):
    """Distribution of X given Y, keyed by ``(x_outcome, y_outcome)`` tuples."""

    kind = DistributionKind.PARTIAL


class Conditional(Distribution):
    """Distribution of X given Y, keyed by ``(x_outcome, y_outcome)`` tuples."""

    kind = DistributionKind.CONDITIONAL


KIND_TO_CLASS = {
    DistributionKind.MARGINAL: Marginal,
    DistributionKind.JOINT: Joint,
    DistributionKind.PARTIAL: Partial,
    DistributionKind.CONDITIONAL: Conditional,
}

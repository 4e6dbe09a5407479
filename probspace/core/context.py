"""Context manager for distribution display settings."""

from typing import List, Optional


class DisplayOptions:
    """Context manager for the truncation rules used when rendering.

    Distributions with at most ``threshold`` entries are shown in full;
    longer ones show the first ``head`` entries, an ellipsis and the last
    ``tail`` entries.  Outcome tuples longer than ``arity_threshold`` are
    abbreviated to their first and last components.

    Example:
        >>> with DisplayOptions(threshold=5, head=3):
        ...     print(dist)
    """

    _active_context: Optional['DisplayOptions'] = None

    def __init__(
        self,
        threshold: int = 3,
        head: int = 2,
        tail: int = 1,
        arity_threshold: int = 3,
        indent: int = 3,
    ):
        """Initialize and check the display settings.

        Raises:
            ValueError: If the settings cannot produce a truncated view.
        """
        if head < 1:
            raise ValueError(f"head must be >= 1, got {head}")
        if tail < 0:
            raise ValueError(f"tail must be >= 0, got {tail}")
        if head + tail > threshold:
            raise ValueError(
                f"head + tail ({head + tail}) must not exceed "
                f"threshold ({threshold})"
            )
        if arity_threshold < 1:
            raise ValueError(
                f"arity_threshold must be >= 1, got {arity_threshold}"
            )
        if indent < 0:
            raise ValueError(f"indent must be >= 0, got {indent}")
        self.threshold = threshold
        self.head = head
        self.tail = tail
        self.arity_threshold = arity_threshold
        self.indent = indent
        self._parent_contexts: List[Optional['DisplayOptions']] = []

    def __enter__(self) -> 'DisplayOptions':
        """Make these options the active ones.

        Returns:
            The DisplayOptions instance.
        """
        self._parent_contexts.append(DisplayOptions._active_context)
        DisplayOptions._active_context = self
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        """Restore the previously active options.

        Returns:
            False to propagate any exceptions.
        """
        DisplayOptions._active_context = self._parent_contexts.pop()
        return False

    @classmethod
    def current(cls) -> 'DisplayOptions':
        """Get the active options, or the defaults when none are active."""
        if cls._active_context is None:
            return _DEFAULTS
        return cls._active_context

    @classmethod
    def is_active(cls) -> bool:
        """Check if a DisplayOptions context is currently active."""
        return cls._active_context is not None

    def __repr__(self) -> str:
        return (
            f"DisplayOptions(threshold={self.threshold}, head={self.head}, "
            f"tail={self.tail}, arity_threshold={self.arity_threshold}, "
            f"indent={self.indent})"
        )


_DEFAULTS = DisplayOptions()

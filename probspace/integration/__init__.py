"""Integration modules for persisting distributions."""

from probspace.integration.serialization import (
    from_dict,
    load_distribution,
    save_distribution,
    to_dict,
    validate_probabilities,
)

__all__ = [
    "from_dict",
    "load_distribution",
    "save_distribution",
    "to_dict",
    "validate_probabilities",
]

"""Distribution serialization and deserialization.

Provides :func:`save_distribution` and :func:`load_distribution` for
persisting :class:`~probspace.core.types.Distribution` instances to disk in
JSON format.  The format includes a version field for backward
compatibility.

Features:

* JSON export of outcome keys and probability labels.  Tuple keys are
  written as (nested) arrays and restored as tuples.
* Pickle fallback for labels or keys that cannot be represented in JSON
  (e.g. symbolic expression objects), stored as a base64-encoded blob.
* Optional validation on load for numeric labels
  (0 <= p <= 1, sum(p) = 1 per conditioning outcome).
"""

from __future__ import annotations

import base64
import json
import logging
import numbers
import pickle
from collections import defaultdict
from pathlib import Path
from typing import Any, Dict, List, Union

import numpy as np

from probspace.core.types import KIND_TO_CLASS, Distribution, DistributionKind
from probspace.display.text import split_conditional_key

logger = logging.getLogger(__name__)

# Current serialization format version
FORMAT_VERSION = 1

# Tolerance for probability constraint checks
_PROB_TOL = 1e-6


# ------------------------------------------------------------------ #
#  Public API
# ------------------------------------------------------------------ #


def save_distribution(
    dist: Distribution,
    filepath: Union[str, Path],
) -> None:
    """Export a :class:`Distribution` to a JSON file.

    Parameters
    ----------
    dist : Distribution
        The distribution to serialize.
    filepath : str or Path
        Destination file path.  Parent directories must exist.

    Raises
    ------
    TypeError
        If *dist* is not a :class:`Distribution`.
    """
    payload = to_dict(dist)
    filepath = Path(filepath)
    with open(filepath, "w", encoding="utf-8") as fh:
        json.dump(payload, fh, indent=2, ensure_ascii=False)
    logger.debug(
        "Saved %s distribution with %d outcomes to %s",
        dist.kind.value, len(dist), filepath,
    )


def load_distribution(
    filepath: Union[str, Path],
    validate: bool = False,
) -> Distribution:
    """Reconstruct a :class:`Distribution` from a JSON file.

    Parameters
    ----------
    filepath : str or Path
        Path to a JSON file previously created by :func:`save_distribution`.
    validate : bool
        If *True*, check numeric labels with :func:`validate_probabilities`.

    Returns
    -------
    Distribution
        The reconstructed distribution, of the kind that was saved.

    Raises
    ------
    FileNotFoundError
        If *filepath* does not exist.
    ValueError
        If the file is corrupted, has an unsupported version, or fails
        validation.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Distribution file not found: {filepath}")

    try:
        with open(filepath, "r", encoding="utf-8") as fh:
            payload = json.load(fh)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Corrupted distribution file: {exc}") from exc

    dist = from_dict(payload, validate=validate)
    logger.debug(
        "Loaded %s distribution with %d outcomes from %s",
        dist.kind.value, len(dist), filepath,
    )
    return dist


def to_dict(dist: Distribution) -> Dict[str, Any]:
    """Convert a distribution to a JSON-serializable dictionary."""
    if not isinstance(dist, Distribution):
        raise TypeError(
            f"Expected Distribution, got {type(dist).__name__}"
        )

    payload: Dict[str, Any] = {
        "format_version": FORMAT_VERSION,
        "kind": dist.kind.value,
    }

    entries = [
        (_to_native(key), _to_native(value)) for key, value in dist
    ]
    if all(_is_json_native(k) and _is_json_native(v) for k, v in entries):
        payload["encoding"] = "json"
        payload["entries"] = [
            {"key": _encode_key(k), "value": v} for k, v in entries
        ]
    else:
        payload["encoding"] = "pickle"
        payload["entries_pickle"] = _pickle_to_base64(dist.p)
    return payload


def from_dict(payload: Dict[str, Any], validate: bool = False) -> Distribution:
    """Reconstruct a distribution from a dictionary made by :func:`to_dict`."""
    # ---- version check ------------------------------------------------ #
    version = payload.get("format_version")
    if version is None:
        raise ValueError("Missing 'format_version' in distribution data")

    if (
        not isinstance(version, int)
        or isinstance(version, bool)
        or not 1 <= version <= FORMAT_VERSION
    ):
        raise ValueError(
            f"Unsupported format version {version!r} "
            f"(max supported: {FORMAT_VERSION})"
        )

    # ---- kind --------------------------------------------------------- #
    kind_name = payload.get("kind")
    if kind_name is None:
        raise ValueError("Missing 'kind' in distribution data")
    try:
        kind = DistributionKind(kind_name)
    except ValueError as exc:
        raise ValueError(f"Unknown distribution kind {kind_name!r}") from exc

    # ---- entries ------------------------------------------------------ #
    encoding = payload.get("encoding", "json")
    if encoding == "pickle":
        blob = payload.get("entries_pickle")
        if blob is None:
            raise ValueError(
                "pickle encoding but no 'entries_pickle' field"
            )
        mapping = _base64_to_unpickle(blob)
    elif encoding == "json":
        mapping = {}
        for entry in _migrate(payload, version):
            if "key" not in entry or "value" not in entry:
                raise ValueError(
                    f"Entry missing 'key' or 'value' field: {entry!r}"
                )
            mapping[_decode_key(entry["key"])] = entry["value"]
    else:
        raise ValueError(f"Unknown encoding {encoding!r}")

    dist = KIND_TO_CLASS[kind](mapping)
    if validate:
        validate_probabilities(dist)
    return dist


# ------------------------------------------------------------------ #
#  Version migration
# ------------------------------------------------------------------ #


def _migrate(
    payload: Dict[str, Any], version: int
) -> List[Dict[str, Any]]:
    """Apply version migrations to bring *payload* up to current format.

    Parameters
    ----------
    payload : dict
        The raw deserialized JSON.
    version : int
        The format version found in the data.

    Returns
    -------
    list of dict
        The (possibly migrated) list of entries.
    """
    entries = payload.get("entries")
    if entries is None:
        raise ValueError("Missing 'entries' in distribution data")

    # Version 1 is current -- no migration needed.
    return entries


# ------------------------------------------------------------------ #
#  Validation
# ------------------------------------------------------------------ #


def validate_probabilities(dist: Distribution, tol: float = _PROB_TOL) -> None:
    """Check probability constraints on numeric labels.

    * All values must be in [0, 1].
    * Marginal and joint labels must sum to 1.
    * Partial and conditional labels must sum to 1 for each conditioning
      outcome ``y``.

    Distributions with symbolic labels cannot be checked and are skipped.

    Raises
    ------
    ValueError
        If *dist* is empty or any constraint is violated.
    """
    if len(dist) == 0:
        raise ValueError(f"{dist.kind.title} distribution has no outcomes")

    values = list(dist.p.values())
    if not all(_is_numeric(v) for v in values):
        logger.debug(
            "Skipping validation of %s distribution with symbolic labels",
            dist.kind.value,
        )
        return

    masses = np.asarray(values, dtype=np.float64)
    if not np.all(np.isfinite(masses)):
        raise ValueError(
            f"{dist.kind.title} distribution has non-finite values"
        )
    if np.any(masses < -tol) or np.any(masses > 1.0 + tol):
        raise ValueError(
            f"{dist.kind.title} distribution has values outside [0, 1]"
        )

    if dist.kind in (DistributionKind.MARGINAL, DistributionKind.JOINT):
        total = masses.sum()
        if abs(total - 1.0) > tol:
            raise ValueError(
                f"{dist.kind.title} distribution does not sum to 1 "
                f"(sum={total:.6f})"
            )
        return

    totals: Dict[Any, float] = defaultdict(float)
    for key, value in dist:
        _, y = split_conditional_key(key)
        totals[y] += float(value)
    for y, total in totals.items():
        if not np.isfinite(total) or abs(total - 1.0) > tol:
            raise ValueError(
                f"{dist.kind.title} distribution given y={y!r} does not "
                f"sum to 1 (sum={total:.6f})"
            )


# ------------------------------------------------------------------ #
#  Key and value helpers
# ------------------------------------------------------------------ #


def _is_numeric(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _to_native(obj: Any) -> Any:
    """Convert numpy scalars (also inside tuples) to Python scalars."""
    if isinstance(obj, tuple):
        return tuple(_to_native(o) for o in obj)
    if isinstance(obj, np.generic):
        return obj.item()
    return obj


def _is_json_native(obj: Any) -> bool:
    if isinstance(obj, tuple):
        return all(_is_json_native(o) for o in obj)
    return obj is None or isinstance(obj, (str, bool, int, float))


def _encode_key(key: Any) -> Any:
    if isinstance(key, tuple):
        return [_encode_key(k) for k in key]
    return key


def _decode_key(raw: Any) -> Any:
    if isinstance(raw, list):
        return tuple(_decode_key(r) for r in raw)
    return raw


# ------------------------------------------------------------------ #
#  Pickle helpers
# ------------------------------------------------------------------ #


def _pickle_to_base64(obj: Any) -> str:
    """Serialize *obj* via pickle and return a base64-encoded string."""
    raw = pickle.dumps(obj, protocol=pickle.HIGHEST_PROTOCOL)
    return base64.b64encode(raw).decode("ascii")


def _base64_to_unpickle(b64: str) -> Any:
    """Decode a base64 string and unpickle the result."""
    raw = base64.b64decode(b64.encode("ascii"))
    return pickle.loads(raw)  # noqa: S301

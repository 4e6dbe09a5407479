"""Tests for probspace/integration/serialization.py.

Covers:
- Round-trip consistency (save → load produces an equal distribution)
- Versioning and error handling (corrupted files, missing fields)
- Pickle fallback for labels that JSON cannot represent
- Probability constraint validation (0≤p≤1, Σp=1)
"""

from __future__ import annotations

import json
import os
import tempfile
from fractions import Fraction
from pathlib import Path

import numpy as np
import pytest

from probspace.core.types import Conditional, Joint, Marginal, Partial
from probspace.integration.serialization import (
    FORMAT_VERSION,
    from_dict,
    load_distribution,
    save_distribution,
    to_dict,
    validate_probabilities,
)


# ------------------------------------------------------------------ #
#  Helpers
# ------------------------------------------------------------------ #


def _symbolic_marginal() -> Marginal:
    return Marginal({"a₁": "θ₁", "a₂": "θ₂", "a₃": "θ₃", "aₘ": "θₘ"})


def _numeric_conditional() -> Conditional:
    """P(X | Y) with two conditioning outcomes."""
    return Conditional({
        (("x0",), ("y0",)): 0.9,
        (("x1",), ("y0",)): 0.1,
        (("x0",), ("y1",)): 0.3,
        (("x1",), ("y1",)): 0.7,
    })


@pytest.fixture
def json_path():
    with tempfile.NamedTemporaryFile(suffix=".json", delete=False) as f:
        path = f.name
    yield path
    os.unlink(path)


# ------------------------------------------------------------------ #
#  Round-trip consistency
# ------------------------------------------------------------------ #


class TestRoundTrip:
    def test_symbolic_marginal(self, json_path) -> None:
        dist = _symbolic_marginal()
        save_distribution(dist, json_path)
        loaded = load_distribution(json_path)
        assert isinstance(loaded, Marginal)
        assert loaded == dist

    def test_joint_tuple_keys(self, json_path) -> None:
        dist = Joint({(1, "b", 3.5, None): 0.25, (2, "c", 0.0, True): 0.75})
        save_distribution(dist, Path(json_path))
        loaded = load_distribution(json_path)
        assert isinstance(loaded, Joint)
        assert loaded == dist
        assert all(isinstance(k, tuple) for k in loaded.keys())

    def test_conditional_nested_keys(self, json_path) -> None:
        dist = _numeric_conditional()
        save_distribution(dist, json_path)
        loaded = load_distribution(json_path, validate=True)
        assert isinstance(loaded, Conditional)
        assert loaded[(("x1",), ("y1",))] == pytest.approx(0.7)

    def test_empty(self) -> None:
        assert from_dict(to_dict(Partial())) == Partial()

    def test_numpy_scalars_become_json(self) -> None:
        dist = Marginal({np.int64(1): np.float64(0.5), 2: 0.5})
        payload = to_dict(dist)
        assert payload["encoding"] == "json"
        json.dumps(payload)
        assert from_dict(payload) == Marginal({1: 0.5, 2: 0.5})

    def test_file_is_readable_json(self, json_path) -> None:
        save_distribution(Joint({("a", "b"): 1.0}), json_path)
        with open(json_path, encoding="utf-8") as fh:
            payload = json.load(fh)
        assert payload["format_version"] == FORMAT_VERSION
        assert payload["kind"] == "joint"
        assert payload["entries"] == [{"key": ["a", "b"], "value": 1.0}]


# ------------------------------------------------------------------ #
#  Pickle fallback
# ------------------------------------------------------------------ #


class TestPickleFallback:
    def test_fraction_labels(self, json_path) -> None:
        dist = Marginal({"h": Fraction(1, 3), "t": Fraction(2, 3)})
        save_distribution(dist, json_path)
        with open(json_path, encoding="utf-8") as fh:
            assert json.load(fh)["encoding"] == "pickle"
        loaded = load_distribution(json_path, validate=True)
        assert loaded == dist
        assert loaded["h"] == Fraction(1, 3)

    def test_missing_blob(self) -> None:
        with pytest.raises(ValueError, match="entries_pickle"):
            from_dict({"format_version": 1, "kind": "marginal", "encoding": "pickle"})


# ------------------------------------------------------------------ #
#  Error handling
# ------------------------------------------------------------------ #


class TestErrors:
    def test_save_wrong_type(self, json_path) -> None:
        with pytest.raises(TypeError, match="Distribution"):
            save_distribution({"a": 1}, json_path)

    def test_missing_file(self) -> None:
        with pytest.raises(FileNotFoundError):
            load_distribution("/nonexistent/dist.json")

    def test_corrupted_file(self, json_path) -> None:
        with open(json_path, "w", encoding="utf-8") as fh:
            fh.write("{not json")
        with pytest.raises(ValueError, match="Corrupted"):
            load_distribution(json_path)

    def test_missing_version(self) -> None:
        with pytest.raises(ValueError, match="format_version"):
            from_dict({"kind": "marginal", "entries": []})

    def test_future_version(self) -> None:
        with pytest.raises(ValueError, match="Unsupported"):
            from_dict({
                "format_version": FORMAT_VERSION + 1,
                "kind": "marginal",
                "entries": [],
            })

    def test_missing_kind(self) -> None:
        with pytest.raises(ValueError, match="kind"):
            from_dict({"format_version": 1, "entries": []})

    @pytest.mark.parametrize("version", ["1", 0, -1, 1.0, True, [1]])
    def test_invalid_version(self, version) -> None:
        with pytest.raises(ValueError, match="Unsupported"):
            from_dict({
                "format_version": version,
                "kind": "marginal",
                "entries": [],
            })

    def test_unknown_kind(self) -> None:
        with pytest.raises(ValueError, match="Unknown distribution kind"):
            from_dict({"format_version": 1, "kind": "mixture", "entries": []})

    def test_unknown_encoding(self) -> None:
        with pytest.raises(ValueError, match="encoding"):
            from_dict({"format_version": 1, "kind": "joint", "encoding": "xml"})

    def test_missing_entries(self) -> None:
        with pytest.raises(ValueError, match="entries"):
            from_dict({"format_version": 1, "kind": "joint"})

    def test_malformed_entry(self) -> None:
        with pytest.raises(ValueError, match="key"):
            from_dict({
                "format_version": 1,
                "kind": "marginal",
                "entries": [{"value": 1.0}],
            })


# ------------------------------------------------------------------ #
#  Probability validation
# ------------------------------------------------------------------ #


class TestValidation:
    def test_valid_marginal(self) -> None:
        validate_probabilities(Marginal({"a": 0.2, "b": 0.3, "c": 0.5}))

    def test_valid_conditional(self) -> None:
        validate_probabilities(_numeric_conditional())

    def test_out_of_range(self) -> None:
        with pytest.raises(ValueError, match=r"outside \[0, 1\]"):
            validate_probabilities(Marginal({"a": 1.5, "b": -0.5}))

    def test_not_normalized(self) -> None:
        with pytest.raises(ValueError, match="does not sum to 1"):
            validate_probabilities(Joint({("a", "b"): 0.2, ("a", "c"): 0.2}))

    def test_conditional_checked_per_group(self) -> None:
        # sums to 2 overall, but 1 within each conditioning outcome
        validate_probabilities(Partial({
            (("x0",), ("y0",)): 0.5,
            (("x1",), ("y0",)): 0.5,
            (("x0",), ("y1",)): 1.0,
        }))
        with pytest.raises(ValueError, match="given y"):
            validate_probabilities(Partial({
                (("x0",), ("y0",)): 0.5,
                (("x0",), ("y1",)): 0.5,
            }))

    def test_nan_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-finite"):
            validate_probabilities(Marginal({"a": float("nan")}))

    def test_nan_in_conditional_group_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-finite"):
            validate_probabilities(Partial({
                (("x0",), ("y0",)): float("nan"),
                (("x1",), ("y0",)): 1.0,
            }))

    def test_infinity_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-finite"):
            validate_probabilities(Marginal({"a": float("inf")}))

    def test_symbolic_labels_skipped(self) -> None:
        validate_probabilities(_symbolic_marginal())

    def test_empty_rejected(self) -> None:
        with pytest.raises(ValueError, match="no outcomes"):
            validate_probabilities(Marginal())

    def test_load_with_validation(self, json_path) -> None:
        save_distribution(Marginal({"a": 0.4, "b": 0.4}), json_path)
        assert len(load_distribution(json_path)) == 2
        with pytest.raises(ValueError, match="does not sum to 1"):
            load_distribution(json_path, validate=True)

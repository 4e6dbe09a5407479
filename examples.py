"""Example usage of the probspace package.

This example walks through the three subspaces of the distribution space:
- Marginal distributions of a single random variable X
- Joint distributions of a tuple of random variables (X₁, ..., Xₙ)
- Partial (conditional) distributions of X given Y
and shows display settings, LaTeX output and JSON persistence.
"""

import os
import tempfile

from probspace import (
    Conditional, DisplayOptions, Joint, Marginal, Partial,
    load_distribution, save_distribution, to_latex,
)


def marginal_example():
    """p_X(x; θ(X)) = θᵢ(X) for x = aᵢ."""
    print("=" * 60)
    print("Marginal distribution")
    print("=" * 60)

    p = Marginal({"a₁": "θ₁", "a₂": "θ₂", "a₃": "θ₃", "aₘ": "θₘ"})
    print(p)
    print(f"\n   p[a₂] = {p['a₂']}, p[b] = {p['b']}, |p| = {len(p)}")


def joint_example():
    """p(x₁ⁿ; θ(X₁ⁿ)) over tuples of outcomes."""
    print("\n" + "=" * 60)
    print("Joint distribution")
    print("=" * 60)

    q = Joint({
        ("a₁⁽¹⁾", "a₁⁽²⁾", "a₁⁽³⁾", "a₁⁽ⁿ⁾"): "θ₁",
        ("a₂⁽¹⁾", "a₁⁽²⁾", "a₁⁽³⁾", "a₁⁽ⁿ⁾"): "θ₂",
        ("a₃⁽¹⁾", "a₁⁽²⁾", "a₁⁽³⁾", "a₁⁽ⁿ⁾"): "θ₃",
        ("aₘ⁽¹⁾", "aₘ⁽²⁾", "aₘ⁽³⁾", "aₘ⁽ⁿ⁾"): "θₘ",
    })
    print(q)

    print("\n   Showing every outcome:")
    with DisplayOptions(threshold=len(q)):
        print(q)


def partial_example():
    """p(x | y; θ(X|Y)) keyed by (x-outcome, y-outcome) pairs."""
    print("\n" + "=" * 60)
    print("Partial / conditional distribution")
    print("=" * 60)

    r = Partial({
        (("a₁",), ("b₁",)): "θ₁",
        (("a₂",), ("b₁",)): "θ₂",
        (("a₃",), ("b₁",)): "θ₃",
        (("aₙ",), ("bₘ",)): "θₙₘ",
    })
    print(r)
    print(f"\n   LaTeX: {to_latex(r)}")


def persistence_example():
    """Save a numeric conditional distribution and load it back validated."""
    print("\n" + "=" * 60)
    print("Persistence")
    print("=" * 60)

    weather = Conditional({
        (("rain",), ("cloudy",)): 0.6,
        (("dry",), ("cloudy",)): 0.4,
        (("rain",), ("clear",)): 0.1,
        (("dry",), ("clear",)): 0.9,
    })
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "weather.json")
        save_distribution(weather, path)
        loaded = load_distribution(path, validate=True)
    print(loaded)
    print(f"\n   Round trip equal: {loaded == weather}")


def main():
    marginal_example()
    joint_example()
    partial_example()
    persistence_example()


if __name__ == "__main__":
    main()

"""Pure in-memory toy datasets."""

from __future__ import annotations

from typing import Callable, Dict, Tuple

import numpy as np

from ..core.types import Sample
from .registry import Dataset, register_dataset

_TRUTH_TABLES: Dict[str, Callable[[int, int], int]] = {
    "xor": lambda a, b: a ^ b,
    "and": lambda a, b: a & b,
    "or": lambda a, b: a | b,
}


def _truth_table(name: str) -> Dataset:
    gate = _TRUTH_TABLES[name]
    samples = tuple(
        Sample(inputs=(float(a), float(b)), targets=(float(gate(a, b)),))
        for a in (0, 1)
        for b in (0, 1)
    )
    return Dataset(
        name=name,
        samples=samples,
        n_inputs=2,
        n_outputs=1,
        provenance={"type": "truth_table", "gate": name},
    )


def _make_sine(n_points: int, seed: int, noise: float) -> Tuple[np.ndarray, np.ndarray]:
    rng = np.random.default_rng(seed)
    x = np.linspace(0.0, 1.0, n_points, dtype=np.float64)
    y = 0.5 + 0.4 * np.sin(2.0 * np.pi * x)
    if noise:
        y = y + noise * rng.standard_normal(size=y.shape)
    return x, y


@register_dataset("xor")
def xor(**_: object) -> Dataset:
    return _truth_table("xor")


@register_dataset("and")
def and_gate(**_: object) -> Dataset:
    return _truth_table("and")


@register_dataset("or")
def or_gate(**_: object) -> Dataset:
    return _truth_table("or")


@register_dataset("sine")
def sine(n_points: int = 32, seed: int = 0, noise: float = 0.0, **_: object) -> Dataset:
    """One period of a sine wave squeezed into ``(0.1, 0.9)`` for sigmoid outputs."""

    if n_points < 1:
        raise ValueError(f"n_points must be positive, got {n_points}")
    x, y = _make_sine(int(n_points), int(seed), float(noise))
    samples = tuple(
        Sample(inputs=(float(xi),), targets=(float(yi),)) for xi, yi in zip(x, y)
    )
    return Dataset(
        name="sine",
        samples=samples,
        n_inputs=1,
        n_outputs=1,
        provenance={
            "type": "synthetic",
            "n_points": int(n_points),
            "seed": int(seed),
            "noise": float(noise),
        },
    )


__all__ = ["xor", "and_gate", "or_gate", "sine"]

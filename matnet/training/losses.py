"""Loss registry used to report training progress."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable

import numpy as np

from ..core.types import Array

LossFn = Callable[[Array, Array], float]


@dataclass(frozen=True)
class Loss:
    """Named loss over stacked predictions and targets."""

    name: str
    fn: LossFn

    def __call__(self, predictions: Array, targets: Array) -> float:
        return self.fn(predictions, targets)


class LossRegistry:
    """Central registry for loss functions."""

    def __init__(self) -> None:
        self._registry: Dict[str, Loss] = {}

    def register(self, name: str, fn: LossFn) -> None:
        self._registry[name] = Loss(name, fn)

    def get(self, name: str) -> Loss:
        if name not in self._registry:
            available = ", ".join(self.names())
            raise KeyError(f"Unknown loss {name!r}. Available losses: {available}")
        return self._registry[name]

    def names(self) -> Iterable[str]:
        return sorted(self._registry)


REGISTRY = LossRegistry()


def _mse(pred: Array, target: Array) -> float:
    return float(np.mean(np.square(pred - target)))


def _sse(pred: Array, target: Array) -> float:
    return float(0.5 * np.sum(np.square(pred - target)))


def _mae(pred: Array, target: Array) -> float:
    return float(np.mean(np.abs(pred - target)))


REGISTRY.register("mse", _mse)
REGISTRY.register("sse", _sse)
REGISTRY.register("mae", _mae)

__all__ = ["Loss", "LossRegistry", "REGISTRY"]

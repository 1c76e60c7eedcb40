"""Core typing contracts for matnet."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Sequence, Tuple

import numpy as np

if TYPE_CHECKING:  # pragma: no cover - imports for annotations only
    from .matrix import Matrix
    from .network import Network

Array = np.ndarray


@dataclass(frozen=True)
class WeightRange:
    """Uniform range used to randomise freshly created weights."""

    low: float = -1.0
    high: float = 1.0
    as_int: bool = False


@dataclass(frozen=True)
class Sample:
    """A single training example."""

    inputs: Tuple[float, ...]
    targets: Tuple[float, ...]


@dataclass
class ForwardTrace:
    """Values captured during the forward pass.

    ``activations`` starts with the input column and holds one post-activation
    column per layer after it. ``pre_activations`` holds the raw weighted sums,
    one per weight matrix, so ``pre_activations[i]`` produced
    ``activations[i + 1]``.
    """

    activations: List["Matrix"]
    pre_activations: List["Matrix"]

    @property
    def output(self) -> "Matrix":
        return self.activations[-1]


@dataclass(frozen=True)
class TrainResult:
    """Summary returned by :meth:`matnet.training.trainer.OnlineTrainer.run`."""

    epochs: int
    final_loss: float
    history: Sequence[float] = field(default_factory=tuple)


@dataclass(frozen=True)
class RunResult:
    """Summary returned by :func:`matnet.training.pipelines.run_pipeline`."""

    epochs: int
    final_loss: float
    metrics_path: str
    summary_path: str = ""
    network: "Network | None" = field(default=None, repr=False, compare=False)

"""Deterministic online training loop for matnet networks."""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

import numpy as np

from ..core.network import Network
from ..core.types import Sample, TrainResult
from .losses import REGISTRY as LOSS_REGISTRY

logger = logging.getLogger(__name__)


class OnlineTrainer:
    """Visit every sample once per epoch, one ``Network.train`` step each."""

    def __init__(
        self,
        network: Network,
        callbacks: Sequence[object] | None = None,
        loss: str = "mse",
    ) -> None:
        self.network = network
        self.callbacks = list(callbacks or [])
        self.loss_fn = LOSS_REGISTRY.get(loss)

    def run(
        self,
        samples: Sequence[Sample],
        epochs: int,
        seed: int = 0,
        *,
        shuffle: bool = True,
        target_loss: float | None = None,
    ) -> TrainResult:
        if epochs < 1:
            raise ValueError(f"epochs must be at least 1, got {epochs}")
        if not samples:
            raise ValueError("Cannot train on an empty sample list")

        rng = np.random.default_rng(seed)
        history: list[float] = []
        completed = 0
        for epoch in range(1, epochs + 1):
            order = rng.permutation(len(samples)) if shuffle else range(len(samples))
            for idx in order:
                sample = samples[int(idx)]
                self.network.train(sample.inputs, sample.targets)

            metrics = self.evaluate(samples)
            history.append(metrics["loss"])
            completed = epoch
            logger.debug("epoch %d: loss=%.6f", epoch, metrics["loss"])
            self._emit_epoch(epoch, metrics)

            if target_loss is not None and metrics["loss"] <= target_loss:
                logger.info(
                    "Reached target loss %.6f after %d epochs", target_loss, epoch
                )
                break

        return TrainResult(
            epochs=completed,
            final_loss=history[-1],
            history=tuple(history),
        )

    def evaluate(self, samples: Sequence[Sample]) -> Mapping[str, float]:
        """Return the loss and the largest absolute error over ``samples``."""

        predictions = np.array(
            [self.network.predict(sample.inputs).to_list() for sample in samples],
            dtype=np.float64,
        )
        targets = np.array([sample.targets for sample in samples], dtype=np.float64)
        return {
            "loss": self.loss_fn(predictions, targets),
            "max_abs_error": float(np.max(np.abs(predictions - targets))),
        }

    def _emit_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        for callback in self.callbacks:
            if hasattr(callback, "on_epoch"):
                callback.on_epoch(epoch, metrics)  # type: ignore[attr-defined]
            elif callable(callback):
                callback(epoch, metrics)


__all__ = ["OnlineTrainer"]

"""Feed-forward network trained one sample at a time with backpropagation."""

from __future__ import annotations

import logging
import numbers
from typing import TYPE_CHECKING, List, Sequence, Tuple

import numpy as np

from .activations import Activation
from .errors import DimensionMismatchError, InvalidConfigurationError
from .matrix import Matrix, product, subtract, transpose
from .types import ForwardTrace, WeightRange

if TYPE_CHECKING:  # pragma: no cover - imports for annotations only
    from ..config import NetworkConfig

logger = logging.getLogger(__name__)

DEFAULT_BIAS = 1.0
DEFAULT_LEARNING_RATE = 0.1


class Network:
    """Fully connected network with a single activation pair for every layer.

    Weight matrix ``i`` maps layer ``i`` to layer ``i + 1`` and has shape
    ``node_counts[i + 1] x (node_counts[i] + 1)``. The extra last column is
    the weight applied to the constant ``bias`` input that is appended to
    every layer's activation before the product.
    """

    def __init__(
        self,
        node_counts: Sequence[int],
        activation: Activation,
        *,
        bias: float | None = None,
        learning_rate: float | None = None,
        randomize_weights: WeightRange | None = None,
        weight_init_value: float | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        for n in node_counts:
            if isinstance(n, bool) or not isinstance(n, numbers.Integral):
                raise InvalidConfigurationError(f"Layer size must be an integer, got {n!r}")
        counts = [int(n) for n in node_counts]
        if len(counts) < 3:
            raise InvalidConfigurationError(
                f"Network needs 3 or more layers, got {len(counts)}: {counts}"
            )
        if any(n < 1 for n in counts):
            raise InvalidConfigurationError(f"Every layer needs at least one node: {counts}")

        self._node_counts: Tuple[int, ...] = tuple(counts)
        self._activation = activation
        self._bias = DEFAULT_BIAS if bias is None else float(bias)
        self._learning_rate = (
            DEFAULT_LEARNING_RATE if learning_rate is None else float(learning_rate)
        )

        rng = rng if rng is not None else np.random.default_rng()
        weights: List[Matrix] = []
        for before, after in zip(counts[:-1], counts[1:]):
            matrix = Matrix(after, before + 1)
            if randomize_weights is not None:
                matrix.randomize(
                    randomize_weights.low,
                    randomize_weights.high,
                    randomize_weights.as_int,
                    rng=rng,
                )
            if weight_init_value is not None:
                matrix.apply(lambda _value: float(weight_init_value))
            weights.append(matrix)
        self._weights = weights

        logger.debug(
            "Built network %s (activation=%s, bias=%s, learning_rate=%s)",
            list(self._node_counts),
            activation.name,
            self._bias,
            self._learning_rate,
        )

    @classmethod
    def from_config(cls, config: "NetworkConfig") -> "Network":
        return cls(
            config.node_counts,
            config.activation,
            bias=config.bias,
            learning_rate=config.learning_rate,
            randomize_weights=config.randomize_weights,
            weight_init_value=config.weight_init_value,
            rng=np.random.default_rng(config.seed),
        )

    # ------------------------------------------------------------------
    # Read-only accessors

    @property
    def node_counts(self) -> Tuple[int, ...]:
        return self._node_counts

    @property
    def layer_count(self) -> int:
        return len(self._node_counts)

    @property
    def weights(self) -> Tuple[Matrix, ...]:
        """The weight matrices owned by this network, input side first."""

        return tuple(self._weights)

    @property
    def activation(self) -> Activation:
        return self._activation

    @property
    def bias(self) -> float:
        return self._bias

    @property
    def learning_rate(self) -> float:
        return self._learning_rate

    # ------------------------------------------------------------------
    # Inference

    def forward(self, inputs: Sequence[float]) -> ForwardTrace:
        """Run the forward pass and keep every intermediate value."""

        if len(inputs) != self._node_counts[0]:
            raise DimensionMismatchError(
                f"Input length {len(inputs)} does not match "
                f"input node count {self._node_counts[0]}"
            )

        current = Matrix.from_sequence(inputs)
        activations: List[Matrix] = [current.clone()]
        pre_activations: List[Matrix] = []
        for W in self._weights:
            augmented = current.clone().append_row([self._bias])
            z = product(W, augmented)
            pre_activations.append(z.clone())
            current = z.apply(self._activation.y)
            activations.append(current.clone())
        return ForwardTrace(activations=activations, pre_activations=pre_activations)

    def predict(
        self, inputs: Sequence[float], return_all_layers: bool = False
    ) -> Matrix | List[Matrix]:
        """Return the output column, or every layer's activation when asked.

        With ``return_all_layers`` the list starts with the input column.
        """

        trace = self.forward(inputs)
        if return_all_layers:
            return trace.activations
        return trace.output

    # ------------------------------------------------------------------
    # Training

    def train(self, inputs: Sequence[float], desired_output: Sequence[float]) -> None:
        """Apply one backpropagation step for a single sample."""

        trace = self.forward(inputs)
        output = trace.output
        if len(desired_output) != output.rows:
            raise DimensionMismatchError(
                f"Target length {len(desired_output)} does not match "
                f"output node count {output.rows}"
            )

        error = subtract(Matrix.from_sequence(desired_output), output)
        for idx in reversed(range(len(self._weights))):
            W = self._weights[idx]
            gradient = (
                trace.pre_activations[idx]
                .clone()
                .apply(self._activation.dydx)
                .multiply(error)
                .multiply(self._learning_rate)
            )

            deltas = product(gradient, transpose(trace.activations[idx]))
            deltas.append_column(gradient.clone().multiply(self._bias))
            W.add(deltas)

            error = product(transpose(W.clone().remove_column(W.cols - 1)), error)

    def __repr__(self) -> str:
        return (
            f"Network(node_counts={list(self._node_counts)}, "
            f"activation={self._activation.name!r}, bias={self._bias}, "
            f"learning_rate={self._learning_rate})"
        )


__all__ = ["Network", "DEFAULT_BIAS", "DEFAULT_LEARNING_RATE"]

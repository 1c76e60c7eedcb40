"""Activation function pairs for matnet."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, Iterable

UnaryFn = Callable[[float], float]


@dataclass(frozen=True)
class Activation:
    """A forward transform ``y`` and its derivative ``dydx``.

    Both functions take a single pre-activation value.
    """

    name: str
    y: UnaryFn
    dydx: UnaryFn


def sigmoid(x: float) -> float:
    """Return the logistic sigmoid of ``x``."""

    # Split on sign so ``math.exp`` never overflows.
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    z = math.exp(x)
    return z / (1.0 + z)


def sigmoid_deriv(x: float) -> float:
    s = sigmoid(x)
    return s * (1.0 - s)


def tanh(x: float) -> float:
    return math.tanh(x)


def tanh_deriv(x: float) -> float:
    return 1.0 - math.tanh(x) ** 2


def relu(x: float) -> float:
    """Return the ReLU activation."""

    return x if x > 0.0 else 0.0


def relu_deriv(x: float) -> float:
    return 1.0 if x > 0.0 else 0.0


def identity(x: float) -> float:
    return x


def identity_deriv(x: float) -> float:
    return 1.0


SIGMOID = Activation("sigmoid", sigmoid, sigmoid_deriv)
TANH = Activation("tanh", tanh, tanh_deriv)
RELU = Activation("relu", relu, relu_deriv)
IDENTITY = Activation("identity", identity, identity_deriv)

_REGISTRY: Dict[str, Activation] = {}


def register_activation(activation: Activation) -> Activation:
    """Make ``activation`` available to :func:`get_activation` by name."""

    _REGISTRY[activation.name] = activation
    return activation


def get_activation(name: str) -> Activation:
    try:
        return _REGISTRY[name]
    except KeyError:
        available = ", ".join(available_activations())
        raise KeyError(f"Unknown activation {name!r}. Available activations: {available}") from None


def available_activations() -> Iterable[str]:
    return sorted(_REGISTRY)


for _builtin in (SIGMOID, TANH, RELU, IDENTITY):
    register_activation(_builtin)


__all__ = [
    "Activation",
    "SIGMOID",
    "TANH",
    "RELU",
    "IDENTITY",
    "available_activations",
    "get_activation",
    "register_activation",
    "relu",
    "sigmoid",
    "tanh",
]

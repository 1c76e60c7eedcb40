"""Core numerical primitives for matnet."""

from . import activations, errors, matrix, network, types

__all__ = ["activations", "errors", "matrix", "network", "types"]

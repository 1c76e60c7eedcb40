"""matnet public API."""

from .config import NetworkConfig, load_config, parse_network_config
from .core import activations  # noqa: F401
from .core import types  # noqa: F401
from .core.errors import (
    DimensionMismatchError,
    IndexOutOfRangeError,
    InvalidConfigurationError,
    InvalidShapeError,
    MatnetError,
)
from .core.matrix import Matrix
from .core.network import Network
from .formatting import format_matrix, print_matrix
from .training.pipelines import load_preset, presets, run_pipeline
from .training.trainer import OnlineTrainer

__version__ = "0.1.0"

__all__ = [
    "Matrix",
    "Network",
    "NetworkConfig",
    "OnlineTrainer",
    "activations",
    "types",
    "MatnetError",
    "DimensionMismatchError",
    "IndexOutOfRangeError",
    "InvalidConfigurationError",
    "InvalidShapeError",
    "format_matrix",
    "print_matrix",
    "load_config",
    "parse_network_config",
    "load_preset",
    "presets",
    "run_pipeline",
]

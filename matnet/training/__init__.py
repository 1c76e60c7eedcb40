"""Training loop, losses and run pipelines."""

from .losses import REGISTRY as LOSS_REGISTRY
from .trainer import OnlineTrainer

__all__ = ["LOSS_REGISTRY", "OnlineTrainer"]

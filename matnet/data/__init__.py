"""Dataset registry and built-in toy datasets."""

# Ensure built-in datasets register themselves when the package is imported.
from . import toy as _toy  # noqa: F401
from .registry import Dataset, Sample, available_datasets, get_dataset, register_dataset

__all__ = [
    "Dataset",
    "Sample",
    "available_datasets",
    "get_dataset",
    "register_dataset",
]

"""Dataset registry and metadata contracts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, MutableMapping, Tuple

from ..core.types import Sample


@dataclass(frozen=True)
class Dataset:
    """An in-memory list of samples with fixed input and output widths.

    Attributes
    ----------
    name:
        Registry identifier of the dataset.
    samples:
        Every example, in a stable order.
    n_inputs:
        Length of each sample's ``inputs`` tuple.
    n_outputs:
        Length of each sample's ``targets`` tuple.
    provenance:
        Free-form metadata describing how the samples were generated, kept so
        runs remain reproducible.
    """

    name: str
    samples: Tuple[Sample, ...]
    n_inputs: int
    n_outputs: int
    provenance: Dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.samples)


DatasetFactory = Callable[..., Dataset]


_REGISTRY: MutableMapping[str, DatasetFactory] = {}


def register_dataset(
    name: str | None = None,
    factory: DatasetFactory | None = None,
) -> Callable[[DatasetFactory], DatasetFactory] | DatasetFactory:
    """Register a dataset factory.

    ``register_dataset`` can be used both as a decorator::

        @register_dataset("xor")
        def make_xor(**kwargs):
            ...

    or directly::

        register_dataset("xor", make_xor)
    """

    def _decorator(func: DatasetFactory) -> DatasetFactory:
        _REGISTRY[str(name or func.__name__)] = func
        return func

    if factory is not None:
        return _decorator(factory)
    if name is None:
        raise TypeError("register_dataset requires a name when used without a decorator")
    return _decorator


def get_dataset(name: str, /, **options: Any) -> Dataset:
    """Build the dataset registered as ``name``."""

    if name not in _REGISTRY:
        available = ", ".join(available_datasets())
        raise KeyError(f"Unknown dataset {name!r}. Available datasets: {available}")

    dataset = _REGISTRY[name](**options)
    _validate(dataset)
    return dataset


def available_datasets() -> Iterable[str]:
    """Return the sorted list of available dataset identifiers."""

    return sorted(_REGISTRY)


def _validate(dataset: Dataset) -> None:
    if not dataset.samples:
        raise ValueError(f"Dataset {dataset.name!r} has no samples")
    for idx, sample in enumerate(dataset.samples):
        if len(sample.inputs) != dataset.n_inputs:
            raise ValueError(
                f"Sample {idx} of {dataset.name!r} has {len(sample.inputs)} inputs, "
                f"expected {dataset.n_inputs}"
            )
        if len(sample.targets) != dataset.n_outputs:
            raise ValueError(
                f"Sample {idx} of {dataset.name!r} has {len(sample.targets)} targets, "
                f"expected {dataset.n_outputs}"
            )


__all__ = [
    "Dataset",
    "Sample",
    "available_datasets",
    "get_dataset",
    "register_dataset",
]

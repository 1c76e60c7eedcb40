"""Construction-time configuration for :class:`matnet.core.network.Network`."""

from __future__ import annotations

import json
import numbers
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple

from .core.activations import SIGMOID, Activation, get_activation
from .core.errors import InvalidConfigurationError
from .core.types import WeightRange

_NETWORK_KEYS = {
    "node_counts",
    "activation",
    "bias",
    "learning_rate",
    "randomize_weights",
    "weight_init_value",
    "seed",
}
_RANGE_KEYS = {"from", "to", "is_int"}


@dataclass(frozen=True)
class NetworkConfig:
    """Resolved options used to build a network."""

    node_counts: Tuple[int, ...]
    activation: Activation = SIGMOID
    bias: float | None = None
    learning_rate: float | None = None
    randomize_weights: WeightRange | None = None
    weight_init_value: float | None = None
    seed: int | None = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serialisable view that round-trips through the parser."""

        payload: Dict[str, Any] = {
            "node_counts": list(self.node_counts),
            "activation": self.activation.name,
        }
        if self.bias is not None:
            payload["bias"] = self.bias
        if self.learning_rate is not None:
            payload["learning_rate"] = self.learning_rate
        if self.randomize_weights is not None:
            payload["randomize_weights"] = {
                "from": self.randomize_weights.low,
                "to": self.randomize_weights.high,
                "is_int": self.randomize_weights.as_int,
            }
        if self.weight_init_value is not None:
            payload["weight_init_value"] = self.weight_init_value
        if self.seed is not None:
            payload["seed"] = self.seed
        return payload


def _number(value: object, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidConfigurationError(f"'{key}' must be a number, got {value!r}")
    return float(value)


def _optional_number(raw: Mapping[str, object], key: str) -> float | None:
    value = raw.get(key)
    return None if value is None else _number(value, key)


def _node_counts(value: object) -> Tuple[int, ...]:
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise InvalidConfigurationError(f"'node_counts' must be a list of integers, got {value!r}")
    counts = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, numbers.Integral):
            raise InvalidConfigurationError(f"Layer size must be an integer, got {item!r}")
        counts.append(int(item))
    if len(counts) < 3:
        raise InvalidConfigurationError(
            f"Network needs 3 or more layers, got {len(counts)}: {counts}"
        )
    return tuple(counts)


def _weight_range(value: object) -> WeightRange | None:
    if value is None or value is False:
        return None
    if value is True:
        return WeightRange()
    if not isinstance(value, Mapping):
        raise InvalidConfigurationError(
            f"'randomize_weights' must be a mapping or a boolean, got {value!r}"
        )
    unknown = set(value) - _RANGE_KEYS
    if unknown:
        raise InvalidConfigurationError(
            f"Unknown 'randomize_weights' keys: {', '.join(sorted(unknown))}"
        )
    low = _number(value.get("from", -1.0), "randomize_weights.from")
    high = _number(value.get("to", 1.0), "randomize_weights.to")
    if high < low:
        raise InvalidConfigurationError(
            f"'randomize_weights' range is empty: from={low} to={high}"
        )
    return WeightRange(low=low, high=high, as_int=bool(value.get("is_int", False)))


def _activation(value: object) -> Activation:
    if value is None:
        return SIGMOID
    if isinstance(value, Activation):
        return value
    try:
        return get_activation(str(value))
    except KeyError as exc:
        raise InvalidConfigurationError(str(exc.args[0])) from exc


def parse_network_config(raw: Mapping[str, object]) -> NetworkConfig:
    """Validate ``raw`` and return a :class:`NetworkConfig`."""

    if not isinstance(raw, Mapping):
        raise InvalidConfigurationError(f"Network config must be a mapping, got {type(raw).__name__}")
    unknown = set(raw) - _NETWORK_KEYS
    if unknown:
        raise InvalidConfigurationError(f"Unknown network options: {', '.join(sorted(unknown))}")
    if "node_counts" not in raw:
        raise InvalidConfigurationError("Network config is missing 'node_counts'")

    seed = raw.get("seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, numbers.Integral)):
        raise InvalidConfigurationError(f"'seed' must be an integer, got {seed!r}")

    return NetworkConfig(
        node_counts=_node_counts(raw["node_counts"]),
        activation=_activation(raw.get("activation")),
        bias=_optional_number(raw, "bias"),
        learning_rate=_optional_number(raw, "learning_rate"),
        randomize_weights=_weight_range(raw.get("randomize_weights")),
        weight_init_value=_optional_number(raw, "weight_init_value"),
        seed=None if seed is None else int(seed),
    )


def load_config(path: str | Path) -> Mapping[str, object]:
    """Read a JSON or YAML config file that decodes to a mapping."""

    path = Path(path)
    text = path.read_text()
    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        try:
            import yaml  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("PyYAML is required to load YAML configs") from exc
        data = yaml.safe_load(text) or {}
    elif suffix == ".json":
        data = json.loads(text or "{}")
    else:
        raise ValueError(f"Unsupported config file type: {path.suffix}")

    if not isinstance(data, Mapping):
        raise TypeError(f"Config {path.name} must decode to a mapping")
    return data


__all__ = ["NetworkConfig", "load_config", "parse_network_config"]

"""Pipeline assembly: presets, dataset, network, trainer and run artifacts."""

from __future__ import annotations

import json
import time
from copy import deepcopy
from pathlib import Path
from typing import Dict, Mapping, Sequence

from ..config import parse_network_config
from ..core.errors import DimensionMismatchError
from ..core.network import Network
from ..core.types import RunResult
from ..data import get_dataset
from ..reporting.metrics import CsvSink, JsonlSink
from ..reporting.plots import LossCurve
from ..reporting.summary import write_summary
from .trainer import OnlineTrainer

_PRESETS: Dict[str, Mapping[str, object]] = {
    "xor": {
        "network": {
            "node_counts": [2, 4, 1],
            "activation": "sigmoid",
            "learning_rate": 0.5,
            "randomize_weights": {"from": -1.0, "to": 1.0, "is_int": False},
            "seed": 3,
        },
        "data": {"name": "xor", "options": {}},
        "train": {
            "epochs": 3000,
            "seed": 0,
            "shuffle": True,
            "loss": "mse",
            "target_loss": 0.002,
            "run_dir": "runs/xor",
            "enable_plots": False,
        },
    },
    "and": {
        "network": {
            "node_counts": [2, 2, 1],
            "activation": "sigmoid",
            "learning_rate": 0.5,
            "randomize_weights": {"from": -1.0, "to": 1.0, "is_int": False},
            "seed": 1,
        },
        "data": {"name": "and", "options": {}},
        "train": {
            "epochs": 1000,
            "seed": 0,
            "shuffle": True,
            "loss": "mse",
            "target_loss": 0.005,
            "run_dir": "runs/and",
            "enable_plots": False,
        },
    },
    "sine": {
        "network": {
            "node_counts": [1, 8, 1],
            "activation": "sigmoid",
            "learning_rate": 0.3,
            "randomize_weights": {"from": -1.0, "to": 1.0, "is_int": False},
            "seed": 7,
        },
        "data": {"name": "sine", "options": {"n_points": 32, "seed": 0}},
        "train": {
            "epochs": 500,
            "seed": 0,
            "shuffle": True,
            "loss": "mse",
            "run_dir": "runs/sine",
            "enable_plots": False,
        },
    },
}


def presets() -> Mapping[str, Mapping[str, object]]:
    return {name: deepcopy(cfg) for name, cfg in _PRESETS.items()}


def load_preset(name: str) -> Dict[str, object]:
    try:
        return deepcopy(dict(_PRESETS[name]))
    except KeyError:
        available = ", ".join(sorted(_PRESETS))
        raise KeyError(f"Unknown preset {name!r}. Available presets: {available}") from None


def merge_config(base: Mapping[str, object], override: Mapping[str, object]) -> Dict[str, object]:
    """Deep-merge ``override`` into a copy of ``base``."""

    merged = deepcopy(dict(base))
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = merge_config(merged[key], value)  # type: ignore[arg-type]
        else:
            merged[key] = deepcopy(value)
    return merged


def run_pipeline(config: Mapping[str, object]) -> RunResult:
    """Train a network as described by ``config`` and write run artifacts."""

    for section in ("network", "data", "train"):
        if not isinstance(config.get(section), Mapping):
            raise KeyError(f"Config is missing the '{section}' section")

    data_cfg = dict(config["data"])  # type: ignore[arg-type]
    train_cfg = dict(config["train"])  # type: ignore[arg-type]
    network_cfg = parse_network_config(config["network"])  # type: ignore[arg-type]

    dataset = get_dataset(str(data_cfg["name"]), **dict(data_cfg.get("options", {})))
    counts = network_cfg.node_counts
    if counts[0] != dataset.n_inputs:
        raise DimensionMismatchError(
            f"Network expects {counts[0]} inputs but dataset {dataset.name!r} "
            f"provides {dataset.n_inputs}"
        )
    if counts[-1] != dataset.n_outputs:
        raise DimensionMismatchError(
            f"Network produces {counts[-1]} outputs but dataset {dataset.name!r} "
            f"provides {dataset.n_outputs} targets"
        )

    seed = int(train_cfg.get("seed", 0))
    epochs = int(train_cfg.get("epochs", 1))
    loss_name = str(train_cfg.get("loss", "mse"))
    target_loss = train_cfg.get("target_loss")
    run_dir = _resolve_run_dir(train_cfg, dataset.name)
    run_dir.mkdir(parents=True, exist_ok=True)

    network = Network.from_config(network_cfg)
    _print_startup_summary(
        dataset_name=dataset.name,
        samples=len(dataset),
        node_counts=counts,
        activation=network.activation.name,
        learning_rate=network.learning_rate,
        bias=network.bias,
        loss=loss_name,
    )

    jsonl = JsonlSink(run_dir / "metrics.jsonl", split="train", seed=seed)
    csv_sink = CsvSink(run_dir / "metrics.csv", split="train")
    curve = LossCurve(run_dir, enable_plots=bool(train_cfg.get("enable_plots", False)))

    trainer = OnlineTrainer(
        network,
        callbacks=[jsonl, csv_sink, curve],
        loss=loss_name,
    )
    result = trainer.run(
        dataset.samples,
        epochs=epochs,
        seed=seed,
        shuffle=bool(train_cfg.get("shuffle", True)),
        target_loss=None if target_loss is None else float(target_loss),
    )
    curve.close()

    summary_path = write_summary(
        jsonl.path, run_dir / "summary.json", tail=int(train_cfg.get("summary_tail", 32))
    )
    resolved = {
        "network": network_cfg.to_dict(),
        "data": json.loads(json.dumps(data_cfg)),
        "train": json.loads(json.dumps(train_cfg)),
        "dataset": dataset.provenance,
    }
    (run_dir / "config.json").write_text(json.dumps(resolved, indent=2))

    return RunResult(
        epochs=result.epochs,
        final_loss=result.final_loss,
        metrics_path=str(jsonl.path),
        summary_path=summary_path,
        network=network,
    )


def _resolve_run_dir(train_cfg: Mapping[str, object], dataset: str) -> Path:
    if train_cfg.get("run_dir"):
        return Path(str(train_cfg["run_dir"]))
    timestamp = time.strftime("%Y%m%d-%H%M%S")
    return Path("runs") / timestamp / dataset


def _print_startup_summary(
    *,
    dataset_name: str,
    samples: int,
    node_counts: Sequence[int],
    activation: str,
    learning_rate: float,
    bias: float,
    loss: str,
) -> None:
    params = sum((node_counts[i] + 1) * node_counts[i + 1] for i in range(len(node_counts) - 1))
    print("=== matnet run ===")
    print(f"Dataset       : {dataset_name} ({samples} samples)")
    print(f"Layers        : {list(node_counts)}")
    print(f"Activation    : {activation}")
    print(f"Learning rate : {learning_rate}")
    print(f"Bias          : {bias}")
    print(f"Loss          : {loss}")
    print(f"Parameters    : {params}")
    print("==================")


__all__ = ["load_preset", "merge_config", "presets", "run_pipeline"]

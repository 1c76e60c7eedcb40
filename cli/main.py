"""Command line entry point for matnet training runs."""

from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path
from typing import Iterable, List

from matnet.config import load_config
from matnet.formatting import format_matrix
from matnet.training import pipelines


def configure_logging() -> None:
    """Set the log level from ``MATNET_LOG_LEVEL`` (default ``WARNING``)."""

    level_name = os.getenv("MATNET_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _parse_vector(text: str) -> List[float]:
    try:
        return [float(part) for part in text.split(",") if part.strip()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Not a comma separated vector: {text!r}") from exc


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    preset_names = sorted(pipelines.presets().keys())
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--preset",
        choices=preset_names,
        default="xor",
        help="Preset configuration to execute",
    )
    parser.add_argument("--config", type=Path, help="Optional JSON/YAML config override")
    parser.add_argument("--epochs", type=int, help="Override the number of training epochs")
    parser.add_argument("--seed", type=int, help="Seed used for sample shuffling")
    parser.add_argument("--run-dir", help="Directory receiving metrics and summaries")
    parser.add_argument(
        "--enable-plots", action="store_true", help="Save a loss curve as loss.png"
    )
    parser.add_argument(
        "--predict",
        type=_parse_vector,
        action="append",
        default=[],
        metavar="X1,X2,...",
        help="Input vector to run through the trained network (repeatable)",
    )
    parser.add_argument(
        "--show-weights", action="store_true", help="Print the trained weight matrices"
    )
    parser.add_argument(
        "--list-presets", action="store_true", help="List available presets and exit"
    )
    parser.add_argument(
        "--dump-config", type=Path, help="Dump the resolved config to a JSON file"
    )
    return parser.parse_args(argv)


def main(argv: Iterable[str] | None = None) -> None:
    args = parse_args(argv)
    configure_logging()

    if args.list_presets:
        for name in sorted(pipelines.presets().keys()):
            print(name)
        raise SystemExit(0)

    config = pipelines.load_preset(args.preset)
    if args.config:
        override = load_config(args.config)
        if {"network", "data", "train"} <= set(override.keys()):
            config = json.loads(json.dumps(override))
        else:
            config = pipelines.merge_config(config, override)

    train_cfg = config.setdefault("train", {})
    if args.epochs is not None:
        train_cfg["epochs"] = int(args.epochs)
    if args.seed is not None:
        train_cfg["seed"] = int(args.seed)
    if args.run_dir:
        train_cfg["run_dir"] = args.run_dir
    if args.enable_plots:
        train_cfg["enable_plots"] = True

    if args.dump_config:
        args.dump_config.parent.mkdir(parents=True, exist_ok=True)
        args.dump_config.write_text(json.dumps(config, indent=2))

    result = pipelines.run_pipeline(config)
    network = result.network

    if args.show_weights and network is not None:
        for idx, weights in enumerate(network.weights):
            print(f"W{idx} ({weights.rows}x{weights.cols}):")
            print(format_matrix(weights))

    predictions = []
    for vector in args.predict:
        output = network.predict(vector)
        predictions.append({"inputs": vector, "outputs": output.to_list()})

    payload = {
        "epochs": result.epochs,
        "final_loss": result.final_loss,
        "metrics": result.metrics_path,
        "summary": result.summary_path,
    }
    if predictions:
        payload["predictions"] = predictions
    print(json.dumps(payload, sort_keys=True))


if __name__ == "__main__":
    main()

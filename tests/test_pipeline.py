import json
from pathlib import Path

import pytest

from matnet.core.errors import DimensionMismatchError
from matnet.data import available_datasets, get_dataset
from matnet.training import pipelines


def _sine_config(run_dir: Path) -> dict:
    config = pipelines.load_preset("sine")
    config["data"]["options"] = {"n_points": 8, "seed": 0}
    config["train"].update({"epochs": 4, "seed": 11, "run_dir": str(run_dir)})
    return config


def test_pipeline_produces_artifacts(tmp_path):
    result = pipelines.run_pipeline(_sine_config(tmp_path / "run"))

    assert result.epochs == 4
    assert result.network is not None
    metrics = [
        json.loads(line)
        for line in Path(result.metrics_path).read_text().splitlines()
        if line
    ]
    assert [entry["epoch"] for entry in metrics] == [1, 2, 3, 4]
    assert all(entry["split"] == "train" and entry["seed"] == 11 for entry in metrics)
    assert metrics[-1]["loss"] == pytest.approx(result.final_loss)

    run_dir = tmp_path / "run"
    assert (run_dir / "metrics.csv").exists()
    summary = json.loads(Path(result.summary_path).read_text())
    assert summary["records"] == 4
    resolved = json.loads((run_dir / "config.json").read_text())
    assert resolved["network"]["node_counts"] == [1, 8, 1]
    assert resolved["dataset"]["type"] == "synthetic"


def test_pipeline_determinism(tmp_path):
    first = pipelines.run_pipeline(_sine_config(tmp_path / "run1"))
    second = pipelines.run_pipeline(_sine_config(tmp_path / "run2"))
    assert Path(first.metrics_path).read_text() == Path(second.metrics_path).read_text()


def test_pipeline_rejects_mismatched_network(tmp_path):
    config = _sine_config(tmp_path / "run")
    config["network"]["node_counts"] = [2, 3, 1]
    with pytest.raises(DimensionMismatchError):
        pipelines.run_pipeline(config)


def test_pipeline_requires_every_section():
    with pytest.raises(KeyError, match="train"):
        pipelines.run_pipeline({"network": {}, "data": {}})


def test_presets_are_copies():
    config = pipelines.load_preset("xor")
    config["train"]["epochs"] = 1
    assert pipelines.load_preset("xor")["train"]["epochs"] != 1
    assert set(pipelines.presets()) == {"xor", "and", "sine"}
    with pytest.raises(KeyError, match="Available presets"):
        pipelines.load_preset("mnist")


def test_merge_config_is_deep():
    merged = pipelines.merge_config({"train": {"epochs": 5, "seed": 1}}, {"train": {"epochs": 2}})
    assert merged == {"train": {"epochs": 2, "seed": 1}}


def test_toy_datasets():
    assert {"xor", "and", "or", "sine"} <= set(available_datasets())
    xor = get_dataset("xor")
    assert len(xor) == 4
    assert [s.targets[0] for s in xor.samples] == [0.0, 1.0, 1.0, 0.0]
    sine = get_dataset("sine", n_points=5)
    assert sine.n_inputs == 1 and len(sine) == 5
    assert all(0.1 - 1e-9 <= s.targets[0] <= 0.9 + 1e-9 for s in sine.samples)
    with pytest.raises(KeyError):
        get_dataset("mnist")

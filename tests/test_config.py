"""Tests for the YAML configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from pose_offsets.config import OffsetConfig, load_config
from pose_offsets.offsets import DEFAULT_EPSILON, DEFAULT_RESOLUTION


def test_defaults() -> None:
    cfg = OffsetConfig(model_path="model.json", space_path="space.json")
    assert cfg.model_path == Path("model.json")
    assert cfg.output_path == Path("Results/offsets.json")
    assert cfg.plot_path is None
    assert cfg.epsilon == DEFAULT_EPSILON == 1e-4
    assert cfg.offset_resolution == DEFAULT_RESOLUTION
    assert cfg.allow_missing is False
    assert cfg.log_level == "INFO"


def test_load_config(tmp_path: Path) -> None:
    path = tmp_path / "cfg.yaml"
    path.write_text(
        "model_path: a/model.json\n"
        "space_path: a/space.json\n"
        "plot_path: out/plot.png\n"
        "epsilon: 1.0e-3\n"
        "offset_resolution: null\n"
        "allow_missing: true\n"
        "log_level: debug\n",
        encoding="utf-8",
    )
    cfg = load_config(path)
    assert cfg.space_path == Path("a/space.json")
    assert cfg.plot_path == Path("out/plot.png")
    assert cfg.epsilon == pytest.approx(1e-3)
    assert cfg.offset_resolution is None
    assert cfg.allow_missing is True
    assert cfg.log_level == "DEBUG"


def test_shipped_example_config_loads() -> None:
    cfg = load_config(Path(__file__).resolve().parents[1] / "configs" / "offsets.yaml")
    assert cfg.epsilon == pytest.approx(1e-4)
    assert cfg.output_path == Path("Results/offsets.json")


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_unknown_key_rejected(tmp_path: Path) -> None:
    path = tmp_path / "cfg.yaml"
    path.write_text("model_path: m.json\nspace_path: s.json\nepsilom: 1\n", encoding="utf-8")
    with pytest.raises(TypeError):
        load_config(path)


@pytest.mark.parametrize(
    "kwargs",
    [{"epsilon": 0.0}, {"epsilon": -1e-4}, {"offset_resolution": -1e-6}, {"log_level": "foo"}],
)
def test_invalid_values(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        OffsetConfig(model_path="m.json", space_path="s.json", **kwargs)

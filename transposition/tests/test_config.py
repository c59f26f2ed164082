from __future__ import annotations

from pathlib import Path

import pytest

from transposition.config.chromosome_config import DEFAULT_CHROMOSOMES, ChromosomeConfig
from transposition.config.simulation_config import SimulationConfig
from transposition.engine.transposition_engine import TranspositionEngine
from transposition.io.chromosome_io import load_chromosome_table
from transposition.io.config_io import load_simulation_config


def test_defaults_match_reference_settings() -> None:
    cfg = SimulationConfig()
    assert cfg.band_width == 3
    assert cfg.progress_step == 0.04
    assert cfg.alert_duration == 1.5
    assert cfg.disruption_radius == 6
    assert [c.name for c in cfg.chromosomes] == ["X", "2", "3", "4", "Y"]
    assert cfg.chromosomes[0].color == "#8BC34A"
    assert cfg.chromosomes == DEFAULT_CHROMOSOMES


@pytest.mark.parametrize(
    "kwargs",
    [
        {"band_width": 0},
        {"band_width": 2.5},
        {"transposable_probability": 1.5},
        {"exon_probability": -0.1},
        {"progress_step": 0.0},
        {"alert_duration": 0.0},
        {"disruption_band_widths": -1.0},
        {"n_transpositions": -2},
        {"n_transpositions": 2.5},
        {"chromosomes": ()},
        {"chromosomes": (ChromosomeConfig("X", 0),)},
        {"chromosomes": (ChromosomeConfig("X", 10), ChromosomeConfig("X", 12))},
    ],
)
def test_invalid_settings_rejected(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        SimulationConfig(**kwargs)


def test_integral_floats_are_stored_as_ints() -> None:
    cfg = SimulationConfig(band_width=3.0, n_transpositions=4.0, chromosomes=(ChromosomeConfig("X", 9.0),))
    assert type(cfg.band_width) is int
    assert type(cfg.n_transpositions) is int
    assert type(cfg.chromosomes[0].length) is int

    engine = TranspositionEngine(cfg)
    assert [b.position for b in engine.bands] == [0, 3, 6]
    assert all(type(b.position) is int for b in engine.bands)


def test_load_yaml_config_with_inline_chromosomes(tmp_path: Path) -> None:
    path = tmp_path / "sim.yaml"
    path.write_text(
        "\n".join(
            [
                "band_width: 4",
                "transposable_probability: '0.1'",
                "progress_step: 0.05",
                "random_seed: 42",
                "n_transpositions: 3",
                "chromosomes:",
                "  - {name: X, length: 400, color: '#8BC34A'}",
                "  - {name: 2L, length: 200}",
            ]
        ),
        encoding="utf-8",
    )
    cfg = load_simulation_config(path)

    assert cfg.band_width == 4
    assert cfg.transposable_probability == pytest.approx(0.1)
    assert cfg.progress_step == pytest.approx(0.05)
    assert cfg.random_seed == 42
    assert cfg.n_transpositions == 3
    assert cfg.chromosomes == (
        ChromosomeConfig("X", 400, "#8BC34A"),
        ChromosomeConfig("2L", 200),
    )


def test_load_empty_yaml_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_simulation_config(path) == SimulationConfig()


def test_load_yaml_rejects_unknown_keys(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("band_widht: 3\n", encoding="utf-8")
    with pytest.raises(TypeError):
        load_simulation_config(path)


def test_load_chromosome_table(tmp_path: Path) -> None:
    path = tmp_path / "chromosomes.csv"
    path.write_text("name,length,color\nX,680,#8BC34A\n2,950,\n", encoding="utf-8")
    chromosomes = load_chromosome_table(path)
    assert chromosomes == [ChromosomeConfig("X", 680, "#8BC34A"), ChromosomeConfig("2", 950)]


def test_chromosome_table_requires_columns(tmp_path: Path) -> None:
    path = tmp_path / "chromosomes.csv"
    path.write_text("name,size\nX,680\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_chromosome_table(path)


def test_shipped_config_and_table_describe_default_karyotype() -> None:
    root = Path(__file__).resolve().parents[2]
    cfg = load_simulation_config(root / "configs" / "default.yaml")
    assert cfg.chromosomes == DEFAULT_CHROMOSOMES
    assert tuple(load_chromosome_table(root / "configs" / "drosophila.csv")) == DEFAULT_CHROMOSOMES


@pytest.mark.parametrize("line", ["n_transpositions: 2.5", "band_width: 3.5", "random_seed: 1.5"])
def test_load_yaml_rejects_non_integral_counts(tmp_path: Path, line: str) -> None:
    path = tmp_path / "sim.yaml"
    path.write_text(line + "\n", encoding="utf-8")
    with pytest.raises(ValueError, match="must be an integer"):
        load_simulation_config(path)


def test_load_yaml_accepts_integral_float_counts(tmp_path: Path) -> None:
    path = tmp_path / "sim.yaml"
    path.write_text("n_transpositions: 2.0\nband_width: '4'\n", encoding="utf-8")
    cfg = load_simulation_config(path)
    assert cfg.n_transpositions == 2
    assert cfg.band_width == 4

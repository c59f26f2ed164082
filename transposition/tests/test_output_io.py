from __future__ import annotations

from pathlib import Path

import pytest

from transposition.config.chromosome_config import ChromosomeConfig
from transposition.config.simulation_config import SimulationConfig
from transposition.engine.transposition_engine import TranspositionEngine
from transposition.io.output_io import load_bands_csv, load_history_csv, save_bands_csv, save_history_csv
from transposition.models.band import Band, BandType


def test_band_csv_preserves_off_grid_positions(tmp_path: Path) -> None:
    bands = [
        Band(BandType.EXON, 0, 0),
        Band(BandType.INTRON, 0, 3),
        Band(BandType.TRANSPOSABLE, 1, 17.25),
    ]
    path = tmp_path / "nested" / "bands.csv"
    save_bands_csv(bands, path)

    assert path.exists()
    assert load_bands_csv(path) == bands


def test_empty_band_list_writes_header_only(tmp_path: Path) -> None:
    path = tmp_path / "bands.csv"
    save_bands_csv([], path)

    assert path.read_text(encoding="utf-8").splitlines() == ["band_index,chromosome,position,band_type"]
    assert load_bands_csv(path) == []


def test_band_csv_requires_contiguous_indices(tmp_path: Path) -> None:
    path = tmp_path / "bands.csv"
    path.write_text("band_index,chromosome,position,band_type\n0,0,0,exon\n2,0,6,intron\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_bands_csv(path)


def test_history_csv_rows(tmp_path: Path) -> None:
    cfg = SimulationConfig(
        transposable_probability=1.0,
        random_seed=4,
        chromosomes=(ChromosomeConfig("X", 30),),
    )
    engine = TranspositionEngine(cfg)
    records = engine.run(4)
    path = tmp_path / "events.csv"
    save_history_csv(records, path)

    rows = load_history_csv(path)
    assert [int(r["cycle"]) for r in rows] == [1, 2, 3, 4]
    assert [int(r["new_band_index"]) for r in rows] == [10, 11, 12, 13]
    # No exons exist, so nothing can be disrupted
    assert all(r["disrupts"] == "False" for r in rows)
    assert all(r["disrupted_exon_index"] == "" for r in rows)

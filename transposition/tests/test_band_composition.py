from __future__ import annotations

import numpy as np
import pytest

from transposition.analysis.band_composition import (
    band_composition,
    composition_chisquare,
    expected_type_fractions,
)
from transposition.config.chromosome_config import ChromosomeConfig
from transposition.config.simulation_config import SimulationConfig
from transposition.models.band import Band, BandType
from transposition.models.generation import build_chromosomes, generate_bands


def test_expected_fractions_follow_draw_order() -> None:
    fractions = expected_type_fractions(SimulationConfig())
    assert fractions[BandType.TRANSPOSABLE] == pytest.approx(0.05)
    assert fractions[BandType.EXON] == pytest.approx(0.285)
    assert fractions[BandType.INTRON] == pytest.approx(0.665)
    assert sum(fractions.values()) == pytest.approx(1.0)


def test_composition_counts_per_chromosome() -> None:
    chromosomes = build_chromosomes([ChromosomeConfig("X", 9), ChromosomeConfig("Y", 6)])
    bands = [
        Band(BandType.EXON, 0, 0),
        Band(BandType.EXON, 0, 3),
        Band(BandType.TRANSPOSABLE, 0, 6),
        Band(BandType.INTRON, 1, 0),
    ]
    counts = band_composition(bands, chromosomes)

    assert list(counts.index) == ["X", "Y"]
    assert list(counts.columns) == ["exon", "intron", "transposable"]
    assert counts.loc["X"].tolist() == [2, 0, 1]
    assert counts.loc["Y"].tolist() == [0, 1, 0]
    assert int(counts.to_numpy().sum()) == len(bands)


def test_generated_layout_fits_expected_mass() -> None:
    cfg = SimulationConfig(chromosomes=(ChromosomeConfig("big", 150_000),))
    bands, _ = generate_bands(build_chromosomes(cfg.chromosomes), cfg, np.random.default_rng(31))
    stat, pvalue = composition_chisquare(bands, cfg)
    assert stat >= 0
    assert pvalue > 1e-6


def test_skewed_layout_is_flagged() -> None:
    cfg = SimulationConfig()
    bands = [Band(BandType.TRANSPOSABLE, 0, 3 * i) for i in range(200)]
    _, pvalue = composition_chisquare(bands, cfg)
    assert pvalue < 1e-6


def test_composition_rejects_band_outside_chromosome_set() -> None:
    chromosomes = build_chromosomes((ChromosomeConfig("X", 9), ChromosomeConfig("2", 9)))
    bands = [Band(BandType.EXON, 0, 0), Band(BandType.INTRON, 2, 3)]
    with pytest.raises(ValueError, match="Band 1 refers to unknown chromosome 2"):
        band_composition(bands, chromosomes)

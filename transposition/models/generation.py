"""Initial band layout for a chromosome set.

Every chromosome of length L is cut into floor(L / w) contiguous bands at
positions 0, w, 2w, ... Each band type is drawn independently: a
transposable-element check first, then an exon/intron split on the remainder,
giving effective masses p_te, (1 - p_te) * p_exon and (1 - p_te) * (1 - p_exon).
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

import numpy as np

from transposition.config.chromosome_config import ChromosomeConfig
from transposition.config.simulation_config import SimulationConfig
from transposition.models.band import Band, BandType
from transposition.models.chromosome import Chromosome
from transposition.models.te_index import TransposableElementIndex


def build_chromosomes(chromosome_configs: Iterable[ChromosomeConfig]) -> List[Chromosome]:
    chromosomes: List[Chromosome] = []
    seen: set[str] = set()
    for idx, cfg in enumerate(chromosome_configs):
        cfg.validate()
        if cfg.name in seen:
            raise ValueError(f"Duplicate chromosome name: {cfg.name}")
        seen.add(cfg.name)
        chromosomes.append(
            Chromosome(
                index=idx,
                name=cfg.name,
                length=int(cfg.length),
                color=cfg.color,
            )
        )
    return chromosomes


def draw_band_type(
    rng: np.random.Generator,
    transposable_probability: float,
    exon_probability: float,
) -> BandType:
    if rng.random() < transposable_probability:
        return BandType.TRANSPOSABLE
    return BandType.EXON if rng.random() < exon_probability else BandType.INTRON


def generate_bands(
    chromosomes: Sequence[Chromosome],
    sim_config: SimulationConfig,
    rng: np.random.Generator,
) -> tuple[List[Band], TransposableElementIndex]:
    """Build a fresh band collection and its transposable element index."""
    w = sim_config.band_width
    bands: List[Band] = []
    te_index = TransposableElementIndex()
    for chrom in chromosomes:
        for j in range(chrom.band_count(w)):
            band_type = draw_band_type(
                rng,
                sim_config.transposable_probability,
                sim_config.exon_probability,
            )
            if band_type is BandType.TRANSPOSABLE:
                te_index.add(len(bands))
            bands.append(Band(band_type=band_type, chromosome=chrom.index, position=j * w))
    return bands, te_index


def validate_bands(bands: Sequence[Band], n_chromosomes: int) -> None:
    """Reject bands that point outside a set of n_chromosomes or sit at a negative position."""
    for idx, band in enumerate(bands):
        if not 0 <= band.chromosome < n_chromosomes:
            raise ValueError(
                f"Band {idx} refers to unknown chromosome {band.chromosome} "
                f"(chromosome set has {n_chromosomes})"
            )
        if band.position < 0:
            raise ValueError(f"Band {idx} has negative position {band.position}")

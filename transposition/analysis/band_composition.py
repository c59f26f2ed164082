from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd
from scipy import stats

from transposition.config.simulation_config import SimulationConfig
from transposition.models.band import Band, BandType
from transposition.models.chromosome import Chromosome
from transposition.models.generation import validate_bands

TYPE_ORDER = [BandType.EXON, BandType.INTRON, BandType.TRANSPOSABLE]


def expected_type_fractions(sim_config: SimulationConfig) -> dict[BandType, float]:
    p_te = sim_config.transposable_probability
    p_exon = sim_config.exon_probability
    return {
        BandType.EXON: (1.0 - p_te) * p_exon,
        BandType.INTRON: (1.0 - p_te) * (1.0 - p_exon),
        BandType.TRANSPOSABLE: p_te,
    }


def band_composition(bands: Sequence[Band], chromosomes: Sequence[Chromosome]) -> pd.DataFrame:
    """Count bands per chromosome (rows, by name) and band type (columns)."""
    validate_bands(bands, len(chromosomes))
    names = [c.name for c in chromosomes]
    columns = [t.value for t in TYPE_ORDER]
    if not bands:
        return pd.DataFrame(0, index=pd.Index(names, name="chromosome"), columns=columns)
    df = pd.DataFrame(
        {
            "chromosome": [names[b.chromosome] for b in bands],
            "band_type": [b.band_type.value for b in bands],
        }
    )
    counts = pd.crosstab(df["chromosome"], df["band_type"])
    return counts.reindex(index=names, columns=columns, fill_value=0).rename_axis(
        index="chromosome", columns=None
    )


def composition_chisquare(bands: Sequence[Band], sim_config: SimulationConfig) -> tuple[float, float]:
    """Goodness of fit of observed band types against the generator's draw probabilities."""
    if not bands:
        raise ValueError("No bands to test")
    expected = expected_type_fractions(sim_config)
    observed = np.array(
        [sum(1 for b in bands if b.band_type is t) for t in TYPE_ORDER],
        dtype=float,
    )
    probs = np.array([expected[t] for t in TYPE_ORDER], dtype=float)
    # Categories with zero expected mass cannot enter the statistic
    keep = probs > 0
    if np.any(observed[~keep] > 0):
        return float("inf"), 0.0
    result = stats.chisquare(observed[keep], f_exp=probs[keep] * observed.sum())
    return float(result.statistic), float(result.pvalue)


def plot_band_composition(counts: pd.DataFrame, title: str | None = None):
    import matplotlib.pyplot as plt

    from transposition.analysis.genome_map import BAND_COLORS

    fig, ax = plt.subplots()
    bottom = np.zeros(len(counts), dtype=float)
    for col in counts.columns:
        values = counts[col].to_numpy(dtype=float)
        ax.bar(counts.index.astype(str), values, bottom=bottom, color=BAND_COLORS[BandType(col)], label=col)
        bottom += values
    ax.set_xlabel("Chromosome")
    ax.set_ylabel("Bands")
    ax.legend()
    if title:
        ax.set_title(title)
    fig.tight_layout()
    return fig, ax

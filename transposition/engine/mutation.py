from __future__ import annotations

from typing import Optional, Sequence

from transposition.models.band import Band, BandType


def find_disrupted_exon(
    bands: Sequence[Band],
    chromosome: int,
    position: float,
    radius: float,
) -> Optional[int]:
    """Return the index of the first exon closer than radius to the insertion site."""
    for idx, band in enumerate(bands):
        if (
            band.band_type is BandType.EXON
            and band.chromosome == chromosome
            and abs(band.position - position) < radius
        ):
            return idx
    return None


def disrupts_exon(bands: Sequence[Band], chromosome: int, position: float, radius: float) -> bool:
    return find_disrupted_exon(bands, chromosome, position, radius) is not None

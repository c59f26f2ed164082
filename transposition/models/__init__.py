"""Model definitions for chromosomes, bands, and the transposable element index."""

from .band import Band, BandType
from .chromosome import Chromosome
from .te_index import TransposableElementIndex
from .generation import build_chromosomes, draw_band_type, generate_bands

__all__ = [
    "Band",
    "BandType",
    "Chromosome",
    "TransposableElementIndex",
    "build_chromosomes",
    "draw_band_type",
    "generate_bands",
]

"""Analysis helpers: band composition statistics and genome map rendering."""

from .band_composition import (
    band_composition,
    composition_chisquare,
    expected_type_fractions,
    plot_band_composition,
)
from .genome_map import animate_genome_map, flight_path_point, mutation_banner_style, plot_genome_map

__all__ = [
    "band_composition",
    "composition_chisquare",
    "expected_type_fractions",
    "plot_band_composition",
    "plot_genome_map",
    "animate_genome_map",
    "flight_path_point",
    "mutation_banner_style",
]

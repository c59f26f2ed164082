"""Input/output helpers for configs, chromosome tables, bands, and event history."""

from .config_io import load_simulation_config
from .chromosome_io import load_chromosome_table
from .output_io import load_bands_csv, load_history_csv, save_bands_csv, save_history_csv

__all__ = [
    "load_simulation_config",
    "load_chromosome_table",
    "save_bands_csv",
    "load_bands_csv",
    "save_history_csv",
    "load_history_csv",
]

from __future__ import annotations

import pathlib

import yaml

from transposition.config.chromosome_config import ChromosomeConfig
from transposition.config.simulation_config import SimulationConfig


def _to_float(val):
    if isinstance(val, (int, float)) and not isinstance(val, bool):
        return float(val)
    if isinstance(val, str):
        return float(val.strip())
    raise TypeError(f"Expected numeric value, got {type(val)}")


def _to_int(val, key: str) -> int:
    if isinstance(val, int) and not isinstance(val, bool):
        return val
    number = _to_float(val)
    if not number.is_integer():
        raise ValueError(f"{key} must be an integer, got {val!r}")
    return int(number)


def _to_chromosome(entry) -> ChromosomeConfig:
    if not isinstance(entry, dict):
        raise TypeError(f"Chromosome entries must be mappings, got {type(entry)}")
    if "name" not in entry or "length" not in entry:
        raise ValueError(f"Chromosome entry needs 'name' and 'length': {entry}")
    length = _to_float(entry["length"])
    if not length.is_integer():
        raise ValueError(f"Chromosome length must be an integer: {entry}")
    color = entry.get("color")
    return ChromosomeConfig(name=str(entry["name"]), length=int(length), color=None if color is None else str(color))


def load_simulation_config(path: str | pathlib.Path) -> SimulationConfig:
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Simulation config must be a mapping: {path}")

    for key in (
        "transposable_probability",
        "exon_probability",
        "progress_step",
        "alert_duration",
        "disruption_band_widths",
    ):
        if key in raw:
            raw[key] = _to_float(raw[key])
    if "band_width" in raw:
        raw["band_width"] = _to_int(raw["band_width"], "band_width")
    if "n_transpositions" in raw:
        raw["n_transpositions"] = _to_int(raw["n_transpositions"], "n_transpositions")
    if raw.get("random_seed") is not None:
        raw["random_seed"] = _to_int(raw["random_seed"], "random_seed")

    # Inline chromosome list overrides the default karyotype
    chromosomes = raw.pop("chromosomes", None)
    if chromosomes is not None:
        raw["chromosomes"] = tuple(_to_chromosome(entry) for entry in chromosomes)
    return SimulationConfig(**raw)

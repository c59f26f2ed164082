from __future__ import annotations

import csv
import pathlib
from typing import List, Sequence

from transposition.engine.state import TranspositionRecord
from transposition.models.band import Band, BandType

BAND_FIELDS = ["band_index", "chromosome", "position", "band_type"]
HISTORY_FIELDS = [
    "cycle",
    "source_index",
    "source_chromosome",
    "source_position",
    "target_chromosome",
    "target_position",
    "new_band_index",
    "disrupted_exon_index",
    "disrupts",
]


def _prepare(path: str | pathlib.Path) -> pathlib.Path:
    path_obj = pathlib.Path(path)
    path_obj.parent.mkdir(parents=True, exist_ok=True)
    return path_obj


def save_bands_csv(bands: Sequence[Band], path: str | pathlib.Path) -> None:
    with open(_prepare(path), "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=BAND_FIELDS)
        writer.writeheader()
        for idx, band in enumerate(bands):
            writer.writerow({"band_index": idx, **band.snapshot()})


def load_bands_csv(path: str | pathlib.Path) -> List[Band]:
    with open(path, "r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        missing = set(BAND_FIELDS) - set(reader.fieldnames or [])
        if missing:
            raise ValueError(f"Missing columns in band CSV: {missing}")
        rows = sorted(reader, key=lambda r: int(r["band_index"]))
    bands: List[Band] = []
    for expected, row in enumerate(rows):
        if int(row["band_index"]) != expected:
            raise ValueError(f"Band indices must be contiguous from 0; missing {expected} in {path}")
        position = float(row["position"])
        bands.append(
            Band(
                band_type=BandType(row["band_type"]),
                chromosome=int(row["chromosome"]),
                position=int(position) if position.is_integer() else position,
            )
        )
    return bands


def save_history_csv(records: Sequence[TranspositionRecord], path: str | pathlib.Path) -> None:
    with open(_prepare(path), "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=HISTORY_FIELDS)
        writer.writeheader()
        for record in records:
            row = record.snapshot()
            if row["disrupted_exon_index"] is None:
                row["disrupted_exon_index"] = ""
            writer.writerow(row)


def load_history_csv(path: str | pathlib.Path) -> list[dict[str, object]]:
    with open(path, "r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        return [dict(row) for row in reader]

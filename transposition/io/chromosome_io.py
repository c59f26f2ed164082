from __future__ import annotations

import csv
import pathlib
from typing import List

from transposition.config.chromosome_config import ChromosomeConfig


def load_chromosome_table(path: str | pathlib.Path) -> List[ChromosomeConfig]:
    chromosomes: List[ChromosomeConfig] = []
    with open(path, "r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        required = {"name", "length"}
        missing = required - set(reader.fieldnames or [])
        if missing:
            raise ValueError(f"Missing columns in chromosome CSV: {missing}")
        for row in reader:
            color = (row.get("color") or "").strip() or None
            chromosomes.append(
                ChromosomeConfig(
                    name=row["name"].strip(),
                    length=int(row["length"]),
                    color=color,
                )
            )
    if not chromosomes:
        raise ValueError(f"No chromosomes found in {path}")
    return chromosomes

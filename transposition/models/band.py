from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class BandType(str, Enum):
    EXON = "exon"
    INTRON = "intron"
    TRANSPOSABLE = "transposable"


@dataclass
class Band:
    band_type: BandType
    chromosome: int # Index into the chromosome set
    position: float # Grid-aligned when generated, arbitrary once a jump lands

    def snapshot(self) -> dict:
        """Return lightweight snapshot dictionary for serialization."""
        return {
            "chromosome": self.chromosome,
            "position": self.position,
            "band_type": self.band_type.value,
        }

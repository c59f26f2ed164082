"""State carried by the transposition engine between ticks.

The engine holds at most one of TranspositionEvent or MutationAlert at a time;
holding neither means it is idle. Phase is the tag derived from that value.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from transposition.models.band import Band
from transposition.models.chromosome import Chromosome


class Phase(str, Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    MUTATION_ALERT = "mutation_alert"


@dataclass
class TranspositionEvent:
    source_index: int
    source_chromosome: int
    source_position: float
    target_chromosome: int
    target_position: float
    progress: float = 0.0
    ticks: int = 0


@dataclass
class MutationAlert:
    at_chromosome: int
    at_position: float
    exon_index: int # First exon found within the disruption radius
    elapsed: float = 0.0
    ticks: int = 0


@dataclass(frozen=True)
class TranspositionRecord:
    cycle: int
    source_index: int
    source_chromosome: int
    source_position: float
    target_chromosome: int
    target_position: float
    new_band_index: int
    disrupted_exon_index: Optional[int]

    @property
    def disrupts(self) -> bool:
        return self.disrupted_exon_index is not None

    def snapshot(self) -> dict:
        return {
            "cycle": self.cycle,
            "source_index": self.source_index,
            "source_chromosome": self.source_chromosome,
            "source_position": self.source_position,
            "target_chromosome": self.target_chromosome,
            "target_position": self.target_position,
            "new_band_index": self.new_band_index,
            "disrupted_exon_index": self.disrupted_exon_index,
            "disrupts": self.disrupts,
        }


@dataclass(frozen=True)
class EngineSnapshot:
    """Copy of everything a renderer needs for one frame."""

    phase: Phase
    bands: tuple[Band, ...]
    chromosomes: tuple[Chromosome, ...]
    band_width: int
    te_count: int
    event: Optional[TranspositionEvent] = None
    alert: Optional[MutationAlert] = None
    alert_duration: float = 1.5

    def bands_on(self, chromosome: int) -> Sequence[Band]:
        return [b for b in self.bands if b.chromosome == chromosome]

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Chromosome:
    index: int
    name: str
    length: int
    color: Optional[str] = None

    def band_count(self, band_width: int) -> int:
        return self.length // band_width

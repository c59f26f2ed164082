from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ChromosomeConfig:
    name: str
    length: int # Abstract length units, same scale as band_width
    color: Optional[str] = None # Display colour for renderers, e.g. "#8BC34A"

    def __post_init__(self) -> None:
        # 9.0 is stored as 9; non-integral lengths are left for validate() to reject
        if isinstance(self.length, float) and self.length.is_integer():
            object.__setattr__(self, "length", int(self.length))

    def validate(self) -> None:
        if not self.name:
            raise ValueError("Chromosome name must be non-empty")
        if int(self.length) != self.length or self.length <= 0:
            raise ValueError(f"length must be a positive integer for chromosome {self.name}")


# Drosophila melanogaster karyotype, scaled for display
DEFAULT_CHROMOSOMES: tuple[ChromosomeConfig, ...] = (
    ChromosomeConfig(name="X", length=680, color="#8BC34A"),
    ChromosomeConfig(name="2", length=950),
    ChromosomeConfig(name="3", length=1000),
    ChromosomeConfig(name="4", length=160),
    ChromosomeConfig(name="Y", length=320, color="#9E9E9E"),
)

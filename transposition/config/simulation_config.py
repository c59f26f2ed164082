from __future__ import annotations

from dataclasses import dataclass, field

from transposition.config.chromosome_config import DEFAULT_CHROMOSOMES, ChromosomeConfig


@dataclass(frozen=True)
class SimulationConfig:
    band_width: int = 3
    transposable_probability: float = 0.05 # Drawn first for every band
    exon_probability: float = 0.3 # Applied to the non-transposable remainder
    progress_step: float = 0.04 # Logical step per tick, not wall-clock
    alert_duration: float = 1.5
    disruption_band_widths: float = 2.0 # Exon within this many band widths of the insertion is disrupted
    random_seed: int | None = None
    n_transpositions: int = 10
    chromosomes: tuple[ChromosomeConfig, ...] = field(default=DEFAULT_CHROMOSOMES)

    def __post_init__(self) -> None:
        object.__setattr__(self, "chromosomes", tuple(self.chromosomes))
        if int(self.band_width) != self.band_width or self.band_width <= 0:
            raise ValueError("band_width must be a positive integer")
        object.__setattr__(self, "band_width", int(self.band_width))
        if not 0.0 <= self.transposable_probability <= 1.0:
            raise ValueError("transposable_probability must be in [0, 1]")
        if not 0.0 <= self.exon_probability <= 1.0:
            raise ValueError("exon_probability must be in [0, 1]")
        if self.progress_step <= 0 or self.progress_step > 1:
            raise ValueError("progress_step must be in (0, 1]")
        if self.alert_duration <= 0:
            raise ValueError("alert_duration must be positive")
        if self.disruption_band_widths < 0:
            raise ValueError("disruption_band_widths must be non-negative")
        if int(self.n_transpositions) != self.n_transpositions or self.n_transpositions < 0:
            raise ValueError("n_transpositions must be a non-negative integer")
        object.__setattr__(self, "n_transpositions", int(self.n_transpositions))
        if not self.chromosomes:
            raise ValueError("At least one chromosome is required")
        names = [cfg.name for cfg in self.chromosomes]
        if len(set(names)) != len(names):
            raise ValueError("Chromosome names must be unique")
        for cfg in self.chromosomes:
            cfg.validate()

    @property
    def disruption_radius(self) -> float:
        return self.disruption_band_widths * self.band_width

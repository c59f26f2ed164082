from __future__ import annotations

import dataclasses
import logging
from typing import List, Optional, Sequence, Union

import numpy as np

from transposition.config.simulation_config import SimulationConfig
from transposition.engine.mutation import find_disrupted_exon
from transposition.engine.state import (
    EngineSnapshot,
    MutationAlert,
    Phase,
    TranspositionEvent,
    TranspositionRecord,
)
from transposition.models.band import Band, BandType
from transposition.models.chromosome import Chromosome
from transposition.models.generation import build_chromosomes, generate_bands, validate_bands
from transposition.models.te_index import TransposableElementIndex

logger = logging.getLogger(__name__)

ActiveState = Union[TranspositionEvent, MutationAlert, None]


class TranspositionEngine:
    def __init__(
        self,
        sim_config: SimulationConfig,
        chromosomes: Sequence[Chromosome] | None = None,
        rng: np.random.Generator | None = None,
        bands: Sequence[Band] | None = None,
    ) -> None:
        self.sim_config = sim_config
        if chromosomes is None:
            chromosomes = build_chromosomes(sim_config.chromosomes)
        self.chromosomes: tuple[Chromosome, ...] = tuple(chromosomes)
        if not self.chromosomes:
            raise ValueError("At least one chromosome is required")
        self.rng = rng if rng is not None else np.random.default_rng(sim_config.random_seed)
        self._bands: List[Band] = []
        self._te_index = TransposableElementIndex()
        self._active: ActiveState = None
        self.history: List[TranspositionRecord] = []
        if bands is None:
            self.generate()
        else:
            self._load_bands(bands)

    def generate(self) -> None:
        """Replace the band collection and index with a fresh random layout."""
        self._bands, self._te_index = generate_bands(self.chromosomes, self.sim_config, self.rng)
        self._active = None
        self.history = []
        logger.debug(
            "Generated %d bands on %d chromosomes (%d transposable)",
            len(self._bands),
            len(self.chromosomes),
            len(self._te_index),
        )

    def _load_bands(self, bands: Sequence[Band]) -> None:
        loaded: List[Band] = []
        te_index = TransposableElementIndex()
        validate_bands(bands, len(self.chromosomes))
        for idx, band in enumerate(bands):
            loaded.append(dataclasses.replace(band))
            if band.band_type is BandType.TRANSPOSABLE:
                te_index.add(idx)
        self._bands = loaded
        self._te_index = te_index
        self._active = None
        self.history = []

    # Read-only state

    @property
    def phase(self) -> Phase:
        if isinstance(self._active, TranspositionEvent):
            return Phase.IN_FLIGHT
        if isinstance(self._active, MutationAlert):
            return Phase.MUTATION_ALERT
        return Phase.IDLE

    @property
    def is_idle(self) -> bool:
        return self._active is None

    @property
    def bands(self) -> tuple[Band, ...]:
        # Live objects; renderers should go through snapshot()
        return tuple(self._bands)

    @property
    def transposable_indices(self) -> frozenset[int]:
        return self._te_index.as_set()

    @property
    def te_count(self) -> int:
        return len(self._te_index)

    @property
    def event(self) -> Optional[TranspositionEvent]:
        if isinstance(self._active, TranspositionEvent):
            return dataclasses.replace(self._active)
        return None

    @property
    def alert(self) -> Optional[MutationAlert]:
        if isinstance(self._active, MutationAlert):
            return dataclasses.replace(self._active)
        return None

    def snapshot(self) -> EngineSnapshot:
        return EngineSnapshot(
            phase=self.phase,
            bands=tuple(dataclasses.replace(b) for b in self._bands),
            chromosomes=self.chromosomes,
            band_width=self.sim_config.band_width,
            te_count=len(self._te_index),
            event=self.event,
            alert=self.alert,
            alert_duration=self.sim_config.alert_duration,
        )

    # Inputs

    def begin_transposition(
        self,
        *,
        source_index: int | None = None,
        target_chromosome: int | None = None,
        target_position: float | None = None,
    ) -> bool:
        """Start a jump if idle and a transposable element exists.

        Returns False without touching any state when a jump or mutation alert
        is already running, or when no transposable element is left. Keyword
        overrides replace the corresponding random draw.
        """
        if self._active is not None:
            logger.debug("Transposition ignored: engine is %s", self.phase.value)
            return False
        if not self._te_index:
            logger.debug("Transposition ignored: no transposable elements")
            return False

        if source_index is None:
            source_index = self._te_index.choice(self.rng)
        elif source_index not in self._te_index:
            raise ValueError(f"Band {source_index} is not a transposable element")

        if target_chromosome is None:
            target_chromosome = int(self.rng.integers(len(self.chromosomes)))
        elif not 0 <= target_chromosome < len(self.chromosomes):
            raise ValueError(f"Unknown target chromosome {target_chromosome}")

        if target_position is None:
            target_position = self._draw_target_position(self.chromosomes[target_chromosome])
        elif target_position < 0:
            raise ValueError("target_position must be non-negative")

        source = self._bands[source_index]
        self._active = TranspositionEvent(
            source_index=source_index,
            source_chromosome=source.chromosome,
            source_position=source.position,
            target_chromosome=target_chromosome,
            target_position=float(target_position),
        )
        logger.debug(
            "Transposition started: band %d (%s:%s) -> %s:%.2f",
            source_index,
            self.chromosomes[source.chromosome].name,
            source.position,
            self.chromosomes[target_chromosome].name,
            target_position,
        )
        return True

    def _draw_target_position(self, chrom: Chromosome) -> float:
        high = chrom.length - self.sim_config.band_width
        if high <= 0:
            return 0.0
        return float(self.rng.uniform(0.0, high))

    def tick(self) -> Phase:
        """Advance the running event or alert by one logical step."""
        step = self.sim_config.progress_step
        active = self._active
        if isinstance(active, TranspositionEvent):
            active.ticks += 1
            # Multiply instead of accumulating so float drift cannot delay completion
            active.progress = active.ticks * step
            if active.progress >= 1.0:
                self._complete(active)
        elif isinstance(active, MutationAlert):
            active.ticks += 1
            active.elapsed = active.ticks * step
            if active.elapsed >= self.sim_config.alert_duration:
                logger.debug("Mutation alert cleared after %d ticks", active.ticks)
                self._active = None
        return self.phase

    def _complete(self, event: TranspositionEvent) -> TranspositionRecord:
        new_index = len(self._bands)
        self._bands.append(
            Band(
                band_type=BandType.TRANSPOSABLE,
                chromosome=event.target_chromosome,
                position=event.target_position,
            )
        )
        self._te_index.add(new_index)

        exon_index = find_disrupted_exon(
            self._bands,
            event.target_chromosome,
            event.target_position,
            self.sim_config.disruption_radius,
        )

        # The vacated site keeps an intron footprint
        self._te_index.remove(event.source_index)
        self._bands[event.source_index].band_type = BandType.INTRON

        record = TranspositionRecord(
            cycle=len(self.history) + 1,
            source_index=event.source_index,
            source_chromosome=event.source_chromosome,
            source_position=event.source_position,
            target_chromosome=event.target_chromosome,
            target_position=event.target_position,
            new_band_index=new_index,
            disrupted_exon_index=exon_index,
        )
        self.history.append(record)

        target_name = self.chromosomes[event.target_chromosome].name
        if exon_index is None:
            self._active = None
            logger.info(
                "Transposition %d landed at %s:%.2f",
                record.cycle,
                target_name,
                event.target_position,
            )
        else:
            self._active = MutationAlert(
                at_chromosome=event.target_chromosome,
                at_position=event.target_position,
                exon_index=exon_index,
            )
            logger.info(
                "Transposition %d landed at %s:%.2f and disrupted exon band %d",
                record.cycle,
                target_name,
                event.target_position,
                exon_index,
            )
        return record

    def run_cycle(self, max_ticks: int = 10_000) -> Optional[TranspositionRecord]:
        """Trigger one transposition and tick until the engine is idle again."""
        if not self.begin_transposition():
            return None
        for _ in range(max_ticks):
            if self.tick() is Phase.IDLE:
                return self.history[-1]
        raise RuntimeError(f"Transposition did not settle within {max_ticks} ticks")

    def run(self, n_transpositions: int | None = None) -> list[TranspositionRecord]:
        n = self.sim_config.n_transpositions if n_transpositions is None else n_transpositions
        if n < 0:
            raise ValueError("n_transpositions must be non-negative")
        records: list[TranspositionRecord] = []
        for _ in range(n):
            record = self.run_cycle()
            if record is None:
                logger.info("No transposable elements left after %d transpositions", len(records))
                break
            records.append(record)
        return records

"""Configuration dataclasses for the simulation and the chromosome set."""

from .simulation_config import SimulationConfig
from .chromosome_config import DEFAULT_CHROMOSOMES, ChromosomeConfig

__all__ = ["SimulationConfig", "ChromosomeConfig", "DEFAULT_CHROMOSOMES"]

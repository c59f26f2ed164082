"""Transposition state machine and exon disruption detection."""

from .mutation import disrupts_exon, find_disrupted_exon
from .state import EngineSnapshot, MutationAlert, Phase, TranspositionEvent, TranspositionRecord
from .transposition_engine import TranspositionEngine

__all__ = [
    "TranspositionEngine",
    "EngineSnapshot",
    "MutationAlert",
    "Phase",
    "TranspositionEvent",
    "TranspositionRecord",
    "find_disrupted_exon",
    "disrupts_exon",
]

"""Genome band map with a transposable-element jump simulation."""

__all__ = [
    "config",
    "models",
    "engine",
    "io",
    "analysis",
]

"""Index of band handles whose current type is transposable.

Backed by a list plus a handle -> slot map so that add, remove (swap with the
last slot) and uniform random choice are all O(1). Slot order carries no
meaning, but it is deterministic for a given sequence of operations, which
keeps seeded runs reproducible.
"""

from __future__ import annotations

from typing import Iterable, Iterator

import numpy as np


class TransposableElementIndex:
    def __init__(self, band_indices: Iterable[int] = ()) -> None:
        self._items: list[int] = []
        self._slots: dict[int, int] = {}
        for idx in band_indices:
            self.add(idx)

    def add(self, band_index: int) -> None:
        if band_index in self._slots:
            raise ValueError(f"Band {band_index} is already indexed")
        self._slots[band_index] = len(self._items)
        self._items.append(band_index)

    def remove(self, band_index: int) -> None:
        slot = self._slots.pop(band_index, None)
        if slot is None:
            raise KeyError(band_index)
        last = self._items.pop()
        if last != band_index:
            self._items[slot] = last
            self._slots[last] = slot

    def choice(self, rng: np.random.Generator) -> int:
        if not self._items:
            raise IndexError("choice from an empty transposable element index")
        return self._items[int(rng.integers(len(self._items)))]

    def as_set(self) -> frozenset[int]:
        return frozenset(self._items)

    def __contains__(self, band_index: object) -> bool:
        return band_index in self._slots

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._items))

    def __repr__(self) -> str:
        return f"TransposableElementIndex({sorted(self._items)!r})"

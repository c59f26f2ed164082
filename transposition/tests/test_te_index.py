from __future__ import annotations

import numpy as np
import pytest

from transposition.models.te_index import TransposableElementIndex


def test_add_remove_keeps_membership() -> None:
    index = TransposableElementIndex([3, 7, 11, 20])
    index.remove(7)
    index.add(42)
    index.remove(20)

    assert index.as_set() == {3, 11, 42}
    assert len(index) == 3
    assert 7 not in index
    assert 42 in index


def test_duplicate_and_missing_entries() -> None:
    index = TransposableElementIndex([1])
    with pytest.raises(ValueError):
        index.add(1)
    with pytest.raises(KeyError):
        index.remove(2)


def test_choice_is_uniform_over_members() -> None:
    index = TransposableElementIndex([4, 9, 15])
    rng = np.random.default_rng(1)
    draws = [index.choice(rng) for _ in range(3000)]

    assert set(draws) == {4, 9, 15}
    for member in (4, 9, 15):
        assert draws.count(member) / len(draws) == pytest.approx(1 / 3, abs=0.05)


def test_choice_from_empty_index() -> None:
    with pytest.raises(IndexError):
        TransposableElementIndex().choice(np.random.default_rng(0))

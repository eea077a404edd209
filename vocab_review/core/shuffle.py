"""Uniform shuffling for review queues."""
from __future__ import annotations

import random
from typing import Sequence, TypeVar

T = TypeVar("T")


def shuffle(items: Sequence[T], rng: random.Random | None = None) -> list[T]:
    """Return a uniformly random permutation of ``items``.

    Fisher-Yates over a copy; the input is left untouched. Pass a seeded
    ``random.Random`` to make the order reproducible.
    """

    source = rng or random.Random()
    result = list(items)
    for index in range(len(result) - 1, 0, -1):
        swap = source.randint(0, index)
        result[index], result[swap] = result[swap], result[index]
    return result

from __future__ import annotations

"""Random number source for distractor sampling and option shuffling."""

import random


def make_rng(seed: int | None = None) -> random.Random:
    """Return a private RNG; seeded when ``seed`` is given so runs are reproducible."""
    if seed is None:
        return random.Random()
    return random.Random(int(seed))

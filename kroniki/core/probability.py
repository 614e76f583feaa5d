"""Random rolls shared by combat, loot and spawning.

Every roll takes the caller's `random.Random` so a seeded generator
replays a whole encounter.
"""

import math
import random


def roll_range(rng: random.Random, low: int, high: int) -> int:
    """Uniform integer in [low, high] (bounds may come in either order)."""
    if high < low:
        low, high = high, low
    return math.floor(rng.random() * (high - low + 1)) + low


def roll_percent(rng: random.Random, chance: float) -> bool:
    """True with `chance` percent probability."""
    return rng.random() * 100 < chance


def pick_weighted(rng: random.Random, weights: list[float]) -> int:
    """
    Index picked by a cumulative percent roll over `weights`.

    Weights need not sum to 100; a roll past the last bucket picks
    index 0.

    Returns:
        Index into `weights` (0 for an empty list).
    """
    roll = rng.random() * 100
    cumulative = 0.0
    for index, weight in enumerate(weights):
        cumulative += weight
        if roll < cumulative:
            return index
    return 0

from __future__ import annotations

import random

from .config import NUM_TEAMS


def bound(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def bound_rating(value: float) -> int:
    return int(bound(round(value), 0, 100))


def trunc_gauss(rng: random.Random, mu: float, sigma: float, low: float, high: float) -> float:
    # Resample a few times, then clamp, so extreme draws never escape the window.
    for _attempt in range(10):
        value = rng.gauss(mu, sigma)
        if low <= value <= high:
            return value
    return bound(rng.gauss(mu, sigma), low, high)


def coaching_multiplier(base_change: float, coaching_rank: float, num_teams: int = NUM_TEAMS) -> float:
    """Scale a season's base change by staff quality.

    Rank 1 is the best staff. The middle rank leaves the change untouched; good
    staffs amplify growth and soften decline, bad staffs do the opposite.
    """
    spread = max(1, num_teams - 1)
    if base_change >= 0:
        return ((coaching_rank - 1) * -0.5) / spread + 1.25
    return ((coaching_rank - 1) * 0.5) / spread + 0.75

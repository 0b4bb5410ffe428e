from __future__ import annotations

import random

from ..config import DEFAULT_COACHING_RANK, NUM_TEAMS
from ..errors import ConfigurationError
from ..helpers import bound, bound_rating, coaching_multiplier, trunc_gauss
from ..models import RatingsSnapshot
from ..strategy import SportRatingStrategy

RATING_KEYS = (
    "hgt", "stre", "spd", "jmp", "endu", "ins", "dnk", "ft", "fg", "tp", "oiq", "diq", "drb", "pss", "reb",
)

OVR_WEIGHTS: dict[str, int] = {
    "hgt": 5, "stre": 1, "spd": 4, "jmp": 2, "endu": 1, "ins": 1, "dnk": 2, "ft": 1,
    "fg": 1, "tp": 3, "oiq": 7, "diq": 3, "drb": 3, "pss": 3, "reb": 1,
}

# Per-rating age sensitivity: athleticism fades early, skills and IQ keep growing.
AGE_PROFILES: dict[str, tuple[float, float]] = {
    "stre": (1.0, 0.0),
    "spd": (1.0, -1.0),
    "jmp": (1.0, -1.0),
    "endu": (1.0, 0.0),
    "ins": (1.0, 0.0),
    "dnk": (1.0, -0.5),
    "ft": (1.0, 0.5),
    "fg": (1.0, 0.5),
    "tp": (1.0, 0.5),
    "oiq": (0.8, 1.0),
    "diq": (0.8, 1.0),
    "drb": (1.0, 0.0),
    "pss": (1.0, 0.5),
    "reb": (1.0, 0.0),
}

# Tag -> (composite weights, threshold). Order is display order.
SKILL_COMPOSITES: dict[str, tuple[dict[str, float], float]] = {
    "3": ({"tp": 1.0, "oiq": 0.1}, 59.0),
    "A": ({"stre": 1.0, "spd": 1.0, "jmp": 1.0, "hgt": 0.75}, 63.0),
    "B": ({"drb": 1.0, "spd": 1.0}, 68.0),
    "Di": ({"hgt": 2.5, "stre": 1.0, "spd": 0.5, "jmp": 0.5, "diq": 2.0}, 57.0),
    "Dp": ({"hgt": 0.5, "spd": 1.0, "jmp": 0.5, "diq": 1.0}, 61.0),
    "Po": ({"hgt": 1.0, "stre": 0.6, "spd": 0.2, "dnk": 1.0, "ins": 1.0, "oiq": 0.4}, 61.0),
    "Ps": ({"drb": 0.4, "oiq": 0.5, "pss": 1.0}, 63.0),
    "R": ({"hgt": 2.0, "stre": 0.1, "jmp": 0.1, "reb": 1.0}, 61.0),
}


def _composite(ratings: RatingsSnapshot, weights: dict[str, float]) -> float:
    total = sum(weights.values())
    return sum(ratings[key] * weight for key, weight in weights.items()) / total


def _base_change(age: int) -> float:
    if age <= 21:
        return 2.0
    if age <= 25:
        return 1.0
    if age <= 27:
        return 0.0
    if age <= 29:
        return -1.0
    if age <= 31:
        return -2.0
    if age <= 34:
        return -3.0
    if age <= 40:
        return -4.0
    if age <= 43:
        return -5.0
    return -6.0


class BasketballStrategy(SportRatingStrategy):
    """One overall per player; the position is a descriptive label."""

    name = "basketball"
    positions = ("PG", "G", "SG", "GF", "SF", "F", "PF", "FC", "C")
    multi_position = False
    tracks_weight = False

    def __init__(self, num_teams: int = NUM_TEAMS) -> None:
        self.num_teams = num_teams

    def _season_shift(self, age: int, rng: random.Random, coaching_rank: float) -> float:
        base = _base_change(age)
        if age <= 23:
            base += trunc_gauss(rng, 0, 5, -4, 20)
        elif age <= 25:
            base += trunc_gauss(rng, 0, 5, -4, 10)
        else:
            base += trunc_gauss(rng, 0, 3, -2, 4)
        return base * coaching_multiplier(base, coaching_rank, self.num_teams)

    def develop_season(
        self,
        ratings: RatingsSnapshot,
        age: int,
        rng: random.Random,
        coaching_rank: float | None = None,
    ) -> None:
        rank = DEFAULT_COACHING_RANK if coaching_rank is None else coaching_rank
        shift = self._season_shift(age, rng, rank)
        # Athleticism peaks around 27; IQ keeps improving into the early 30s.
        age_tilt = bound((age - 27) / 4.0, -1.0, 1.5)
        for key, (scale, late_bias) in AGE_PROFILES.items():
            change = shift * scale + late_bias * age_tilt
            change += rng.uniform(-1.0, 1.0)
            ratings[key] = bound_rating(ratings[key] + change)

        if age <= 20 and rng.random() < 0.25:
            ratings["hgt"] = bound_rating(ratings["hgt"] + 1)

    def overall(self, ratings: RatingsSnapshot, position: str | None = None) -> int:
        if position is not None and position not in self.positions:
            raise ConfigurationError(f'Invalid basketball position "{position}".')
        raw = sum(ratings[key] * weight for key, weight in OVR_WEIGHTS.items()) / sum(OVR_WEIGHTS.values())

        # Stretch the scale so stars read like stars and scrubs like scrubs.
        if raw >= 68:
            fudge = 8.0
        elif raw >= 50:
            fudge = 4.0 + (raw - 50) * (4.0 / 18.0)
        elif raw >= 42:
            fudge = -5.0 + (raw - 42) * (9.0 / 8.0)
        elif raw >= 31:
            fudge = -5.0 - (42 - raw) * (5.0 / 11.0)
        else:
            fudge = -10.0
        return bound_rating(raw + fudge)

    def primary_position(self, ratings: RatingsSnapshot) -> str:
        guard = ratings["drb"] >= 50 and ratings["pss"] >= 50
        big = ratings["hgt"] >= 59
        if ratings["hgt"] >= 67 or (big and ratings["stre"] >= 65 and not guard):
            return "C"
        if big:
            return "FC" if ratings["ins"] >= ratings["tp"] else "PF"
        if ratings["hgt"] <= 40:
            if ratings["pss"] >= ratings["tp"] and guard:
                return "PG"
            return "G" if guard else "SG"
        if ratings["hgt"] <= 48:
            return "GF" if guard else "SG"
        if ratings["stre"] >= 55 and ratings["reb"] >= 50:
            return "PF"
        return "SF" if guard or ratings["tp"] >= 50 else "F"

    def weight_growth(self, height: int, strength: int) -> int:
        # Displayed basketball weights never change.
        return 0

    def skills(self, ratings: RatingsSnapshot) -> list[str]:
        return [
            tag
            for tag, (weights, threshold) in SKILL_COMPOSITES.items()
            if _composite(ratings, weights) >= threshold
        ]

    def generate_ratings(self, rng: random.Random) -> dict[str, int]:
        size = trunc_gauss(rng, 0, 1, -2.5, 2.5)
        athlete = trunc_gauss(rng, 0, 1, -2.5, 2.5)
        skill = trunc_gauss(rng, 0, 1, -2.5, 2.5)
        attrs: dict[str, int] = {"hgt": bound_rating(48 + size * 14)}
        for key in ("stre", "spd", "jmp", "endu"):
            lean = -size * 4 if key in {"spd", "jmp"} else size * 3
            attrs[key] = bound_rating(42 + athlete * 8 + lean + rng.uniform(-8, 8))
        for key in ("ins", "dnk", "reb"):
            attrs[key] = bound_rating(38 + size * 7 + skill * 5 + rng.uniform(-8, 8))
        for key in ("ft", "fg", "tp", "drb", "pss"):
            attrs[key] = bound_rating(40 - size * 5 + skill * 7 + rng.uniform(-8, 8))
        for key in ("oiq", "diq"):
            attrs[key] = bound_rating(36 + skill * 6 + rng.uniform(-6, 6))
        return {key: attrs[key] for key in RATING_KEYS}

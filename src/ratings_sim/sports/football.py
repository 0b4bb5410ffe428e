from __future__ import annotations

import random
from enum import Enum

from ..config import DEFAULT_COACHING_RANK, NUM_TEAMS
from ..errors import ConfigurationError
from ..helpers import bound, bound_rating, coaching_multiplier, trunc_gauss
from ..models import RatingsSnapshot
from ..potential import RegressionCoefficients
from ..strategy import SportRatingStrategy


class FootballPosition(str, Enum):
    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"
    OL = "OL"
    DL = "DL"
    LB = "LB"
    CB = "CB"
    S = "S"
    K = "K"
    P = "P"
    KR = "KR"
    PR = "PR"


RATING_KEYS = (
    "hgt", "stre", "spd", "endu", "thv", "thp", "tha", "bsc", "elu", "rtr", "hnd",
    "rbk", "pbk", "pcv", "tck", "prs", "rns", "kpw", "kac", "ppw", "pac",
)

PHYSICAL_KEYS = frozenset({"stre", "spd", "endu"})
KICKING_KEYS = frozenset({"kpw", "kac", "ppw", "pac"})

POSITION_WEIGHTS: dict[str, dict[str, float]] = {
    "QB": {"hgt": 1, "stre": 1, "spd": 1, "thv": 8, "thp": 6, "tha": 8, "elu": 1},
    "RB": {"stre": 2, "spd": 6, "elu": 6, "bsc": 5, "hnd": 2, "rtr": 1, "endu": 1},
    "WR": {"hgt": 2, "spd": 6, "rtr": 6, "hnd": 6, "elu": 2, "bsc": 1},
    "TE": {"hgt": 2, "stre": 4, "spd": 2, "rtr": 3, "hnd": 4, "rbk": 4, "pbk": 2},
    "OL": {"hgt": 1, "stre": 6, "spd": 1, "rbk": 7, "pbk": 7},
    "DL": {"hgt": 2, "stre": 6, "spd": 4, "prs": 7, "rns": 6, "tck": 3},
    "LB": {"stre": 3, "spd": 5, "pcv": 3, "tck": 6, "prs": 2, "rns": 5},
    "CB": {"hgt": 1, "spd": 8, "pcv": 8, "hnd": 2, "tck": 2},
    "S": {"stre": 2, "spd": 6, "pcv": 6, "tck": 4, "rns": 2, "hnd": 1},
    "K": {"kpw": 1, "kac": 1},
    "P": {"ppw": 1, "pac": 1},
    "KR": {"spd": 5, "elu": 5, "bsc": 3, "hnd": 2},
    "PR": {"spd": 4, "elu": 5, "bsc": 3, "hnd": 3},
}

# Carried over from an earlier football ratings model. Regenerate them with
# calibration.calibrate(FootballStrategy()) to match this develop_season.
POTENTIAL_COEFFICIENTS: dict[FootballPosition, RegressionCoefficients] = {
    FootballPosition.CB: RegressionCoefficients(41.22339, -1.55671, 1.73043, -0.02711),
    FootballPosition.DL: RegressionCoefficients(50.39196, -1.91082, 2.00579, -0.03759),
    FootballPosition.K: RegressionCoefficients(35.997, -1.349, 1.834, -0.032),
    FootballPosition.KR: RegressionCoefficients(39.62046, -1.47839, 1.67194, -0.02539),
    FootballPosition.LB: RegressionCoefficients(36.72401, -1.37224, 1.91346, -0.03444),
    FootballPosition.OL: RegressionCoefficients(38.22024, -1.44549, 2.13113, -0.04226),
    FootballPosition.P: RegressionCoefficients(36.09308, -1.3511, 1.90802, -0.03557),
    FootballPosition.PR: RegressionCoefficients(38.16013, -1.42061, 1.93835, -0.03559),
    FootballPosition.QB: RegressionCoefficients(47.34247, -1.78499, 2.12059, -0.04236),
    FootballPosition.RB: RegressionCoefficients(18.70945, -0.69679, 2.40819, -0.05307),
    FootballPosition.S: RegressionCoefficients(42.84427, -1.62036, 1.99803, -0.03686),
    FootballPosition.TE: RegressionCoefficients(28.15031, -1.05288, 2.27735, -0.04792),
    FootballPosition.WR: RegressionCoefficients(46.83016, -1.75311, 1.76216, -0.02886),
}

# Tag -> (positions that can earn it, composite weights, threshold).
SKILL_COMPOSITES: dict[str, tuple[frozenset[str], dict[str, float], float]] = {
    "Pa": (frozenset({"QB"}), {"tha": 1.0, "thv": 0.5}, 70.0),
    "Pd": (frozenset({"QB"}), {"thp": 1.0}, 72.0),
    "Ps": (frozenset({"QB"}), {"thv": 1.0}, 72.0),
    "X": (frozenset({"RB", "WR", "TE"}), {"spd": 1.0, "elu": 1.0}, 70.0),
    "H": (frozenset({"RB", "WR", "TE"}), {"hnd": 1.0, "rtr": 0.5}, 70.0),
    "Bp": (frozenset({"OL", "TE"}), {"pbk": 1.0, "stre": 0.3}, 70.0),
    "Br": (frozenset({"OL", "TE"}), {"rbk": 1.0, "stre": 0.3}, 70.0),
    "Pr": (frozenset({"DL", "LB"}), {"prs": 1.0, "spd": 0.3}, 70.0),
    "Rd": (frozenset({"DL", "LB", "S"}), {"rns": 1.0, "tck": 0.5}, 70.0),
    "L": (frozenset({"CB", "S", "LB"}), {"pcv": 1.0, "spd": 0.5}, 70.0),
    "Kp": (frozenset({"K"}), {"kpw": 1.0, "kac": 1.0}, 70.0),
    "Pp": (frozenset({"P"}), {"ppw": 1.0, "pac": 1.0}, 70.0),
}


def _weighted(ratings: RatingsSnapshot, weights: dict[str, float]) -> float:
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
    return -3.0


def _peak_age(key: str) -> int:
    if key in PHYSICAL_KEYS:
        return 25
    if key in KICKING_KEYS:
        return 31
    return 28


class FootballStrategy(SportRatingStrategy):
    """Multi-position strategy: one overall and one potential per position."""

    name = "football"
    positions = tuple(p.value for p in FootballPosition)
    multi_position = True
    tracks_weight = True
    position_type = FootballPosition
    regression_table = POTENTIAL_COEFFICIENTS

    def __init__(self, num_teams: int = NUM_TEAMS) -> None:
        self.num_teams = num_teams

    def develop_season(
        self,
        ratings: RatingsSnapshot,
        age: int,
        rng: random.Random,
        coaching_rank: float | None = None,
    ) -> None:
        rank = DEFAULT_COACHING_RANK if coaching_rank is None else coaching_rank
        base = _base_change(age) + trunc_gauss(rng, 0, 2 if age <= 25 else 1, -3, 6)
        base *= coaching_multiplier(base, rank, self.num_teams)
        for key in RATING_KEYS:
            if key == "hgt":
                continue
            # Ratings keep rising until their own peak age, then erode.
            curve = bound((_peak_age(key) - age) / 3.0, -2.0, 1.5)
            change = base + curve + rng.uniform(-1.5, 1.5)
            ratings[key] = bound_rating(ratings[key] + change)

    def overall(self, ratings: RatingsSnapshot, position: str | None = None) -> int:
        if position is None:
            position = ratings.pos or self.primary_position(ratings)
        weights = POSITION_WEIGHTS.get(position)
        if weights is None:
            raise ConfigurationError(f'Invalid football position "{position}".')
        return bound_rating(_weighted(ratings, weights))

    def primary_position(self, ratings: RatingsSnapshot) -> str:
        eligible = [p for p in self.positions if p not in self.banned_primary_positions]
        return max(eligible, key=lambda p: self.overall(ratings, p))

    def weight_growth(self, height: int, strength: int) -> int:
        return round(150 + height * 1.3 + strength * 1.1)

    def skills(self, ratings: RatingsSnapshot) -> list[str]:
        return [
            tag
            for tag, (eligible, weights, threshold) in SKILL_COMPOSITES.items()
            if ratings.pos in eligible and _weighted(ratings, weights) >= threshold
        ]

    def generate_ratings(self, rng: random.Random) -> dict[str, int]:
        archetype = rng.choice([p for p in self.positions if p not in self.banned_primary_positions])
        attrs = {key: bound_rating(rng.gauss(28, 8)) for key in RATING_KEYS}
        attrs["hgt"] = bound_rating(rng.gauss(50, 15))
        attrs["stre"] = bound_rating(rng.gauss(45, 10))
        attrs["spd"] = bound_rating(rng.gauss(45, 10))
        attrs["endu"] = bound_rating(rng.gauss(45, 8))
        for key in POSITION_WEIGHTS[archetype]:
            attrs[key] = bound_rating(attrs[key] + rng.uniform(12, 26))
        return attrs

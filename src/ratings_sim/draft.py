from __future__ import annotations

import logging
import random

from .config import PLAYER_BIRTH_ORIGINS, UNDRAFTED_TID
from .develop import RatingsDevelopmentEngine
from .models import Born, DraftRecord, Player, RatingsSnapshot

logger = logging.getLogger(__name__)


def _sample_birth_origin(rng: random.Random) -> str:
    roll = rng.random()
    cumulative = 0.0
    for origin, weight in PLAYER_BIRTH_ORIGINS:
        cumulative += weight
        if roll <= cumulative:
            return origin
    return PLAYER_BIRTH_ORIGINS[0][0]


def generate_prospect(
    engine: RatingsDevelopmentEngine,
    season: int,
    rng: random.Random,
    base_age: int = 19,
    years: int = 0,
) -> Player:
    """Create an undrafted prospect for ``season`` aged ``base_age + years``.

    Extra years are simulated as bulk development of a new player, which also
    moves the birth year back so the stored age matches the ratings.
    """
    strategy = engine.strategy
    ratings = RatingsSnapshot(season=season, attrs=strategy.generate_ratings(rng))
    player = Player(
        born=Born(year=season - base_age, loc=_sample_birth_origin(rng)),
        ratings=[ratings],
        tid=UNDRAFTED_TID,
        draft=DraftRecord(year=season),
    )
    if strategy.tracks_weight:
        player.weight = strategy.weight_growth(ratings[strategy.height_attr], ratings[strategy.strength_attr])
    engine.develop(player, years=years, is_new_player=True)
    return player


def generate_draft_class(
    engine: RatingsDevelopmentEngine,
    season: int,
    size: int,
    seed: int | None = None,
    max_extra_years: int = 3,
) -> list[Player]:
    rng = random.Random(seed)
    prospects = [
        generate_prospect(engine, season, rng, years=rng.randint(0, max_extra_years))
        for _ in range(size)
    ]
    logger.info("generated %d %s prospects for season %d", len(prospects), engine.strategy.name, season)
    return prospects

from __future__ import annotations

import logging
import random

from .config import DEFAULT_COACHING_RANK, NUM_SIMULATIONS, WEIGHT_STEP_LIMIT
from .helpers import bound
from .models import Player, RatingsSnapshot
from .positions import PositionSelector, resolve_override
from .potential import PotentialEstimator, estimator_for
from .strategy import SportRatingStrategy

logger = logging.getLogger(__name__)


class RatingsDevelopmentEngine:
    def __init__(
        self,
        strategy: SportRatingStrategy,
        seed: int | None = None,
        rng: random.Random | None = None,
        num_simulations: int = NUM_SIMULATIONS,
        estimator: PotentialEstimator | None = None,
    ) -> None:
        strategy.validate()
        self.strategy = strategy
        self._rng = rng or random.Random(seed)
        self.estimator = estimator or estimator_for(strategy, num_simulations)
        self.position_selector = PositionSelector(strategy.positions, strategy.banned_primary_positions)

    @property
    def rng(self) -> random.Random:
        return self._rng

    def _apply_weight_change(self, player: Player, ratings: RatingsSnapshot) -> None:
        candidate = self.strategy.weight_growth(
            ratings[self.strategy.height_attr],
            ratings[self.strategy.strength_attr],
        )
        delta = bound(candidate - player.weight, -WEIGHT_STEP_LIMIT, WEIGHT_STEP_LIMIT)
        player.weight += int(delta)

    def _finalize_single_position(
        self,
        player: Player,
        ratings: RatingsSnapshot,
        age: int,
        skip_potential: bool,
    ) -> None:
        ratings.ovr = self.strategy.overall(ratings)
        if not skip_potential:
            ratings.pot = self.estimator.estimate(ratings, age, None, self._rng)
        ratings.pos = resolve_override(player) or self.strategy.primary_position(ratings)

    def _finalize_multi_position(
        self,
        player: Player,
        ratings: RatingsSnapshot,
        age: int,
        skip_potential: bool,
    ) -> None:
        ovrs, best = self.position_selector.select(self.strategy, ratings)
        ratings.ovrs = ovrs
        if not skip_potential:
            ratings.pots = {
                position: self.estimator.estimate(ratings, age, position, self._rng)
                for position in self.position_selector.positions
            }
        ratings.ovr = ratings.ovrs[best]
        if ratings.pots:
            ratings.pot = ratings.pots[best]
        ratings.pos = resolve_override(player) or best

    def develop(
        self,
        player: Player,
        years: int = 1,
        is_new_player: bool = False,
        coaching_rank: float = DEFAULT_COACHING_RANK,
        skip_potential: bool = False,
    ) -> None:
        """Develop (increase/decrease) the player's latest ratings snapshot in place.

        Args:
            player: Player to mutate. Only ``player.ratings[-1]`` is touched.
            years: Number of seasons to progress before finalizing. Zero still
                recomputes overall, potential, position and skills.
            is_new_player: Generating a new player (draft class, new league).
                Age advances every iteration and the birth year is shifted back
                by ``years`` afterwards.
            coaching_rank: 1 is the best staff, the team count is the worst.
            skip_potential: Leave ``pot``/``pots`` untouched (testing, debug).
        """
        if years < 0:
            raise ValueError(f"years must be >= 0, got {years}.")

        ratings = player.current_ratings
        age = player.age()

        for _year in range(years):
            # Existing players developing one season already had the season
            # counter advanced by the caller. New players and bulk multi-year
            # development stay in the same season, so age moves here.
            if is_new_player or years > 1:
                age += 1

            self.strategy.develop_season(ratings, age, self._rng, coaching_rank)

            if self.strategy.tracks_weight:
                self._apply_weight_change(player, ratings)

        if self.strategy.multi_position:
            self._finalize_multi_position(player, ratings, age, skip_potential)
        else:
            self._finalize_single_position(player, ratings, age, skip_potential)

        ratings.skills = self.strategy.skills(ratings)

        if player.is_undrafted:
            player.draft.ovr = ratings.ovr
            if not skip_potential:
                player.draft.pot = ratings.pot
            player.draft.skills = list(ratings.skills)

        if is_new_player:
            player.born.year -= years

        logger.debug(
            "developed %s: years=%d age=%d ovr=%d pot=%d pos=%s",
            player.player_id,
            years,
            age,
            ratings.ovr,
            ratings.pot,
            ratings.pos,
        )

from __future__ import annotations

import logging
import math
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from .config import NUM_SIMULATIONS, POTENTIAL_CEILING_AGE, POTENTIAL_PERCENTILE
from .errors import ConfigurationError, MissingCapabilityError
from .helpers import bound_rating
from .models import RatingsSnapshot
from .strategy import SportRatingStrategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RegressionCoefficients:
    intercept: float
    age: float
    ovr: float
    interaction: float

    def predict(self, ovr: float, age: float) -> float:
        return self.intercept + self.age * age + self.ovr * ovr + self.interaction * age * ovr


class PotentialEstimator(ABC):
    def __init__(self, strategy: SportRatingStrategy) -> None:
        self.strategy = strategy

    def current_ovr(self, ratings: RatingsSnapshot, position: str | None) -> int:
        return self.strategy.overall(ratings, position)

    @abstractmethod
    def estimate(
        self,
        ratings: RatingsSnapshot,
        age: int,
        position: str | None = None,
        rng: random.Random | None = None,
    ) -> int: ...


class RegressionEstimator(PotentialEstimator):
    """Closed-form potential fitted offline against bootstrap output.

    The fit only holds for the ratings model it was calibrated on, so the table
    has to be regenerated (see ``calibration.calibrate``) whenever the sport's
    progression or overall formulas change.
    """

    JITTER = 2

    def __init__(
        self,
        strategy: SportRatingStrategy,
        table: Mapping[Enum, RegressionCoefficients],
        position_type: type[Enum],
    ) -> None:
        super().__init__(strategy)
        missing = [member.value for member in position_type if member not in table]
        if missing:
            raise ConfigurationError(f"Regression table is missing positions: {', '.join(missing)}")
        self.table = dict(table)
        self.position_type = position_type

    def coefficients(self, position: str | None) -> RegressionCoefficients:
        if position is None:
            raise MissingCapabilityError("A position is required for regression potential.")
        try:
            key = self.position_type(position)
        except ValueError as exc:
            raise ConfigurationError(f'Invalid position "{position}" for potential regression.') from exc
        return self.table[key]

    def estimate(
        self,
        ratings: RatingsSnapshot,
        age: int,
        position: str | None = None,
        rng: random.Random | None = None,
    ) -> int:
        coeffs = self.coefficients(position)
        ovr = self.current_ovr(ratings, position)
        if age >= POTENTIAL_CEILING_AGE:
            return ovr

        rng = rng or random.Random()
        pot = coeffs.predict(ovr, age) + rng.randint(-self.JITTER, self.JITTER)
        if ovr > pot:
            return ovr
        return bound_rating(pot)


class BootstrapSimulator(PotentialEstimator):
    """Repeatedly simulate aging up to the ceiling age and take the 75th percentile max."""

    def __init__(self, strategy: SportRatingStrategy, num_simulations: int = NUM_SIMULATIONS) -> None:
        super().__init__(strategy)
        if num_simulations < 1:
            raise ValueError(f"num_simulations must be positive, got {num_simulations}.")
        self.num_simulations = num_simulations

    @property
    def percentile_index(self) -> int:
        return math.floor(POTENTIAL_PERCENTILE * self.num_simulations)

    def _run_trial(
        self,
        ratings: RatingsSnapshot,
        age: int,
        position: str | None,
        start_ovr: int,
        seed: int,
    ) -> int:
        trial_rng = random.Random(seed)
        trial_ratings = ratings.copy()
        max_ovr = start_ovr
        for trial_age in range(age + 1, POTENTIAL_CEILING_AGE + 1):
            # No coaching rank: potential is a coaching-neutral ceiling.
            self.strategy.develop_season(trial_ratings, trial_age, trial_rng, None)
            max_ovr = max(max_ovr, self.strategy.overall(trial_ratings, position))
        return max_ovr

    def estimate(
        self,
        ratings: RatingsSnapshot,
        age: int,
        position: str | None = None,
        rng: random.Random | None = None,
    ) -> int:
        start_ovr = self.current_ovr(ratings, position)
        if age >= POTENTIAL_CEILING_AGE:
            return start_ovr

        rng = rng or random.Random()
        seeds = [rng.getrandbits(64) for _ in range(self.num_simulations)]
        max_ovrs = sorted(self._run_trial(ratings, age, position, start_ovr, seed) for seed in seeds)
        pot = max_ovrs[self.percentile_index]
        logger.debug(
            "bootstrap potential %s at age %d (pos=%s): ovr=%d trials=%s -> %d",
            self.strategy.name,
            age,
            position,
            start_ovr,
            max_ovrs,
            pot,
        )
        return bound_rating(pot)


def bootstrap_potential(
    strategy: SportRatingStrategy,
    ratings: RatingsSnapshot,
    age: int,
    position: str | None = None,
    rng: random.Random | None = None,
    num_simulations: int = NUM_SIMULATIONS,
) -> int:
    """Simulated potential, ignoring any regression table the sport has."""
    return BootstrapSimulator(strategy, num_simulations).estimate(ratings, age, position, rng)


def estimator_for(strategy: SportRatingStrategy, num_simulations: int = NUM_SIMULATIONS) -> PotentialEstimator:
    if strategy.regression_table is not None:
        if strategy.position_type is None:
            raise ConfigurationError(f"{type(strategy).__name__} has a regression table but no position type.")
        return RegressionEstimator(strategy, strategy.regression_table, strategy.position_type)
    return BootstrapSimulator(strategy, num_simulations)

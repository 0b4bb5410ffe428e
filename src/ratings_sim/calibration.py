"""Offline calibration of regression potential tables.

Regression potential is a cheap stand-in for the bootstrap simulation. This
module samples bootstrap potentials for synthetic players and fits, per
position,

    pot = intercept + age_c * age + ovr_c * ovr + interaction_c * age * ovr

The resulting table is pasted into the sport module (for example
``sports.football.POTENTIAL_COEFFICIENTS``). It is never run as part of a
development pass.
"""

from __future__ import annotations

import logging
import random
from typing import Iterable

import pandas as pd
from sklearn.linear_model import LinearRegression

from .config import NUM_SIMULATIONS
from .models import RatingsSnapshot
from .potential import RegressionCoefficients, bootstrap_potential
from .strategy import SportRatingStrategy

logger = logging.getLogger(__name__)

FEATURE_COLS = ["age", "ovr", "interaction"]
LABEL_COL = "pot"


def sample_potentials(
    strategy: SportRatingStrategy,
    position: str | None,
    samples: int,
    rng: random.Random,
    ages: Iterable[int] = range(19, 29),
    num_simulations: int = NUM_SIMULATIONS,
) -> pd.DataFrame:
    """Build a frame of (age, ovr, pot) rows from freshly generated ratings."""
    age_pool = list(ages)
    rows: list[dict[str, int]] = []
    for _ in range(samples):
        ratings = RatingsSnapshot(season=0, attrs=strategy.generate_ratings(rng))
        age = rng.choice(age_pool)
        rows.append(
            {
                "age": age,
                "ovr": strategy.overall(ratings, position),
                "pot": bootstrap_potential(strategy, ratings, age, position, rng, num_simulations),
            }
        )
    return pd.DataFrame(rows, columns=["age", "ovr", LABEL_COL])


def fit_coefficients(frame: pd.DataFrame) -> RegressionCoefficients:
    """Least-squares fit of potential on age, overall and their interaction.

    Raises:
        ValueError: If the frame has fewer rows than model terms.
    """
    if len(frame) < len(FEATURE_COLS) + 1:
        raise ValueError(f"Not enough rows to fit potential regression (need >= {len(FEATURE_COLS) + 1}).")
    X = pd.DataFrame(
        {
            "age": frame["age"].astype(float),
            "ovr": frame["ovr"].astype(float),
            "interaction": frame["age"].astype(float) * frame["ovr"].astype(float),
        }
    )[FEATURE_COLS]
    y = frame[LABEL_COL].astype(float)

    model = LinearRegression()
    model.fit(X, y)
    age_c, ovr_c, interaction_c = (float(c) for c in model.coef_)
    return RegressionCoefficients(
        intercept=float(model.intercept_),
        age=age_c,
        ovr=ovr_c,
        interaction=interaction_c,
    )


def calibrate(
    strategy: SportRatingStrategy,
    samples_per_position: int = 200,
    seed: int | None = None,
    num_simulations: int = NUM_SIMULATIONS,
) -> dict[str, RegressionCoefficients]:
    rng = random.Random(seed)
    positions: list[str | None] = list(strategy.positions) if strategy.multi_position else [None]
    table: dict[str, RegressionCoefficients] = {}
    for position in positions:
        frame = sample_potentials(strategy, position, samples_per_position, rng, num_simulations=num_simulations)
        key = position or strategy.name
        table[key] = fit_coefficients(frame)
        logger.info("calibrated %s: %s", key, table[key])
    return table

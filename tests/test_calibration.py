import random

import pandas as pd
import pytest

from ratings_sim.calibration import calibrate, fit_coefficients, sample_potentials
from ratings_sim.potential import RegressionCoefficients
from stubs import PositionStrategy, StepStrategy


def test_fit_recovers_known_coefficients() -> None:
    truth = RegressionCoefficients(intercept=12.5, age=-0.8, ovr=1.9, interaction=-0.03)
    rng = random.Random(0)
    rows = []
    for _ in range(60):
        age, ovr = rng.randint(19, 28), rng.randint(30, 80)
        rows.append({"age": age, "ovr": ovr, "pot": truth.predict(ovr, age)})
    fitted = fit_coefficients(pd.DataFrame(rows))
    assert fitted.intercept == pytest.approx(truth.intercept, abs=1e-6)
    assert fitted.age == pytest.approx(truth.age, abs=1e-6)
    assert fitted.ovr == pytest.approx(truth.ovr, abs=1e-6)
    assert fitted.interaction == pytest.approx(truth.interaction, abs=1e-6)


def test_fit_needs_enough_rows() -> None:
    frame = pd.DataFrame({"age": [20, 21, 22], "ovr": [40, 50, 60], "pot": [50, 55, 60]})
    with pytest.raises(ValueError, match="Not enough rows"):
        fit_coefficients(frame)


def test_sample_potentials_frame_shape() -> None:
    frame = sample_potentials(StepStrategy(), None, 15, random.Random(1), ages=[20, 24], num_simulations=2)
    assert list(frame.columns) == ["age", "ovr", "pot"]
    assert len(frame) == 15
    assert set(frame["age"]) <= {20, 24}
    assert (frame["pot"] == frame["ovr"] + 58 - 2 * frame["age"]).all()


def test_calibrate_single_position_sport_keys_by_name() -> None:
    table = calibrate(StepStrategy(), samples_per_position=30, seed=2, num_simulations=2)
    assert list(table) == ["step"]
    fitted = table["step"]
    assert fitted.intercept == pytest.approx(58, abs=1e-6)
    assert fitted.age == pytest.approx(-2, abs=1e-6)
    assert fitted.ovr == pytest.approx(1, abs=1e-6)
    assert fitted.interaction == pytest.approx(0, abs=1e-6)


def test_calibrate_multi_position_sport_keys_by_position() -> None:
    table = calibrate(PositionStrategy(), samples_per_position=30, seed=3, num_simulations=2)
    assert list(table) == ["QB", "RB"]
    assert all(c.ovr == pytest.approx(1, abs=1e-6) for c in table.values())

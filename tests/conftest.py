import pytest

from stubs import PositionStrategy, StepStrategy


@pytest.fixture
def step_strategy() -> StepStrategy:
    return StepStrategy()


@pytest.fixture
def position_strategy() -> PositionStrategy:
    return PositionStrategy()

import pytest

from ratings_sim.develop import RatingsDevelopmentEngine
from ratings_sim.errors import InvariantViolation
from ratings_sim.models import RatingsSnapshot
from ratings_sim.positions import PositionSelector, resolve_override
from stubs import PositionStrategy, make_player


class ReturnerStrategy(PositionStrategy):
    positions = ("QB", "RB", "KR")


class SpecialistsOnlyStrategy(PositionStrategy):
    positions = ("KR", "PR")

    def primary_position(self, ratings) -> str:
        return "KR"


def _ratings(**attrs: int) -> RatingsSnapshot:
    return RatingsSnapshot(season=2025, attrs=attrs)


def test_every_position_is_rated(position_strategy: PositionStrategy) -> None:
    selector = PositionSelector(position_strategy.positions)
    ovrs, best = selector.select(position_strategy, _ratings(qb=70, rb=45))
    assert ovrs == {"QB": 70, "RB": 45}
    assert best == "QB"


def test_banned_position_is_rated_but_never_chosen() -> None:
    strategy = ReturnerStrategy()
    ovrs, best = PositionSelector(strategy.positions).select(strategy, _ratings(qb=40, rb=55, kr=90))
    assert ovrs["KR"] == 90
    assert best == "RB"


def test_tie_goes_to_earlier_position(position_strategy: PositionStrategy) -> None:
    _ovrs, best = PositionSelector(position_strategy.positions).select(position_strategy, _ratings(qb=60, rb=60))
    assert best == "QB"


def test_custom_ban_list() -> None:
    strategy = ReturnerStrategy()
    selector = PositionSelector(strategy.positions, banned={"RB"})
    _ovrs, best = selector.select(strategy, _ratings(qb=40, rb=55, kr=90))
    assert best == "KR"


def test_no_eligible_position_is_invariant_violation() -> None:
    strategy = SpecialistsOnlyStrategy()
    with pytest.raises(InvariantViolation, match="Should never happen"):
        PositionSelector(strategy.positions).select(strategy, _ratings(kr=50, pr=50))


def test_engine_surfaces_invariant_violation() -> None:
    engine = RatingsDevelopmentEngine(SpecialistsOnlyStrategy())
    player = make_player({"kr": 50, "pr": 50})
    with pytest.raises(InvariantViolation):
        engine.develop(player, years=0, skip_potential=True)


@pytest.mark.parametrize(
    ("override", "expected"),
    [(None, None), ("QB", "QB"), ("", None), (7, None)],
)
def test_resolve_override(override, expected) -> None:
    player = make_player({"qb": 50, "rb": 50}, pos=override)
    assert resolve_override(player) == expected


def test_invalid_override_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    player = make_player({"qb": 50, "rb": 50}, pos="")
    with caplog.at_level("WARNING", logger="ratings_sim.positions"):
        assert resolve_override(player) is None
    assert "Ignoring invalid position override" in caplog.text

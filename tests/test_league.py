import random

import pytest

from ratings_sim.config import PLAYER_BIRTH_ORIGINS, UNDRAFTED_TID
from ratings_sim.develop import RatingsDevelopmentEngine
from ratings_sim.draft import generate_draft_class, generate_prospect
from ratings_sim.league import advance_season
from ratings_sim.sports.basketball import BasketballStrategy
from ratings_sim.sports.football import FootballStrategy
from stubs import StepStrategy, make_player


def test_advance_season_appends_snapshot_and_reports_changes(step_strategy: StepStrategy) -> None:
    engine = RatingsDevelopmentEngine(step_strategy, seed=7)
    players = [make_player({"ovr": 50}, season=2024, age=22, tid=3), make_player({"ovr": 40}, season=2024, age=30, tid=5)]
    for player in players:
        engine.develop(player, years=0)
    step_strategy.calls.clear()

    report = advance_season(engine, players, 2025, coaching_ranks={3: 1})

    assert report["season"] == 2025
    assert report["developed"] == 2
    assert [(c["ovr_before"], c["ovr_after"]) for c in report["changes"]] == [(50, 52), (40, 42)]
    assert step_strategy.calls[0] == (23, 1)
    assert (31, 15.5) in step_strategy.calls
    for player in players:
        assert [r.season for r in player.ratings] == [2024, 2025]
        assert player.ratings[0].ovr == player.ratings[1].ovr - 2


def test_advance_season_rejects_stale_season(step_strategy: StepStrategy) -> None:
    engine = RatingsDevelopmentEngine(step_strategy)
    with pytest.raises(ValueError):
        advance_season(engine, [make_player({"ovr": 50}, season=2025)], 2025)


def test_prospect_is_undrafted_with_synced_draft_record() -> None:
    engine = RatingsDevelopmentEngine(BasketballStrategy(), seed=1)
    prospect = generate_prospect(engine, 2030, random.Random(4), years=2)
    ratings = prospect.current_ratings
    assert prospect.tid == UNDRAFTED_TID
    assert prospect.age() == 21
    assert prospect.draft.year == 2030
    assert prospect.draft.ovr == ratings.ovr
    assert prospect.draft.pot == ratings.pot >= ratings.ovr
    assert prospect.draft.skills == ratings.skills
    assert prospect.born.loc in {origin for origin, _weight in PLAYER_BIRTH_ORIGINS}


def test_football_prospect_gets_a_weight_and_playable_position() -> None:
    engine = RatingsDevelopmentEngine(FootballStrategy(), seed=2)
    prospect = generate_prospect(engine, 2030, random.Random(8), years=1)
    ratings = prospect.current_ratings
    assert prospect.weight > 0
    assert ratings.pos not in {"KR", "PR"}
    assert set(ratings.ovrs) == set(FootballStrategy.positions)
    assert all(0 <= ratings.ovrs[p] <= ratings.pots[p] <= 100 for p in ratings.ovrs)


def test_draft_class_ages_match_extra_years() -> None:
    strategy = StepStrategy()
    engine = RatingsDevelopmentEngine(strategy, seed=3)
    prospects = generate_draft_class(engine, 2030, 12, seed=5, max_extra_years=3)
    assert len(prospects) == 12
    assert all(19 <= p.age() <= 22 for p in prospects)
    assert all(p.current_ratings.season == 2030 for p in prospects)
    assert len({p.player_id for p in prospects}) == 12


def test_draft_class_is_reproducible() -> None:
    first = generate_draft_class(RatingsDevelopmentEngine(BasketballStrategy(), seed=1), 2030, 5, seed=9)
    second = generate_draft_class(RatingsDevelopmentEngine(BasketballStrategy(), seed=1), 2030, 5, seed=9)
    assert [p.current_ratings for p in first] == [p.current_ratings for p in second]

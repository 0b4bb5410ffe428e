from __future__ import annotations

import logging
from typing import Iterable, Mapping

from .config import DEFAULT_COACHING_RANK
from .develop import RatingsDevelopmentEngine
from .models import Player

logger = logging.getLogger(__name__)


def advance_season(
    engine: RatingsDevelopmentEngine,
    players: Iterable[Player],
    season: int,
    coaching_ranks: Mapping[int, float] | None = None,
) -> dict[str, object]:
    """Start ``season`` for every player and develop them one year.

    A fresh snapshot is appended before developing, so the previous season's
    ratings stay as history and age already reflects the new season.
    """
    coaching_ranks = coaching_ranks or {}
    changes: list[dict[str, object]] = []
    for player in players:
        ovr_before = player.current_ratings.ovr
        player.add_season(season)
        engine.develop(player, coaching_rank=coaching_ranks.get(player.tid, DEFAULT_COACHING_RANK))
        ratings = player.current_ratings
        changes.append(
            {
                "player_id": player.player_id,
                "ovr_before": ovr_before,
                "ovr_after": ratings.ovr,
                "pot": ratings.pot,
            }
        )
    logger.info("season %d: developed %d players", season, len(changes))
    return {"season": season, "developed": len(changes), "changes": changes}

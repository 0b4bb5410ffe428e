from __future__ import annotations

import logging
from typing import Iterable

from .config import BANNED_PRIMARY_POSITIONS
from .errors import InvariantViolation
from .models import Player, RatingsSnapshot
from .strategy import SportRatingStrategy

logger = logging.getLogger(__name__)


class PositionSelector:
    def __init__(self, positions: Iterable[str], banned: Iterable[str] = BANNED_PRIMARY_POSITIONS) -> None:
        self.positions = tuple(positions)
        self.banned = frozenset(banned)

    def select(self, strategy: SportRatingStrategy, ratings: RatingsSnapshot) -> tuple[dict[str, int], str]:
        """Rate every position and pick the best one a player may hold as main position.

        Banned positions keep their overall in the returned mapping. Ties go to
        the earlier position in canonical order.
        """
        ovrs: dict[str, int] = {}
        best: str | None = None
        best_ovr = float("-inf")
        for position in self.positions:
            ovrs[position] = strategy.overall(ratings, position)
            if position not in self.banned and ovrs[position] > best_ovr:
                best = position
                best_ovr = ovrs[position]

        if best is None:
            raise InvariantViolation(
                f"Should never happen: no eligible primary position among {self.positions} "
                f"(banned: {sorted(self.banned)})."
            )
        return ovrs, best


def resolve_override(player: Player) -> str | None:
    """Return the player's manually fixed position, if one is set."""
    override = player.pos
    if override is None:
        return None
    if isinstance(override, str) and override:
        return override
    logger.warning("Ignoring invalid position override %r for player %s", override, player.player_id)
    return None

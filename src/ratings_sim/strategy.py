from __future__ import annotations

import random
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Mapping

from .config import BANNED_PRIMARY_POSITIONS
from .errors import ConfigurationError
from .models import RatingsSnapshot

if TYPE_CHECKING:
    from .potential import RegressionCoefficients


class SportRatingStrategy(ABC):
    """Sport-specific rating rules injected into the development engine.

    Every hook is abstract, so a partial strategy fails at instantiation rather
    than in the middle of a development pass.
    """

    name: ClassVar[str] = "sport"
    positions: ClassVar[tuple[str, ...]] = ()
    multi_position: ClassVar[bool] = False
    banned_primary_positions: ClassVar[frozenset[str]] = BANNED_PRIMARY_POSITIONS
    tracks_weight: ClassVar[bool] = False
    height_attr: ClassVar[str] = "hgt"
    strength_attr: ClassVar[str] = "stre"
    position_type: ClassVar[type[Enum] | None] = None
    regression_table: ClassVar[Mapping[Enum, RegressionCoefficients] | None] = None

    def validate(self) -> None:
        if not self.positions:
            raise ConfigurationError(f"{type(self).__name__} defines no positions.")
        if len(set(self.positions)) != len(self.positions):
            raise ConfigurationError(f"{type(self).__name__} has duplicate positions: {self.positions}")

    @abstractmethod
    def develop_season(
        self,
        ratings: RatingsSnapshot,
        age: int,
        rng: random.Random,
        coaching_rank: float | None = None,
    ) -> None:
        """Progress ``ratings`` by one season in place. ``None`` rank means neutral coaching."""

    @abstractmethod
    def overall(self, ratings: RatingsSnapshot, position: str | None = None) -> int:
        """Return the 0-100 overall, optionally for one position."""

    @abstractmethod
    def primary_position(self, ratings: RatingsSnapshot) -> str: ...

    @abstractmethod
    def weight_growth(self, height: int, strength: int) -> int: ...

    @abstractmethod
    def skills(self, ratings: RatingsSnapshot) -> list[str]: ...

    @abstractmethod
    def generate_ratings(self, rng: random.Random) -> dict[str, int]: ...

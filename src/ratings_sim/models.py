from __future__ import annotations

import copy
from dataclasses import dataclass, field
from uuid import uuid4

from .config import UNDRAFTED_TID


@dataclass(slots=True)
class RatingsSnapshot:
    season: int
    attrs: dict[str, int] = field(default_factory=dict)
    ovr: int = 0
    pot: int = 0
    ovrs: dict[str, int] = field(default_factory=dict)
    pots: dict[str, int] = field(default_factory=dict)
    pos: str = ""
    skills: list[str] = field(default_factory=list)

    def __getitem__(self, key: str) -> int:
        return self.attrs[key]

    def __setitem__(self, key: str, value: int) -> None:
        self.attrs[key] = value

    def copy(self) -> RatingsSnapshot:
        return copy.deepcopy(self)


@dataclass(slots=True)
class Born:
    year: int
    loc: str = ""


@dataclass(slots=True)
class DraftRecord:
    ovr: int = 0
    pot: int = 0
    skills: list[str] = field(default_factory=list)
    year: int | None = None


@dataclass(slots=True)
class Player:
    born: Born
    ratings: list[RatingsSnapshot]
    tid: int = UNDRAFTED_TID
    draft: DraftRecord = field(default_factory=DraftRecord)
    weight: int = 0
    pos: str | None = None
    player_id: str = field(default_factory=lambda: uuid4().hex)

    def __post_init__(self) -> None:
        if not self.ratings:
            raise ValueError("Player needs at least one ratings snapshot.")

    @property
    def current_ratings(self) -> RatingsSnapshot:
        return self.ratings[-1]

    @property
    def is_undrafted(self) -> bool:
        return self.tid == UNDRAFTED_TID

    def age(self, season: int | None = None) -> int:
        if season is None:
            season = self.current_ratings.season
        return season - self.born.year

    def add_season(self, season: int) -> RatingsSnapshot:
        latest = self.current_ratings
        if season <= latest.season:
            raise ValueError(f"Season {season} does not follow latest season {latest.season}.")
        snapshot = latest.copy()
        snapshot.season = season
        self.ratings.append(snapshot)
        return snapshot

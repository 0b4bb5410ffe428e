from __future__ import annotations

import logging
from threading import Lock
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .config import DEFAULT_COACHING_RANK, NUM_SIMULATIONS, UNDRAFTED_TID
from .develop import RatingsDevelopmentEngine
from .errors import InvariantViolation
from .models import Born, DraftRecord, Player, RatingsSnapshot
from .potential import bootstrap_potential
from .sports.basketball import BasketballStrategy
from .sports.football import FootballStrategy
from .strategy import SportRatingStrategy

logger = logging.getLogger(__name__)


class DevelopSelection(BaseModel):
    player: dict[str, Any]
    years: int = Field(default=1, ge=0, le=30)
    is_new_player: bool = False
    coaching_rank: float = DEFAULT_COACHING_RANK
    skip_potential: bool = False


class BootstrapSelection(BaseModel):
    ratings: dict[str, Any]
    age: int = Field(ge=0, le=60)
    position: str | None = None
    num_simulations: int = Field(default=NUM_SIMULATIONS, ge=1, le=1000)


class DevelopmentService:
    def __init__(self, seed: int | None = None) -> None:
        strategies: list[SportRatingStrategy] = [BasketballStrategy(), FootballStrategy()]
        self.engines: dict[str, RatingsDevelopmentEngine] = {
            strategy.name: RatingsDevelopmentEngine(strategy, seed=seed) for strategy in strategies
        }
        self._lock = Lock()

    def engine(self, sport: str) -> RatingsDevelopmentEngine:
        engine = self.engines.get(sport.lower())
        if engine is None:
            raise HTTPException(status_code=404, detail="Sport not found")
        return engine

    def _serialize_ratings(self, ratings: RatingsSnapshot) -> dict[str, Any]:
        return {
            "season": ratings.season,
            "attrs": dict(ratings.attrs),
            "ovr": ratings.ovr,
            "pot": ratings.pot,
            "ovrs": dict(ratings.ovrs),
            "pots": dict(ratings.pots),
            "pos": ratings.pos,
            "skills": list(ratings.skills),
        }

    def _deserialize_ratings(self, raw: dict[str, Any]) -> RatingsSnapshot:
        if not isinstance(raw, dict):
            raise HTTPException(status_code=400, detail="ratings entries must be objects")
        if "season" not in raw:
            raise HTTPException(status_code=400, detail="ratings.season is required")
        return RatingsSnapshot(
            season=int(raw["season"]),
            attrs={str(k): int(v) for k, v in dict(raw.get("attrs", {})).items()},
            ovr=int(raw.get("ovr", 0)),
            pot=int(raw.get("pot", 0)),
            ovrs={str(k): int(v) for k, v in dict(raw.get("ovrs", {})).items()},
            pots={str(k): int(v) for k, v in dict(raw.get("pots", {})).items()},
            pos=str(raw.get("pos", "")),
            skills=[str(s) for s in raw.get("skills", [])],
        )

    def serialize_player(self, player: Player) -> dict[str, Any]:
        return {
            "player_id": player.player_id,
            "born": {"year": player.born.year, "loc": player.born.loc},
            "draft": {
                "ovr": player.draft.ovr,
                "pot": player.draft.pot,
                "skills": list(player.draft.skills),
                "year": player.draft.year,
            },
            "tid": player.tid,
            "weight": player.weight,
            "pos": player.pos,
            "ratings": [self._serialize_ratings(r) for r in player.ratings],
        }

    def deserialize_player(self, raw: dict[str, Any]) -> Player:
        raw_ratings = raw.get("ratings")
        if not isinstance(raw_ratings, list) or not raw_ratings:
            raise HTTPException(status_code=400, detail="player.ratings must be a non-empty list")
        born = raw.get("born")
        if not isinstance(born, dict) or "year" not in born:
            raise HTTPException(status_code=400, detail="player.born.year is required")
        draft = raw.get("draft") if isinstance(raw.get("draft"), dict) else {}
        player = Player(
            born=Born(year=int(born["year"]), loc=str(born.get("loc", ""))),
            ratings=[self._deserialize_ratings(r) for r in raw_ratings],
            tid=int(raw.get("tid", UNDRAFTED_TID)),
            draft=DraftRecord(
                ovr=int(draft.get("ovr", 0)),
                pot=int(draft.get("pot", 0)),
                skills=[str(s) for s in draft.get("skills", [])],
                year=(int(draft["year"]) if draft.get("year") is not None else None),
            ),
            weight=int(raw.get("weight", 0)),
            pos=(str(raw["pos"]) if raw.get("pos") is not None else None),
        )
        if raw.get("player_id"):
            player.player_id = str(raw["player_id"])
        return player

    def develop(self, sport: str, selection: DevelopSelection) -> dict[str, Any]:
        engine = self.engine(sport)
        try:
            player = self.deserialize_player(selection.player)
        except (TypeError, ValueError) as exc:
            raise HTTPException(status_code=400, detail=f"Invalid player payload: {exc}") from exc
        try:
            engine.develop(
                player,
                years=selection.years,
                is_new_player=selection.is_new_player,
                coaching_rank=selection.coaching_rank,
                skip_potential=selection.skip_potential,
            )
        except (ValueError, KeyError, InvariantViolation) as exc:
            logger.warning("develop failed for %s player %s: %s", sport, player.player_id, exc)
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return self.serialize_player(player)

    def bootstrap(self, sport: str, selection: BootstrapSelection) -> dict[str, int]:
        engine = self.engine(sport)
        try:
            ratings = self._deserialize_ratings(selection.ratings)
            pot = bootstrap_potential(
                engine.strategy,
                ratings,
                selection.age,
                selection.position,
                engine.rng,
                selection.num_simulations,
            )
        except (TypeError, ValueError, KeyError) as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return {"pot": pot}


service = DevelopmentService()
app = FastAPI(title="Ratings Sim API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/api/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/api/sports")
def sports() -> list[dict[str, Any]]:
    return [
        {
            "sport": name,
            "positions": list(engine.strategy.positions),
            "multi_position": engine.strategy.multi_position,
            "estimator": type(engine.estimator).__name__,
        }
        for name, engine in service.engines.items()
    ]


@app.post("/api/sports/{sport}/develop")
def develop(sport: str, payload: DevelopSelection) -> dict[str, Any]:
    with service._lock:
        return service.develop(sport, payload)


@app.post("/api/sports/{sport}/potential/bootstrap")
def potential_bootstrap(sport: str, payload: BootstrapSelection) -> dict[str, int]:
    with service._lock:
        return service.bootstrap(sport, payload)

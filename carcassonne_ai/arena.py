"""Running matches, random playouts and replay files."""
from __future__ import annotations

import json
import logging
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Sequence, Set

from .board import MoveRequest, Rotation, Slot, TileData
from .errors import ReplayError, RulesViolation
from .referee import RefereeState
from .tilebag import RandomTileBag, ReplayTileBag, TileBag
from .types import Coordinate, Player

if TYPE_CHECKING:
    from .bots.base import Bot

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    player_scores: Dict[Player, int]

    def get_winners(self) -> Set[Player]:
        if not self.player_scores:
            return set()
        best = max(self.player_scores.values())
        return {player for player, score in self.player_scores.items() if score == best}

    def ranking(self) -> List[tuple]:
        return sorted(self.player_scores.items(), key=lambda kv: (-kv[1], kv[0]))


@dataclass
class ConcreteMove:
    """A move together with the tile it placed."""

    tile: TileData
    coord: Coordinate
    rotation: Rotation = Rotation.NONE
    meeple: Optional[Slot] = None

    def to_request(self) -> MoveRequest:
        return MoveRequest(self.coord, self.rotation, self.meeple)

    def to_dict(self) -> Dict[str, Any]:
        out = {"tile": self.tile.to_dict()}
        out.update(self.to_request().to_dict())
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ConcreteMove":
        request = MoveRequest.from_dict(data)
        return cls(
            tile=TileData.from_dict(data["tile"]),
            coord=request.coord,
            rotation=request.rotation,
            meeple=request.meeple,
        )


@dataclass
class Replay:
    turn_order: List[Player] = field(default_factory=list)
    moves: List[ConcreteMove] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "turn_order": [player.value for player in self.turn_order],
            "moves": [move.to_dict() for move in self.moves],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Replay":
        return cls(
            turn_order=[Player(p) for p in data.get("turn_order", [])],
            moves=[ConcreteMove.from_dict(m) for m in data.get("moves", [])],
        )

    def save(self, path: str) -> None:
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f)
        except OSError as exc:
            raise ReplayError(f"failed to write replay to {path}: {exc}") from exc

    @classmethod
    def from_path(cls, path: str) -> "Replay":
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as exc:
            raise ReplayError(f"failed to open replay {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ReplayError(f"failed to parse replay {path}: {exc}") from exc
        try:
            return cls.from_dict(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise ReplayError(f"malformed replay {path}: {exc}") from exc

    def replay(self) -> GameResult:
        """Feed the recorded moves back through a normal match."""
        from .bots.replay_bot import ReplayBot

        if not self.turn_order:
            raise ReplayError("replay has no players")
        bots = [ReplayBot(player) for player in self.turn_order]
        for idx, move in enumerate(self.moves):
            bots[idx % len(bots)].add_move(move.to_request())
        bag = ReplayTileBag([move.tile for move in self.moves])
        try:
            return Match.play(bots, bag=bag)
        except RulesViolation as exc:
            raise ReplayError(f"recorded move rejected: {exc}") from exc


class Match:
    @staticmethod
    def play(
        bots: Sequence["Bot"],
        bag: Optional[TileBag] = None,
        record: Optional[str] = None,
        meeples_per_player: Optional[int] = None,
    ) -> GameResult:
        """Run a match to completion; optionally write a replay to ``record``."""
        by_player: Dict[Player, "Bot"] = {}
        for bot in bots:
            by_player.setdefault(bot.get_own_player(), bot)
        kwargs = {} if meeples_per_player is None else {"meeples_per_player": meeples_per_player}
        state = RefereeState.from_players(by_player, bag if bag is not None else RandomTileBag(), **kwargs)
        replay = Replay(turn_order=list(state.turn_order))

        while not state.is_over():
            bot = by_player[state.get_player()]
            request = bot.get_move(state)
            if record is not None:
                replay.moves.append(
                    ConcreteMove(state.tilebag.peek().copy(), request.coord, request.rotation, request.meeple)
                )
            state.process_move(request)

        if record is not None:
            replay.save(record)
            logger.info("replay written to %s", record)

        result = GameResult(state.final_scores())
        logger.info(
            "match over: %s",
            ", ".join(f"{by_player[p].name} ({p.value}) {score}" for p, score in result.ranking()),
        )
        return result

    @staticmethod
    def play_random_from_state(state: RefereeState, rng: Optional[random.Random] = None) -> GameResult:
        """Finish ``state`` in place with uniformly random legal moves.

        Future draws are re-randomised, so callers should pass a clone.
        """
        rng = rng or random.Random()
        state.tilebag = state.tilebag.as_random_bag(rng.getrandbits(64))
        while not state.is_over():
            state.process_move(rng.choice(state.get_legal_moves()))
        return GameResult(state.final_scores())


__all__ = ["GameResult", "ConcreteMove", "Replay", "Match"]

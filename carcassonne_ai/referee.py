"""Turn order, the two-phase move protocol, meeple reserves and the score ledger.

A turn is a tile placement followed by a meeple decision (place one or skip).
Scoring happens when the meeple decision closes the turn: every feature the
new tile touches is scored, completed features hand their meeples back and
the next player is up. ``process_move`` runs a whole turn at once and either
applies all of it or none of it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional

from .board import Board, MoveRequest, Rotation, Slot
from .board.features import ScoringData
from .errors import OutOfMeeplesError, RulesViolation, WrongPhaseError
from .tilebag import TileBag
from .types import Coordinate, Player

logger = logging.getLogger(__name__)

DEFAULT_MEEPLES = 7


class Phase(str, Enum):
    AWAITING_TILE = "awaiting_tile_placement"
    AWAITING_MEEPLE = "awaiting_meeple_placement"


@dataclass(frozen=True)
class ScoreEvent:
    """One award written to the ledger."""

    player: Player
    points: int
    endgame: bool = False


class RefereeState:
    def __init__(
        self,
        turn_order: List[Player],
        tilebag: TileBag,
        *,
        meeples_per_player: int = DEFAULT_MEEPLES,
        board: Optional[Board] = None,
    ) -> None:
        if not turn_order:
            raise ValueError("a match needs at least one player")
        self.turn_order: List[Player] = list(turn_order)
        self.turn_idx = 0
        self.phase = Phase.AWAITING_TILE
        self.meeples_per_player = meeples_per_player
        self.player_scores: Dict[Player, int] = {p: 0 for p in self.turn_order}
        self.player_meeples: Dict[Player, int] = {p: meeples_per_player for p in self.turn_order}
        self.board = board if board is not None else Board()
        self.tilebag = tilebag
        self.pending: Optional[Coordinate] = None
        self.score_log: List[ScoreEvent] = []
        self.endgame_recorded = False
        self.tilebag.ensure_legal_draw(self.board)

    @classmethod
    def from_players(
        cls,
        players: Iterable[Player],
        tilebag: TileBag,
        meeples_per_player: int = DEFAULT_MEEPLES,
    ) -> "RefereeState":
        """Sort and deduplicate ``players`` into the turn order."""
        return cls(sorted(set(players)), tilebag, meeples_per_player=meeples_per_player)

    # -- queries -----------------------------------------------------------

    def get_player(self) -> Player:
        return self.turn_order[self.turn_idx]

    def is_over(self) -> bool:
        return self.phase is Phase.AWAITING_TILE and self.tilebag.is_empty()

    def can_place_meeple(self, player: Optional[Player] = None) -> bool:
        return self.player_meeples.get(player or self.get_player(), 0) > 0

    def get_legal_moves(self) -> List[MoveRequest]:
        """Every move the current player may submit for the tile on top of the bag."""
        if self.phase is not Phase.AWAITING_TILE or self.tilebag.is_empty():
            return []
        return self.board.get_legal_moves(self.tilebag.peek(), self.can_place_meeple())

    def final_scores(self) -> Dict[Player, int]:
        """Ledger totals plus standing points for every feature still holding a meeple.

        Once the match is over the standing awards are also appended to
        ``score_log`` (only the first time this is called).
        """
        standing = self.board.get_all_scoring_data()
        out = dict(self.player_scores)
        for data in standing:
            for player in data.players:
                out[player] = out.get(player, 0) + data.points
        if self.is_over() and not self.endgame_recorded:
            self.endgame_recorded = True
            for data in standing:
                for player in sorted(data.players):
                    if data.points:
                        self.score_log.append(ScoreEvent(player, data.points, endgame=True))
        return out

    # -- moves -------------------------------------------------------------

    def process_move(self, request: MoveRequest) -> None:
        """Place the tile and resolve the meeple phase in one step.

        Everything is validated against a preview before anything changes,
        so a rejected request leaves the state exactly as it was.
        """
        try:
            self._validate(request)
        except RulesViolation as exc:
            logger.debug("rejected %s for %s: %s", request, self.get_player().value, exc)
            raise
        self.place_tile(request.coord, request.rotation)
        if request.meeple is None:
            self.skip_meeple()
        else:
            self.place_meeple(request.meeple)

    def place_tile(self, coord: Coordinate, rotation: Rotation = Rotation.NONE) -> None:
        self._require_phase(Phase.AWAITING_TILE)
        candidate = self.tilebag.peek().with_rotation(rotation)
        self.board.check_placement(coord, candidate)
        self.tilebag.pull()
        self.board.set(coord, candidate)
        self.pending = coord
        self.phase = Phase.AWAITING_MEEPLE

    def place_meeple(self, slot: Slot) -> None:
        self._require_phase(Phase.AWAITING_MEEPLE)
        player = self.get_player()
        if not self.can_place_meeple(player):
            raise OutOfMeeplesError(f"{player.value} has no meeples left")
        self.board.check_meeple(self.pending, slot)
        self.board.at_mut(self.pending).place_meeple(slot, player)
        self.player_meeples[player] -= 1
        self._finish_turn()

    def skip_meeple(self) -> None:
        self._require_phase(Phase.AWAITING_MEEPLE)
        self._finish_turn()

    def clone(self) -> "RefereeState":
        """Independent deep copy, board and bag included."""
        out = RefereeState.__new__(RefereeState)
        out.turn_order = list(self.turn_order)
        out.turn_idx = self.turn_idx
        out.phase = self.phase
        out.meeples_per_player = self.meeples_per_player
        out.player_scores = dict(self.player_scores)
        out.player_meeples = dict(self.player_meeples)
        out.board = self.board.copy()
        out.tilebag = self.tilebag.copy()
        out.pending = self.pending
        out.score_log = list(self.score_log)
        out.endgame_recorded = self.endgame_recorded
        return out

    # -- internals ---------------------------------------------------------

    def _require_phase(self, phase: Phase) -> None:
        if self.phase is not phase:
            raise WrongPhaseError(f"expected {phase.value}, currently {self.phase.value}")

    def _validate(self, request: MoveRequest) -> None:
        self._require_phase(Phase.AWAITING_TILE)
        candidate = self.tilebag.peek().with_rotation(request.rotation)
        self.board.check_placement(request.coord, candidate)
        if request.meeple is None:
            return
        if not self.can_place_meeple():
            raise OutOfMeeplesError(f"{self.get_player().value} has no meeples left")
        self.board.with_overlay(request.coord, candidate).check_meeple(request.coord, request.meeple)

    def _finish_turn(self) -> None:
        coord = self.pending
        for data in self.board.get_feature_score_data(coord, self.board.at(coord)):
            self._award(data)
        self.pending = None
        self.phase = Phase.AWAITING_TILE
        self.turn_idx = (self.turn_idx + 1) % len(self.turn_order)
        self.tilebag.ensure_legal_draw(self.board)

    def _award(self, data: ScoringData) -> None:
        if data.points:
            for player in sorted(data.players):
                self.player_scores[player] = self.player_scores.get(player, 0) + data.points
                self.score_log.append(ScoreEvent(player, data.points))
                logger.debug("%s scores %d for %s at %s", player.value, data.points, data.kind.value, data.origin)
        if not data.complete:
            return
        for spot, slot in data.removal_candidates:
            tile = self.board.at_mut(spot)
            owner = tile.remove_meeple(slot) if tile is not None else None
            if owner is not None:
                self.player_meeples[owner] = self.player_meeples.get(owner, 0) + 1

    def __repr__(self) -> str:
        return (
            f"RefereeState(player={self.get_player().value}, phase={self.phase.value}, "
            f"tiles={len(self.board)}, remaining={self.tilebag.count_remaining()})"
        )


__all__ = ["Phase", "ScoreEvent", "RefereeState", "DEFAULT_MEEPLES"]

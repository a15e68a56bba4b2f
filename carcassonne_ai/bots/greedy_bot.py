from __future__ import annotations

import random
from typing import TYPE_CHECKING, List, Optional, Tuple

from ..board import MoveRequest
from ..types import Player
from .base import pick_best, signed_total

if TYPE_CHECKING:
    from ..referee import RefereeState


class GreedyBot:
    """Maximises the immediate completion points of the move.

    Each candidate is scored as own points minus opponents' points on the
    features the placement touches.
    """

    name = "greedy bot"

    def __init__(self, player: Player, seed: Optional[int] = None) -> None:
        self.own_player = player
        self.rng = random.Random(seed)

    def get_own_player(self) -> Player:
        return self.own_player

    def evaluate(self, state: "RefereeState", request: MoveRequest) -> int:
        tile = state.tilebag.peek().with_rotation(request.rotation)
        if request.meeple is not None:
            tile.place_meeple(request.meeple, self.own_player)
        return signed_total(state.board.get_completion_points(request.coord, tile), self.own_player)

    def get_move(self, state: "RefereeState") -> MoveRequest:
        scored: List[Tuple[MoveRequest, int]] = [
            (request, self.evaluate(state, request)) for request in state.get_legal_moves()
        ]
        return pick_best(scored, self.rng)


__all__ = ["GreedyBot"]

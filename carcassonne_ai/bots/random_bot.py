from __future__ import annotations

import random
from typing import TYPE_CHECKING, Optional

from ..board import MoveRequest
from ..types import Player

if TYPE_CHECKING:
    from ..referee import RefereeState


class RandomBot:
    """Uniform over the legal moves."""

    name = "random bot"

    def __init__(self, player: Player, seed: Optional[int] = None) -> None:
        self.own_player = player
        self.rng = random.Random(seed)

    def get_own_player(self) -> Player:
        return self.own_player

    def get_move(self, state: "RefereeState") -> MoveRequest:
        return self.rng.choice(state.get_legal_moves())


__all__ = ["RandomBot"]

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, List, Optional, Tuple

from ..board import MoveRequest
from ..types import Player
from .base import pick_best
from .playouts import run_batch

if TYPE_CHECKING:
    from ..referee import RefereeState

logger = logging.getLogger(__name__)


class ShallowBot:
    """Flat Monte Carlo: ``depth`` random playouts per candidate move.

    A candidate's value is the sum over its playouts of own final score minus
    the opponents' final scores.
    """

    def __init__(self, player: Player, depth: int = 10, workers: int = 1, seed: Optional[int] = None) -> None:
        self.own_player = player
        self.depth = depth
        self.workers = workers
        self.rng = random.Random(seed)

    @property
    def name(self) -> str:
        return f"shallow bot {self.depth}"

    def get_own_player(self) -> Player:
        return self.own_player

    def get_move(self, state: "RefereeState") -> MoveRequest:
        moves = state.get_legal_moves()
        jobs = [
            (state, request, self.own_player, self.rng.getrandbits(64))
            for request in moves
            for _ in range(self.depth)
        ]
        values = run_batch(jobs, self.workers)
        scored: List[Tuple[MoveRequest, int]] = []
        for idx, request in enumerate(moves):
            scored.append((request, sum(values[idx * self.depth:(idx + 1) * self.depth])))
        logger.debug("%s evaluated %d moves with %d playouts", self.name, len(moves), len(jobs))
        return pick_best(scored, self.rng)


__all__ = ["ShallowBot"]

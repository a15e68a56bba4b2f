"""Move-choosing strategies share one small protocol."""
from __future__ import annotations

import random
from typing import TYPE_CHECKING, Any, Dict, Optional, Protocol, Sequence, runtime_checkable

from ..board import MoveRequest
from ..types import Player

if TYPE_CHECKING:
    from ..referee import RefereeState


@runtime_checkable
class Bot(Protocol):
    name: str

    def get_own_player(self) -> Player:
        ...

    def get_move(self, state: "RefereeState") -> MoveRequest:
        ...


def signed_total(scores: Dict[Optional[Player], int], own: Player) -> int:
    """Own points minus everybody else's; unowned points are ignored."""
    total = 0
    for player, points in scores.items():
        if player is None:
            continue
        total += points if player == own else -points
    return total


def pick_best(scored: Sequence[tuple], rng: random.Random) -> MoveRequest:
    """Highest-scoring move, ties broken uniformly at random."""
    best = max(score for _, score in scored)
    return rng.choice([move for move, score in scored if score == best])


def make_bot(kind: str, player: Player, **params: Any) -> Bot:
    """Build a bot by name: ``random``, ``greedy``, ``shallow`` or ``mcts``."""
    from .greedy_bot import GreedyBot
    from .mcts_bot import MCTSBot
    from .random_bot import RandomBot
    from .shallow_bot import ShallowBot

    kind = kind.lower()
    seed = params.pop("seed", None)
    if kind == "random":
        return RandomBot(player, seed=seed)
    if kind == "greedy":
        return GreedyBot(player, seed=seed)
    if kind == "shallow":
        return ShallowBot(
            player,
            depth=int(params.get("depth", 10)),
            workers=int(params.get("workers", 1)),
            seed=seed,
        )
    if kind == "mcts":
        return MCTSBot(
            player,
            iterations=int(params.get("iterations", 200)),
            exploration=float(params.get("exploration", 2.0)),
            workers=int(params.get("workers", 1)),
            seed=seed,
        )
    raise ValueError(f"unknown bot kind: {kind!r}")


BOT_KINDS = ("random", "greedy", "shallow", "mcts")

__all__ = ["Bot", "make_bot", "signed_total", "pick_best", "BOT_KINDS"]

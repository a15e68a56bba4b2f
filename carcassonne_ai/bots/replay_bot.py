from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Deque, Iterable, Optional

from ..board import MoveRequest
from ..errors import ReplayError
from ..types import Player

if TYPE_CHECKING:
    from ..referee import RefereeState


class ReplayBot:
    """Hands back pre-recorded moves in order."""

    name = "replay bot"

    def __init__(self, player: Player, moves: Optional[Iterable[MoveRequest]] = None) -> None:
        self.own_player = player
        self.moves: Deque[MoveRequest] = deque(moves or [])

    def add_move(self, request: MoveRequest) -> None:
        self.moves.append(request)

    def get_own_player(self) -> Player:
        return self.own_player

    def get_move(self, state: "RefereeState") -> MoveRequest:
        if not self.moves:
            raise ReplayError(f"no recorded moves left for {self.own_player.value}")
        return self.moves.popleft()


__all__ = ["ReplayBot"]

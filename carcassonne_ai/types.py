"""Shared lightweight types used across the rules engine."""

from __future__ import annotations

from enum import Enum
from typing import Tuple

Coordinate = Tuple[int, int]


class Player(str, Enum):
    """Seat colours. Declaration order is the turn order."""

    WHITE = "White"
    BLACK = "Black"
    RED = "Red"
    BLUE = "Blue"

    @property
    def order(self) -> int:
        return _PLAYER_ORDER[self]

    # str's lexical comparison would otherwise leak through the mixin.
    def __lt__(self, other):
        if not isinstance(other, Player):
            return NotImplemented
        return self.order < other.order

    def __le__(self, other):
        if not isinstance(other, Player):
            return NotImplemented
        return self.order <= other.order

    def __gt__(self, other):
        if not isinstance(other, Player):
            return NotImplemented
        return self.order > other.order

    def __ge__(self, other):
        if not isinstance(other, Player):
            return NotImplemented
        return self.order >= other.order

    def __str__(self) -> str:
        return self.value


_PLAYER_ORDER = {player: idx for idx, player in enumerate(Player)}


__all__ = ["Coordinate", "Player"]

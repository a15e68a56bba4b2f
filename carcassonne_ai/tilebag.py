"""Tile draw sources.

A bag always knows which tile it will hand out next (the cursor), so a
strategy can peek at it before deciding. ``ensure_legal_draw`` throws away
tiles that cannot be placed anywhere; without it a finite bag could deadlock
the match.
"""
from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional, Sequence

from .board.tile import TileData
from .data import standard_tiles
from .errors import DrawSourceEmptyError

if TYPE_CHECKING:
    from .board.view import BoardView

logger = logging.getLogger(__name__)


class TileBag(ABC):
    def __init__(self, tiles: Sequence[TileData], next_idx: Optional[int]) -> None:
        self.data: List[TileData] = list(tiles)
        self.next_idx: Optional[int] = next_idx if self.data else None

    @abstractmethod
    def _pick_next_idx(self) -> None:
        ...

    @abstractmethod
    def copy(self) -> "TileBag":
        ...

    def peek(self) -> TileData:
        if self.next_idx is None:
            raise DrawSourceEmptyError("the tile bag is empty")
        return self.data[self.next_idx]

    def pull(self) -> Optional[TileData]:
        """Remove and return the tile under the cursor, then move the cursor."""
        if self.next_idx is None:
            return None
        out = self._swap_remove(self.next_idx)
        self._pick_next_idx()
        return out

    def is_empty(self) -> bool:
        return self.next_idx is None

    def count_remaining(self) -> int:
        return len(self.data)

    def remaining(self) -> List[TileData]:
        return list(self.data)

    def ensure_legal_draw(self, view: "BoardView") -> bool:
        """Discard tiles until the next one can be placed.

        Returns ``False`` once the bag runs out.
        """
        while self.next_idx is not None:
            if view.does_legal_move_exist(self.peek()):
                return True
            discarded = self.pull()
            logger.debug("discarding unplaceable tile %s", discarded.to_dict() if discarded else None)
        return False

    def rig(self, tiles: Sequence[TileData]) -> None:
        """Force a draw sequence: drop every listed tile and put the last one on top.

        Used by lookahead search to pin the outcome of a draw (the leading
        tiles are the ones ``ensure_legal_draw`` would have discarded).
        """
        for elem in tiles:
            for idx, candidate in enumerate(self.data):
                if candidate.matches_minis(elem) and candidate.has_emblem == elem.has_emblem:
                    self._swap_remove(idx)
                    break
            else:
                logger.warning("rigged tile %s not found in bag", elem.to_dict())
        if tiles:
            self.data.append(tiles[-1].copy())
            self.next_idx = len(self.data) - 1

    def as_random_bag(self, seed: Optional[int] = None) -> "RandomTileBag":
        """Same remaining tiles and cursor, random draws afterwards."""
        return RandomTileBag(
            tiles=[tile.copy() for tile in self.data],
            next_idx=self.next_idx,
            rng=random.Random(seed),
        )

    def _swap_remove(self, idx: int) -> TileData:
        last = self.data.pop()
        if idx == len(self.data):
            return last
        out = self.data[idx]
        self.data[idx] = last
        return out


class RandomTileBag(TileBag):
    """Draws uniformly at random; the first tile offered is the start tile."""

    def __init__(
        self,
        tiles: Optional[Sequence[TileData]] = None,
        *,
        next_idx: Optional[int] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        tiles = list(tiles) if tiles is not None else standard_tiles()
        if next_idx is None and tiles:
            next_idx = len(tiles) - 1
        super().__init__(tiles, next_idx)
        self.rng = rng or random.Random(seed)

    def _pick_next_idx(self) -> None:
        if not self.data:
            self.next_idx = None
        else:
            self.next_idx = self.rng.randrange(len(self.data))

    def copy(self) -> "RandomTileBag":
        rng = random.Random()
        rng.setstate(self.rng.getstate())
        return RandomTileBag([tile.copy() for tile in self.data], next_idx=self.next_idx, rng=rng)


class ReplayTileBag(TileBag):
    """Hands out tiles in exactly the order given."""

    def __init__(self, tiles: Sequence[TileData]) -> None:
        data = [tile.copy() for tile in reversed(list(tiles))]
        super().__init__(data, len(data) - 1 if data else None)

    def _pick_next_idx(self) -> None:
        self.next_idx = len(self.data) - 1 if self.data else None

    def copy(self) -> "ReplayTileBag":
        out = ReplayTileBag([])
        out.data = [tile.copy() for tile in self.data]
        out.next_idx = self.next_idx
        return out


__all__ = ["TileBag", "RandomTileBag", "ReplayTileBag"]

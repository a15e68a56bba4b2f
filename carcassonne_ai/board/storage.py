"""Concrete board: a sparse coordinate -> tile map with no rules logic."""
from __future__ import annotations

from typing import Dict, Iterator, Optional, Tuple

from ..types import Coordinate
from .coordinates import bounding_box
from .tile import TileData
from .view import BoardView


class Board(BoardView):
    def __init__(self, data: Optional[Dict[Coordinate, TileData]] = None) -> None:
        self._data: Dict[Coordinate, TileData] = dict(data or {})

    def at(self, coord: Coordinate) -> Optional[TileData]:
        return self._data.get(coord)

    def at_mut(self, coord: Coordinate) -> Optional[TileData]:
        """The stored tile itself; writes to its meeples persist."""
        return self._data.get(coord)

    def set(self, coord: Coordinate, tile: TileData) -> None:
        self._data[coord] = tile

    def tiles_present(self) -> Iterator[Coordinate]:
        return iter(self._data)

    def tiles_placed(self) -> int:
        return len(self._data)

    def items(self) -> Iterator[Tuple[Coordinate, TileData]]:
        return iter(self._data.items())

    def bounding_box(self) -> Optional[Tuple[Coordinate, Coordinate]]:
        return bounding_box(self._data)

    def copy(self) -> "Board":
        return Board({coord: tile.copy() for coord, tile in self._data.items()})

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, coord: object) -> bool:
        return coord in self._data

    def __repr__(self) -> str:
        return f"Board(tiles={len(self._data)})"


__all__ = ["Board"]

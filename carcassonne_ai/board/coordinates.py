"""Square-grid coordinates for the tile board.

Coordinate System:
    - ``(row, col)`` pairs, unbounded in both directions
    - The opening tile conventionally sits at the origin ``(0, 0)``

Edge offsets:
    Top    : (-1,  0)
    Bottom : (+1,  0)
    Left   : ( 0, -1)
    Right  : ( 0, +1)
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from ..types import Coordinate
from .tile import EDGES, Slot

EDGE_OFFSETS: Dict[Slot, Tuple[int, int]] = {
    Slot.TOP: (-1, 0),
    Slot.BOTTOM: (1, 0),
    Slot.LEFT: (0, -1),
    Slot.RIGHT: (0, 1),
}

# An edge faces its coupled edge on the neighbouring tile.
COUPLING: Dict[Slot, Slot] = {
    Slot.TOP: Slot.BOTTOM,
    Slot.BOTTOM: Slot.TOP,
    Slot.LEFT: Slot.RIGHT,
    Slot.RIGHT: Slot.LEFT,
}

SURROUNDING_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)
)


def neighbor(coord: Coordinate, edge: Slot) -> Coordinate:
    """Coordinate of the tile across ``edge``."""
    dr, dc = EDGE_OFFSETS[edge]
    return (coord[0] + dr, coord[1] + dc)


def crossing(coord: Coordinate, edge: Slot) -> Tuple[Coordinate, Slot]:
    """The (coordinate, edge) pair on the far side of ``edge``."""
    return neighbor(coord, edge), COUPLING[edge]


def orthogonal_neighbors(coord: Coordinate) -> Dict[Slot, Coordinate]:
    return {edge: neighbor(coord, edge) for edge in EDGES}


def surrounding(coord: Coordinate) -> List[Coordinate]:
    """The eight coordinates around ``coord`` (diagonals included)."""
    r, c = coord
    return [(r + dr, c + dc) for dr, dc in SURROUNDING_OFFSETS]


def bounding_box(coords: Iterable[Coordinate]) -> Optional[Tuple[Coordinate, Coordinate]]:
    """Return ``((min_row, min_col), (max_row, max_col))`` or ``None`` when empty."""
    coords = list(coords)
    if not coords:
        return None
    rows = [r for r, _ in coords]
    cols = [c for _, c in coords]
    return (min(rows), min(cols)), (max(rows), max(cols))


__all__ = [
    "EDGE_OFFSETS",
    "COUPLING",
    "SURROUNDING_OFFSETS",
    "neighbor",
    "crossing",
    "orthogonal_neighbors",
    "surrounding",
    "bounding_box",
]

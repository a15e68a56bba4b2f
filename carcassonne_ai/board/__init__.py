"""Board data structures, the read capability and the feature resolver."""

from .tile import EDGES, MEEPLE_SLOTS, ROTATIONS, MiniTile, Rotation, Slot, TileData
from .moves import MoveRequest
from .view import ORIGIN, BoardView, OverlayBoard
from .storage import Board
from .features import FeatureResult, ScoringData

__all__ = [
    "EDGES",
    "MEEPLE_SLOTS",
    "ROTATIONS",
    "MiniTile",
    "Rotation",
    "Slot",
    "TileData",
    "MoveRequest",
    "ORIGIN",
    "BoardView",
    "OverlayBoard",
    "Board",
    "FeatureResult",
    "ScoringData",
]

"""Read capability over a board plus every rules query built on top of it.

:class:`BoardView` needs only :meth:`~BoardView.at` and
:meth:`~BoardView.tiles_present`. Legality checks, move enumeration and
scoring are written once here, so a hypothetical placement (an
:class:`OverlayBoard`) and a real one answer through identical code.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Dict, Iterator, List, Mapping, Optional, Set

from ..errors import (
    FeatureNonEmptyError,
    FeaturesMismatchError,
    NoConnectingTileError,
    NonScoringFeatureError,
    NoTilePresentError,
    RulesViolation,
)
from ..types import Coordinate, Player
from . import features
from .coordinates import COUPLING, orthogonal_neighbors
from .moves import MoveRequest
from .tile import MEEPLE_SLOTS, ROTATIONS, MiniTile, Slot, TileData

ORIGIN: Coordinate = (0, 0)


class BoardView(ABC):
    """Anything that can answer "which tile is at this coordinate"."""

    @abstractmethod
    def at(self, coord: Coordinate) -> Optional[TileData]:
        ...

    @abstractmethod
    def tiles_present(self) -> Iterator[Coordinate]:
        ...

    def is_empty(self) -> bool:
        return next(iter(self.tiles_present()), None) is None

    def with_overlay(self, coord: Coordinate, tile: TileData) -> "OverlayBoard":
        return OverlayBoard(self, {coord: tile})

    # -- placement ---------------------------------------------------------

    def get_legal_tiles(self) -> Set[Coordinate]:
        """Empty coordinates orthogonally adjacent to at least one tile."""
        out: Set[Coordinate] = set()
        for coord in self.tiles_present():
            for dest in orthogonal_neighbors(coord).values():
                if self.at(dest) is None:
                    out.add(dest)
        return out

    def is_features_match(self, dest: Coordinate, candidate: TileData) -> bool:
        """Every present neighbour must show the same feature on the shared edge.

        Vacuously true with no neighbours; the opening tile relies on that.
        """
        for edge, coord in orthogonal_neighbors(dest).items():
            other = self.at(coord)
            if other is None:
                continue
            if other.at(COUPLING[edge]) != candidate.at(edge):
                return False
        return True

    def check_placement(self, dest: Coordinate, candidate: TileData) -> None:
        """Raise the matching :class:`RulesViolation` when ``candidate`` cannot go at ``dest``."""
        if not self.is_empty() and dest not in self.get_legal_tiles():
            raise NoConnectingTileError(f"{dest} does not touch a placed tile")
        if not self.is_features_match(dest, candidate):
            raise FeaturesMismatchError(f"edges of the tile do not match the neighbours of {dest}")

    def get_legal_moves(self, tile: TileData, can_place_meeple: bool) -> List[MoveRequest]:
        """Every (coordinate, rotation, meeple-or-not) the rules allow for ``tile``."""
        coords = self.get_legal_tiles() if not self.is_empty() else {ORIGIN}
        out: List[MoveRequest] = []
        for coord in sorted(coords):
            for rotation in ROTATIONS:
                candidate = tile.with_rotation(rotation)
                if not self.is_features_match(coord, candidate):
                    continue
                if can_place_meeple:
                    preview = self.with_overlay(coord, candidate)
                    # one slot per feature; later edges of a traced feature are skipped
                    covered: Set[Slot] = set()
                    for slot in MEEPLE_SLOTS:
                        if slot in covered or not preview.is_legal_meeple(coord, slot):
                            continue
                        out.append(MoveRequest(coord, rotation, slot))
                        if slot is not Slot.CENTER:
                            covered |= features.trace_feature(preview, coord, slot).entrance_edges
                out.append(MoveRequest(coord, rotation, None))
        return out

    def does_legal_move_exist(self, tile: TileData) -> bool:
        if self.is_empty():
            return True
        for coord in self.get_legal_tiles():
            for rotation in ROTATIONS:
                if self.is_features_match(coord, tile.with_rotation(rotation)):
                    return True
        return False

    # -- meeples -----------------------------------------------------------

    def check_meeple(self, coord: Coordinate, slot: Slot) -> None:
        """Raise the matching :class:`RulesViolation` when a meeple may not go on ``slot``."""
        tile = self.at(coord)
        if tile is None:
            raise NoTilePresentError(f"no tile at {coord}")
        kind = tile.at(slot)
        if kind is MiniTile.MONASTERY:
            if tile.meeple_at(Slot.CENTER) is not None:
                raise FeatureNonEmptyError("monastery already claimed")
            return
        if not kind.is_traversable or slot is Slot.CENTER:
            raise NonScoringFeatureError(f"{kind.value} on {slot.value} cannot hold a meeple")
        if tile.meeple_at(slot) is not None:
            raise FeatureNonEmptyError(f"{slot.value} already holds a meeple")
        result = features.trace_feature(self, coord, slot)
        if not result.visited or features.meeple_owners(self, result.visited):
            raise FeatureNonEmptyError("connected feature already has an owner")

    def is_legal_meeple(self, coord: Coordinate, slot: Slot) -> bool:
        try:
            self.check_meeple(coord, slot)
        except RulesViolation:
            return False
        return True

    def meeple_counts(self) -> Dict[Player, int]:
        counts: Dict[Player, int] = defaultdict(int)
        for coord in self.tiles_present():
            tile = self.at(coord)
            for _, owner in tile.meeples():
                counts[owner] += 1
        return dict(counts)

    # -- scoring -----------------------------------------------------------

    def get_feature_score_data(self, coord: Coordinate, tile: TileData) -> List[features.ScoringData]:
        """Score every feature ``tile`` touches if it were placed at ``coord``."""
        return features.placement_scoring(self, coord, tile)

    def get_all_scoring_data(self) -> List[features.ScoringData]:
        """Endgame scoring of every feature that still holds a meeple."""
        return features.standing_scoring(self)

    def get_completion_points(self, coord: Coordinate, tile: TileData) -> Dict[Optional[Player], int]:
        """Points per owner for placing ``tile`` at ``coord``; ``None`` collects unowned points."""
        out: Dict[Optional[Player], int] = defaultdict(int)
        for data in self.get_feature_score_data(coord, tile):
            if not data.players:
                out[None] += data.points
            for player in data.players:
                out[player] += data.points
        return dict(out)

    def get_standing_points(self) -> Dict[Player, int]:
        out: Dict[Player, int] = defaultdict(int)
        for data in self.get_all_scoring_data():
            for player in data.players:
                out[player] += data.points
        return dict(out)


class OverlayBoard(BoardView):
    """Read-only view that patches a few coordinates on top of ``base``.

    Nothing is copied: ``at`` checks the patch map and falls back to the base.
    """

    def __init__(self, base: BoardView, patches: Mapping[Coordinate, TileData]) -> None:
        self.base = base
        self.patches: Dict[Coordinate, TileData] = dict(patches)

    def at(self, coord: Coordinate) -> Optional[TileData]:
        tile = self.patches.get(coord)
        if tile is not None:
            return tile
        return self.base.at(coord)

    def tiles_present(self) -> Iterator[Coordinate]:
        for coord in self.base.tiles_present():
            yield coord
        for coord in self.patches:
            if self.base.at(coord) is None:
                yield coord

    def with_overlay(self, coord: Coordinate, tile: TileData) -> "OverlayBoard":
        patches = dict(self.patches)
        patches[coord] = tile
        return OverlayBoard(self.base, patches)

    def __repr__(self) -> str:
        return f"OverlayBoard(patches={sorted(self.patches)})"


__all__ = ["BoardView", "OverlayBoard", "ORIGIN"]

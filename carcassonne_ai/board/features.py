"""Feature connectivity and scoring.

Roads and cities are traced with an explicit work queue over
``(coordinate, edge)`` pairs; the visited set only grows and the board is
finite, so loops and closed rings terminate. Monasteries are scored from the
3x3 block around their tile.

Scoring rules:
    - Road: one point per tile.
    - City: two points per tile when completed during play, one per tile at
      the end of the game; plus one point per tile carrying an emblem.
    - Monastery: one point per tile in its 3x3 block (9 when complete).
    - An incomplete feature is worth nothing until the end of the game.

The player(s) holding the most meeples on a feature score it; ties all score
in full.
"""
from __future__ import annotations

from collections import Counter, deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Deque, FrozenSet, List, Set, Tuple

from ..types import Coordinate, Player
from .coordinates import crossing, surrounding
from .tile import EDGES, MiniTile, Slot, TileData

if TYPE_CHECKING:
    from .view import BoardView

EdgeRef = Tuple[Coordinate, Slot]


@dataclass
class FeatureResult:
    """Outcome of one traversal."""

    kind: MiniTile
    origin: Coordinate
    visited: Set[EdgeRef] = field(default_factory=set)
    complete: bool = True

    @property
    def entrance_edges(self) -> Set[Slot]:
        """Edges of the origin tile that belong to this feature."""
        return {edge for coord, edge in self.visited if coord == self.origin}


@dataclass
class ScoringData:
    kind: MiniTile
    origin: Coordinate
    players: FrozenSet[Player]
    points: int
    complete: bool
    removal_candidates: Set[EdgeRef] = field(default_factory=set)


def trace_feature(view: "BoardView", coord: Coordinate, entrance: Slot) -> FeatureResult:
    """Collect every (coordinate, edge) pair connected to ``entrance``.

    A missing neighbour marks the feature incomplete but the queue is still
    drained, so endgame scoring and ownership checks see the whole fragment.
    """
    tile = view.at(coord)
    assert tile is not None, f"trace_feature from empty coordinate {coord}"
    kind = tile.at(entrance)
    assert entrance.is_edge and kind.is_traversable, f"{kind.value} on {entrance.value} is not traversable"

    result = FeatureResult(kind=kind, origin=coord, visited={(coord, entrance)})
    queue: Deque[EdgeRef] = deque([(coord, entrance)])
    while queue:
        here, edge = queue.popleft()
        current = view.at(here)
        if current is None:
            result.complete = False
            continue
        for exit_edge in current.get_exits(edge):
            result.visited.add((here, exit_edge))
            across = crossing(here, exit_edge)
            if across not in result.visited:
                result.visited.add(across)
                queue.append(across)
    return result


def meeple_owners(view: "BoardView", candidates: Set[EdgeRef]) -> Counter:
    """Meeple count per player over ``candidates``."""
    owners: Counter = Counter()
    for coord, slot in candidates:
        tile = view.at(coord)
        if tile is None:
            continue
        owner = tile.meeple_at(slot)
        if owner is not None:
            owners[owner] += 1
    return owners


def majority(owners: Counter) -> FrozenSet[Player]:
    if not owners:
        return frozenset()
    top = max(owners.values())
    return frozenset(player for player, count in owners.items() if count == top)


def feature_points(kind: MiniTile, tiles: int, emblems: int, complete: bool, endgame: bool) -> int:
    if not complete and not endgame:
        return 0
    if kind is MiniTile.CITY:
        return tiles * (1 if endgame else 2) + emblems
    return tiles


def score_feature(view: "BoardView", result: FeatureResult, endgame: bool = False) -> ScoringData:
    coords = {coord for coord, _ in result.visited if view.at(coord) is not None}
    emblems = sum(1 for coord in coords if view.at(coord).has_emblem)
    return ScoringData(
        kind=result.kind,
        origin=result.origin,
        players=majority(meeple_owners(view, result.visited)),
        points=feature_points(result.kind, len(coords), emblems, result.complete, endgame),
        complete=result.complete,
        removal_candidates=set(result.visited),
    )


def score_monastery(view: "BoardView", coord: Coordinate, endgame: bool = False) -> ScoringData:
    tile = view.at(coord)
    assert tile is not None and tile.center is MiniTile.MONASTERY, f"no monastery at {coord}"
    present = 1 + sum(1 for spot in surrounding(coord) if view.at(spot) is not None)
    complete = present == 9
    candidates = {(coord, Slot.CENTER)}
    return ScoringData(
        kind=MiniTile.MONASTERY,
        origin=coord,
        players=majority(meeple_owners(view, candidates)),
        points=feature_points(MiniTile.MONASTERY, present, 0, complete, endgame),
        complete=complete,
        removal_candidates=candidates,
    )


def placement_scoring(view: "BoardView", coord: Coordinate, tile: TileData) -> List[ScoringData]:
    """One ScoringData per distinct feature touched by placing ``tile`` at ``coord``."""
    board = view.with_overlay(coord, tile)
    out: List[ScoringData] = []
    covered: Set[Slot] = set()
    for edge in EDGES:
        if edge in covered or not tile.at(edge).is_traversable:
            continue
        result = trace_feature(board, coord, edge)
        covered |= result.entrance_edges
        out.append(score_feature(board, result))
    for spot in [coord] + surrounding(coord):
        other = board.at(spot)
        if other is not None and other.center is MiniTile.MONASTERY:
            out.append(score_monastery(board, spot))
    return out


def standing_scoring(view: "BoardView") -> List[ScoringData]:
    """Score every feature that still holds a meeple, once each."""
    seen: Set[EdgeRef] = set()
    out: List[ScoringData] = []
    for coord in sorted(view.tiles_present()):
        tile = view.at(coord)
        for slot, _ in tile.meeples():
            if (coord, slot) in seen:
                continue
            if slot is Slot.CENTER:
                seen.add((coord, slot))
                out.append(score_monastery(view, coord, endgame=True))
                continue
            result = trace_feature(view, coord, slot)
            seen |= result.visited
            out.append(score_feature(view, result, endgame=True))
    return out


__all__ = [
    "EdgeRef",
    "FeatureResult",
    "ScoringData",
    "trace_feature",
    "meeple_owners",
    "majority",
    "feature_points",
    "score_feature",
    "score_monastery",
    "placement_scoring",
    "standing_scoring",
]

"""Tile model: five feature slots, discrete rotation and meeple annotations.

Edge slots are stored canonically (as printed on the tile). Every accessor
that takes a :class:`Slot` applies the current rotation first, so callers
never see the raw layout. Meeples are keyed by the canonical slot and
therefore turn with the tile.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..errors import FeatureNonEmptyError
from ..types import Player


class MiniTile(str, Enum):
    GRASS = "Grass"
    ROAD = "Road"
    CITY = "City"
    MONASTERY = "Monastery"
    JUNCTION = "Junction"

    @property
    def is_traversable(self) -> bool:
        """Roads and cities connect across tile edges."""
        return self in (MiniTile.ROAD, MiniTile.CITY)


class Slot(str, Enum):
    TOP = "Top"
    LEFT = "Left"
    CENTER = "Center"
    RIGHT = "Right"
    BOTTOM = "Bottom"

    @property
    def is_edge(self) -> bool:
        return self is not Slot.CENTER


# Clockwise order; rotation arithmetic indexes into this tuple.
EDGES: Tuple[Slot, ...] = (Slot.TOP, Slot.RIGHT, Slot.BOTTOM, Slot.LEFT)

# Order in which move enumeration offers meeple targets.
MEEPLE_SLOTS: Tuple[Slot, ...] = (Slot.TOP, Slot.BOTTOM, Slot.LEFT, Slot.RIGHT, Slot.CENTER)


class Rotation(str, Enum):
    NONE = "None"
    RIGHT = "Right"
    FLIP = "Flip"
    LEFT = "Left"

    @property
    def quarter_turns(self) -> int:
        """Clockwise quarter turns away from the printed orientation."""
        return _QUARTER_TURNS[self]

    @classmethod
    def from_quarter_turns(cls, turns: int) -> "Rotation":
        return _BY_QUARTER_TURNS[turns % 4]

    def next_right(self) -> "Rotation":
        return Rotation.from_quarter_turns(self.quarter_turns + 1)

    def next_left(self) -> "Rotation":
        return Rotation.from_quarter_turns(self.quarter_turns - 1)


_QUARTER_TURNS = {Rotation.NONE: 0, Rotation.RIGHT: 1, Rotation.FLIP: 2, Rotation.LEFT: 3}
_BY_QUARTER_TURNS = {turns: rot for rot, turns in _QUARTER_TURNS.items()}

ROTATIONS: Tuple[Rotation, ...] = (Rotation.NONE, Rotation.LEFT, Rotation.FLIP, Rotation.RIGHT)


@dataclass
class TileData:
    """A single tile.

    ``top``/``left``/``right``/``bottom`` hold the canonical, un-rotated
    edges; read them through :meth:`at`. ``secondary_center`` models tiles
    where a city passes behind a road (two features share the middle).
    """

    top: MiniTile = MiniTile.GRASS
    left: MiniTile = MiniTile.GRASS
    center: MiniTile = MiniTile.GRASS
    right: MiniTile = MiniTile.GRASS
    bottom: MiniTile = MiniTile.GRASS
    secondary_center: Optional[MiniTile] = None
    has_emblem: bool = False
    rotation: Rotation = Rotation.NONE
    meeple_slots: Dict[Slot, Player] = field(default_factory=dict)

    # -- rotation ----------------------------------------------------------

    def canonical_slot(self, slot: Slot) -> Slot:
        """Map a displayed slot to the slot it is stored under."""
        if slot is Slot.CENTER:
            return slot
        idx = EDGES.index(slot)
        return EDGES[(idx - self.rotation.quarter_turns) % 4]

    def at(self, slot: Slot) -> MiniTile:
        if slot is Slot.CENTER:
            return self.center
        return getattr(self, self.canonical_slot(slot).name.lower())

    def rotate_right(self) -> None:
        self.rotation = self.rotation.next_right()

    def rotate_left(self) -> None:
        self.rotation = self.rotation.next_left()

    def with_rotation(self, rotation: Rotation) -> "TileData":
        out = self.copy()
        out.rotation = rotation
        return out

    def matches_minis(self, other: "TileData") -> bool:
        """True when all four displayed edges agree."""
        return all(self.at(edge) == other.at(edge) for edge in EDGES)

    # -- connectivity ------------------------------------------------------

    def center_matches(self, kind: MiniTile) -> bool:
        return self.center == kind or self.secondary_center == kind

    def get_exits(self, entrance: Slot) -> List[Slot]:
        """Edges through which a feature entering at ``entrance`` leaves.

        A feature whose kind the center does not carry ends on this tile, so
        only the entrance itself comes back.
        """
        kind = self.at(entrance)
        if not kind.is_traversable:
            return []
        if not self.center_matches(kind):
            return [entrance]
        return [edge for edge in EDGES if self.at(edge) == kind]

    # -- meeples -----------------------------------------------------------

    def place_meeple(self, slot: Slot, player: Player) -> None:
        key = self.canonical_slot(slot)
        if key in self.meeple_slots:
            raise FeatureNonEmptyError(f"{slot.value} already holds a meeple")
        self.meeple_slots[key] = player

    def meeple_at(self, slot: Slot) -> Optional[Player]:
        return self.meeple_slots.get(self.canonical_slot(slot))

    def remove_meeple(self, slot: Slot) -> Optional[Player]:
        return self.meeple_slots.pop(self.canonical_slot(slot), None)

    def meeples(self) -> List[Tuple[Slot, Player]]:
        """Meeples on this tile as (displayed slot, owner) pairs."""
        out = []
        for slot in (Slot.CENTER,) + EDGES:
            owner = self.meeple_at(slot)
            if owner is not None:
                out.append((slot, owner))
        return out

    # -- copying / serialisation ------------------------------------------

    def copy(self) -> "TileData":
        return TileData(
            top=self.top,
            left=self.left,
            center=self.center,
            right=self.right,
            bottom=self.bottom,
            secondary_center=self.secondary_center,
            has_emblem=self.has_emblem,
            rotation=self.rotation,
            meeple_slots=dict(self.meeple_slots),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "top": self.top.value,
            "left": self.left.value,
            "center": self.center.value,
            "right": self.right.value,
            "bottom": self.bottom.value,
            "secondary_center": self.secondary_center.value if self.secondary_center else None,
            "has_emblem": self.has_emblem,
            "rotation": self.rotation.value,
        }
        if self.meeple_slots:
            out["meeples"] = {slot.value: player.value for slot, player in self.meeple_slots.items()}
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TileData":
        secondary = data.get("secondary_center")
        return cls(
            top=MiniTile(data.get("top", MiniTile.GRASS.value)),
            left=MiniTile(data.get("left", MiniTile.GRASS.value)),
            center=MiniTile(data.get("center", MiniTile.GRASS.value)),
            right=MiniTile(data.get("right", MiniTile.GRASS.value)),
            bottom=MiniTile(data.get("bottom", MiniTile.GRASS.value)),
            secondary_center=MiniTile(secondary) if secondary else None,
            has_emblem=bool(data.get("has_emblem", False)),
            rotation=Rotation(data.get("rotation", Rotation.NONE.value)),
            meeple_slots={
                Slot(slot): Player(player) for slot, player in (data.get("meeples") or {}).items()
            },
        )


__all__ = [
    "MiniTile",
    "Slot",
    "Rotation",
    "TileData",
    "EDGES",
    "MEEPLE_SLOTS",
    "ROTATIONS",
]

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from ..types import Coordinate
from .tile import Rotation, Slot


@dataclass(frozen=True)
class MoveRequest:
    """Where to put the drawn tile, how it is turned and an optional meeple slot."""

    coord: Coordinate = (0, 0)
    rotation: Rotation = Rotation.NONE
    meeple: Optional[Slot] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "coord": [self.coord[0], self.coord[1]],
            "rotation": self.rotation.value,
            "meeple": self.meeple.value if self.meeple else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MoveRequest":
        row, col = data.get("coord", (0, 0))
        meeple = data.get("meeple")
        return cls(
            coord=(int(row), int(col)),
            rotation=Rotation(data.get("rotation", Rotation.NONE.value)),
            meeple=Slot(meeple) if meeple else None,
        )


__all__ = ["MoveRequest"]

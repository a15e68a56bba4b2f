"""Loader for the tile catalogue in base_tiles.yaml."""
from __future__ import annotations

import os
from functools import lru_cache
from typing import Any, Dict, List, Optional, Tuple

import yaml

from ..board.tile import TileData

_TILE_KEYS = ("top", "left", "center", "right", "bottom", "secondary_center", "has_emblem")


def _yaml_path(override: Optional[str] = None) -> str:
    base_path = os.path.join(os.path.dirname(__file__), "base_tiles.yaml")
    return os.path.abspath(override or base_path)


def _tile_from_entry(entry: Dict[str, Any]) -> TileData:
    return TileData.from_dict({k: entry[k] for k in _TILE_KEYS if k in entry})


@lru_cache()
def load_catalogue(path: Optional[str] = None) -> Tuple[Tuple[str, int, Dict[str, Any]], ...]:
    """Parse the catalogue into ``(name, count, entry)`` records.

    Cached, so the records are tuples; build tiles with :func:`standard_tiles`.
    """
    with open(_yaml_path(path), "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    records = []
    for entry in data.get("tiles", []):
        records.append((str(entry.get("name", "")), int(entry.get("count", 1)), dict(entry)))
    start = data.get("start")
    if start:
        records.append((str(start.get("name", "start")), 1, dict(start)))
    return tuple(records)


def load_start_tile(path: Optional[str] = None) -> TileData:
    name, _, entry = load_catalogue(path)[-1]
    if name != "start":
        raise ValueError(f"catalogue {_yaml_path(path)} has no start tile")
    return _tile_from_entry(entry)


def standard_tiles(path: Optional[str] = None) -> List[TileData]:
    """Fresh tiles for a full bag, start tile last."""
    tiles: List[TileData] = []
    for _, count, entry in load_catalogue(path):
        tiles.extend(_tile_from_entry(entry) for _ in range(count))
    return tiles


__all__ = ["load_catalogue", "load_start_tile", "standard_tiles"]

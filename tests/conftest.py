"""Shared tile fixtures."""
import pytest

from carcassonne_ai.board import MiniTile, TileData

CITY = MiniTile.CITY
ROAD = MiniTile.ROAD


def straight_road() -> TileData:
    return TileData(left=ROAD, center=ROAD, right=ROAD)


def road_end(side: str) -> TileData:
    """Road on one edge stopping at a junction."""
    return TileData(center=MiniTile.JUNCTION, **{side: ROAD})


def city_cap(side: str) -> TileData:
    return TileData(**{side: CITY})


def four_way_city() -> TileData:
    return TileData(top=CITY, left=CITY, center=CITY, right=CITY, bottom=CITY)


def start_tile() -> TileData:
    return TileData(top=CITY, left=ROAD, center=ROAD, right=ROAD)


def monastery() -> TileData:
    return TileData(center=MiniTile.MONASTERY)


@pytest.fixture
def grass():
    return TileData()


@pytest.fixture
def start():
    return start_tile()

"""Tests for feature tracing and scoring."""
import pytest

from carcassonne_ai.board import Board, MiniTile, Slot, TileData
from carcassonne_ai.board.coordinates import surrounding
from carcassonne_ai.board.features import feature_points, majority, trace_feature
from carcassonne_ai.types import Player

from conftest import city_cap, four_way_city, monastery, road_end, straight_road

A = Player.WHITE
B = Player.BLACK


def curve(first: str, second: str) -> TileData:
    return TileData(center=MiniTile.ROAD, **{first: MiniTile.ROAD, second: MiniTile.ROAD})


@pytest.fixture
def enclosed_city():
    board = Board()
    board.set((-1, 0), city_cap("bottom"))
    board.set((1, 0), city_cap("top"))
    board.set((0, -1), city_cap("right"))
    board.set((0, 1), city_cap("left"))
    return board


class TestTracing:
    def test_closed_loop_terminates_complete(self):
        board = Board()
        board.set((0, 0), curve("right", "bottom"))
        board.set((0, 1), curve("left", "bottom"))
        board.set((1, 0), curve("top", "right"))
        board.set((1, 1), curve("top", "left"))
        result = trace_feature(board, (0, 0), Slot.RIGHT)
        assert result.complete
        assert {coord for coord, _ in result.visited} == {(0, 0), (0, 1), (1, 0), (1, 1)}

    def test_open_end_marks_incomplete(self):
        board = Board()
        board.set((0, 0), straight_road())
        result = trace_feature(board, (0, 0), Slot.LEFT)
        assert not result.complete
        assert result.entrance_edges == {Slot.LEFT, Slot.RIGHT}

    def test_tracing_grass_is_a_bug(self):
        board = Board()
        board.set((0, 0), TileData())
        with pytest.raises(AssertionError):
            trace_feature(board, (0, 0), Slot.TOP)


class TestPlacementScoring:
    def test_enclosed_city(self, enclosed_city):
        data = enclosed_city.get_feature_score_data((0, 0), four_way_city())
        assert len(data) == 1
        city = data[0]
        assert city.kind is MiniTile.CITY
        assert city.complete
        # two per tile plus one per emblem; the often quoted 16 is not reachable (DESIGN.md, question 1)
        assert city.points == 10
        assert city.players == frozenset()

    def test_city_chain_closed_by_emblem_tile(self):
        board = Board()
        board.set((0, 0), city_cap("right"))
        board.set((0, 1), TileData(left=MiniTile.CITY, center=MiniTile.CITY, right=MiniTile.CITY))
        board.set((0, 2), TileData(left=MiniTile.CITY, center=MiniTile.CITY, right=MiniTile.CITY))
        closing = TileData(left=MiniTile.CITY, has_emblem=True)
        (city,) = board.get_feature_score_data((0, 3), closing)
        assert city.complete
        # four tiles and one emblem give 9, never the quoted 12 (DESIGN.md, question 1)
        assert city.points == 2 * 4 + 1

    def test_incomplete_feature_scores_nothing_mid_game(self):
        board = Board()
        board.set((0, 0), straight_road())
        points = board.get_completion_points((0, 1), straight_road())
        assert sum(points.values()) == 0

    def test_loop_scored_once_from_two_edges(self):
        board = Board()
        board.set((0, 0), curve("right", "bottom"))
        board.set((0, 1), curve("left", "bottom"))
        board.set((1, 0), curve("top", "right"))
        data = board.get_feature_score_data((1, 1), curve("top", "left"))
        assert len(data) == 1
        assert data[0].points == 4

    def test_monastery_completed_by_eighth_neighbour(self):
        board = Board()
        board.set((0, 0), monastery())
        board.at_mut((0, 0)).place_meeple(Slot.CENTER, A)
        for spot in surrounding((0, 0))[:-1]:
            board.set(spot, TileData())
        last = surrounding((0, 0))[-1]
        (data,) = board.get_feature_score_data(last, TileData())
        assert data.kind is MiniTile.MONASTERY
        assert data.complete
        assert data.points == 9
        assert data.players == frozenset({A})
        assert data.removal_candidates == {((0, 0), Slot.CENTER)}

    def test_contested_road_goes_to_majority(self):
        board = Board()
        board.set((0, 0), road_end("right"))
        board.at_mut((0, 0)).place_meeple(Slot.RIGHT, A)
        board.set((0, 2), straight_road())
        board.at_mut((0, 2)).place_meeple(Slot.RIGHT, A)
        board.set((0, 3), road_end("left"))
        board.at_mut((0, 3)).place_meeple(Slot.LEFT, B)
        points = board.get_completion_points((0, 1), straight_road())
        assert points == {A: 4}

    def test_tie_pays_every_tied_player_in_full(self):
        board = Board()
        board.set((0, 0), road_end("right"))
        board.at_mut((0, 0)).place_meeple(Slot.RIGHT, A)
        board.set((0, 2), road_end("left"))
        board.at_mut((0, 2)).place_meeple(Slot.LEFT, B)
        points = board.get_completion_points((0, 1), straight_road())
        assert points == {A: 3, B: 3}

    def test_unowned_points_go_to_none_bucket(self, enclosed_city):
        assert enclosed_city.get_completion_points((0, 0), four_way_city()) == {None: 10}


class TestStandingScoring:
    def test_open_city_and_monastery_at_game_end(self):
        board = Board()
        board.set((0, 0), TileData(left=MiniTile.CITY, center=MiniTile.CITY, right=MiniTile.CITY, has_emblem=True))
        board.at_mut((0, 0)).place_meeple(Slot.LEFT, A)
        board.set((5, 5), monastery())
        board.at_mut((5, 5)).place_meeple(Slot.CENTER, B)
        board.set((5, 6), TileData())
        board.set((6, 5), TileData())
        # city: one tile at one point plus the emblem; monastery: three present tiles
        assert board.get_standing_points() == {A: 2, B: 3}

    def test_feature_with_two_meeples_scored_once(self):
        board = Board()
        board.set((0, 0), straight_road())
        board.at_mut((0, 0)).place_meeple(Slot.LEFT, A)
        board.set((0, 1), straight_road())
        board.at_mut((0, 1)).place_meeple(Slot.RIGHT, A)
        data = board.get_all_scoring_data()
        assert len(data) == 1
        assert data[0].points == 2
        assert not data[0].complete


class TestHelpers:
    def test_majority(self):
        from collections import Counter

        assert majority(Counter()) == frozenset()
        assert majority(Counter({A: 2, B: 1})) == frozenset({A})
        assert majority(Counter({A: 1, B: 1})) == frozenset({A, B})

    def test_city_multiplier_differs_at_game_end(self):
        assert feature_points(MiniTile.CITY, 3, 1, complete=True, endgame=False) == 7
        assert feature_points(MiniTile.CITY, 3, 1, complete=False, endgame=True) == 4
        assert feature_points(MiniTile.ROAD, 3, 0, complete=False, endgame=False) == 0

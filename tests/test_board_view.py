"""Tests for placement legality, overlays and meeple legality."""
import pytest

from carcassonne_ai.board import ORIGIN, ROTATIONS, Board, MiniTile, MoveRequest, OverlayBoard, Rotation, Slot, TileData
from carcassonne_ai.errors import (
    FeatureNonEmptyError,
    FeaturesMismatchError,
    NoConnectingTileError,
    NonScoringFeatureError,
    NoTilePresentError,
)
from carcassonne_ai.types import Player

from conftest import city_cap, four_way_city, monastery, start_tile, straight_road


@pytest.fixture
def started():
    board = Board()
    board.set(ORIGIN, start_tile())
    return board


class TestFeaturesMatch:
    def test_enclosed_city_matches_at_every_rotation(self):
        board = Board()
        for coord in [(-1, 0), (1, 0), (0, -1), (0, 1)]:
            board.set(coord, four_way_city())
        for rotation in ROTATIONS:
            assert board.is_features_match(ORIGIN, four_way_city().with_rotation(rotation))

    def test_road_against_grass_mismatches(self, started):
        # the straight road shows grass at the bottom; start shows city on top
        assert not started.is_features_match((-1, 0), straight_road())
        assert started.is_features_match((0, 1), straight_road())

    def test_no_neighbours_is_vacuously_true(self):
        assert Board().is_features_match((9, 9), straight_road())

    def test_check_placement_reasons(self, started):
        with pytest.raises(NoConnectingTileError):
            started.check_placement((5, 5), TileData())
        with pytest.raises(FeaturesMismatchError):
            started.check_placement((-1, 0), straight_road())
        started.check_placement((-1, 0), city_cap("bottom"))


class TestOverlay:
    def test_patch_wins_and_base_is_untouched(self, started):
        overlay = started.with_overlay((0, 1), straight_road())
        assert isinstance(overlay, OverlayBoard)
        assert overlay.at((0, 1)) is not None
        assert started.at((0, 1)) is None
        assert sorted(overlay.tiles_present()) == [(0, 0), (0, 1)]

    def test_stacked_overlays_merge_patches(self, started):
        overlay = started.with_overlay((0, 1), straight_road()).with_overlay((0, 2), straight_road())
        assert overlay.base is started
        assert set(overlay.tiles_present()) == {(0, 0), (0, 1), (0, 2)}

    def test_patch_over_existing_coordinate_not_listed_twice(self, started):
        overlay = started.with_overlay(ORIGIN, TileData())
        assert list(overlay.tiles_present()) == [ORIGIN]
        assert overlay.at(ORIGIN).center is MiniTile.GRASS


class TestLegalMoves:
    def test_empty_board_offers_origin_only(self):
        moves = Board().get_legal_moves(TileData(), can_place_meeple=True)
        assert {m.coord for m in moves} == {ORIGIN}
        # grass holds no meeple, so one move per rotation
        assert len(moves) == 4

    def test_meeple_moves_only_when_allowed(self, started):
        with_meeples = started.get_legal_moves(straight_road(), can_place_meeple=True)
        without = started.get_legal_moves(straight_road(), can_place_meeple=False)
        assert all(m.meeple is None for m in without)
        assert MoveRequest((0, 1), Rotation.NONE, Slot.LEFT) in with_meeples
        assert MoveRequest((0, 1), Rotation.NONE, None) in with_meeples
        assert {(m.coord, m.rotation) for m in with_meeples} == {(m.coord, m.rotation) for m in without}

    def test_one_meeple_move_per_feature(self, started):
        def slots(tile):
            moves = started.get_legal_moves(tile, can_place_meeple=True)
            return [m.meeple for m in moves if m.coord == (0, 1) and m.rotation is Rotation.NONE and m.meeple is not None]

        # left and right belong to the same road
        assert slots(straight_road()) == [Slot.LEFT]
        assert slots(start_tile()) == [Slot.TOP, Slot.LEFT]

    def test_every_listed_move_is_placeable(self, started):
        for move in started.get_legal_moves(straight_road(), can_place_meeple=True):
            candidate = straight_road().with_rotation(move.rotation)
            started.check_placement(move.coord, candidate)
            if move.meeple is not None:
                assert started.with_overlay(move.coord, candidate).is_legal_meeple(move.coord, move.meeple)

    def test_does_legal_move_exist(self):
        board = Board()
        board.set(ORIGIN, four_way_city())
        assert not board.does_legal_move_exist(TileData())
        assert board.does_legal_move_exist(city_cap("top"))


class TestMeepleLegality:
    def test_no_tile(self, started):
        with pytest.raises(NoTilePresentError):
            started.check_meeple((4, 4), Slot.TOP)

    def test_grass_and_road_center_are_non_scoring(self, started):
        board = Board()
        board.set(ORIGIN, TileData())
        with pytest.raises(NonScoringFeatureError):
            board.check_meeple(ORIGIN, Slot.TOP)
        with pytest.raises(NonScoringFeatureError):
            started.check_meeple(ORIGIN, Slot.CENTER)

    def test_claimed_feature_rejected_from_connected_tile(self, started):
        started.at_mut(ORIGIN).place_meeple(Slot.LEFT, Player.WHITE)
        overlay = started.with_overlay((0, 1), straight_road())
        with pytest.raises(FeatureNonEmptyError):
            overlay.check_meeple((0, 1), Slot.RIGHT)
        # the city on the same tile is a separate feature
        assert started.is_legal_meeple(ORIGIN, Slot.TOP)

    def test_monastery_center(self):
        board = Board()
        board.set(ORIGIN, monastery())
        assert board.is_legal_meeple(ORIGIN, Slot.CENTER)
        board.at_mut(ORIGIN).place_meeple(Slot.CENTER, Player.BLACK)
        with pytest.raises(FeatureNonEmptyError):
            board.check_meeple(ORIGIN, Slot.CENTER)

    def test_meeple_counts(self, started):
        started.at_mut(ORIGIN).place_meeple(Slot.TOP, Player.RED)
        started.at_mut(ORIGIN).place_meeple(Slot.LEFT, Player.RED)
        assert started.meeple_counts() == {Player.RED: 2}

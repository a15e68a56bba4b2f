"""Tests for the move-choosing strategies."""
import pytest

from carcassonne_ai.board import MiniTile, MoveRequest, Rotation, Slot, TileData
from carcassonne_ai.bots import Bot, GreedyBot, MCTSBot, RandomBot, ReplayBot, ShallowBot, make_bot
from carcassonne_ai.bots.playouts import run_batch
from carcassonne_ai.errors import ReplayError
from carcassonne_ai.referee import RefereeState
from carcassonne_ai.tilebag import ReplayTileBag
from carcassonne_ai.types import Player

from conftest import city_cap, start_tile, straight_road

W = Player.WHITE
B = Player.BLACK


@pytest.fixture
def road_state():
    first = TileData(top=MiniTile.CITY, left=MiniTile.ROAD, center=MiniTile.ROAD, right=MiniTile.ROAD)
    second = TileData(right=MiniTile.ROAD)
    third = TileData(left=MiniTile.ROAD, center=MiniTile.JUNCTION)
    state = RefereeState.from_players([W, B], ReplayTileBag([first, second, third]))
    state.process_move(MoveRequest((0, 0)))
    state.process_move(MoveRequest((0, -1)))
    return state


@pytest.fixture
def short_game():
    tiles = [start_tile(), straight_road(), city_cap("top"), straight_road()]
    return RefereeState.from_players([W, B], ReplayTileBag(tiles))


def test_greedy_completes_road_with_meeple(road_state):
    expected = MoveRequest((0, 1), Rotation.NONE, Slot.LEFT)
    for seed in range(10):
        assert GreedyBot(B, seed=seed).get_move(road_state) == expected


@pytest.mark.parametrize(
    "bot",
    [
        RandomBot(W, seed=0),
        GreedyBot(W, seed=0),
        ShallowBot(W, depth=2, seed=0),
        MCTSBot(W, iterations=4, seed=0),
    ],
)
def test_bots_return_legal_moves(bot, short_game):
    assert isinstance(bot, Bot)
    assert bot.get_move(short_game) in short_game.get_legal_moves()


def test_lookahead_bots_do_not_mutate_state(short_game):
    short_game.process_move(MoveRequest((0, 0)))
    remaining = short_game.tilebag.count_remaining()
    tiles = len(short_game.board)
    MCTSBot(B, iterations=6, seed=1).get_move(short_game)
    ShallowBot(B, depth=2, seed=1).get_move(short_game)
    assert short_game.tilebag.count_remaining() == remaining
    assert len(short_game.board) == tiles
    assert short_game.get_player() is B


class TestProcessPool:
    def test_pooled_shallow_bot_returns_legal_move(self, short_game):
        bot = ShallowBot(W, depth=1, workers=2, seed=0)
        assert bot.get_move(short_game) in short_game.get_legal_moves()

    def test_pool_matches_serial_results(self, short_game):
        jobs = [(short_game, request, W, seed) for seed, request in enumerate(short_game.get_legal_moves())]
        assert len(jobs) > 1
        assert run_batch(jobs, workers=2) == run_batch(jobs, workers=1)


class TestReplayBot:
    def test_pops_in_order(self, short_game):
        moves = [MoveRequest((0, 0)), MoveRequest((0, 1))]
        bot = ReplayBot(W, moves)
        assert bot.get_move(short_game) == moves[0]
        assert bot.get_move(short_game) == moves[1]
        with pytest.raises(ReplayError):
            bot.get_move(short_game)


class TestFactory:
    @pytest.mark.parametrize("kind,cls", [("random", RandomBot), ("greedy", GreedyBot), ("shallow", ShallowBot), ("MCTS", MCTSBot)])
    def test_kinds(self, kind, cls):
        bot = make_bot(kind, B, seed=3, depth=4, iterations=9)
        assert isinstance(bot, cls)
        assert bot.get_own_player() is B

    def test_params_reach_the_bot(self):
        assert make_bot("shallow", W, depth=4).depth == 4
        assert make_bot("mcts", W, iterations=9).iterations == 9

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            make_bot("human", W)

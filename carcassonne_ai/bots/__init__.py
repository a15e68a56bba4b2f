"""Move-choosing strategies."""

from .base import BOT_KINDS, Bot, make_bot
from .greedy_bot import GreedyBot
from .mcts_bot import MCTSBot
from .random_bot import RandomBot
from .replay_bot import ReplayBot
from .shallow_bot import ShallowBot

__all__ = [
    "BOT_KINDS",
    "Bot",
    "make_bot",
    "GreedyBot",
    "MCTSBot",
    "RandomBot",
    "ReplayBot",
    "ShallowBot",
]

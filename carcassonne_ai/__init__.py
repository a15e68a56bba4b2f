"""Carcassonne AI: tile-placement rules engine, referee and bots."""

from importlib import import_module
from typing import Any

__version__ = "0.1.0"
__all__ = [
    "Player",
    "MiniTile",
    "Slot",
    "Rotation",
    "TileData",
    "MoveRequest",
    "Board",
    "BoardView",
    "OverlayBoard",
    "RulesViolation",
    "TileBag",
    "RandomTileBag",
    "ReplayTileBag",
    "RefereeState",
    "Match",
    "GameResult",
    "Replay",
    "make_bot",
    "__version__",
]

_EXPORTS = {
    "Player": ("types", "Player"),
    "MiniTile": ("board.tile", "MiniTile"),
    "Slot": ("board.tile", "Slot"),
    "Rotation": ("board.tile", "Rotation"),
    "TileData": ("board.tile", "TileData"),
    "MoveRequest": ("board.moves", "MoveRequest"),
    "Board": ("board.storage", "Board"),
    "BoardView": ("board.view", "BoardView"),
    "OverlayBoard": ("board.view", "OverlayBoard"),
    "RulesViolation": ("errors", "RulesViolation"),
    "TileBag": ("tilebag", "TileBag"),
    "RandomTileBag": ("tilebag", "RandomTileBag"),
    "ReplayTileBag": ("tilebag", "ReplayTileBag"),
    "RefereeState": ("referee", "RefereeState"),
    "Match": ("arena", "Match"),
    "GameResult": ("arena", "GameResult"),
    "Replay": ("arena", "Replay"),
    "make_bot": ("bots.base", "make_bot"),
}


def __getattr__(name: str) -> Any:
    if name in _EXPORTS:
        module_name, attr_name = _EXPORTS[name]
        module = import_module(f".{module_name}", __name__)
        attr = getattr(module, attr_name)
        globals()[name] = attr
        return attr
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


def __dir__() -> list[str]:
    return sorted(set(list(globals().keys()) + list(__all__)))

"""
Minesweeper game package.

Provides the game engine and the collaborators around it: clock,
preferences store, text renderer, session, and Gymnasium environment.
"""
from .cell import MINE, Cell, CellState
from .clock import GameClock
from .board import (
    GameEngine,
    BoardConfig,
    GameStatus,
    DIFFICULTIES,
    EASY,
    MEDIUM,
    HARD,
    get_preset,
    preset_name,
)
from .preferences import PreferencesStore, PreferencesError
from .render import TextRenderer
from .session import GameSession
from .environment import MinesweeperEnv

__all__ = [
    "MINE",
    "Cell",
    "CellState",
    "GameClock",
    "GameEngine",
    "BoardConfig",
    "GameStatus",
    "DIFFICULTIES",
    "EASY",
    "MEDIUM",
    "HARD",
    "get_preset",
    "preset_name",
    "PreferencesStore",
    "PreferencesError",
    "TextRenderer",
    "GameSession",
    "MinesweeperEnv",
]

"""
Board module for Minesweeper.

Implements the game engine: deferred mine placement, adjacency counts,
flood-fill reveal, flagging, and win/loss detection.
"""
import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Optional, Protocol, Tuple

import numpy as np

from .cell import MINE, Cell, CellState
from .clock import GameClock
from .preferences import PreferencesError

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameStatus(Enum):
    """Lifecycle of a single game."""

    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()


@dataclass(frozen=True)
class BoardConfig:
    """
    Dimensions and mine count of a board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        num_mines: Total mines to place.
    """

    rows: int = 9
    cols: int = 9
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise ValueError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.rows * self.cols - 1
        if self.num_mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols

    @property
    def safe_cells(self) -> int:
        return self.total_cells - self.num_mines


# Preset difficulty levels
EASY = BoardConfig(9, 9, 10)
MEDIUM = BoardConfig(16, 16, 40)
HARD = BoardConfig(16, 30, 99)

DIFFICULTIES: Dict[str, BoardConfig] = {
    "easy": EASY,
    "medium": MEDIUM,
    "hard": HARD,
}


def get_preset(name: str) -> BoardConfig:
    """Look up a difficulty preset by name."""
    try:
        return DIFFICULTIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown difficulty {name!r} (expected one of {', '.join(DIFFICULTIES)})"
        ) from None


def preset_name(config: BoardConfig) -> Optional[str]:
    """Return the name of the preset matching config, if any."""
    for name, preset in DIFFICULTIES.items():
        if preset == config:
            return name
    return None


class HighScoreRecorder(Protocol):
    """Anything that can judge and store a completion time."""

    def set_high_score(self, difficulty: str, seconds: int) -> bool:
        ...


# ============================================================================
# Game Engine
# ============================================================================

@dataclass
class GameEngine:
    """
    Minesweeper game engine.

    Owns the grid, the game status and the clock. Callers mutate it
    through reveal(), toggle_flag(), reset() and configure(), then read
    the new state back through the accessors.
    """

    config: BoardConfig = field(default_factory=lambda: EASY)
    difficulty: Optional[str] = field(init=False, default=None)
    rng: random.Random = field(default_factory=random.Random, repr=False)
    clock: GameClock = field(default_factory=GameClock, repr=False)
    scores: Optional[HighScoreRecorder] = field(default=None, repr=False)
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    _status: GameStatus = GameStatus.NOT_STARTED
    _cells_revealed: int = 0
    _new_record: bool = False

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        self.difficulty = preset_name(self.config)
        self._init_grid()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create a hidden, mine-free grid."""
        self._grid = [
            [Cell() for _ in range(self.config.cols)]
            for _ in range(self.config.rows)
        ]

    def _place_mines(self, exclude: Tuple[int, int]) -> None:
        """
        Scatter mines by rejection sampling.

        Draws a random row and column, skipping the excluded cell and
        cells that already hold a mine, until num_mines are placed.

        Args:
            exclude: (row, col) position to keep mine-free.
        """
        placed = 0
        while placed < self.config.num_mines:
            row = self.rng.randrange(self.config.rows)
            col = self.rng.randrange(self.config.cols)
            if (row, col) == exclude or self._grid[row][col].is_mine:
                continue
            self._grid[row][col].value = MINE
            placed += 1
        logger.debug(
            "Placed %d mines on %dx%d board avoiding %s",
            placed, self.config.rows, self.config.cols, exclude,
        )

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all non-mine cells."""
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                if not self._grid[row][col].is_mine:
                    self._grid[row][col].value = self._count_adjacent_mines(row, col)

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        count = 0
        for neighbor_row, neighbor_col in self._get_neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _get_neighbors(self, row: int, col: int) -> List[Tuple[int, int]]:
        """
        Get in-bounds neighbouring positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples, at most eight.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.rows and 0 <= col < self.config.cols

    def _check_position(self, row: int, col: int) -> None:
        if not self._is_valid_position(row, col):
            raise ValueError(
                f"Position ({row}, {col}) is outside the "
                f"{self.config.rows}x{self.config.cols} board"
            )

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def configure(self, rows: int, cols: int, num_mines: int) -> None:
        """
        Switch to new dimensions and start a fresh board.

        Raises:
            ValueError: If the dimensions or mine count are invalid. The
                current board is left untouched in that case.
        """
        config = BoardConfig(rows, cols, num_mines)
        self.config = config
        self.difficulty = preset_name(config)
        self.reset()

    def select_difficulty(self, name: str) -> None:
        """Switch to a named preset and start a fresh board."""
        config = get_preset(name)
        self.configure(config.rows, config.cols, config.num_mines)

    def reveal(self, row: int, col: int) -> bool:
        """
        Reveal a cell.

        The first reveal of a game places the mines, keeping this cell
        safe, and starts the clock. A zero cell opens its whole empty
        region plus the numbered border around it.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            True if anything was revealed, False if the move was ignored
            (game over, cell already revealed, or cell flagged).

        Raises:
            ValueError: If the position is off the board.
        """
        self._check_position(row, col)
        if self.is_over:
            return False
        if not self._grid[row][col].is_hidden:
            return False

        if self._status == GameStatus.NOT_STARTED:
            self._handle_first_click(row, col)

        cell = self._grid[row][col]
        cell.reveal()
        self._cells_revealed += 1

        if cell.is_mine:
            self._handle_loss(row, col)
            return True

        if cell.value == 0:
            self._flood_reveal(row, col)

        self._check_win_condition()
        return True

    def _handle_first_click(self, row: int, col: int) -> None:
        """Place mines, compute counts and start the clock."""
        self._place_mines((row, col))
        self._calculate_adjacent_mines()
        self._status = GameStatus.IN_PROGRESS
        self.clock.start()
        logger.debug("Game started at (%d, %d)", row, col)

    def _flood_reveal(self, row: int, col: int) -> None:
        """Open the empty region around a revealed zero cell."""
        stack = [(row, col)]
        while stack:
            current_row, current_col = stack.pop()
            for neighbor_row, neighbor_col in self._get_neighbors(current_row, current_col):
                neighbor = self._grid[neighbor_row][neighbor_col]
                if not neighbor.reveal():
                    continue
                self._cells_revealed += 1
                if neighbor.value == 0:
                    stack.append((neighbor_row, neighbor_col))

    def _handle_loss(self, row: int, col: int) -> None:
        self._status = GameStatus.LOST
        for line in self._grid:
            for cell in line:
                if cell.is_mine:
                    cell.expose()
        self.clock.stop()
        logger.debug("Game lost at (%d, %d) after %ds", row, col, self.clock.elapsed)

    def _check_win_condition(self) -> bool:
        """Finish the game once every safe cell is revealed."""
        if self._status != GameStatus.IN_PROGRESS:
            return False
        if self._cells_revealed != self.config.safe_cells:
            return False
        return self._handle_win()

    def _handle_win(self) -> bool:
        """
        Finish a won game.

        Returns:
            Whether the finishing time is a new record for the active
            difficulty.
        """
        self._status = GameStatus.WON
        self.clock.stop()
        for line in self._grid:
            for cell in line:
                if cell.is_mine and cell.is_hidden:
                    cell.toggle_flag()

        elapsed = self.clock.elapsed
        if self.scores is not None and self.difficulty is not None:
            try:
                self._new_record = self.scores.set_high_score(self.difficulty, elapsed)
            except PreferencesError as exc:
                logger.warning("Could not record %ds on %s: %s", elapsed, self.difficulty, exc)
        logger.debug(
            "Game won in %ds on %s (new record: %s)",
            elapsed, self.difficulty or "custom board", self._new_record,
        )
        return self._new_record

    def toggle_flag(self, row: int, col: int) -> bool:
        """
        Toggle the flag on an unrevealed cell.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            True if the flag was toggled, False otherwise.

        Raises:
            ValueError: If the position is off the board.
        """
        self._check_position(row, col)
        if self.is_over:
            return False
        if not self._grid[row][col].toggle_flag():
            return False
        # Flags never count towards the win; re-checked only for parity
        # with revealing.
        self._check_win_condition()
        return True

    def reset(self) -> None:
        """Start a new game with the current dimensions."""
        self.clock.reset()
        self._init_grid()
        self._status = GameStatus.NOT_STARTED
        self._cells_revealed = 0
        self._new_record = False

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def is_playing(self) -> bool:
        """Game has started and is not over."""
        return self._status == GameStatus.IN_PROGRESS

    @property
    def is_won(self) -> bool:
        return self._status == GameStatus.WON

    @property
    def is_lost(self) -> bool:
        return self._status == GameStatus.LOST

    @property
    def is_over(self) -> bool:
        return self._status in (GameStatus.WON, GameStatus.LOST)

    @property
    def rows(self) -> int:
        return self.config.rows

    @property
    def cols(self) -> int:
        return self.config.cols

    @property
    def elapsed(self) -> int:
        """Whole seconds since the first reveal, frozen once the game ends."""
        return self.clock.elapsed

    @property
    def new_record(self) -> bool:
        """Whether the last win set a best time for its difficulty."""
        return self._new_record

    @property
    def revealed_count(self) -> int:
        return sum(1 for line in self._grid for cell in line if cell.is_revealed)

    @property
    def flag_count(self) -> int:
        return sum(1 for line in self._grid for cell in line if cell.is_flagged)

    @property
    def mines_remaining(self) -> int:
        """Mine counter as shown to the player; negative when over-flagged."""
        return self.config.num_mines - self.flag_count

    def get_cell(self, row: int, col: int) -> Cell:
        """Get the cell at a position."""
        self._check_position(row, col)
        return self._grid[row][col]

    def get_values(self) -> np.ndarray:
        """Cell values: -1 for mines, 0-8 otherwise."""
        return np.array(
            [[cell.value for cell in line] for line in self._grid],
            dtype=np.int8,
        )

    def get_revealed_mask(self) -> np.ndarray:
        return self._state_mask(CellState.REVEALED)

    def get_flagged_mask(self) -> np.ndarray:
        return self._state_mask(CellState.FLAGGED)

    def _state_mask(self, state: CellState) -> np.ndarray:
        return np.array(
            [[cell.state == state for cell in line] for line in self._grid],
            dtype=bool,
        )

    def get_observation(self) -> np.ndarray:
        """
        Get the board as the player sees it.

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.config.rows, self.config.cols), dtype=np.int8)
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                obs[row, col] = self._grid[row][col].to_observation()
        return obs

    def get_valid_actions(self) -> List[Tuple[int, int]]:
        """
        Get cells that a reveal would act on.

        Returns:
            List of (row, col) positions that are hidden and unflagged.
        """
        if self.is_over:
            return []
        actions = []
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                if self._grid[row][col].is_hidden:
                    actions.append((row, col))
        return actions

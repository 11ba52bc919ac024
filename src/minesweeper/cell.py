"""
Cell module for Minesweeper.

A cell holds its value (a mine, or the number of neighbouring mines)
and its visible state (hidden, revealed or flagged).
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

MINE = -1


class CellState(Enum):
    """Possible visible states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    A single square of the grid.

    Attributes:
        value: MINE (-1) for a mine, otherwise the adjacent mine count (0-8).
        state: Current visible state.
    """

    value: int = 0
    state: CellState = CellState.HIDDEN

    @property
    def is_mine(self) -> bool:
        return self.value == MINE

    def reveal(self) -> bool:
        """
        Reveal a hidden cell.

        Returns:
            True if the cell was hidden and is now revealed, False if it
            was already revealed or carries a flag.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def expose(self) -> None:
        """Reveal the cell unconditionally, dropping any flag."""
        self.state = CellState.REVEALED

    def toggle_flag(self) -> bool:
        """
        Flip the flag on an unrevealed cell.

        Returns:
            True if the flag was toggled, False if the cell is revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.HIDDEN
        return True

    @property
    def is_hidden(self) -> bool:
        """Hidden and not flagged."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        return self.state == CellState.FLAGGED

    def to_observation(self) -> int:
        """
        Encode the cell as seen by the player.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
        """
        if self.state == CellState.HIDDEN:
            return -1
        if self.state == CellState.FLAGGED:
            return -2
        if self.is_mine:
            return 9
        return self.value

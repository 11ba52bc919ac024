"""
Pytest configuration and shared fixtures.
"""
import random
from typing import Iterable, List, Tuple

import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import BoardConfig, Cell, GameEngine, PreferencesStore


# ============================================================================
# Helpers
# ============================================================================

class ScriptedRandom(random.Random):
    """Random source that hands out scripted values to randrange first."""

    def __init__(self, values: Iterable[int]) -> None:
        self._script: List[int] = list(values)
        super().__init__(0)

    def randrange(self, start, stop=None, step=1):
        if self._script:
            return self._script.pop(0)
        return super().randrange(start, stop, step)


def scripted_engine(
    rows: int, cols: int, mines: Iterable[Tuple[int, int]], **kwargs
) -> GameEngine:
    """Engine whose first reveal places mines at the given positions."""
    mines = list(mines)
    script = [value for position in mines for value in position]
    return GameEngine(
        BoardConfig(rows, cols, len(mines)), rng=ScriptedRandom(script), **kwargs
    )


# ============================================================================
# Engine Fixtures
# ============================================================================

@pytest.fixture
def make_engine():
    """Factory for engines with a scripted mine layout."""
    return scripted_engine


@pytest.fixture
def scripted_rng():
    """Factory for scripted random sources."""
    return ScriptedRandom


@pytest.fixture
def default_engine() -> GameEngine:
    """Create a default easy engine (9x9, 10 mines)."""
    return GameEngine(rng=random.Random(1234))


@pytest.fixture
def empty_engine() -> GameEngine:
    """Create a 5x5 engine with no mines for cascade testing."""
    return GameEngine(BoardConfig(5, 5, 0))


@pytest.fixture
def two_mine_engine() -> GameEngine:
    """
    3x3 engine with mines at (2, 0) and (2, 2).

    Revealing (0, 0) opens rows 0 and 1 and leaves (2, 1) as the
    only hidden safe cell.
    """
    return scripted_engine(3, 3, [(2, 0), (2, 2)])


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(value=-1)


# ============================================================================
# Preferences Fixtures
# ============================================================================

@pytest.fixture
def memory_store() -> PreferencesStore:
    """Preferences kept in memory only."""
    return PreferencesStore()


@pytest.fixture
def prefs_path(tmp_path: Path) -> Path:
    """Location for a preferences file inside a temporary directory."""
    return tmp_path / "prefs" / "preferences.json"

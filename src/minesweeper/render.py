"""
Text rendering of a game.

The renderer only reads engine state; it is called again after every
move to draw a fresh frame.
"""
from typing import Dict, List, Optional

from .board import GameEngine, GameStatus


# ============================================================================
# Constants
# ============================================================================

RESET = "\033[0m"

# ANSI colours for the digits 1-8, plus flags and mines
PALETTES: Dict[str, Dict[str, str]] = {
    "light": {
        "1": "\033[34m", "2": "\033[32m", "3": "\033[31m", "4": "\033[35m",
        "5": "\033[33m", "6": "\033[36m", "7": "\033[30m", "8": "\033[90m",
        "F": "\033[91m", "*": "\033[1;30m", ".": "\033[90m",
    },
    "dark": {
        "1": "\033[94m", "2": "\033[92m", "3": "\033[91m", "4": "\033[95m",
        "5": "\033[93m", "6": "\033[96m", "7": "\033[97m", "8": "\033[37m",
        "F": "\033[1;91m", "*": "\033[1;97m", ".": "\033[37m",
    },
}

FACES = {
    GameStatus.NOT_STARTED: ":(",
    GameStatus.IN_PROGRESS: ":(",
    GameStatus.WON: "B)",
    GameStatus.LOST: "X(",
}


def format_counter(value: Optional[int]) -> str:
    """Three-digit counter, or '---' when there is nothing to show."""
    if value is None:
        return "---"
    return str(value).zfill(3)


# ============================================================================
# Renderer
# ============================================================================

class TextRenderer:
    """
    Draws an engine snapshot as lines of text.

    Attributes:
        theme: "light" or "dark", selecting the colour palette.
        color: Whether to emit ANSI colour codes.
    """

    def __init__(self, theme: str = "light", color: bool = True) -> None:
        if theme not in PALETTES:
            raise ValueError(f"Unknown theme {theme!r}")
        self.theme = theme
        self.color = color

    def render(self, engine: GameEngine, best: Optional[int] = None) -> str:
        """Draw the header and grid for the current state."""
        lines = [self._header(engine, best)]
        lines.extend(self._grid(engine))
        return "\n".join(lines)

    def _header(self, engine: GameEngine, best: Optional[int]) -> str:
        return (
            f"Mines: {engine.mines_remaining:>3}  "
            f"[{FACES[engine.status]}]  "
            f"Time: {format_counter(engine.elapsed)}  "
            f"Best: {format_counter(best)}"
        )

    def _grid(self, engine: GameEngine) -> List[str]:
        obs = engine.get_observation()
        width = len(str(engine.cols - 1))
        label = len(str(engine.rows - 1))

        lines = [" " * (label + 1) + " ".join(str(c).rjust(width) for c in range(engine.cols))]
        for row in range(engine.rows):
            glyphs = [self._glyph(int(value)).rjust(width) for value in obs[row]]
            glyphs = [self._paint(glyph) for glyph in glyphs]
            lines.append(str(row).rjust(label) + " " + " ".join(glyphs))
        return lines

    @staticmethod
    def _glyph(value: int) -> str:
        if value == -1:
            return "."
        if value == -2:
            return "F"
        if value == 9:
            return "*"
        if value == 0:
            return " "
        return str(value)

    def _paint(self, glyph: str) -> str:
        code = PALETTES[self.theme].get(glyph.strip())
        if not self.color or code is None:
            return glyph
        return f"{code}{glyph}{RESET}"

"""
Game session: routes player intents to the engine and redraws after each.
"""
from typing import Optional

from .board import GameEngine
from .clock import GameClock
from .preferences import PreferencesStore
from .render import TextRenderer


class GameSession:
    """
    Wires an engine to its collaborators.

    The preferences store doubles as the engine's high-score recorder.
    Every intent returns the frame drawn after it was applied.
    """

    def __init__(
        self,
        preferences: Optional[PreferencesStore] = None,
        engine: Optional[GameEngine] = None,
        renderer: Optional[TextRenderer] = None,
        difficulty: Optional[str] = None,
    ) -> None:
        self.preferences = preferences or PreferencesStore()
        self.engine = engine or GameEngine(clock=GameClock(auto_tick=True))
        self.engine.scores = self.preferences
        self.renderer = renderer or TextRenderer(theme=self.preferences.theme)
        self.renderer.theme = self.preferences.theme
        if difficulty is not None and difficulty != self.engine.difficulty:
            self.engine.select_difficulty(difficulty)

    # ========================================================================
    # Intents
    # ========================================================================

    def reveal(self, row: int, col: int) -> str:
        self.engine.reveal(row, col)
        return self.render()

    def toggle_flag(self, row: int, col: int) -> str:
        self.engine.toggle_flag(row, col)
        return self.render()

    def reset(self) -> str:
        self.engine.reset()
        return self.render()

    def select_difficulty(self, name: str) -> str:
        self.engine.select_difficulty(name)
        return self.render()

    def toggle_theme(self) -> str:
        self.renderer.theme = self.preferences.toggle_theme()
        return self.render()

    # ========================================================================
    # Display
    # ========================================================================

    @property
    def best_time(self) -> Optional[int]:
        """Best time for the active difficulty, None on custom boards."""
        if self.engine.difficulty is None:
            return None
        return self.preferences.get_high_score(self.engine.difficulty)

    def render(self) -> str:
        return self.renderer.render(self.engine, self.best_time)

    def close(self) -> None:
        """Stop the clock so no ticker outlives the session."""
        self.engine.clock.stop()

"""
Player preferences: best completion time per difficulty and colour theme.

Stored as a small JSON document, rewritten on every change.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

THEMES = ("light", "dark")
DEFAULT_THEME = "light"
DEFAULT_DIFFICULTIES = ("easy", "medium", "hard")


class PreferencesError(Exception):
    """Raised when preferences cannot be written."""


def default_preferences() -> Dict[str, Any]:
    return {
        "high_scores": {name: None for name in DEFAULT_DIFFICULTIES},
        "theme": DEFAULT_THEME,
    }


# ============================================================================
# Preferences Store
# ============================================================================

class PreferencesStore:
    """
    Key-value preferences backed by an optional JSON file.

    Without a path the store lives in memory only, which is what the
    tests and throwaway sessions use.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        self.path = Path(path) if path is not None else None
        self._data = self._load()

    # ========================================================================
    # Persistence (Low-level)
    # ========================================================================

    def _load(self) -> Dict[str, Any]:
        """Read the preferences file, falling back to defaults."""
        data = default_preferences()
        if self.path is None or not self.path.exists():
            return data

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                saved = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable preferences %s: %s", self.path, exc)
            return data

        if not isinstance(saved, dict):
            logger.warning("Ignoring malformed preferences %s", self.path)
            return data

        scores = saved.get("high_scores")
        if isinstance(scores, dict):
            for difficulty, seconds in scores.items():
                data["high_scores"][difficulty] = _to_seconds(seconds)
        if saved.get("theme") in THEMES:
            data["theme"] = saved["theme"]
        return data

    def save(self) -> None:
        """Write the preferences file, if this store has one."""
        if self.path is None:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=2)
        except OSError as exc:
            raise PreferencesError(f"Could not save preferences: {exc}") from exc

    # ========================================================================
    # High Scores
    # ========================================================================

    @property
    def high_scores(self) -> Dict[str, Optional[int]]:
        return dict(self._data["high_scores"])

    def get_high_score(self, difficulty: str) -> Optional[int]:
        """Best time in seconds for a difficulty, or None if never won."""
        return self._data["high_scores"].get(difficulty)

    def set_high_score(self, difficulty: str, seconds: int) -> bool:
        """
        Offer a completion time for a difficulty.

        Args:
            difficulty: Preset name.
            seconds: Completion time.

        Returns:
            True if the time was stored as the new best, False if an
            equal or better time is already on record.
        """
        current = self.get_high_score(difficulty)
        if current is not None and seconds >= current:
            return False
        self._data["high_scores"][difficulty] = seconds
        try:
            self.save()
        except PreferencesError:
            self._data["high_scores"][difficulty] = current
            raise
        logger.info("New best time for %s: %ds", difficulty, seconds)
        return True

    # ========================================================================
    # Theme
    # ========================================================================

    @property
    def theme(self) -> str:
        return self._data["theme"]

    def set_theme(self, theme: str) -> None:
        if theme not in THEMES:
            raise ValueError(f"Unknown theme {theme!r} (expected one of {', '.join(THEMES)})")
        previous = self._data["theme"]
        self._data["theme"] = theme
        try:
            self.save()
        except PreferencesError:
            self._data["theme"] = previous
            raise

    def toggle_theme(self) -> str:
        """Switch between light and dark, returning the new theme."""
        new_theme = "dark" if self.theme == "light" else "light"
        self.set_theme(new_theme)
        return new_theme


def _to_seconds(value: Any) -> Optional[int]:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None

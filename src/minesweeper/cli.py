"""
Minesweeper - command-line entry point.

Usage:
    minesweeper play [--difficulty {easy,medium,hard}] [--no-color]
    minesweeper scores
    minesweeper theme [{light,dark}]
"""
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from .board import DIFFICULTIES
from .preferences import THEMES, PreferencesError, PreferencesStore
from .render import TextRenderer, format_counter
from .session import GameSession

DEFAULT_PREFS_PATH = Path.home() / ".minesweeper" / "preferences.json"

HELP_TEXT = """Commands:
  r ROW COL   reveal a cell
  f ROW COL   toggle a flag
  n           new game
  d NAME      switch difficulty (easy, medium, hard)
  t           toggle light/dark theme
  q           quit"""


def _parse_position(parts: List[str]) -> Optional[tuple]:
    if len(parts) != 3:
        return None
    try:
        return int(parts[1]), int(parts[2])
    except ValueError:
        return None


def handle_command(session: GameSession, line: str) -> Optional[str]:
    """
    Apply one command line to the session.

    Returns:
        The text to show, or None when the player quits.
    """
    try:
        return _dispatch(session, line)
    except PreferencesError as exc:
        return str(exc)


def _dispatch(session: GameSession, line: str) -> Optional[str]:
    parts = line.split()
    if not parts:
        return session.render()

    command = parts[0].lower()
    if command in ("q", "quit"):
        return None
    if command in ("n", "new"):
        return session.reset()
    if command in ("t", "theme"):
        return session.toggle_theme()
    if command in ("d", "difficulty"):
        if len(parts) != 2:
            return HELP_TEXT
        try:
            return session.select_difficulty(parts[1].lower())
        except ValueError as exc:
            return str(exc)
    if command in ("r", "f"):
        position = _parse_position(parts)
        if position is None:
            return HELP_TEXT
        try:
            if command == "r":
                return session.reveal(*position)
            return session.toggle_flag(*position)
        except ValueError as exc:
            return str(exc)
    return HELP_TEXT


def play(args: argparse.Namespace) -> None:
    """Run an interactive game in the terminal."""
    preferences = PreferencesStore(args.prefs)
    renderer = TextRenderer(theme=preferences.theme, color=not args.no_color)
    session = GameSession(preferences, renderer=renderer, difficulty=args.difficulty)

    print(HELP_TEXT)
    print(session.render())
    try:
        while True:
            try:
                line = input("> ")
            except EOFError:
                break
            was_over = session.engine.is_over
            output = handle_command(session, line)
            if output is None:
                break
            print(output)
            if was_over:
                continue
            if session.engine.is_won:
                message = "You win!"
                if session.engine.new_record:
                    message += f" New record: {session.engine.elapsed}s"
                print(message)
            elif session.engine.is_lost:
                print("Boom. Type 'n' for a new game.")
    finally:
        session.close()


def scores(args: argparse.Namespace) -> None:
    """Print the best time for each difficulty."""
    preferences = PreferencesStore(args.prefs)
    print(f"{'Difficulty':<12} {'Best':>5}")
    print("-" * 18)
    for name, seconds in preferences.high_scores.items():
        print(f"{name:<12} {format_counter(seconds):>5}")


def theme(args: argparse.Namespace) -> None:
    """Show or set the colour theme."""
    preferences = PreferencesStore(args.prefs)
    if args.theme is not None:
        preferences.set_theme(args.theme)
    print(f"Theme: {preferences.theme}")


def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Minesweeper in the terminal")
    parser.add_argument(
        "--prefs", type=Path, default=DEFAULT_PREFS_PATH,
        help="Preferences file (best times and theme)",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log game events to stderr"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play a game")
    play_parser.add_argument(
        "--difficulty", choices=list(DIFFICULTIES), default="easy",
        help="Board preset",
    )
    play_parser.add_argument(
        "--no-color", action="store_true", help="Disable ANSI colours"
    )

    subparsers.add_parser("scores", help="Show best times")

    theme_parser = subparsers.add_parser("theme", help="Show or set the theme")
    theme_parser.add_argument("theme", nargs="?", choices=THEMES, default=None)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == "play":
        play(args)
    elif args.command == "scores":
        scores(args)
    elif args.command == "theme":
        theme(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()

"""Session state and terminal front end for the numbers game."""

from numbers_game.game.session import GameSession

__all__ = ["GameSession"]

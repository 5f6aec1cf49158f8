"""
Decide whether a game is won, lost, or still in play.
"""

import logging
from collections.abc import Sequence
from enum import Enum

logger = logging.getLogger(__name__)


class Outcome(Enum):
    CONTINUE = "continue"
    WIN = "win"
    LOSE = "lose"


def check_endgame(
    latest_result: int | None, remaining: Sequence[int | None], goal: int
) -> Outcome:
    """
    Check whether the latest move ended the game.

    The game is won as soon as a result equals the goal. It is lost when a
    single number is left on the board and it is not the goal.

    Args:
        latest_result: Result of the move just played, None if nothing was played
        remaining: The board slots, None for an emptied slot
        goal: The goal of the round

    Returns:
        Outcome: WIN, LOSE or CONTINUE
    """
    if latest_result is not None and latest_result == goal:
        return Outcome.WIN

    left = [value for value in remaining if value is not None]
    if len(left) == 1 and left[0] != goal:
        logger.debug(f"Only {left[0]} left, goal was {goal}")
        return Outcome.LOSE

    return Outcome.CONTINUE

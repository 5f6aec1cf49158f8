"""
Game session: board, player selection and win/loss tracking for one player.

The session never prints or reads anything. A front end calls into it and
renders its views (slots, goal, hints, work area, status, counters).
"""

import logging

from numbers_game.utils.arithmetics import (
    NumbersPuzzle,
    NumbersPuzzleGenerator,
    Operator,
    apply_operation,
)
from numbers_game.utils.endgame import Outcome, check_endgame
from numbers_game.utils.string_helper import format_equation, format_fold_steps

logger = logging.getLogger(__name__)

STATUS_NEW_GAME = "Lets Play!"
STATUS_SELECT_OPERATOR = "Select an operator."
STATUS_SELECT_SECOND = "Select a second number."
STATUS_SELECT_NUMBER = "Select a number."
STATUS_WIN = "Congratulations! You win! Click above to play again!"
STATUS_LOSE = "Sorry, you lost! Click above to play again!"


class GameSession:
    def __init__(
        self, generator: NumbersPuzzleGenerator | None = None, cheat: bool = False
    ):
        """
        Initialize a session. Call new_round to deal the first board.

        Args:
            generator: Builds the board and goal of each round
            cheat: Whether new rounds reveal the steps used to build the goal
        """
        self.generator = generator or NumbersPuzzleGenerator()
        self.cheat = cheat
        self.wins = 0
        self.losses = 0

        self.puzzle: NumbersPuzzle | None = None
        self.slots: list[int | None] = []
        self.hints: list[str] = []
        self.work_area: list[str] = []
        self.status = STATUS_NEW_GAME
        self.over = False
        self.last_outcome: Outcome | None = None

        self._first_slot: int | None = None
        self._operator: Operator | None = None

    @property
    def goal(self) -> int | None:
        return self.puzzle.goal if self.puzzle is not None else None

    @property
    def first_slot(self) -> int | None:
        return self._first_slot

    @property
    def operator(self) -> Operator | None:
        return self._operator

    def set_cheat(self, enabled: bool) -> None:
        # Read on the next new_round only
        self.cheat = enabled

    def new_round(self) -> NumbersPuzzle:
        """
        Reset the board and deal new operands and a new goal.

        Returns:
            NumbersPuzzle: The puzzle for the round
        """
        self._clear_selection()
        self.over = False
        self.last_outcome = None
        self.work_area = []
        self.status = STATUS_NEW_GAME

        self.puzzle = self.generator.new_round(trace_enabled=self.cheat)
        self.slots = list(self.puzzle.operands)
        self.hints = format_fold_steps(list(self.puzzle.steps))
        logger.debug(
            "New round: operands=%s goal=%d", self.slots, self.puzzle.goal
        )
        return self.puzzle

    def select_number(self, slot: int) -> bool:
        """
        Handle a click on one of the number slots.

        The first click picks the left operand (and can be changed until an
        operator is chosen). Once an operator is chosen, a click on another slot
        plays the move.

        Args:
            slot: Index of the slot, starting at 0

        Returns:
            bool: False if the click was ignored
        """
        if self.over or self.puzzle is None:
            return False
        if not 0 <= slot < len(self.slots) or self.slots[slot] is None:
            return False

        if self._operator is None:
            self._first_slot = slot
            self.status = STATUS_SELECT_OPERATOR
            return True

        if slot == self._first_slot:
            return False

        self._play(self._first_slot, self._operator, slot)
        return True

    def select_operator(self, op: Operator | str) -> bool:
        """
        Handle a click on an operator.

        Args:
            op: The operator or its symbol

        Returns:
            bool: False if no first number has been selected yet
        """
        if self.over or self._first_slot is None:
            return False
        self._operator = Operator.from_symbol(op)
        self.status = STATUS_SELECT_SECOND
        return True

    def _play(self, first: int, op: Operator, second: int) -> None:
        a, b = self.slots[first], self.slots[second]
        result = apply_operation(a, op, b)
        self.work_area.append(format_equation(a, op, b, result))

        self.slots[first] = None
        self.slots[second] = result
        self.status = STATUS_SELECT_NUMBER

        self._check_endgame(result)
        self._clear_selection()

    def _check_endgame(self, result: int) -> None:
        outcome = check_endgame(result, self.slots, self.puzzle.goal)
        self.last_outcome = outcome
        if outcome is Outcome.WIN:
            self.over = True
            self.wins += 1
            self.status = STATUS_WIN
            logger.debug("Round won (%d wins)", self.wins)
        elif outcome is Outcome.LOSE:
            self.over = True
            self.losses += 1
            self.status = STATUS_LOSE
            logger.debug("Round lost (%d losses)", self.losses)

    def _clear_selection(self) -> None:
        self._first_slot = None
        self._operator = None

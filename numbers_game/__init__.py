"""Numbers game: reach a generated goal by combining four operands."""

from numbers_game.game.session import GameSession
from numbers_game.utils.arithmetics import (
    DifficultyTier,
    FoldStep,
    GoalSynthesizer,
    NumbersPuzzle,
    NumbersPuzzleGenerator,
    OperandGenerator,
    Operator,
    apply_operation,
    replay_fold_steps,
)
from numbers_game.utils.endgame import Outcome, check_endgame

__all__ = [
    "DifficultyTier",
    "FoldStep",
    "GameSession",
    "GoalSynthesizer",
    "NumbersPuzzle",
    "NumbersPuzzleGenerator",
    "OperandGenerator",
    "Operator",
    "Outcome",
    "apply_operation",
    "check_endgame",
    "replay_fold_steps",
]

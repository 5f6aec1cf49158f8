import random

import pytest

from numbers_game.utils.arithmetics import (
    DifficultyTier,
    FoldStep,
    NumbersPuzzle,
    Operator,
)


class ScriptedRandom:
    """Stand-in for random.Random that replays queued draws."""

    def __init__(self, randranges=(), choices=(), randints=()):
        self.randranges = list(randranges)
        self.choices = list(choices)
        self.randints = list(randints)

    def randrange(self, stop):
        value = self.randranges.pop(0)
        assert 0 <= value < stop
        return value

    def choice(self, seq):
        value = self.choices.pop(0)
        assert value in seq
        return value

    def randint(self, a, b):
        value = self.randints.pop(0)
        assert a <= value <= b
        return value


class FixedPuzzleGenerator:
    """Deals the same puzzle every round."""

    def __init__(self, operands, goal, steps=()):
        self.operands = tuple(operands)
        self.goal = goal
        self.steps = tuple(steps)
        self.trace_requests = []

    def new_round(self, trace_enabled=False):
        self.trace_requests.append(trace_enabled)
        return NumbersPuzzle(
            operands=self.operands,
            goal=self.goal,
            tier=DifficultyTier(max(len(self.steps), 1)),
            steps=self.steps if trace_enabled else (),
        )


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def scripted_random():
    return ScriptedRandom


@pytest.fixture
def win_in_one_generator():
    """7 + 3 reaches the goal of 10."""
    return FixedPuzzleGenerator(
        operands=[7, 3, 5, 2],
        goal=10,
        steps=[FoldStep(7, Operator.ADD, 3, 10)],
    )


@pytest.fixture
def unreachable_generator():
    return FixedPuzzleGenerator(operands=[1, 2, 3, 4], goal=100)

import logging
import operator
import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)


class Operator(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"

    @classmethod
    def from_symbol(cls, symbol: "str | Operator") -> "Operator":
        """
        Resolve an operator symbol typed or clicked by the player.

        Args:
            symbol: One of +, -, *, or the aliases x, ×, −

        Returns:
            Operator: The matching operator

        Raises:
            ValueError: If the symbol is not a supported operator
        """
        if isinstance(symbol, Operator):
            return symbol
        if not isinstance(symbol, str):
            raise ValueError(f"Unsupported operator symbol: {symbol!r}")
        normalized = _OPERATOR_ALIASES.get(symbol.strip(), symbol.strip())
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unsupported operator symbol: {symbol!r}") from None


_OPERATOR_ALIASES = {"x": "*", "X": "*", "×": "*", "−": "-"}

_OPERATOR_FUNCTIONS = {
    Operator.ADD: operator.add,
    Operator.SUB: operator.sub,
    Operator.MUL: operator.mul,
}


def apply_operation(a: int, op: "Operator | str", b: int) -> int:
    """
    Apply a player-chosen operator to two operands.

    The left operand comes first, so subtraction is a - b.

    Args:
        a: The left operand
        op: The operator, as an Operator or a symbol
        b: The right operand

    Returns:
        int: The result of the operation
    """
    return _OPERATOR_FUNCTIONS[Operator.from_symbol(op)](a, b)


class DifficultyTier(Enum):
    EASY = 1  # Goal reachable in one operation
    MEDIUM = 2
    HARD = 3

    @property
    def rounds(self) -> int:
        return self.value


@dataclass(frozen=True)
class FoldStep:
    left: int
    operator: Operator
    right: int
    result: int


@dataclass(frozen=True)
class NumbersPuzzle:
    operands: tuple[int, ...]
    goal: int
    tier: DifficultyTier
    steps: tuple[FoldStep, ...] = field(default_factory=tuple)


class OperandGenerator:
    def __init__(
        self,
        min_num: int = 1,
        max_num: int = 10,
        count: int = 4,
        rng: random.Random | None = None,
    ):
        """
        Initialize the operand generator.

        Args:
            min_num: The smallest operand that can be drawn (inclusive)
            max_num: The largest operand that can be drawn (inclusive)
            count: How many operands make up a board
            rng: Source of randomness, the global random module if omitted
        """
        if min_num > max_num:
            raise ValueError(
                f"min_num must not exceed max_num, got {min_num} > {max_num}"
            )
        if count < 2:
            raise ValueError(f"A board needs at least 2 operands, got {count}")
        self.min_num = min_num
        self.max_num = max_num
        self.count = count
        self.rng = rng if rng is not None else random

    def _generate_random_number(self) -> int:
        return self.rng.randint(self.min_num, self.max_num)

    def generate_operands(self) -> list[int]:
        """
        Generate a fresh board of operands.

        Each operand is drawn independently, so duplicates are expected.

        Returns:
            list[int]: The generated operands
        """
        return [self._generate_random_number() for _ in range(self.count)]


class GoalSynthesizer:
    def __init__(
        self,
        tier_upper_bounds: Sequence[int] = (10, 40, 100),
        operators: Sequence[Operator] = tuple(Operator),
        rng: random.Random | None = None,
    ):
        """
        Initialize the goal synthesizer.

        A chance is drawn in [1, 100] and the first tier whose upper bound is not
        exceeded wins, so the default bounds give the tiers a 10/30/60 split.

        Args:
            tier_upper_bounds: Cumulative upper bound of the chance for each tier
            operators: The operators the fold may pick from
            rng: Source of randomness, the global random module if omitted
        """
        bounds = tuple(tier_upper_bounds)
        if len(bounds) != len(DifficultyTier):
            raise ValueError(
                f"Expected {len(DifficultyTier)} tier bounds, got {len(bounds)}"
            )
        if any(low >= high for low, high in zip((0,) + bounds, bounds)):
            raise ValueError(f"Tier bounds must be strictly increasing: {bounds}")
        if bounds[-1] != 100:
            raise ValueError(f"The last tier bound must be 100, got {bounds[-1]}")
        if not operators:
            raise ValueError("At least one operator is required")
        self.tier_upper_bounds = bounds
        self.operators = tuple(operators)
        self.rng = rng if rng is not None else random
        self.last_tier: DifficultyTier | None = None

    def tier_for_chance(self, chance: int) -> DifficultyTier:
        # First matching band wins, so a chance on a boundary takes the lower tier
        if chance < 1:
            raise ValueError(f"Chance must lie in [1, 100], got {chance}")
        for tier, upper in zip(DifficultyTier, self.tier_upper_bounds):
            if chance <= upper:
                return tier
        raise ValueError(f"Chance must lie in [1, 100], got {chance}")

    def select_tier(self) -> DifficultyTier:
        """
        Draw a difficulty tier using the weighted bands.

        Returns:
            DifficultyTier: The selected tier
        """
        chance = self.rng.randint(1, 100)
        tier = self.tier_for_chance(chance)
        logger.debug(f"Drew chance {chance} -> {tier.name}")
        return tier

    def _pick_distinct_positions(self, length: int) -> tuple[int, int]:
        first = self.rng.randrange(length)
        second = self.rng.randrange(length)
        while second == first:
            second = self.rng.randrange(length)
        return first, second

    def fold_operands(
        self, operands: Sequence[int], rounds: int, trace_enabled: bool = False
    ) -> tuple[int, list[FoldStep]]:
        """
        Fold the operands down by combining random pairs for a number of rounds.

        Each round the value at the first position is combined with the value at
        the second position, the result replaces the second and the first is
        removed. Folding stops early once a single value is left. The caller's
        operands are copied, never modified.

        Args:
            operands: The operands on the board
            rounds: How many operations to apply
            trace_enabled: Whether to record the steps taken

        Returns:
            tuple[int, list[FoldStep]]: The goal and the recorded steps
        """
        if len(operands) < 2:
            raise ValueError("goal synthesis requires at least 2 operands")
        if rounds < 1:
            raise ValueError(f"At least one operation is required, got {rounds}")

        nums = list(operands)
        steps: list[FoldStep] = []
        result = nums[0]

        for _ in range(min(rounds, len(nums) - 1)):
            idx1, idx2 = self._pick_distinct_positions(len(nums))
            op = self.rng.choice(self.operators)
            result = apply_operation(nums[idx1], op, nums[idx2])

            if trace_enabled:
                steps.append(FoldStep(nums[idx1], op, nums[idx2], result))
            logger.debug(f"{nums[idx1]} {op.value} {nums[idx2]} = {result}")

            nums[idx2] = result
            del nums[idx1]

        return result, steps

    def synthesize_goal(
        self, operands: Sequence[int], trace_enabled: bool = False
    ) -> tuple[int, list[FoldStep]]:
        """
        Reverse engineer a reachable goal from the operands.

        The tier drawn for the call is kept in last_tier.

        Args:
            operands: The operands on the board
            trace_enabled: Whether to record the steps taken

        Returns:
            tuple[int, list[FoldStep]]: The goal and the recorded steps
        """
        if len(operands) < 2:
            raise ValueError("goal synthesis requires at least 2 operands")
        tier = self.select_tier()
        self.last_tier = tier
        return self.fold_operands(operands, tier.rounds, trace_enabled)


class NumbersPuzzleGenerator:
    def __init__(
        self,
        operand_generator: OperandGenerator | None = None,
        goal_synthesizer: GoalSynthesizer | None = None,
        rng: random.Random | None = None,
    ):
        """
        Initialize the puzzle generator.

        Args:
            operand_generator: Draws the board, a default one is built if omitted
            goal_synthesizer: Builds the goal, a default one is built if omitted
            rng: Shared source of randomness for the default components
        """
        self.operand_generator = operand_generator or OperandGenerator(rng=rng)
        self.goal_synthesizer = goal_synthesizer or GoalSynthesizer(rng=rng)

    def new_round(self, trace_enabled: bool = False) -> NumbersPuzzle:
        """
        Generate the operands and a reachable goal for a new game.

        Args:
            trace_enabled: Whether to keep the steps used to build the goal

        Returns:
            NumbersPuzzle: The generated puzzle
        """
        operands = self.operand_generator.generate_operands()
        goal, steps = self.goal_synthesizer.synthesize_goal(operands, trace_enabled)
        tier = self.goal_synthesizer.last_tier
        logger.debug(f"New round {operands} -> {goal} ({tier.name})")
        return NumbersPuzzle(
            operands=tuple(operands), goal=goal, tier=tier, steps=tuple(steps)
        )


def replay_fold_steps(operands: Sequence[int], steps: Sequence[FoldStep]) -> int:
    """
    Replay recorded fold steps starting from the original operands.

    Args:
        operands: The operands the steps were recorded against
        steps: The steps in the order they were taken

    Returns:
        int: The value produced by the last step

    Raises:
        ValueError: If a step cannot be applied to the remaining values
    """
    if not steps:
        raise ValueError("No steps to replay")

    nums = list(operands)
    result = None
    for step in steps:
        if step.left not in nums:
            raise ValueError(f"{step.left} is not available in {nums}")
        idx1 = nums.index(step.left)
        candidates = [i for i, n in enumerate(nums) if n == step.right and i != idx1]
        if not candidates:
            raise ValueError(f"{step.right} is not available in {nums}")
        idx2 = candidates[0]

        result = apply_operation(nums[idx1], step.operator, nums[idx2])
        if result != step.result:
            raise ValueError(
                f"Step {step.left} {step.operator.value} {step.right} gives {result}, "
                f"recorded {step.result}"
            )
        nums[idx2] = result
        del nums[idx1]

    return result

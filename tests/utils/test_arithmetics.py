"""Tests for operand generation, goal synthesis and the round evaluator."""

import random
from collections import Counter

import pytest

from numbers_game.utils.arithmetics import (
    DifficultyTier,
    FoldStep,
    GoalSynthesizer,
    NumbersPuzzleGenerator,
    OperandGenerator,
    Operator,
    apply_operation,
    replay_fold_steps,
)


class TestApplyOperation:
    """Tests for apply_operation."""

    def test_addition(self):
        assert apply_operation(7, "+", 3) == 10

    def test_subtraction(self):
        assert apply_operation(7, "-", 3) == 4

    def test_subtraction_keeps_operand_order(self):
        assert apply_operation(3, "-", 7) == -4

    def test_multiplication(self):
        assert apply_operation(4, "*", 5) == 20

    def test_accepts_operator_enum(self):
        assert apply_operation(4, Operator.MUL, 5) == 20

    def test_accepts_multiplication_aliases(self):
        assert apply_operation(4, "x", 5) == 20
        assert apply_operation(4, "×", 5) == 20

    def test_unknown_symbol_raises(self):
        with pytest.raises(ValueError, match="Unsupported operator"):
            apply_operation(4, "/", 2)

    @pytest.mark.parametrize("symbol", [None, 3, 2.5])
    def test_non_string_symbol_raises_value_error(self, symbol):
        with pytest.raises(ValueError, match="Unsupported operator"):
            Operator.from_symbol(symbol)


class TestOperandGenerator:
    """Tests for OperandGenerator."""

    def test_generates_four_operands(self, rng):
        operands = OperandGenerator(rng=rng).generate_operands()
        assert len(operands) == 4
        assert all(isinstance(n, int) for n in operands)

    def test_values_within_range(self, rng):
        generator = OperandGenerator(rng=rng)
        samples = [n for _ in range(2500) for n in generator.generate_operands()]
        assert len(samples) == 10_000
        assert min(samples) >= 1
        assert max(samples) <= 10

    def test_distribution_is_uniform(self, rng):
        generator = OperandGenerator(count=2, rng=rng)
        samples = [n for _ in range(5000) for n in generator.generate_operands()]
        counts = Counter(samples)
        expected = len(samples) / 10

        chi_square = sum(
            (counts.get(value, 0) - expected) ** 2 / expected for value in range(1, 11)
        )
        # 9 degrees of freedom, p = 0.001
        assert chi_square < 27.88

    def test_duplicates_are_allowed(self):
        generator = OperandGenerator(min_num=5, max_num=5)
        assert generator.generate_operands() == [5, 5, 5, 5]

    def test_invalid_range_raises(self):
        with pytest.raises(ValueError, match="min_num"):
            OperandGenerator(min_num=10, max_num=1)

    def test_too_few_operands_raises(self):
        with pytest.raises(ValueError, match="at least 2"):
            OperandGenerator(count=1)


class TestTierSelection:
    """Tests for the weighted tier bands."""

    @pytest.mark.parametrize(
        "chance, tier",
        [
            (1, DifficultyTier.EASY),
            (10, DifficultyTier.EASY),
            (11, DifficultyTier.MEDIUM),
            (40, DifficultyTier.MEDIUM),
            (41, DifficultyTier.HARD),
            (100, DifficultyTier.HARD),
        ],
    )
    def test_band_boundaries(self, chance, tier):
        assert GoalSynthesizer().tier_for_chance(chance) is tier

    @pytest.mark.parametrize("chance", [0, 101])
    def test_chance_out_of_range_raises(self, chance):
        with pytest.raises(ValueError):
            GoalSynthesizer().tier_for_chance(chance)

    def test_rounds_match_tier(self):
        assert [tier.rounds for tier in DifficultyTier] == [1, 2, 3]

    def test_weights_converge(self, rng):
        synthesizer = GoalSynthesizer(rng=rng)
        draws = 100_000
        counts = Counter(synthesizer.select_tier() for _ in range(draws))

        assert counts[DifficultyTier.EASY] / draws == pytest.approx(0.10, abs=0.01)
        assert counts[DifficultyTier.MEDIUM] / draws == pytest.approx(0.30, abs=0.01)
        assert counts[DifficultyTier.HARD] / draws == pytest.approx(0.60, abs=0.01)

    def test_select_tier_uses_drawn_chance(self, scripted_random):
        synthesizer = GoalSynthesizer(rng=scripted_random(randints=[10, 11, 41]))
        assert synthesizer.select_tier() is DifficultyTier.EASY
        assert synthesizer.select_tier() is DifficultyTier.MEDIUM
        assert synthesizer.select_tier() is DifficultyTier.HARD

    @pytest.mark.parametrize(
        "bounds", [(10, 40), (40, 10, 100), (10, 40, 90), (0, 40, 100)]
    )
    def test_invalid_bounds_raise(self, bounds):
        with pytest.raises(ValueError):
            GoalSynthesizer(tier_upper_bounds=bounds)


class TestFoldOperands:
    """Tests for GoalSynthesizer.fold_operands."""

    def test_single_round_with_rejected_position(self, scripted_random):
        # Second position is redrawn until it differs from the first
        rng = scripted_random(randranges=[2, 2, 0], choices=[Operator.SUB])
        goal, steps = GoalSynthesizer(rng=rng).fold_operands(
            [1, 2, 3, 4], rounds=1, trace_enabled=True
        )
        assert goal == 2
        assert steps == [FoldStep(3, Operator.SUB, 1, 2)]
        assert rng.randranges == []

    def test_result_replaces_second_and_first_is_removed(self, scripted_random):
        rng = scripted_random(
            randranges=[0, 3, 1, 0, 0, 1],
            choices=[Operator.ADD, Operator.MUL, Operator.SUB],
        )
        goal, steps = GoalSynthesizer(rng=rng).fold_operands(
            [1, 2, 3, 4], rounds=3, trace_enabled=True
        )
        # [1,2,3,4] -> 1+4 -> [2,3,5] -> 3*2 -> [6,5] -> 6-5 -> [1]
        assert steps == [
            FoldStep(1, Operator.ADD, 4, 5),
            FoldStep(3, Operator.MUL, 2, 6),
            FoldStep(6, Operator.SUB, 5, 1),
        ]
        assert goal == 1

    def test_negative_goal_is_allowed(self, scripted_random):
        rng = scripted_random(randranges=[0, 1], choices=[Operator.SUB])
        goal, _ = GoalSynthesizer(rng=rng).fold_operands([2, 9], rounds=1)
        assert goal == -7

    def test_no_trace_when_disabled(self, rng):
        goal, steps = GoalSynthesizer(rng=rng).fold_operands([1, 2, 3, 4], rounds=3)
        assert isinstance(goal, int)
        assert steps == []

    def test_does_not_mutate_caller_operands(self, rng):
        operands = [1, 2, 3, 4]
        GoalSynthesizer(rng=rng).fold_operands(operands, rounds=3)
        assert operands == [1, 2, 3, 4]

    def test_stops_when_one_value_left(self, rng):
        goal, steps = GoalSynthesizer(rng=rng).fold_operands(
            [3, 5], rounds=3, trace_enabled=True
        )
        assert len(steps) == 1
        assert goal == steps[0].result

    @pytest.mark.parametrize("operands", [[], [7]])
    def test_too_few_operands_raises(self, rng, operands):
        with pytest.raises(ValueError, match="at least 2 operands"):
            GoalSynthesizer(rng=rng).fold_operands(operands, rounds=1)

    def test_zero_rounds_raises(self, rng):
        with pytest.raises(ValueError):
            GoalSynthesizer(rng=rng).fold_operands([1, 2, 3, 4], rounds=0)


class TestSynthesizeGoal:
    """Tests for GoalSynthesizer.synthesize_goal."""

    @pytest.mark.parametrize("chance, rounds", [(5, 1), (25, 2), (75, 3)])
    def test_trace_length_matches_tier(self, scripted_random, chance, rounds):
        rng = scripted_random(
            randints=[chance],
            randranges=[0, 1] * rounds,
            choices=[Operator.ADD] * rounds,
        )
        synthesizer = GoalSynthesizer(rng=rng)

        goal, steps = synthesizer.synthesize_goal([4, 8, 2, 6], trace_enabled=True)

        assert len(steps) == rounds
        assert synthesizer.last_tier.rounds == rounds
        assert goal == steps[-1].result == [12, 14, 20][rounds - 1]
        assert rng.randints == []

    def test_trace_replays_to_goal(self, rng):
        synthesizer = GoalSynthesizer(rng=rng)
        operand_generator = OperandGenerator(rng=rng)
        for _ in range(500):
            operands = operand_generator.generate_operands()
            goal, steps = synthesizer.synthesize_goal(operands, trace_enabled=True)
            assert 1 <= len(steps) <= 3
            assert replay_fold_steps(operands, steps) == goal

    def test_does_not_mutate_caller_operands(self, rng):
        operands = [10, 1, 10, 1]
        GoalSynthesizer(rng=rng).synthesize_goal(operands, trace_enabled=True)
        assert operands == [10, 1, 10, 1]

    def test_too_few_operands_raises(self, rng):
        with pytest.raises(ValueError, match="goal synthesis requires at least 2"):
            GoalSynthesizer(rng=rng).synthesize_goal([3])


class TestNumbersPuzzleGenerator:
    """Tests for NumbersPuzzleGenerator.new_round."""

    def test_new_round_with_trace(self, rng):
        puzzle = NumbersPuzzleGenerator(rng=rng).new_round(trace_enabled=True)

        assert len(puzzle.operands) == 4
        assert len(puzzle.steps) == puzzle.tier.rounds
        assert replay_fold_steps(puzzle.operands, puzzle.steps) == puzzle.goal

    def test_new_round_without_trace(self, rng):
        puzzle = NumbersPuzzleGenerator(rng=rng).new_round()
        assert puzzle.steps == ()

    def test_same_seed_same_puzzle(self):
        first = NumbersPuzzleGenerator(rng=random.Random(7)).new_round(True)
        second = NumbersPuzzleGenerator(rng=random.Random(7)).new_round(True)
        assert first == second

    def test_new_round_uses_synthesized_tier(self, scripted_random):
        rng = scripted_random(
            randints=[1, 2, 3, 4, 25],
            randranges=[0, 1, 0, 1],
            choices=[Operator.MUL, Operator.SUB],
        )
        puzzle = NumbersPuzzleGenerator(rng=rng).new_round(trace_enabled=True)

        # [1,2,3,4] -> 1*2 -> [2,3,4] -> 2-3 -> [-1,4]
        assert puzzle.operands == (1, 2, 3, 4)
        assert puzzle.tier is DifficultyTier.MEDIUM
        assert puzzle.goal == -1
        assert len(puzzle.steps) == 2
        assert rng.randints == []


class TestReplayFoldSteps:
    """Tests for replay_fold_steps."""

    def test_replays_with_duplicate_values(self):
        steps = [
            FoldStep(2, Operator.MUL, 2, 4),
            FoldStep(4, Operator.SUB, 4, 0),
        ]
        assert replay_fold_steps([2, 2, 4, 9], steps) == 0

    def test_missing_value_raises(self):
        with pytest.raises(ValueError, match="not available"):
            replay_fold_steps([1, 2, 3, 4], [FoldStep(5, Operator.ADD, 1, 6)])

    def test_same_value_needs_two_copies(self):
        with pytest.raises(ValueError, match="not available"):
            replay_fold_steps([3, 1, 2, 4], [FoldStep(3, Operator.ADD, 3, 6)])

    def test_wrong_result_raises(self):
        with pytest.raises(ValueError, match="recorded"):
            replay_fold_steps([1, 2, 3, 4], [FoldStep(1, Operator.ADD, 2, 4)])

    def test_empty_trail_raises(self):
        with pytest.raises(ValueError):
            replay_fold_steps([1, 2, 3, 4], [])

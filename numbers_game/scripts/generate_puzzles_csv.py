#!/usr/bin/env python3
"""
Script to generate a CSV file of numbers game puzzles.

Each row holds the four operands, the goal, the difficulty tier and the steps
used to build the goal, with columns: id, tier, goal, num1, num2, num3, num4, trace.
"""

import argparse
import csv
import logging
import random
from pathlib import Path
from typing import Any

from numbers_game.utils.arithmetics import NumbersPuzzleGenerator
from numbers_game.utils.string_helper import format_fold_steps

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

TRACE_SEPARATOR = "; "

FIELDNAMES = ["id", "tier", "goal", "num1", "num2", "num3", "num4", "trace"]


def generate_puzzles(num_puzzles: int, seed: int | None = None) -> list[dict[str, Any]]:
    """
    Generate puzzles with their goal-building steps.

    Args:
        num_puzzles: Number of puzzles to generate
        seed: Seed for reproducible output

    Returns:
        list[dict[str, Any]]: One dictionary per puzzle
    """
    generator = NumbersPuzzleGenerator(rng=random.Random(seed))

    puzzles = []
    logger.info(f"Starting generation of {num_puzzles} puzzles...")

    for puzzle_id in range(1, num_puzzles + 1):
        puzzle = generator.new_round(trace_enabled=True)
        num1, num2, num3, num4 = puzzle.operands
        puzzles.append(
            {
                "id": puzzle_id,
                "tier": puzzle.tier.rounds,
                "goal": puzzle.goal,
                "num1": num1,
                "num2": num2,
                "num3": num3,
                "num4": num4,
                "trace": TRACE_SEPARATOR.join(format_fold_steps(list(puzzle.steps))),
            }
        )

        if puzzle_id % 1000 == 0:
            logger.info(f"Generated {puzzle_id} puzzles...")

    logger.info(f"Successfully generated {len(puzzles)} puzzles")
    return puzzles


def save_to_csv(puzzles: list[dict[str, Any]], output_file: Path) -> None:
    """
    Save puzzles to a CSV file.

    Args:
        puzzles: List of puzzle dictionaries
        output_file: Path to the output CSV file
    """
    if not puzzles:
        logger.error("No puzzles to save")
        return

    # Create output directory if it doesn't exist
    output_file.parent.mkdir(parents=True, exist_ok=True)

    logger.info(f"Saving {len(puzzles)} puzzles to {output_file}")

    with open(output_file, "w", newline="", encoding="utf-8") as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=FIELDNAMES)
        writer.writeheader()
        for entry in puzzles:
            writer.writerow(entry)

    logger.info(f"Successfully saved puzzles to {output_file}")


def main() -> None:
    """
    Main function to handle command line arguments and orchestrate the generation process.
    """
    parser = argparse.ArgumentParser(
        description="Generate numbers game puzzles in CSV format"
    )

    parser.add_argument(
        "--num_puzzles", type=int, required=True, help="Number of puzzles to generate"
    )

    parser.add_argument(
        "--output_file", type=str, required=True, help="Path to the output CSV file"
    )

    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for reproducibility"
    )

    args = parser.parse_args()

    # Validate arguments
    if args.num_puzzles <= 0:
        logger.error("Number of puzzles must be positive")
        return

    puzzles = generate_puzzles(args.num_puzzles, args.seed)
    save_to_csv(puzzles, Path(args.output_file))


if __name__ == "__main__":
    main()

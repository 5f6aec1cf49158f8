#!/usr/bin/env python3
"""
Script to summarize a CSV of generated puzzles.

Reports how often each difficulty tier was drawn against its expected share,
basic statistics of the goals, and whether every recorded trace replays to
its goal from the row's operands.
"""

import argparse
import logging
from pathlib import Path

import pandas as pd

from numbers_game.scripts.generate_puzzles_csv import FIELDNAMES, TRACE_SEPARATOR
from numbers_game.utils.arithmetics import replay_fold_steps
from numbers_game.utils.string_helper import parse_fold_step

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

EXPECTED_TIER_SHARE = {1: 0.10, 2: 0.30, 3: 0.60}


def validate_input_file(file_path: Path) -> None:
    """
    Validate the input CSV file exists and has the puzzle columns.

    Args:
        file_path: Path to the input CSV file

    Raises:
        ValueError: If file validation fails
    """
    if not file_path.exists():
        raise ValueError(f"Input file does not exist: {file_path}")

    if not file_path.suffix.lower() == ".csv":
        raise ValueError(f"Input file is not a CSV file: {file_path}")

    try:
        header = pd.read_csv(file_path, nrows=1)
    except Exception as e:
        raise ValueError(f"Failed to read CSV file {file_path}: {e}") from e

    missing = [column for column in FIELDNAMES if column not in header.columns]
    if missing:
        raise ValueError(f"Missing columns in {file_path}: {missing}")
    logger.info(f"Input file validated: {file_path}")


def summarize_tiers(df: pd.DataFrame) -> pd.DataFrame:
    """
    Count puzzles per tier and compare with the expected share.

    Args:
        df: The puzzles

    Returns:
        pd.DataFrame: Indexed by tier, with count, share and expected columns
    """
    counts = df["tier"].value_counts().reindex(list(EXPECTED_TIER_SHARE), fill_value=0)
    summary = pd.DataFrame({"count": counts})
    summary["share"] = summary["count"] / max(len(df), 1)
    summary["expected"] = pd.Series(EXPECTED_TIER_SHARE)
    summary.index.name = "tier"
    return summary


def summarize_goals(df: pd.DataFrame) -> dict[str, float]:
    """
    Compute statistics of the generated goals.

    Args:
        df: The puzzles

    Returns:
        dict[str, float]: min, max, mean and the number of non-positive goals
    """
    goals = df["goal"]
    return {
        "min": float(goals.min()),
        "max": float(goals.max()),
        "mean": float(goals.mean()),
        "non_positive": float((goals <= 0).sum()),
    }


def count_unsound_rows(df: pd.DataFrame) -> int:
    """
    Count rows whose trace does not replay to the recorded goal.

    Args:
        df: The puzzles

    Returns:
        int: Number of rows failing the replay
    """
    unsound = 0
    for row in df.itertuples(index=False):
        operands = [row.num1, row.num2, row.num3, row.num4]
        if not isinstance(row.trace, str) or not row.trace:
            logger.warning(f"Puzzle {row.id} has no trace")
            unsound += 1
            continue
        try:
            steps = [parse_fold_step(line) for line in row.trace.split(TRACE_SEPARATOR)]
            if replay_fold_steps(operands, steps) != row.goal:
                raise ValueError(f"trace does not end at {row.goal}")
        except ValueError as e:
            logger.warning(f"Puzzle {row.id} failed replay: {e}")
            unsound += 1
    return unsound


def main() -> None:
    """
    Main function to handle command line arguments and print the summary.
    """
    parser = argparse.ArgumentParser(description="Summarize generated puzzles")

    parser.add_argument(
        "--input_file", type=str, required=True, help="Path to the puzzles CSV file"
    )

    args = parser.parse_args()
    input_path = Path(args.input_file)

    try:
        validate_input_file(input_path)
    except ValueError as e:
        logger.error(str(e))
        return

    df = pd.read_csv(input_path)
    logger.info(f"Loaded {len(df)} puzzles")

    logger.info("Tier distribution:\n%s", summarize_tiers(df).to_string())
    logger.info("Goal statistics: %s", summarize_goals(df))

    unsound = count_unsound_rows(df)
    if unsound:
        logger.error(f"{unsound} puzzles do not replay to their goal")
    else:
        logger.info("Every trace replays to its goal")


if __name__ == "__main__":
    main()

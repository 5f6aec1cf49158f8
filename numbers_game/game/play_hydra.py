#!/usr/bin/env python3
"""
Play the numbers game in the terminal using Hydra configuration.

Combine the numbers two at a time with +, - or * until one of the
results equals the goal.
"""

import logging
import random
from collections.abc import Callable

import hydra
from omegaconf import DictConfig, OmegaConf

from numbers_game.game.session import GameSession
from numbers_game.utils.arithmetics import (
    GoalSynthesizer,
    NumbersPuzzleGenerator,
    OperandGenerator,
    Operator,
)

# Set up logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("numbers_game")


def help_text(session: GameSession) -> str:
    return (
        f"Commands: 1-{len(session.slots)} select a number, + - * select an operator, "
        "new, cheat, help, quit"
    )


def create_session(cfg: DictConfig) -> GameSession:
    """
    Build a game session from Hydra configuration.

    Args:
        cfg: Configuration with seed, cheat, operands and tiers sections

    Returns:
        GameSession: A session ready for its first round
    """
    seed = cfg.get("seed", None)
    rng = random.Random(seed) if seed is not None else random.Random()

    operand_generator = OperandGenerator(
        min_num=cfg.operands.min_num,
        max_num=cfg.operands.max_num,
        count=cfg.operands.count,
        rng=rng,
    )
    goal_synthesizer = GoalSynthesizer(
        tier_upper_bounds=OmegaConf.to_container(cfg.tiers.upper_bounds),
        rng=rng,
    )
    generator = NumbersPuzzleGenerator(operand_generator, goal_synthesizer)
    return GameSession(generator, cheat=cfg.cheat)


def render(session: GameSession) -> list[str]:
    """
    Render the board, goal and messages of a session as text lines.

    Args:
        session: The session to render

    Returns:
        list[str]: Lines to print
    """
    board = []
    for i, value in enumerate(session.slots):
        label = "" if value is None else str(value)
        if i == session.first_slot:
            label = f"[{label}]"
        board.append(f"{i + 1}:{label:>6}")

    lines = [
        f"Goal: {session.goal}    Wins: {session.wins}    Losses: {session.losses}",
        "  ".join(board),
    ]
    if session.operator is not None:
        lines.append(f"Operator: {session.operator.value}")
    if session.work_area:
        lines.append("Work Area")
        lines.extend(f"  {line}" for line in session.work_area)
    if session.hints:
        lines.append("Cheat")
        lines.extend(f"  {line}" for line in session.hints)
    lines.append(session.status)
    return lines


def handle_command(session: GameSession, command: str) -> bool:
    """
    Apply one command typed by the player.

    Args:
        session: The session to drive
        command: The raw command

    Returns:
        bool: False when the player asked to quit
    """
    command = command.strip().lower()
    if command in ("q", "quit", "exit"):
        return False

    if command in ("n", "new"):
        session.new_round()
    elif command in ("c", "cheat"):
        session.set_cheat(not session.cheat)
        state = "on" if session.cheat else "off"
        print(f"Cheat mode {state}, applies from the next new game")
    elif command in ("h", "help", "?"):
        print(help_text(session))
    elif command.isdecimal():
        if not session.select_number(int(command) - 1):
            print("That number cannot be selected right now")
    else:
        try:
            op = Operator.from_symbol(command)
        except ValueError:
            print(f"Unknown command: {command!r}. {help_text(session)}")
            return True
        if not session.select_operator(op):
            print("Select a number first")
    return True


def play(session: GameSession, read_line: Callable[[str], str] = input) -> None:
    """
    Run the interactive loop until the player quits or input ends.

    Args:
        session: The session to drive
        read_line: Prompt function returning the next command
    """
    session.new_round()
    print(help_text(session))
    while True:
        print("\n".join(render(session)))
        try:
            command = read_line("> ")
        except EOFError:
            break
        if not handle_command(session, command):
            break
    logger.info("Final score: %d wins, %d losses", session.wins, session.losses)


@hydra.main(version_base=None, config_path="../config/play", config_name="config")
def main(cfg: DictConfig) -> None:
    """
    Start a game session with Hydra configuration.

    Args:
        cfg: Hydra configuration object

    Returns:
        None
    """
    logger.info("Configuration:\n%s", OmegaConf.to_yaml(cfg))

    try:
        session = create_session(cfg)
    except ValueError as e:
        logger.error(str(e))
        return

    play(session)


if __name__ == "__main__":
    main()

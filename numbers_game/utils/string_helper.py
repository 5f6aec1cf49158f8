import re

from numbers_game.utils.arithmetics import FoldStep, Operator

_STEP_PATTERN = re.compile(
    r"^\s*(-?\d+)\s*([+\-*x×−])\s*(-?\d+)\s*=\s*(-?\d+)\s*$", re.IGNORECASE
)


def format_equation(a: int, op: Operator | str, b: int, result: int) -> str:
    """
    Render one operation the way it is shown in the work area and hints.

    Args:
        a: The left operand
        op: The operator
        b: The right operand
        result: The result of the operation

    Returns:
        str: The line, e.g. "7 - 3 = 4"
    """
    return f"{a} {Operator.from_symbol(op).value} {b} = {result}"


def format_fold_step(step: FoldStep) -> str:
    return format_equation(step.left, step.operator, step.right, step.result)


def format_fold_steps(steps: list[FoldStep]) -> list[str]:
    """
    Render the steps used to build a goal as hint lines.

    Args:
        steps: The recorded steps

    Returns:
        list[str]: One line per step
    """
    return [format_fold_step(step) for step in steps]


def parse_fold_step(line: str) -> FoldStep:
    """
    Parse a hint line back into a step.

    Args:
        line: A line such as "4 * 5 = 20"

    Returns:
        FoldStep: The parsed step

    Raises:
        ValueError: If the line is not an equation
    """
    match = _STEP_PATTERN.match(line)
    if match is None:
        raise ValueError(f"Not an equation: {line!r}")
    left, symbol, right, result = match.groups()
    return FoldStep(int(left), Operator.from_symbol(symbol), int(right), int(result))

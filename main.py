from numbers_game.utils.arithmetics import NumbersPuzzleGenerator
from numbers_game.utils.string_helper import format_fold_steps


def main() -> None:
    """
    Main function
    """
    puzzle = NumbersPuzzleGenerator().new_round(trace_enabled=True)
    print(f"Numbers: {list(puzzle.operands)}  Goal: {puzzle.goal}")
    for line in format_fold_steps(list(puzzle.steps)):
        print(line)


if __name__ == "__main__":
    main()

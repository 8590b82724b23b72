import argparse
import logging
import random
from collections.abc import Iterable

from ttt_engine.ai import Difficulty
from ttt_engine.board import PlayerSymbol
from ttt_engine.exception import InvalidDifficultyError
from ttt_engine.ui import Ui
from ttt_engine.ui_pygame import PygameUi
from ttt_engine.ui_terminal import TerminalUi


def main() -> None:
    ui_choices: dict[str, type[Ui]] = {"terminal": TerminalUi, "pygame": PygameUi}

    parser, args = _parse_args(ui_choices.keys())

    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        difficulty = Difficulty.parse(args.difficulty)
    except InvalidDifficultyError as e:
        parser.error(str(e))

    ai_player: PlayerSymbol | None
    match args.ai:
        case "x":
            ai_player = "X"
        case "o":
            ai_player = "O"
        case _:
            ai_player = None

    rng = random.Random(args.seed) if args.seed is not None else None

    ui = ui_choices[args.ui](difficulty, ai_player, rng)
    ui.run()


def _parse_args(ui_choices: Iterable[str]) -> tuple[argparse.ArgumentParser, argparse.Namespace]:
    parser = argparse.ArgumentParser(prog="ttt_engine", description="Tic-Tac-Toe against a configurable AI.")

    parser.add_argument("--ui", choices=ui_choices, required=True)
    parser.add_argument(
        "--difficulty",
        default=Difficulty.OPTIMAL.name.lower(),
        help=f"AI level, by name or number ({', '.join(Difficulty.names())})",
    )
    parser.add_argument("--ai", choices=("none", "x", "o"), default="none", help="side the AI plays automatically")
    parser.add_argument("--seed", type=int, help="seed for the randomized AI levels")
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="WARNING",
        type=str.upper,
    )

    args = parser.parse_args()
    return parser, args


if __name__ == "__main__":
    main()

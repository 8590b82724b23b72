# ruff: noqa: T201

from ttt_engine.ai import Difficulty
from ttt_engine.board import BOARD_SIZE
from ttt_engine.game_engine import BLANK_SYMBOL
from ttt_engine.ui import Ui

HELP_TEXT = (
    f"Commands: 1-{BOARD_SIZE * BOARD_SIZE} to move, 'ai [level]' for an AI move, "
    f"'difficulty <level>' ({', '.join(Difficulty.names())}), 'restart', 'exit'"
)


class TerminalUi(Ui):
    def run(self) -> None:
        print(HELP_TEXT, flush=True)
        super().run()
        while self._running:
            self._get_input()
        print("Terminal UI stopped", flush=True)

    def _get_input(self) -> None:
        try:
            input_str = input("> ")
        except (KeyboardInterrupt, EOFError):
            self._stop()
            return
        self._handle_command(input_str)

    def _handle_command(self, input_str: str) -> None:
        command, _, argument = input_str.strip().partition(" ")
        argument = argument.strip()

        match command.lower():
            case "":
                return
            case "exit" | "quit":
                self._stop()
            case "restart":
                self._restart()
            case "help":
                print(HELP_TEXT, flush=True)
            case "ai":
                self._ai_move(argument or None)
            case "difficulty":
                if not argument:
                    print(f"Difficulty: {self._difficulty.name.lower()}", flush=True)
                    return
                self._set_difficulty(argument)
            case _:
                self._handle_move(command)

    def _handle_move(self, input_str: str) -> None:
        try:
            board_position = int(input_str)
        except ValueError:
            self._on_input_error(ValueError(f"Unknown command: {input_str}"))
            return

        max_move = BOARD_SIZE * BOARD_SIZE
        if not (1 <= board_position <= max_move):
            self._on_input_error(ValueError(f"Not between 1 and {max_move}"))
            return

        row, col = divmod(board_position - 1, BOARD_SIZE)
        self._human_move(row, col)

    def _render_board(self, snapshot: list[str]) -> None:
        def _cell_value(index: int) -> str:
            value = snapshot[index]
            return value if value != BLANK_SYMBOL else str(index + 1)

        rows = []
        for r in range(BOARD_SIZE):
            start = r * BOARD_SIZE
            row = " | ".join(_cell_value(start + i) for i in range(BOARD_SIZE))
            rows.append(f" {row} ")

        separator = "\n-----------\n"
        output = separator.join(rows)
        print(f"\n{output}\n", flush=True)

    def _show_status(self, text: str, *, game_over: bool) -> None:
        print(text, flush=True)
        if game_over:
            print("Type 'restart' to play again or 'exit' to quit", flush=True)

    def _on_input_error(self, exception: Exception) -> None:
        print(str(exception), flush=True)

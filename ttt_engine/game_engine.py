import logging
import random
from typing import Final

from ttt_engine.ai import Difficulty, select_move
from ttt_engine.board import Cell
from ttt_engine.exception import InvalidDifficultyError, InvariantViolationError
from ttt_engine.game import Drawn, Game, InProgress, Status, Won

logger = logging.getLogger(__name__)

BLANK_SYMBOL: Final = "."


def new_game(rng: random.Random | None = None) -> "GameEngine":
    """Start a fresh game. Restarting means calling this again and dropping the old engine."""
    return GameEngine(rng)


def status_text(status: Status) -> str:
    match status:
        case InProgress(player):
            return f"Player {player} moves"
        case Won(player, _):
            return f"Player {player} wins"
        case Drawn():
            return "Tie"


class GameEngine:
    def __init__(self, rng: random.Random | None = None) -> None:
        self._game = Game()
        self._rng = rng

    @property
    def game(self) -> Game:
        return self._game

    def human_move(self, row: int, col: int) -> bool:
        return self._game.apply_move(row, col)

    def ai_move(self, difficulty: Difficulty | int | str) -> bool:
        """Let the AI play for the current player.

        Returns False if the game is over or the difficulty is not recognized.
        """
        if self._game.is_game_over():
            logger.warning("AI move requested but the game is over")
            return False

        try:
            level = Difficulty.parse(difficulty)
        except InvalidDifficultyError as e:
            logger.warning("AI move rejected: %s", e)
            return False

        player = self._game.current_player
        row, col = select_move(self._game.board, player, level, self._rng)
        if not self._game.apply_move(row, col):
            msg = f"AI move ({row}, {col}) for player {player} was rejected."
            logger.error(msg)
            raise InvariantViolationError(msg)
        return True

    def board_snapshot(self) -> list[str]:
        return [_symbol(cell) for cell in self._game.board.cells()]

    def status_text(self) -> str:
        return status_text(self._game.status)

    def is_game_over(self) -> bool:
        return self._game.is_game_over()


def _symbol(cell: Cell) -> str:
    return cell if cell is not None else BLANK_SYMBOL

import logging
from dataclasses import dataclass
from typing import TypeAlias

from ttt_engine.board import FIRST_PLAYER, Board, PlayerSymbol, Position, opponent
from ttt_engine.exception import InvalidMoveError, InvariantViolationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class InProgress:
    player: PlayerSymbol


@dataclass(frozen=True, slots=True)
class Won:
    player: PlayerSymbol
    line: tuple[Position, ...]


@dataclass(frozen=True, slots=True)
class Drawn:
    pass


Status: TypeAlias = InProgress | Won | Drawn


class Game:
    def __init__(self) -> None:
        self._board = Board()
        self._status: Status = InProgress(FIRST_PLAYER)

    @property
    def board(self) -> Board:
        return self._board

    @property
    def status(self) -> Status:
        return self._status

    @property
    def current_player(self) -> PlayerSymbol:
        """Player to move, derived from the number of marks on the board."""
        return FIRST_PLAYER if self._board.move_count() % 2 == 0 else opponent(FIRST_PLAYER)

    def is_game_over(self) -> bool:
        return isinstance(self._status, Won | Drawn)

    def apply_move(self, row: int, col: int) -> bool:
        """Mark (row, col) for the player to move.

        Returns False, leaving the board untouched, if the game is over or the
        position is out of range or occupied.
        """
        if self.is_game_over():
            logger.warning("Move (%s, %s) rejected: game over", row, col)
            return False

        player = self.current_player
        try:
            self._board.set(row, col, player)
        except InvalidMoveError as e:
            logger.warning("Move (%s, %s) rejected for player %s: %s", row, col, player, e)
            return False

        logger.debug("Player %s played (%s, %s)", player, row, col)
        self._status = self._compute_status()
        if self.is_game_over():
            logger.info("Game over: %s", self._status)
        return True

    def _compute_status(self) -> Status:
        winner = self._board.get_winner()
        if winner is not None:
            line = self._board.get_winning_line()
            if line is None:
                raise InvariantViolationError("Winner found without a winning line.")
            return Won(winner, line)
        if self._board.is_full():
            return Drawn()
        return InProgress(self.current_player)

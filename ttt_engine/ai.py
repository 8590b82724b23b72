"""Move selection for the automated opponent.

Each difficulty level maps to a ``MovePolicy``. Levels are ordered by
strength, so comparing two ``Difficulty`` values compares how well they play.
"""

import logging
import random
from abc import ABC, abstractmethod
from enum import IntEnum
from functools import lru_cache
from typing import Final

from ttt_engine.board import Board, Cell, PlayerSymbol, Position, opponent
from ttt_engine.exception import InvalidDifficultyError, NoLegalMovesError

logger = logging.getLogger(__name__)

WIN_SCORE: Final = 10


class Difficulty(IntEnum):
    RANDOM = 0
    HEURISTIC = 1
    OPTIMAL = 2

    @classmethod
    def parse(cls, value: "Difficulty | int | str") -> "Difficulty":
        """Accept a level number, a numeric string or a level name."""
        if isinstance(value, str):
            text = value.strip()
            try:
                value = int(text)
            except ValueError:
                try:
                    return cls[text.upper()]
                except KeyError:
                    msg = f"Unknown difficulty: {value!r}. Choose from {', '.join(cls.names())}."
                    raise InvalidDifficultyError(msg) from None
        if isinstance(value, bool):
            msg = f"Unknown difficulty: {value!r}."
            raise InvalidDifficultyError(msg)
        try:
            return cls(value)
        except ValueError as e:
            msg = f"Unknown difficulty: {value!r}. Choose from {', '.join(cls.names())}."
            raise InvalidDifficultyError(msg) from e

    @classmethod
    def names(cls) -> list[str]:
        return [level.name.lower() for level in cls]


class MovePolicy(ABC):
    @abstractmethod
    def find_move(self, board: Board, player: PlayerSymbol, rng: random.Random) -> Position | None:
        pass


class RandomPolicy(MovePolicy):
    def find_move(self, board: Board, player: PlayerSymbol, rng: random.Random) -> Position | None:  # noqa: ARG002
        available_positions = board.get_available_positions()
        if not available_positions:
            return None
        return rng.choice(available_positions)


class HeuristicPolicy(MovePolicy):
    """Win if possible, otherwise block, otherwise play anywhere.

    Looks a single ply ahead, so forks and other multi-move traps get past it.
    """

    def __init__(self) -> None:
        self._fallback = RandomPolicy()

    def find_move(self, board: Board, player: PlayerSymbol, rng: random.Random) -> Position | None:
        winning_move = self._first_completing_move(board, player)
        if winning_move is not None:
            return winning_move

        blocking_move = self._first_completing_move(board, opponent(player))
        if blocking_move is not None:
            return blocking_move

        return self._fallback.find_move(board, player, rng)

    @staticmethod
    def _first_completing_move(board: Board, player: PlayerSymbol) -> Position | None:
        for row, col in board.get_available_positions():
            trial = board.clone()
            trial.set(row, col, player)
            if trial.get_winner() == player:
                return row, col
        return None


class OptimalPolicy(MovePolicy):
    """Exhaustive minimax; ties go to the first move in row-major order."""

    def find_move(self, board: Board, player: PlayerSymbol, rng: random.Random) -> Position | None:  # noqa: ARG002
        best_score = -1000000
        best_move: Position | None = None
        for row, col in board.get_available_positions():
            trial = board.clone()
            trial.set(row, col, player)
            score = _decay(_minimax(trial.cells(), opponent(player), player))
            if score > best_score:
                best_score = score
                best_move = (row, col)

        if logger.isEnabledFor(logging.DEBUG):
            stats = _minimax.cache_info()
            logger.debug("Minimax picked %s for %s (score %s, %s)", best_move, player, best_score, stats)
        return best_move


_POLICIES: Final[dict[Difficulty, MovePolicy]] = {
    Difficulty.RANDOM: RandomPolicy(),
    Difficulty.HEURISTIC: HeuristicPolicy(),
    Difficulty.OPTIMAL: OptimalPolicy(),
}


def select_move(
    board: Board,
    player: PlayerSymbol,
    difficulty: Difficulty | int | str,
    rng: random.Random | None = None,
) -> Position:
    """Choose a move for ``player`` without touching ``board``.

    Raises NoLegalMovesError if the board is full or already won.
    """
    level = Difficulty.parse(difficulty)
    if board.is_game_over():
        msg = f"No moves available for player {player}: game over."
        raise NoLegalMovesError(msg)

    move = _POLICIES[level].find_move(board, player, rng if rng is not None else random.Random())
    if move is None:
        msg = f"No moves available for player {player}, but game not over."
        raise NoLegalMovesError(msg)

    logger.debug("AI (%s) chose %s for player %s", level.name.lower(), move, player)
    return move


@lru_cache(maxsize=None)
def _minimax(cells: tuple[Cell, ...], player: PlayerSymbol, maximizer: PlayerSymbol) -> int:
    """Score of the position for ``maximizer`` with ``player`` to move.

    Depth is counted from this position, so equal positions share one cache entry.
    """
    board = Board.from_cells(cells)
    winner = board.get_winner()
    if winner == maximizer:
        return WIN_SCORE
    if winner is not None:
        return -WIN_SCORE
    if board.is_full():
        return 0

    is_maximizing = player == maximizer
    best_score = -100 if is_maximizing else 100
    for row, col in board.get_available_positions():
        trial = board.clone()
        trial.set(row, col, player)
        score = _decay(_minimax(trial.cells(), opponent(player), maximizer))
        best_score = max(best_score, score) if is_maximizing else min(best_score, score)
    return best_score


def _decay(score: int) -> int:
    # Scores move one step toward zero per ply of distance.
    if score > 0:
        return score - 1
    if score < 0:
        return score + 1
    return 0

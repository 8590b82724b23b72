from collections.abc import Iterable
from typing import Final, Literal, TypeAlias

from ttt_engine.exception import CellOccupiedError, InvariantViolationError, OutOfRangeError

BOARD_SIZE: Final = 3
PlayerSymbol: TypeAlias = Literal["X", "O"]
Cell: TypeAlias = PlayerSymbol | None
Position: TypeAlias = tuple[int, int]

FIRST_PLAYER: Final[PlayerSymbol] = "X"
SECOND_PLAYER: Final[PlayerSymbol] = "O"

WINNING_LINES: Final[tuple[tuple[Position, ...], ...]] = (
    *(tuple((r, c) for c in range(BOARD_SIZE)) for r in range(BOARD_SIZE)),  # Horizontal lines
    *(tuple((r, c) for r in range(BOARD_SIZE)) for c in range(BOARD_SIZE)),  # Vertical lines
    tuple((i, i) for i in range(BOARD_SIZE)),  # First diagonal
    tuple((i, BOARD_SIZE - 1 - i) for i in range(BOARD_SIZE)),  # Second diagonal
)


def opponent(player: PlayerSymbol) -> PlayerSymbol:
    return SECOND_PLAYER if player == FIRST_PLAYER else FIRST_PLAYER


class Board:
    def __init__(self) -> None:
        self._board: list[list[Cell]] = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]

    @classmethod
    def from_cells(cls, cells: Iterable[Cell]) -> "Board":
        """Build a board from cells listed in row-major order."""
        cells = list(cells)
        if len(cells) != BOARD_SIZE * BOARD_SIZE:
            msg = f"Expected {BOARD_SIZE * BOARD_SIZE} cells, got {len(cells)}."
            raise ValueError(msg)
        invalid = [cell for cell in cells if cell not in (None, FIRST_PLAYER, SECOND_PLAYER)]
        if invalid:
            msg = f"Invalid cell values: {invalid!r}."
            raise ValueError(msg)
        board = cls()
        board._board = [cells[r * BOARD_SIZE : (r + 1) * BOARD_SIZE] for r in range(BOARD_SIZE)]
        return board

    def clone(self) -> "Board":
        copied = Board()
        copied._board = [row[:] for row in self._board]
        return copied

    def cells(self) -> tuple[Cell, ...]:
        return tuple(cell for row in self._board for cell in row)

    def get(self, row: int, col: int) -> Cell:
        self._check_bounds(row, col)
        return self._board[row][col]

    def set(self, row: int, col: int, player: PlayerSymbol) -> None:
        self._check_bounds(row, col)
        if self._board[row][col] is not None:
            msg = f"Cell ({row}, {col}) occupied."
            raise CellOccupiedError(msg)
        self._board[row][col] = player

    def get_available_positions(self) -> list[Position]:
        return [(r, c) for r in range(BOARD_SIZE) for c in range(BOARD_SIZE) if self._board[r][c] is None]

    def move_count(self) -> int:
        return sum(cell is not None for row in self._board for cell in row)

    def is_full(self) -> bool:
        return all(all(cell is not None for cell in row) for row in self._board)

    def get_winning_line(self) -> tuple[Position, ...] | None:
        for line in self._complete_lines():
            return line
        return None

    def get_winner(self) -> PlayerSymbol | None:
        winners = {self._board[line[0][0]][line[0][1]] for line in self._complete_lines()}
        if len(winners) > 1:
            raise InvariantViolationError("Both players own a complete line.")
        return winners.pop() if winners else None

    def is_draw(self) -> bool:
        return self.is_full() and self.get_winner() is None

    def is_game_over(self) -> bool:
        return self.get_winner() is not None or self.is_full()

    def _complete_lines(self) -> Iterable[tuple[Position, ...]]:
        for line in WINNING_LINES:
            first = self._board[line[0][0]][line[0][1]]
            if first is not None and all(self._board[r][c] == first for r, c in line[1:]):
                yield line

    @staticmethod
    def _check_bounds(row: int, col: int) -> None:
        if not (0 <= row < BOARD_SIZE) or not (0 <= col < BOARD_SIZE):
            msg = f"Move ({row}, {col}) out of bounds."
            raise OutOfRangeError(msg)

from collections.abc import Callable

import pytest

from ttt_engine.board import Board, Cell


def _board_from_rows(*rows: str) -> Board:
    cells: list[Cell] = []
    for row in rows:
        for char in row:
            cells.append(None if char == "." else char)  # type: ignore[arg-type]
    return Board.from_cells(cells)


@pytest.fixture
def make_board() -> Callable[..., Board]:
    """Build a board from strings like "XO.", one per row ("." is empty)."""
    return _board_from_rows

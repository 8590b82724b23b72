import logging
import random
from collections.abc import Callable

import pytest

from ttt_engine.ai import Difficulty, HeuristicPolicy, select_move
from ttt_engine.board import Board, PlayerSymbol, opponent
from ttt_engine.exception import InvalidDifficultyError, NoLegalMovesError
from ttt_engine.game import Drawn, Game

CORNERS = [(0, 0), (0, 2), (2, 0), (2, 2)]


def assert_optimal_never_loses(board: Board, ai_player: PlayerSymbol, to_move: PlayerSymbol) -> None:
    """Walk every line of play of the opponent against the optimal AI."""
    if board.is_game_over():
        assert board.get_winner() != opponent(ai_player), f"Optimal AI lost: {board.cells()}"
        return

    if to_move == ai_player:
        row, col = select_move(board, ai_player, Difficulty.OPTIMAL)
        child = board.clone()
        child.set(row, col, ai_player)
        assert_optimal_never_loses(child, ai_player, opponent(to_move))
        return

    for row, col in board.get_available_positions():
        child = board.clone()
        child.set(row, col, to_move)
        assert_optimal_never_loses(child, ai_player, opponent(to_move))


def play_out(x_level: Difficulty, o_level: Difficulty, seed: int) -> Game:
    rng = random.Random(seed)
    game = Game()
    levels = {"X": x_level, "O": o_level}
    while not game.is_game_over():
        player = game.current_player
        row, col = select_move(game.board, player, levels[player], rng)
        assert game.apply_move(row, col)
    return game


class TestDifficulty:
    """Test difficulty levels and parsing."""

    def test_levels_are_ordered_by_strength(self) -> None:
        assert Difficulty.RANDOM < Difficulty.HEURISTIC < Difficulty.OPTIMAL
        assert sorted(Difficulty) == [Difficulty.RANDOM, Difficulty.HEURISTIC, Difficulty.OPTIMAL]

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0, Difficulty.RANDOM),
            (1, Difficulty.HEURISTIC),
            (2, Difficulty.OPTIMAL),
            ("2", Difficulty.OPTIMAL),
            ("heuristic", Difficulty.HEURISTIC),
            (" Optimal ", Difficulty.OPTIMAL),
            (Difficulty.RANDOM, Difficulty.RANDOM),
        ],
    )
    def test_parse(self, value: Difficulty | int | str, expected: Difficulty) -> None:
        assert Difficulty.parse(value) is expected

    @pytest.mark.parametrize("value", [3, -1, "7", "hard", "", "--1", "²", "1.5", True])
    def test_parse_invalid(self, value: int | str) -> None:
        with pytest.raises(InvalidDifficultyError, match="Unknown difficulty"):
            Difficulty.parse(value)

    def test_select_move_rejects_unknown_level(self) -> None:
        with pytest.raises(InvalidDifficultyError):
            select_move(Board(), "X", 42)


class TestSelectMovePreconditions:
    """Test the contract shared by every policy."""

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_full_board(self, difficulty: Difficulty, make_board: Callable[..., Board]) -> None:
        board = make_board("XOX", "XOO", "OXX")

        with pytest.raises(NoLegalMovesError):
            select_move(board, "X", difficulty)

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_won_board(self, difficulty: Difficulty, make_board: Callable[..., Board]) -> None:
        board = make_board("XXX", "OO.", "...")

        with pytest.raises(NoLegalMovesError):
            select_move(board, "O", difficulty)

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_board_not_mutated(self, difficulty: Difficulty, make_board: Callable[..., Board]) -> None:
        board = make_board("X..", ".O.", "..X")
        before = board.cells()

        row, col = select_move(board, "O", difficulty, random.Random(0))

        assert board.cells() == before
        assert (row, col) in board.get_available_positions()


class TestRandomPolicy:
    """Test the random policy."""

    def test_seeded_choices_repeat(self) -> None:
        board = Board()
        first = [select_move(board, "X", Difficulty.RANDOM, random.Random(seed)) for seed in range(10)]
        second = [select_move(board, "X", Difficulty.RANDOM, random.Random(seed)) for seed in range(10)]

        assert first == second

    def test_single_cell_left(self, make_board: Callable[..., Board]) -> None:
        board = make_board("XOX", "XOO", "OX.")

        assert select_move(board, "X", Difficulty.RANDOM) == (2, 2)

    def test_covers_all_cells(self) -> None:
        rng = random.Random(1234)
        chosen = {select_move(Board(), "X", Difficulty.RANDOM, rng) for _ in range(500)}

        assert chosen == set(Board().get_available_positions())


class TestHeuristicPolicy:
    """Test the one-ply heuristic policy."""

    @pytest.mark.parametrize("difficulty", [Difficulty.HEURISTIC, Difficulty.OPTIMAL])
    def test_takes_immediate_win(self, difficulty: Difficulty, make_board: Callable[..., Board]) -> None:
        board = make_board("XX.", "OO.", "...")

        assert select_move(board, "X", difficulty) == (0, 2)

    @pytest.mark.parametrize("difficulty", [Difficulty.HEURISTIC, Difficulty.OPTIMAL])
    def test_prefers_win_over_block(self, difficulty: Difficulty, make_board: Callable[..., Board]) -> None:
        board = make_board("XX.", "OO.", "X..")

        assert select_move(board, "O", difficulty) == (1, 2)

    @pytest.mark.parametrize("difficulty", [Difficulty.HEURISTIC, Difficulty.OPTIMAL])
    def test_blocks_immediate_threat(self, difficulty: Difficulty, make_board: Callable[..., Board]) -> None:
        board = make_board("XX.", ".O.", "...")

        assert select_move(board, "O", difficulty) == (0, 2)

    def test_blocks_first_threat_in_row_major_order(self, make_board: Callable[..., Board]) -> None:
        board = make_board("XX.", "XO.", "..O")

        assert select_move(board, "O", Difficulty.HEURISTIC, random.Random(0)) == (0, 2)

    @pytest.mark.parametrize("seed", range(20))
    def test_reply_to_corner_opening_leaves_no_immediate_win(self, seed: int) -> None:
        game = Game()
        assert game.apply_move(0, 0)

        row, col = select_move(game.board, "O", Difficulty.HEURISTIC, random.Random(seed))
        assert game.apply_move(row, col)

        assert HeuristicPolicy._first_completing_move(game.board, "X") is None

    def test_falls_back_to_random_without_threats(self) -> None:
        rng = random.Random(7)
        chosen = {select_move(Board(), "X", Difficulty.HEURISTIC, rng) for _ in range(200)}

        assert len(chosen) > 1


class TestOptimalPolicy:
    """Test the minimax policy."""

    def test_deterministic(self, make_board: Callable[..., Board]) -> None:
        board = make_board("X..", "...", "...")

        moves = {select_move(board, "O", Difficulty.OPTIMAL, random.Random(seed)) for seed in range(5)}

        assert len(moves) == 1

    def test_empty_board_tie_break_is_row_major(self) -> None:
        assert select_move(Board(), "X", Difficulty.OPTIMAL) == (0, 0)

    def test_answers_corner_with_center(self, make_board: Callable[..., Board]) -> None:
        board = make_board("X..", "...", "...")

        assert select_move(board, "O", Difficulty.OPTIMAL) == (1, 1)

    def test_answers_center_with_corner(self, make_board: Callable[..., Board]) -> None:
        board = make_board("...", ".X.", "...")

        assert select_move(board, "O", Difficulty.OPTIMAL) in CORNERS

    def test_optimal_vs_optimal_is_draw(self) -> None:
        game = play_out(Difficulty.OPTIMAL, Difficulty.OPTIMAL, seed=0)

        assert game.status == Drawn()

    def test_never_loses_as_second_player(self) -> None:
        assert_optimal_never_loses(Board(), ai_player="O", to_move="X")

    def test_never_loses_as_first_player(self) -> None:
        assert_optimal_never_loses(Board(), ai_player="X", to_move="O")

    @pytest.mark.parametrize("seed", range(10))
    @pytest.mark.parametrize("weaker", [Difficulty.RANDOM, Difficulty.HEURISTIC])
    def test_never_loses_to_weaker_levels(self, seed: int, weaker: Difficulty) -> None:
        as_x = play_out(Difficulty.OPTIMAL, weaker, seed)
        as_o = play_out(weaker, Difficulty.OPTIMAL, seed)

        assert as_x.board.get_winner() != "O"
        assert as_o.board.get_winner() != "X"

    def test_optimal_skips_cache_stats_without_debug(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[int] = []
        monkeypatch.setattr("ttt_engine.ai._minimax.cache_info", lambda: calls.append(1))
        logging.getLogger("ttt_engine.ai").setLevel(logging.INFO)
        try:
            select_move(Board(), "X", Difficulty.OPTIMAL)
        finally:
            logging.getLogger("ttt_engine.ai").setLevel(logging.NOTSET)

        assert calls == []

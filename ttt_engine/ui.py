import random
from abc import ABC, abstractmethod

from ttt_engine.ai import Difficulty
from ttt_engine.board import PlayerSymbol
from ttt_engine.exception import GameError, InvalidMoveError
from ttt_engine.game_engine import GameEngine, new_game


class Ui(ABC):
    """Front end driving a GameEngine through its public operations only."""

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.OPTIMAL,
        ai_player: PlayerSymbol | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._difficulty = difficulty
        self._ai_player = ai_player
        self._rng = rng
        self._game_engine: GameEngine = new_game(self._rng)
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def game_engine(self) -> GameEngine:
        return self._game_engine

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    def run(self) -> None:
        self._running = True
        self._render()
        self._maybe_auto_ai_move()

    def _stop(self) -> None:
        self._running = False

    def _restart(self) -> None:
        self._game_engine = new_game(self._rng)
        self._render()
        self._maybe_auto_ai_move()

    def _set_difficulty(self, value: Difficulty | int | str) -> None:
        try:
            self._difficulty = Difficulty.parse(value)
        except GameError as e:
            self._on_input_error(e)

    def _human_move(self, row: int, col: int) -> None:
        if self._game_engine.is_game_over():
            return
        if not self._game_engine.human_move(row, col):
            self._on_input_error(InvalidMoveError(f"Invalid move: ({row}, {col})"))
            return
        self._render()
        self._maybe_auto_ai_move()

    def _ai_move(self, difficulty: Difficulty | int | str | None = None) -> None:
        level = self._difficulty if difficulty is None else difficulty
        if not self._game_engine.ai_move(level):
            self._on_input_error(GameError("Could not get AI move"))
            return
        self._render()

    def _maybe_auto_ai_move(self) -> None:
        if self._ai_player is None or self._game_engine.is_game_over():
            return
        if self._game_engine.game.current_player == self._ai_player:
            self._ai_move()

    def _render(self) -> None:
        self._render_board(self._game_engine.board_snapshot())
        self._show_status(self._game_engine.status_text(), game_over=self._game_engine.is_game_over())

    @abstractmethod
    def _render_board(self, snapshot: list[str]) -> None:
        pass

    @abstractmethod
    def _show_status(self, text: str, *, game_over: bool) -> None:
        pass

    @abstractmethod
    def _on_input_error(self, exception: Exception) -> None:
        pass

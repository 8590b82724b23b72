import random
from typing import Final

import pygame

from ttt_engine.ai import Difficulty
from ttt_engine.board import BOARD_SIZE, PlayerSymbol, Position
from ttt_engine.game import Won
from ttt_engine.game_engine import BLANK_SYMBOL
from ttt_engine.ui import Ui


class PygameUi(Ui):
    TITLE: Final = "Tic-Tac-Toe (Pygame)"
    BOARD_PIXELS: Final = 480
    PANEL_HEIGHT: Final = 120
    CELL_SIZE: Final = BOARD_PIXELS // BOARD_SIZE
    LINE_WIDTH: Final = 4

    BG_COLOR: Final = (0, 0, 0)
    LINE_COLOR: Final = (127, 127, 127)
    X_COLOR: Final = (191, 63, 63)
    O_COLOR: Final = (63, 63, 191)
    WIN_COLOR: Final = (63, 95, 63)
    TEXT_COLOR: Final = (255, 255, 255)
    ERROR_COLOR: Final = (255, 127, 0)
    BUTTON_COLOR: Final = (63, 63, 63)

    AI_BUTTON: Final = pygame.Rect(16, BOARD_PIXELS + 64, 140, 40)
    RESTART_BUTTON: Final = pygame.Rect(BOARD_PIXELS - 156, BOARD_PIXELS + 64, 140, 40)

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.OPTIMAL,
        ai_player: PlayerSymbol | None = None,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(difficulty, ai_player, rng)
        self._snapshot = [BLANK_SYMBOL] * (BOARD_SIZE * BOARD_SIZE)
        self._status = ""
        self._game_over = False
        self._error = ""

    def run(self) -> None:
        pygame.init()
        self._screen = pygame.display.set_mode((self.BOARD_PIXELS, self.BOARD_PIXELS + self.PANEL_HEIGHT))
        pygame.display.set_caption(self.TITLE)

        self._font = pygame.font.SysFont(None, 96)
        self._small_font = pygame.font.SysFont(None, 36)
        self._button_font = pygame.font.SysFont(None, 28)

        super().run()
        self._main_loop()

    def _main_loop(self) -> None:
        clock = pygame.time.Clock()
        while self._running:
            clock.tick(30)
            self._handle_events()
            self._draw()
        pygame.quit()

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            match event.type:
                case pygame.QUIT:
                    self._stop()
                case pygame.KEYDOWN:
                    self._on_key(event.key)
                case pygame.MOUSEBUTTONDOWN:
                    self._on_click(event.pos)

    def _on_key(self, key: int) -> None:
        levels = list(Difficulty)
        index = key - pygame.K_1
        if 0 <= index < len(levels):
            self._error = ""
            self._set_difficulty(levels[index])

    def _on_click(self, pos: tuple[int, int]) -> None:
        self._error = ""
        if self.AI_BUTTON.collidepoint(pos):
            self._ai_move()
            return
        if self._game_over and self.RESTART_BUTTON.collidepoint(pos):
            self._restart()
            return

        x, y = pos
        col = x // self.CELL_SIZE
        row = y // self.CELL_SIZE
        if not (0 <= row < BOARD_SIZE) or not (0 <= col < BOARD_SIZE):
            return
        self._human_move(row, col)

    def _render_board(self, snapshot: list[str]) -> None:
        self._snapshot = snapshot

    def _show_status(self, text: str, *, game_over: bool) -> None:
        self._status = text
        self._game_over = game_over

    def _on_input_error(self, exception: Exception) -> None:
        self._error = str(exception)

    def _winning_line(self) -> tuple[Position, ...]:
        status = self._game_engine.game.status
        return status.line if isinstance(status, Won) else ()

    def _draw(self) -> None:
        self._screen.fill(self.BG_COLOR)
        self._draw_winning_line()
        self._draw_grid()
        self._draw_marks()
        self._draw_panel()
        pygame.display.flip()

    def _draw_winning_line(self) -> None:
        for row, col in self._winning_line():
            rect = pygame.Rect(col * self.CELL_SIZE, row * self.CELL_SIZE, self.CELL_SIZE, self.CELL_SIZE)
            pygame.draw.rect(self._screen, self.WIN_COLOR, rect)

    def _draw_grid(self) -> None:
        for i in range(1, BOARD_SIZE):
            pygame.draw.line(
                self._screen,
                self.LINE_COLOR,
                (0, i * self.CELL_SIZE),
                (self.BOARD_PIXELS, i * self.CELL_SIZE),
                self.LINE_WIDTH,
            )
            pygame.draw.line(
                self._screen,
                self.LINE_COLOR,
                (i * self.CELL_SIZE, 0),
                (i * self.CELL_SIZE, self.BOARD_PIXELS),
                self.LINE_WIDTH,
            )
        pygame.draw.line(
            self._screen,
            self.LINE_COLOR,
            (0, self.BOARD_PIXELS),
            (self.BOARD_PIXELS, self.BOARD_PIXELS),
            self.LINE_WIDTH,
        )

    def _draw_marks(self) -> None:
        for index, value in enumerate(self._snapshot):
            if value == BLANK_SYMBOL:
                continue
            row, col = divmod(index, BOARD_SIZE)
            text = self._font.render(value, True, self.X_COLOR if value == "X" else self.O_COLOR)  # noqa: FBT003
            rect = text.get_rect(
                center=(col * self.CELL_SIZE + self.CELL_SIZE // 2, row * self.CELL_SIZE + self.CELL_SIZE // 2),
            )
            self._screen.blit(text, rect)

    def _draw_panel(self) -> None:
        message, color = (self._error, self.ERROR_COLOR) if self._error else (self._status, self.TEXT_COLOR)
        status_text = self._small_font.render(message, True, color)  # noqa: FBT003
        self._screen.blit(status_text, status_text.get_rect(midleft=(16, self.BOARD_PIXELS + 18)))

        difficulty = f"Difficulty: {self._difficulty.name.lower()} (keys 1-{len(Difficulty)})"
        difficulty_text = self._button_font.render(difficulty, True, self.TEXT_COLOR)  # noqa: FBT003
        self._screen.blit(difficulty_text, difficulty_text.get_rect(midleft=(16, self.BOARD_PIXELS + 46)))

        self._draw_button(self.AI_BUTTON, "AI move")
        if self._game_over:
            self._draw_button(self.RESTART_BUTTON, "Restart")

    def _draw_button(self, rect: pygame.Rect, label: str) -> None:
        pygame.draw.rect(self._screen, self.BUTTON_COLOR, rect)
        text = self._button_font.render(label, True, self.TEXT_COLOR)  # noqa: FBT003
        self._screen.blit(text, text.get_rect(center=rect.center))

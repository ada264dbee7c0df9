"""Falling-block simulation engine.

The engine owns the board and the active piece. The host owns the frame
buffer and the line counter; the engine writes into both once per tick.

Usage:
    screen = framebuffer.new_screen()
    lines = np.zeros(1, dtype=np.uint32)
    game = TetrisGame(screen, lines, clock.now, gamepad.to_mask)
    game.init_game()
    while True:
        game.run()
        # ... display screen and lines[0] ...
"""

from __future__ import annotations

import logging
import random
from typing import Callable, Protocol

from . import framebuffer
from .board import Board
from .keys import Key, KeyRepeat
from .pieces import ROTATIONS, PieceType, get_pattern, spawn_row

logger = logging.getLogger(__name__)

SPAWN_COL = 3
DEFAULT_FALL_DELAY = 1000


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


class TetrisGame:
    """Tick-driven game state machine.

    Time is in milliseconds from any fixed epoch. ``tick`` may be called as
    often as the host likes; gravity and key repeat pace themselves off the
    supplied time.
    """

    def __init__(
        self,
        screen,
        lines,
        get_time: Callable[[], int],
        get_keys: Callable[[], int],
        *,
        rng: RandomSource | None = None,
        seed: int | None = None,
        fall_delay: int = DEFAULT_FALL_DELAY,
    ):
        if len(screen) < framebuffer.SCREEN_HEIGHT:
            raise ValueError(
                f"Frame buffer needs {framebuffer.SCREEN_HEIGHT} rows, got {len(screen)}"
            )
        if len(lines) < 1:
            raise ValueError("Line counter needs at least one cell")
        if fall_delay <= 0:
            raise ValueError(f"fall_delay must be positive, got {fall_delay}")

        self._screen = screen
        self._lines = lines
        self._get_time = get_time
        self._get_keys = get_keys
        self._rng = rng if rng is not None else random.Random(seed)

        self.board = Board()
        self.fall_delay = fall_delay
        self._repeat = KeyRepeat()
        self._last_update_time = 0

        self._cur_piece = PieceType.I
        self._cur_rotation = 0
        self._cur_row = 0
        self._cur_col = SPAWN_COL
        self._next_piece = PieceType.I
        self._next_rotation = 0

        self._playing = False

    # ── Queries ─────────────────────────────────────────────────────────────

    @property
    def game_over(self) -> bool:
        return not self._playing

    @property
    def current_piece(self) -> PieceType:
        return self._cur_piece

    @property
    def current_rotation(self) -> int:
        return self._cur_rotation

    @property
    def current_row(self) -> int:
        return self._cur_row

    @property
    def current_col(self) -> int:
        return self._cur_col

    @property
    def next_piece(self) -> PieceType:
        return self._next_piece

    @property
    def next_rotation(self) -> int:
        return self._next_rotation

    @property
    def lines(self) -> int:
        return int(self._lines[0])

    # ── Game lifecycle ──────────────────────────────────────────────────────

    def init_game(self):
        """Start a fresh game. Safe to call at any time."""
        self._lines[0] = 0
        self._next_piece, self._next_rotation = self._roll_piece()
        self.board.reset()
        framebuffer.draw_border(self._screen)
        self._spawn()
        self._playing = True
        logger.info("New game, first piece %s", self._cur_piece.name)

    def run(self):
        """Sample the host's input and clock, then advance one tick."""
        self.tick(self._get_keys(), self._get_time())

    def tick(self, keys: int, time: int):
        """Advance one frame with an explicit input mask and timestamp.

        ESC restarts the game and the rest of the frame runs against the
        fresh state. Once the game is over only rendering happens.
        """
        if keys & Key.ESC:
            self.init_game()
        if not self._playing:
            self._render()
            return
        self._step(keys, time)

    # ── Internals ───────────────────────────────────────────────────────────

    def _step(self, keys: int, time: int):
        fired = self._repeat.update(keys, time)

        ncol, nrow, nrot = self._cur_col, self._cur_row, self._cur_rotation
        if fired & Key.LEFT:
            ncol -= 1
        if fired & Key.RIGHT:
            ncol += 1
        if fired & Key.UP:
            nrot = (self._cur_rotation + 1) % ROTATIONS
        if fired & Key.DOWN:
            nrow += 1

        if fired and self._can_move(ncol, nrow, nrot):
            self._cur_col, self._cur_row, self._cur_rotation = ncol, nrow, nrot

        if time > self._last_update_time + self.fall_delay:
            if self._can_move(self._cur_col, self._cur_row + 1, self._cur_rotation):
                self._cur_row += 1
            else:
                self._land()
            self._last_update_time = time

        self._render()

    def _land(self):
        pattern = get_pattern(self._cur_piece, self._cur_rotation)
        self.board.merge(pattern, self._cur_col, self._cur_row)
        logger.debug(
            "Merged %s rot=%d at (%d,%d)",
            self._cur_piece.name, self._cur_rotation, self._cur_col, self._cur_row,
        )
        cleared = self.board.clear_lines()
        if cleared:
            self._lines[0] += cleared
            logger.info("Cleared %d line(s), total %d", cleared, self.lines)
        self._spawn()

    def _roll_piece(self) -> tuple[PieceType, int]:
        piece = PieceType(self._rng.randrange(len(PieceType)))
        return piece, self._rng.randrange(ROTATIONS)

    def _spawn(self):
        self._cur_piece = self._next_piece
        self._cur_rotation = self._next_rotation
        self._next_piece, self._next_rotation = self._roll_piece()

        self._cur_row = spawn_row(self._cur_piece, self._cur_rotation)
        self._cur_col = SPAWN_COL

        if not self._can_move(self._cur_col, self._cur_row, self._cur_rotation):
            self._playing = False
            logger.info("Game over, %d line(s)", self.lines)
        else:
            logger.debug(
                "Spawned %s rot=%d, next %s",
                self._cur_piece.name, self._cur_rotation, self._next_piece.name,
            )

    def _can_move(self, col: int, row: int, rotation: int) -> bool:
        return self.board.can_place(get_pattern(self._cur_piece, rotation), col, row)

    def _render(self):
        pattern = get_pattern(self._cur_piece, self._cur_rotation)
        for i in range(Board.HEIGHT):
            framebuffer.blit_row(
                self._screen, i,
                self.board.overlay(i, pattern, self._cur_col, self._cur_row),
            )

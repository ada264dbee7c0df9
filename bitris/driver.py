"""Headless host loop around the simulation engine.

Owns the frame buffer, the line counter, a millisecond clock and an input
source, and pumps ``TetrisGame.run`` the way a window's timer would.
The screen can be dumped to stdout as text after each frame.
"""

import logging
import random
import time

import numpy as np

from .game import framebuffer
from .game.engine import DEFAULT_FALL_DELAY, TetrisGame
from .game.keys import GamepadState

logger = logging.getLogger(__name__)


class MonotonicClock:
    """Milliseconds elapsed since construction."""

    def __init__(self):
        self._start = time.monotonic()

    def now(self) -> int:
        return int((time.monotonic() - self._start) * 1000)


class RandomInput:
    """Random button masher for unattended runs.

    Each frame every direction button is flipped with probability
    ``flip_chance``. ESC is never pressed.
    """

    BUTTONS = ("left", "up", "right", "down")

    def __init__(self, seed: int | None = None, flip_chance: float = 0.05):
        self._rng = random.Random(seed)
        self.flip_chance = flip_chance
        self.state = GamepadState()

    def __call__(self) -> int:
        for button in self.BUTTONS:
            if self._rng.random() < self.flip_chance:
                if getattr(self.state, button):
                    self.state.release(button)
                else:
                    self.state.press(button)
        return self.state.to_mask()


class GameDriver:
    """Runs the engine frame by frame until game over or the frame limit."""

    def __init__(self, config: dict, input_source=None, clock=None):
        self.config = config

        self.screen = framebuffer.new_screen()
        self.lines = np.zeros(1, dtype=np.uint32)
        self.clock = clock if clock is not None else MonotonicClock()
        self.input_source = (
            input_source
            if input_source is not None
            else RandomInput(seed=config.get("input_seed"))
        )

        self.game = TetrisGame(
            self.screen,
            self.lines,
            self.clock.now,
            self.input_source,
            seed=config.get("seed"),
            fall_delay=config.get("fall_delay", DEFAULT_FALL_DELAY),
        )

        self._frames_played = 0
        self._tick_interval = config.get("tick_interval", 0.001)
        self._max_frames = config.get("max_frames")
        self._render = config.get("render", False)
        self._status_every = config.get("status_every", 1000)

    @property
    def frames_played(self) -> int:
        return self._frames_played

    def title(self) -> str:
        """Window-title style status line."""
        if self.game.game_over:
            return f"Game Over! {int(self.lines[0])}"
        return str(int(self.lines[0]))

    def step(self):
        """Advance one frame."""
        self.game.run()
        self._frames_played += 1
        if self._render:
            print(framebuffer.to_ascii(self.screen))
            print(self.title())

    def play(self) -> int:
        """Start a game and loop until it ends. Returns lines cleared."""
        logger.info("=== Game Starting ===")
        self.game.init_game()

        try:
            while not self.game.game_over:
                if self._max_frames is not None and self._frames_played >= self._max_frames:
                    logger.info("Frame limit %d reached", self._max_frames)
                    break
                self.step()
                if self._tick_interval:
                    time.sleep(self._tick_interval)
                if self._frames_played % self._status_every == 0:
                    logger.info(
                        "Frame %d | lines=%d piece=%s next=%s",
                        self._frames_played,
                        int(self.lines[0]),
                        self.game.current_piece.name,
                        self.game.next_piece.name,
                    )
        except KeyboardInterrupt:
            logger.info("Interrupted by user")

        logger.info(
            "=== Game Finished === %s, frames: %d",
            self.title(),
            self._frames_played,
        )
        return int(self.lines[0])

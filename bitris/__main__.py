"""Entry point: python -m bitris

Runs a headless game driven by random input.
Pass --debug for per-piece logging, --render to print every frame.
"""

import logging
import sys

from .driver import GameDriver

# Default configuration
CONFIG = {
    # Milliseconds between gravity steps
    "fall_delay": 1000,
    # Seconds slept between frames (0 = as fast as possible)
    "tick_interval": 0.001,
    # Piece randomizer seed (None = nondeterministic)
    "seed": None,
    # Seed for the random input source
    "input_seed": None,
    # Stop after this many frames (None = until game over)
    "max_frames": None,
    # Print the frame buffer after every frame
    "render": False,
    # Log a status line every N frames
    "status_every": 1000,
}


def main():
    # Configure logging
    log_level = logging.DEBUG if "--debug" in sys.argv else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    config = dict(CONFIG)
    if "--render" in sys.argv:
        config["render"] = True

    driver = GameDriver(config)
    driver.play()
    print(driver.title())


if __name__ == "__main__":
    main()

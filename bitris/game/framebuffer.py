"""Frame buffer layout shared by the engine and the display host.

The screen is 32 rows of 32-bit words. Pixel column 0 is the most
significant bit. The 10-column playing field sits in bits 11..20 of
rows 6..25, framed by a wall on each side and a floor on row 26:

    row  6..25: 0x00200400   (walls at bits 21 and 10)
    row     26: 0x003FFC00   (floor across bits 10..21)
"""

import numpy as np

from .board import FULL_LINE_MASK, Board

SCREEN_WIDTH = 32
SCREEN_HEIGHT = 32

BOARD_HORIZONTAL_SHIFT = 11
BOARD_VERTICAL_SHIFT = 6

WALL_PATTERN = 0x00200400
FLOOR_PATTERN = 0x003FFC00

FIELD_MASK = FULL_LINE_MASK << BOARD_HORIZONTAL_SHIFT
# Everything in a screen row except the field window
COPY_LINE_MASK = 0xFFFFFFFF ^ FIELD_MASK


def new_screen() -> np.ndarray:
    return np.zeros(SCREEN_HEIGHT, dtype=np.uint32)


def draw_border(screen):
    """Write the walls beside the field and the floor beneath it.

    Clears the field window of rows 6..25 as a side effect.
    """
    for i in range(Board.HEIGHT):
        screen[i + BOARD_VERTICAL_SHIFT] = WALL_PATTERN
    screen[BOARD_VERTICAL_SHIFT + Board.HEIGHT] = FLOOR_PATTERN


def blit_row(screen, index: int, bits: int):
    """Place a 10-bit board row into the field window of screen row ``index + 6``.

    Bits outside the window are preserved.
    """
    line = BOARD_VERTICAL_SHIFT + index
    kept = int(screen[line]) & COPY_LINE_MASK
    screen[line] = kept | ((bits & FULL_LINE_MASK) << BOARD_HORIZONTAL_SHIFT)


def field_row(screen, index: int) -> int:
    """Read board row ``index`` back out of the screen."""
    return (int(screen[BOARD_VERTICAL_SHIFT + index]) >> BOARD_HORIZONTAL_SHIFT) & FULL_LINE_MASK


def unpack(screen) -> np.ndarray:
    """Return a 32x32 boolean pixel grid, pixel column 0 = bit 31."""
    words = np.asarray(screen, dtype=np.uint32)[:SCREEN_HEIGHT]
    shifts = np.arange(SCREEN_WIDTH - 1, -1, -1, dtype=np.uint32)
    return ((words[:, None] >> shifts) & 1).astype(bool)


def to_ascii(screen, on: str = "#", off: str = " ") -> str:
    """Render the screen as text, one line per row."""
    return "\n".join("".join(on if v else off for v in row) for row in unpack(screen))

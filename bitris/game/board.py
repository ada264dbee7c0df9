"""Tetris board representation as packed occupancy rows.

The board is 10 columns wide and 20 rows tall. Row 0 is the top.
Each row is one unsigned word holding 10 significant bits: column 0 is
bit 9, column 9 is bit 0. Bits above the 10-bit window are always zero.
"""

from __future__ import annotations

import logging

import numpy as np

from .pieces import pattern_row

logger = logging.getLogger(__name__)

FULL_LINE_MASK = 0x03FF


def row_strip(pattern: int, pattern_row_index: int, col: int) -> int:
    """Bits of one pattern row shifted to board column ``col``.

    Cells that would fall outside the 10 columns are dropped.
    """
    nibble = pattern_row(pattern, pattern_row_index)
    shift = 6 - col
    if shift >= 0:
        strip = nibble << shift
    else:
        strip = nibble >> -shift
    return strip & FULL_LINE_MASK


class Board:
    """10-wide by 20-tall Tetris board."""

    WIDTH = 10
    HEIGHT = 20

    def __init__(self, rows: np.ndarray | None = None):
        if rows is not None:
            self.rows = np.asarray(rows, dtype=np.uint32) & FULL_LINE_MASK
        else:
            self.rows = np.zeros(self.HEIGHT, dtype=np.uint32)

    def reset(self):
        """Empty every row in place."""
        self.rows[:] = 0

    @classmethod
    def from_occupancy(cls, grid: np.ndarray) -> Board:
        """Create a board from a 20x10 boolean occupancy grid.

        Used for setting up test positions.
        """
        grid = np.asarray(grid, dtype=bool)
        weights = 1 << np.arange(cls.WIDTH - 1, -1, -1, dtype=np.uint32)
        return cls((grid * weights).sum(axis=1).astype(np.uint32))

    # ── Cell queries ────────────────────────────────────────────────────────

    def row(self, index: int) -> int:
        return int(self.rows[index])

    def is_occupied(self, row: int, col: int) -> bool:
        return bool(self.row(row) & (1 << (self.WIDTH - 1 - col)))

    def can_place(self, pattern: int, col: int, row: int) -> bool:
        """True if every occupied pattern cell at (col, row) is on an empty cell.

        Cells left/right of the board, above row 0 or below the last row
        make the pose illegal.
        """
        mask = 0x8000
        for r in range(4):
            for c in range(4):
                if pattern & mask:
                    x = col + c
                    y = row + r
                    if x < 0 or x >= self.WIDTH:
                        return False
                    if y < 0 or y >= self.HEIGHT:
                        return False
                    if self.is_occupied(y, x):
                        return False
                mask >>= 1
        return True

    # ── Mutation ────────────────────────────────────────────────────────────

    def overlay(self, index: int, pattern: int, col: int, row: int) -> int:
        """Board row ``index`` with the piece at (col, row) OR'd in.

        The board itself is left untouched.
        """
        value = self.row(index)
        r = index - row
        if 0 <= r < 4:
            value |= row_strip(pattern, r, col)
        return value

    def merge(self, pattern: int, col: int, row: int):
        """Commit a landed piece into the board.

        Pattern rows that fall above or below the board are skipped.
        """
        for i in range(row, row + 4):
            if i < 0 or i >= self.HEIGHT:
                continue
            self.rows[i] = self.overlay(i, pattern, col, row)

    def is_full(self, index: int) -> bool:
        return (self.row(index) & FULL_LINE_MASK) == FULL_LINE_MASK

    def clear_lines(self) -> int:
        """Remove complete rows in place and return how many were cleared.

        Scans bottom to top. After a removal the same index is checked again
        since the row above has moved into it.
        """
        cleared = 0
        index = self.HEIGHT - 1
        while index >= 0:
            if self.is_full(index):
                for dest in range(index, 0, -1):
                    self.rows[dest] = self.row(dest - 1) & FULL_LINE_MASK
                self.rows[0] = 0
                cleared += 1
            else:
                index -= 1
        if cleared:
            logger.debug("Cleared %d line(s)", cleared)
        return cleared

    # ── Grid representations ────────────────────────────────────────────────

    def to_occupancy_grid(self) -> np.ndarray:
        """Return 20x10 boolean array. True = occupied."""
        shifts = np.arange(self.WIDTH - 1, -1, -1, dtype=np.uint32)
        return ((self.rows[:, None] >> shifts) & 1).astype(bool)

    def column_heights(self) -> np.ndarray:
        """Height of each column (0 = empty, 20 = full).

        Height = number of rows from the bottom to the topmost occupied cell.
        """
        grid = self.to_occupancy_grid()
        heights = np.zeros(self.WIDTH, dtype=int)
        for c in range(self.WIDTH):
            filled = np.flatnonzero(grid[:, c])
            if filled.size:
                heights[c] = self.HEIGHT - filled[0]
        return heights

    def is_empty(self) -> bool:
        return not self.rows.any()

    # ── Display ─────────────────────────────────────────────────────────────

    def to_ascii(self) -> str:
        """Render the board as an ASCII art string."""
        grid = self.to_occupancy_grid()
        lines = ["+" + "-" * self.WIDTH + "+"]
        for r in range(self.HEIGHT):
            lines.append("|" + "".join("#" if v else "." for v in grid[r]) + "|")
        lines.append("+" + "-" * self.WIDTH + "+")
        return "\n".join(lines)

    def __repr__(self):
        return self.to_ascii()

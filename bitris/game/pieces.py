"""Tetromino definitions and rotation tables.

Each piece/rotation is a 16-bit pattern describing a 4x4 bounding box,
row-major with the most significant bit as the top-left cell:

    bit 15 14 13 12   -> row 0, cols 0..3
    bit 11 10  9  8   -> row 1
    bit  7  6  5  4   -> row 2
    bit  3  2  1  0   -> row 3

Patterns are stored as one flat table of 7 * 4 entries, indexed by
``piece * 4 + rotation`` (see ``block_index``).
"""

from enum import IntEnum


class PieceType(IntEnum):
    I = 0
    J = 1
    L = 2
    O = 3
    S = 4
    T = 5
    Z = 6


ROTATIONS = 4

BLOCK_PATTERNS: tuple[int, ...] = (
    0x0F00, 0x2222, 0x00F0, 0x4444,  # I
    0x8E00, 0x6440, 0x0E20, 0x44C0,  # J
    0x2E00, 0x4460, 0x0E80, 0xC440,  # L
    0x6600, 0x6600, 0x6600, 0x6600,  # O
    0x6C00, 0x4620, 0x06C0, 0x8C40,  # S
    0x4E00, 0x4640, 0x0E40, 0x4C40,  # T
    0xC600, 0x2640, 0x0C60, 0x4C80,  # Z
)

# Row of the bounding box at spawn. Rotations whose first row is empty
# start above the board so the visible cells appear on row 0.
SPAWN_ROWS: tuple[int, ...] = (
    -1, 0, -2, 0,
     0, 0, -1, 0,
     0, 0, -1, 0,
     0, 0,  0, 0,
     0, 0, -1, 0,
     0, 0, -1, 0,
     0, 0, -1, 0,
)


def block_index(piece: PieceType, rotation: int) -> int:
    """Index into the flat pattern tables. Rotation wraps modulo 4."""
    return int(piece) * ROTATIONS + rotation % ROTATIONS


def get_pattern(piece: PieceType, rotation: int) -> int:
    """Get the 16-bit 4x4 occupancy pattern for a piece in a given rotation."""
    return BLOCK_PATTERNS[block_index(piece, rotation)]


def spawn_row(piece: PieceType, rotation: int) -> int:
    return SPAWN_ROWS[block_index(piece, rotation)]


def pattern_row(pattern: int, row: int) -> int:
    """Return the 4-bit nibble for one row of a pattern (bit 3 = left cell)."""
    return (pattern >> (12 - 4 * row)) & 0xF


def get_cells(piece: PieceType, rotation: int) -> list[tuple[int, int]]:
    """Get (row, col) offsets of the occupied cells, top-left first."""
    pattern = get_pattern(piece, rotation)
    mask = 0x8000
    cells = []
    for r in range(4):
        for c in range(4):
            if pattern & mask:
                cells.append((r, c))
            mask >>= 1
    return cells


def get_width(piece: PieceType, rotation: int) -> int:
    """Get the width (column span) of a piece in a given rotation."""
    cols = [c for _, c in get_cells(piece, rotation)]
    return max(cols) - min(cols) + 1


def get_height(piece: PieceType, rotation: int) -> int:
    """Get the height (row span) of a piece in a given rotation."""
    rows = [r for r, _ in get_cells(piece, rotation)]
    return max(rows) - min(rows) + 1


def normalize_cells(cells: list[tuple[int, int]]) -> list[tuple[int, int]]:
    """Shift cells so the minimum row and column are both 0."""
    min_r = min(r for r, _ in cells)
    min_c = min(c for _, c in cells)
    return sorted((r - min_r, c - min_c) for r, c in cells)

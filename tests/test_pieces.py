"""Tests for piece definitions and rotation tables."""

import pytest

from bitris.game.pieces import (
    BLOCK_PATTERNS,
    SPAWN_ROWS,
    PieceType,
    block_index,
    get_cells,
    get_height,
    get_pattern,
    get_width,
    normalize_cells,
    pattern_row,
    spawn_row,
)


class TestPieceType:
    def test_all_seven_pieces(self):
        assert len(PieceType) == 7
        assert PieceType.I == 0
        assert PieceType.Z == 6

    def test_tables_cover_every_rotation(self):
        assert len(BLOCK_PATTERNS) == 28
        assert len(SPAWN_ROWS) == 28

    def test_each_rotation_has_4_cells(self):
        for piece in PieceType:
            for rot in range(4):
                cells = get_cells(piece, rot)
                assert len(cells) == 4, f"{piece.name} rot {rot} has {len(cells)} cells"

    def test_block_index_is_piece_times_four(self):
        assert block_index(PieceType.I, 0) == 0
        assert block_index(PieceType.J, 0) == 4
        assert block_index(PieceType.Z, 3) == 27


class TestPatterns:
    def test_known_patterns(self):
        assert get_pattern(PieceType.I, 0) == 0x0F00
        assert get_pattern(PieceType.T, 0) == 0x4E00
        assert get_pattern(PieceType.Z, 3) == 0x4C80

    def test_pattern_row(self):
        assert pattern_row(0x4E00, 0) == 0x4
        assert pattern_row(0x4E00, 1) == 0xE
        assert pattern_row(0x4E00, 2) == 0x0

    def test_i_piece_cells(self):
        assert get_cells(PieceType.I, 0) == [(1, 0), (1, 1), (1, 2), (1, 3)]
        assert get_cells(PieceType.I, 1) == [(0, 2), (1, 2), (2, 2), (3, 2)]


class TestPieceDimensions:
    def test_i_piece_horizontal(self):
        assert get_width(PieceType.I, 0) == 4
        assert get_height(PieceType.I, 0) == 1

    def test_i_piece_vertical(self):
        assert get_width(PieceType.I, 1) == 1
        assert get_height(PieceType.I, 1) == 4

    def test_o_piece_all_rotations(self):
        for rot in range(4):
            assert get_width(PieceType.O, rot) == 2
            assert get_height(PieceType.O, rot) == 2

    def test_t_piece_dimensions(self):
        assert get_width(PieceType.T, 0) == 3
        assert get_height(PieceType.T, 0) == 2

    def test_s_piece_dimensions(self):
        assert get_width(PieceType.S, 0) == 3
        assert get_height(PieceType.S, 0) == 2
        assert get_width(PieceType.S, 1) == 2
        assert get_height(PieceType.S, 1) == 3

    def test_z_piece_dimensions(self):
        assert get_width(PieceType.Z, 0) == 3
        assert get_height(PieceType.Z, 0) == 2


class TestSpawnRows:
    def test_topmost_cell_starts_on_row_zero(self):
        for piece in PieceType:
            for rot in range(4):
                top = min(r for r, _ in get_cells(piece, rot))
                assert spawn_row(piece, rot) + top == 0, f"{piece.name} rot {rot}"

    @pytest.mark.parametrize(
        "piece, rotation, expected",
        [(PieceType.I, 0, -1), (PieceType.I, 2, -2), (PieceType.O, 2, 0), (PieceType.T, 2, -1)],
    )
    def test_known_offsets(self, piece, rotation, expected):
        assert spawn_row(piece, rotation) == expected


class TestGetCells:
    def test_wraps_rotation(self):
        """Rotation 4 should be same as rotation 0."""
        assert get_cells(PieceType.T, 0) == get_cells(PieceType.T, 4)

    def test_cells_inside_bounding_box(self):
        for piece in PieceType:
            for rot in range(4):
                for r, c in get_cells(piece, rot):
                    assert 0 <= r < 4 and 0 <= c < 4


class TestNormalizeCells:
    def test_shift_to_origin(self):
        cells = [(2, 3), (2, 4), (3, 3), (3, 4)]
        assert normalize_cells(cells) == [(0, 0), (0, 1), (1, 0), (1, 1)]


class TestSymmetricPieces:
    @pytest.mark.parametrize("piece", [PieceType.I, PieceType.S, PieceType.Z])
    def test_half_turn_symmetry(self, piece):
        """Rotation 0 and 2 are the same shape, shifted."""
        assert normalize_cells(get_cells(piece, 0)) == normalize_cells(get_cells(piece, 2))

    def test_o_piece_all_same(self):
        base = normalize_cells(get_cells(PieceType.O, 0))
        for rot in range(1, 4):
            assert normalize_cells(get_cells(PieceType.O, rot)) == base

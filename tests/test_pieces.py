import random
import unittest

from tomino.game import DEFAULT_THEME, Piece, PieceType, Position, Theme, create_piece
from tomino.game.pieces import SHAPES


class PieceTests(unittest.TestCase):
    def test_blocks_share_piece_type(self):
        piece = Piece([Position(0, 0), Position(0, 1)], PieceType.S)
        self.assertEqual(len(piece.blocks), 2)
        self.assertTrue(all(block.type == PieceType.S for block in piece.blocks))

    def test_empty_piece_is_rejected(self):
        with self.assertRaises(ValueError):
            Piece([], PieceType.T)

    def test_width_and_top(self):
        piece = create_piece(PieceType.I)
        self.assertEqual(piece.width, 3)
        self.assertEqual(piece.top, 0)
        piece = create_piece(PieceType.T)
        self.assertEqual(piece.width, 2)
        self.assertEqual(piece.top, 1)

    def test_width_ignores_column_order(self):
        piece = Piece([Position(3, 7), Position(3, 4)], PieceType.J)
        self.assertEqual(piece.width, 3)

    def test_positions_snapshot_and_restore(self):
        piece = create_piece(PieceType.L)
        saved = piece.get_positions()
        for block in piece.blocks:
            block.move_by(5, 5)
        self.assertNotEqual(piece.get_positions(), saved)
        piece.restore_positions(saved)
        self.assertEqual(piece.get_positions(), saved)

    def test_set_color_reaches_every_block(self):
        piece = create_piece(PieceType.Z)
        piece.set_color((1, 2, 3))
        self.assertEqual(piece.color, (1, 2, 3))
        self.assertTrue(all(block.color == (1, 2, 3) for block in piece.blocks))

    def test_every_type_has_four_blocks_and_only_o_is_fixed(self):
        for kind in PieceType:
            piece = create_piece(kind)
            self.assertEqual(len(piece.blocks), 4)
            self.assertEqual(len(set(piece.get_positions())), 4)
            self.assertEqual(piece.can_rotate, kind != PieceType.O)
        self.assertEqual(set(SHAPES), set(PieceType))

    def test_pieces_are_independent(self):
        first = create_piece(PieceType.T)
        second = create_piece(PieceType.T)
        first.blocks[0].move_by(1, 1)
        self.assertNotEqual(first.get_positions(), second.get_positions())

    def test_position_is_a_value(self):
        self.assertEqual(Position(1, 2), Position(1, 2))
        self.assertEqual(len({Position(1, 2), Position(1, 2)}), 1)
        self.assertEqual(Position(1, 2).moved_by(-1, 3), Position(0, 5))


class ThemeTests(unittest.TestCase):
    def test_color_for_type(self):
        self.assertEqual(DEFAULT_THEME.color_for(PieceType.O), DEFAULT_THEME.colors[0])

    def test_random_color_comes_from_palette(self):
        rng = random.Random(3)
        for _ in range(20):
            self.assertIn(DEFAULT_THEME.random_color(rng), DEFAULT_THEME.colors)

    def test_palette_size_is_checked(self):
        with self.assertRaises(ValueError):
            Theme("short", ((0, 0, 0),))


if __name__ == "__main__":
    unittest.main()

import random
import unittest
from collections import Counter

from tomino.game import BalancedRandomPieceProvider, PieceType, RandomPieceProvider


class BalancedProviderTests(unittest.TestCase):
    def test_every_type_appears_in_any_thirteen_draws(self):
        provider = BalancedRandomPieceProvider(random.Random(1234))
        draws = [provider.get_piece().type for _ in range(700)]
        for start in range(len(draws) - 13 + 1):
            self.assertEqual(set(draws[start:start + 13]), set(PieceType), start)

    def test_each_bag_holds_every_type_once(self):
        provider = BalancedRandomPieceProvider(7)
        for _ in range(10):
            bag = [provider.get_piece().type for _ in range(len(PieceType))]
            self.assertEqual(Counter(bag), Counter(PieceType))

    def test_duplicates_widen_the_bag(self):
        provider = BalancedRandomPieceProvider(5, duplicates=2)
        bag = [provider.get_piece().type for _ in range(2 * len(PieceType))]
        self.assertTrue(all(count == 2 for count in Counter(bag).values()))

    def test_invalid_duplicates(self):
        with self.assertRaises(ValueError):
            BalancedRandomPieceProvider(duplicates=0)

    def test_peek_does_not_consume(self):
        provider = BalancedRandomPieceProvider(42)
        upcoming = provider.get_next_piece()
        self.assertIs(provider.get_next_piece(), upcoming)
        self.assertIs(provider.get_piece(), upcoming)
        self.assertIsNot(provider.get_next_piece(), upcoming)

    def test_same_seed_same_sequence(self):
        first = BalancedRandomPieceProvider(99)
        second = BalancedRandomPieceProvider(99)
        self.assertEqual(
            [first.get_piece().type for _ in range(30)],
            [second.get_piece().type for _ in range(30)],
        )

    def test_fresh_piece_objects(self):
        provider = BalancedRandomPieceProvider(0)
        self.assertIsNot(provider.get_piece(), provider.get_piece())


class RandomProviderTests(unittest.TestCase):
    def test_draws_valid_types(self):
        provider = RandomPieceProvider(random.Random(8))
        kinds = {provider.get_piece().type for _ in range(200)}
        self.assertEqual(kinds, set(PieceType))


if __name__ == "__main__":
    unittest.main()

"""
Tests for parent selection strategies.
"""

import unittest
import sys
from pathlib import Path

import numpy as np

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent.parent))

from genetic import ScoredIndividual, from_fittest_part_selection


class TestFromFittestPartSelection(unittest.TestCase):
    """Test selection from the fittest prefix of a sorted population"""

    def setUp(self):
        self.population = [ScoredIndividual(float(i), i) for i in range(1, 101)]
        self.rng = np.random.default_rng(42)

    def _select_many(self, fraction, count=2000):
        return [from_fittest_part_selection(self.population, self.rng, fraction) for _ in range(count)]

    def test_quarter_of_population(self):
        selected = self._select_many(0.25)
        self.assertTrue(all(1 <= s <= 25 for s in selected))

    def test_half_of_population(self):
        selected = self._select_many(0.5)
        self.assertTrue(all(1 <= s <= 50 for s in selected))
        self.assertGreater(max(selected), 25)

    def test_whole_population(self):
        selected = self._select_many(1.0)
        self.assertTrue(all(1 <= s <= 100 for s in selected))
        self.assertGreater(max(selected), 90)

    def test_default_fraction_is_half(self):
        selected = [from_fittest_part_selection(self.population, self.rng) for _ in range(2000)]
        self.assertTrue(all(1 <= s <= 50 for s in selected))

    def test_tiny_fraction_always_selects_fittest(self):
        selected = self._select_many(0.001, count=100)
        self.assertEqual(set(selected), {1})

    def test_single_individual(self):
        population = [ScoredIndividual(5.0, 'only')]
        self.assertEqual(from_fittest_part_selection(population, self.rng, 1.0), 'only')


if __name__ == '__main__':
    unittest.main()

"""Nearest-energy lookup tests — exact matches, ties, and table boundaries."""

import logging

import numpy as np
import pytest

from calcatten.core.energy_lookup import closest_index, neighbour_indices
from calcatten.core.errors import MissingField

ENERGIES = [0.1, 0.2, 0.5, 0.6, 0.8, 1.0]


class TestClosestIndex:
    @pytest.mark.parametrize("i", range(len(ENERGIES)))
    def test_exact_match(self, i):
        assert closest_index(ENERGIES, ENERGIES[i]) == i

    def test_nearest_lower(self):
        # 0.662 is 0.062 from 0.6 and 0.138 from 0.8
        assert closest_index(ENERGIES, 0.662) == 3

    def test_nearest_upper(self):
        assert closest_index(ENERGIES, 0.75) == 4

    def test_tie_goes_to_upper(self):
        # 0.5 and 0.75 are exactly representable; 0.625 is their midpoint
        assert closest_index([0.5, 0.75], 0.625) == 1

    def test_matches_brute_force(self):
        table = np.array([0.01, 0.015, 0.02, 0.03, 0.05, 0.08, 0.1, 0.3, 1.0, 10.0])
        for q in np.linspace(0.005, 12.0, 97):
            expected = int(np.argmin(np.abs(table - q)))
            assert table[closest_index(table, q)] == pytest.approx(table[expected]), q

    def test_accepts_numpy_array(self):
        assert closest_index(np.array(ENERGIES), 0.19) == 1

    def test_logs_neighbours(self, caplog):
        caplog.set_level(logging.INFO, logger="calcatten.core.energy_lookup")
        closest_index([0.5, 0.6, 0.8], 0.662)
        assert "Closest energies in data for 0.662: 0.6 0.8" in caplog.text


class TestBoundaries:
    def test_below_first_clamps_to_first(self):
        assert closest_index(ENERGIES, 0.0) == 0
        assert closest_index(ENERGIES, -5.0) == 0

    def test_above_last_clamps_to_last(self):
        assert closest_index(ENERGIES, 50.0) == len(ENERGIES) - 1

    def test_at_last_entry(self):
        assert closest_index(ENERGIES, 1.0) == len(ENERGIES) - 1

    def test_single_entry_table(self):
        assert closest_index([0.662], 0.0) == 0
        assert closest_index([0.662], 0.662) == 0
        assert closest_index([0.662], 5.0) == 0

    def test_neighbours_clamped(self):
        assert neighbour_indices(ENERGIES, 0.0) == (0, 0)
        assert neighbour_indices(ENERGIES, 2.0) == (5, 5)
        assert neighbour_indices(ENERGIES, 0.662) == (3, 4)

    def test_empty_table_raises(self):
        with pytest.raises(MissingField):
            closest_index([], 0.5)

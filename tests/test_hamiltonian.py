"""
Unit tests for Hamiltonian cycle construction
"""

import pytest
import numpy as np

from snakenav.hamiltonian import (
    CycleConstructionError,
    CycleIndex,
    build_cycle,
    validate_cycle,
)

CYCLE_SIZES = [
    (w, h) for w in range(2, 11) for h in range(2, 11)
    if w % 2 == 0 or h % 2 == 0
]


class TestBuildCycle:
    """Test cycle construction"""

    @pytest.mark.parametrize("width,height", CYCLE_SIZES)
    def test_cycle_is_valid(self, width, height):
        """Every cell appears once and consecutive cells are adjacent, wrap included"""
        cycle, _ = build_cycle(width, height)
        assert len(cycle) == width * height
        assert validate_cycle(cycle, width, height)

    @pytest.mark.parametrize("width,height", [(30, 20), (20, 30), (4, 4), (7, 2)])
    def test_index_is_bijective(self, width, height):
        """Index maps every cell to its position in the cycle"""
        cycle, index = build_cycle(width, height)

        assert index.shape == (width * height,)
        assert sorted(index.tolist()) == list(range(width * height))
        for i, (x, y) in enumerate(cycle):
            assert index[y * width + x] == i

    def test_column_sweep_layout(self):
        """Even width: column 0 goes down, row 0 carries the return path"""
        cycle, _ = build_cycle(4, 4)
        assert cycle == [
            (0, 0), (0, 1), (0, 2), (0, 3),
            (1, 3), (1, 2), (1, 1),
            (2, 1), (2, 2), (2, 3),
            (3, 3), (3, 2), (3, 1),
            (3, 0), (2, 0), (1, 0),
        ]

    def test_odd_width_uses_row_sweep(self):
        """Odd width with even height sweeps rows, column 0 carries the return path"""
        cycle, _ = build_cycle(3, 2)
        assert cycle == [(0, 0), (1, 0), (2, 0), (2, 1), (1, 1), (0, 1)]

    @pytest.mark.parametrize("width,height", [(3, 3), (5, 7), (29, 19)])
    def test_odd_by_odd_raises(self, width, height):
        """No Hamiltonian cycle exists when both sides are odd"""
        with pytest.raises(CycleConstructionError):
            build_cycle(width, height)

    @pytest.mark.parametrize("width,height", [(3, 3), (5, 5), (5, 7), (9, 3), (15, 15), (29, 19)])
    def test_odd_by_odd_skips_corner(self, width, height):
        """With skip_corner every cell but the bottom-right one forms a closed tour"""
        corner = (width - 1, height - 1)
        cycle, index = build_cycle(width, height, skip_corner=True)

        assert len(cycle) == width * height - 1
        assert validate_cycle(cycle, width, height, omitted=corner)
        assert index[corner[1] * width + corner[0]] == -1
        assert sorted(i for i in index.tolist() if i >= 0) == list(range(width * height - 1))

    def test_corner_skipping_layout(self):
        """3x3: top row right, weave through the middle, back up column 0"""
        cycle, _ = build_cycle(3, 3, skip_corner=True)
        assert cycle == [(0, 0), (1, 0), (2, 0), (2, 1), (1, 1), (1, 2), (0, 2), (0, 1)]

    def test_skip_corner_ignored_when_cycle_exists(self):
        assert build_cycle(4, 4, skip_corner=True)[0] == build_cycle(4, 4)[0]

    @pytest.mark.parametrize("width,height", [(1, 4), (4, 1), (0, 0)])
    def test_too_small_raises(self, width, height):
        """Grids narrower than 2 cells are rejected"""
        with pytest.raises(ValueError):
            build_cycle(width, height)

    def test_validate_rejects_broken_cycle(self):
        """validate_cycle catches duplicates, gaps and missing cells"""
        cycle, _ = build_cycle(4, 4)

        swapped = list(cycle)
        swapped[3], swapped[5] = swapped[5], swapped[3]
        assert not validate_cycle(swapped, 4, 4)
        assert not validate_cycle(cycle[:-1], 4, 4)
        assert not validate_cycle(cycle[:-1] + [cycle[0]], 4, 4)


class TestCycleIndex:
    """Test CycleIndex lookups"""

    @pytest.fixture
    def cycle(self):
        return CycleIndex(6, 4)

    def test_length(self, cycle):
        assert len(cycle) == 24

    def test_index_of_round_trip(self, cycle):
        """cell_at and index_of agree"""
        for i in range(len(cycle)):
            assert cycle.index_of(cycle.cell_at(i)) == i

    def test_off_grid_is_missing(self, cycle):
        """Positions off the grid are not in the cycle"""
        assert cycle.index_of((-1, 0)) == -1
        assert cycle.index_of((6, 0)) == -1
        assert cycle.index_of((0, 4)) == -1

    def test_cell_at_wraps(self, cycle):
        assert cycle.cell_at(24) == cycle.cell_at(0)

    def test_distance_is_forward(self, cycle):
        """Distance counts forward along the cycle"""
        assert cycle.distance(3, 5) == 2
        assert cycle.distance(5, 3) == 22
        assert cycle.distance(7, 7) == 0

    def test_matches(self, cycle):
        assert cycle.matches(6, 4)
        assert not cycle.matches(4, 6)

    def test_index_dtype(self, cycle):
        assert np.issubdtype(cycle.index.dtype, np.integer)

    def test_complete_cycle_has_no_detour(self, cycle):
        assert cycle.omitted is None
        assert cycle.target_index((5, 3)) == cycle.index_of((5, 3))


class TestOddGridCycleIndex:
    """Test the corner detour on grids with both sides odd"""

    @pytest.fixture
    def cycle(self):
        return CycleIndex(5, 5)

    def test_corner_is_omitted(self, cycle):
        assert len(cycle) == 24
        assert cycle.omitted == (4, 4)
        assert cycle.index_of((4, 4)) == -1

    def test_detour_cells(self, cycle):
        """Entry and exit are the corner's neighbours, two positions apart"""
        assert cycle.cell_at(cycle.detour_entry) == (4, 3)
        assert cycle.cell_at(cycle.detour_exit) == (3, 4)
        assert cycle.distance(cycle.detour_entry, cycle.detour_exit) == 2

    def test_target_index_maps_corner_to_entry(self, cycle):
        assert cycle.target_index((4, 4)) == cycle.detour_entry
        assert cycle.target_index((0, 0)) == 0
        assert cycle.target_index((5, 0)) == -1


if __name__ == '__main__':
    pytest.main([__file__, '-v'])

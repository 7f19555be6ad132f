"""
Unit tests for the grid model and direction math
"""

import pytest

from snakenav.grid import (
    Direction,
    GridModel,
    NavigationState,
    direction_between,
    manhattan_distance,
    step,
)


class TestDirection:
    """Test Direction enum"""

    def test_deltas(self):
        assert Direction.UP.delta == (0, -1)
        assert Direction.RIGHT.delta == (1, 0)
        assert Direction.DOWN.delta == (0, 1)
        assert Direction.LEFT.delta == (-1, 0)

    @pytest.mark.parametrize("direction,opposite", [
        (Direction.UP, Direction.DOWN),
        (Direction.RIGHT, Direction.LEFT),
        (Direction.DOWN, Direction.UP),
        (Direction.LEFT, Direction.RIGHT),
    ])
    def test_reversal(self, direction, opposite):
        """Each direction reverses exactly its opposite"""
        assert direction.opposite == opposite
        assert direction.is_reversal_of(opposite)
        for other in Direction:
            if other != opposite:
                assert not direction.is_reversal_of(other)

    def test_direction_between(self):
        assert direction_between((3, 3), (3, 2)) == Direction.UP
        assert direction_between((3, 3), (4, 3)) == Direction.RIGHT
        assert direction_between((3, 3), (3, 4)) == Direction.DOWN
        assert direction_between((3, 3), (2, 3)) == Direction.LEFT

    def test_direction_between_rejects_non_adjacent(self):
        with pytest.raises(ValueError):
            direction_between((0, 0), (1, 1))
        with pytest.raises(ValueError):
            direction_between((0, 0), (0, 0))

    def test_step_and_manhattan(self):
        assert step((2, 2), Direction.LEFT) == (1, 2)
        assert manhattan_distance((0, 0), (3, -4)) == 7


class TestGridModel:
    """Test GridModel occupancy queries"""

    @pytest.fixture
    def model(self):
        state = NavigationState(
            snake=[(2, 1), (1, 1), (0, 1)],
            food=(3, 3),
            grid_width=5,
            grid_height=4
        )
        return GridModel(state)

    def test_properties(self, model):
        assert model.head == (2, 1)
        assert model.tail == (0, 1)
        assert model.length == 3
        assert model.cell_count == 20
        assert model.fill_ratio == pytest.approx(0.15)

    def test_flat_occupancy(self, model):
        """Occupancy array is indexed y * width + x"""
        assert model.occupancy.shape == (20,)
        assert model.occupancy[1 * 5 + 2]
        assert model.occupancy.sum() == 3

    def test_out_of_bounds_is_occupied(self, model):
        for pos in [(-1, 0), (5, 0), (0, -1), (0, 4)]:
            assert model.is_occupied(pos)
            assert model.is_body(pos)

    def test_tail_is_free(self, model):
        """The tail vacates this tick so it does not count as a collision"""
        assert not model.is_occupied((0, 1))
        assert model.is_body((0, 1))

    def test_body_is_occupied(self, model):
        assert model.is_occupied((1, 1))
        assert model.is_occupied((2, 1))
        assert not model.is_occupied((3, 1))

    def test_free_moves(self, model):
        """Only non-colliding moves, in UP, RIGHT, DOWN, LEFT order"""
        moves = model.free_moves()
        assert moves == [
            (Direction.UP, (2, 0)),
            (Direction.RIGHT, (3, 1)),
            (Direction.DOWN, (2, 2)),
        ]


if __name__ == '__main__':
    pytest.main([__file__, '-v'])

"""
Grid Model

Per-tick, read-only view of the board used by the navigation agents:
- Direction enum with reversal math
- NavigationState, the input handed to an agent every tick
- GridModel, a flat occupancy array indexed by y * width + x
"""

import numpy as np
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Sequence, Tuple

Position = Tuple[int, int]


class Direction(IntEnum):
    """Cardinal directions for snake movement"""
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    @property
    def delta(self) -> Tuple[int, int]:
        """(dx, dy) unit vector for this direction"""
        return _DELTAS[self]

    @property
    def opposite(self) -> 'Direction':
        return Direction((self + 2) % 4)

    def is_reversal_of(self, other: 'Direction') -> bool:
        """Check if two directions are opposite (180 degrees apart)"""
        return other == self.opposite


_DELTAS = {
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
}


def step(pos: Position, direction: Direction) -> Position:
    """Position reached by moving one cell in direction"""
    dx, dy = direction.delta
    return (pos[0] + dx, pos[1] + dy)


def manhattan_distance(pos1: Position, pos2: Position) -> int:
    """Calculate Manhattan distance between two positions"""
    return abs(pos1[0] - pos2[0]) + abs(pos1[1] - pos2[1])


def direction_between(src: Position, dst: Position) -> Direction:
    """
    Convert the delta between two 4-adjacent cells into a direction.

    Raises:
        ValueError: if the cells are not 4-adjacent
    """
    dx = dst[0] - src[0]
    dy = dst[1] - src[1]
    if dy == -1 and dx == 0:
        return Direction.UP
    elif dx == 1 and dy == 0:
        return Direction.RIGHT
    elif dy == 1 and dx == 0:
        return Direction.DOWN
    elif dx == -1 and dy == 0:
        return Direction.LEFT
    raise ValueError(f"{src} and {dst} are not adjacent")


@dataclass(frozen=True)
class NavigationState:
    """
    Everything an agent may read during one tick.

    Owned by the tick driver; agents never mutate it.
    """
    snake: Sequence[Position]
    food: Optional[Position]
    grid_width: int
    grid_height: int
    current_direction: Direction = Direction.RIGHT


class GridModel:
    """
    Read-only occupancy view of a NavigationState.

    Occupancy is stored as a flat boolean array so lookups are a single
    index operation instead of a scan over the snake body.
    """

    def __init__(self, state: NavigationState):
        self.width = state.grid_width
        self.height = state.grid_height
        self.snake: List[Position] = list(state.snake)
        self.food = state.food

        self.occupancy = np.zeros(self.width * self.height, dtype=bool)
        for x, y in self.snake:
            if self.in_bounds((x, y)):
                self.occupancy[y * self.width + x] = True

    @property
    def head(self) -> Position:
        return self.snake[0]

    @property
    def tail(self) -> Position:
        return self.snake[-1]

    @property
    def length(self) -> int:
        return len(self.snake)

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    @property
    def fill_ratio(self) -> float:
        """Fraction of the board covered by the snake"""
        return self.length / self.cell_count

    def flat_index(self, pos: Position) -> int:
        return pos[1] * self.width + pos[0]

    def in_bounds(self, pos: Position) -> bool:
        """Check if position is within grid bounds"""
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def is_body(self, pos: Position) -> bool:
        """True for any snake segment, tail included. Out of bounds counts as blocked."""
        if not self.in_bounds(pos):
            return True
        return bool(self.occupancy[self.flat_index(pos)])

    def is_occupied(self, pos: Position) -> bool:
        """
        Check if moving the head onto pos would collide.

        The tail is treated as free since it moves away on the same tick.
        Food never sits on the tail, so a move onto the tail is never an
        eating move and the exemption always holds.
        """
        if not self.in_bounds(pos):
            return True
        if pos == self.tail:
            return False
        return bool(self.occupancy[self.flat_index(pos)])

    def free_moves(self, head: Optional[Position] = None) -> List[Tuple[Direction, Position]]:
        """Non-colliding (direction, position) pairs from head in UP, RIGHT, DOWN, LEFT order"""
        head = self.head if head is None else head
        moves = []
        for direction in Direction:
            pos = step(head, direction)
            if not self.is_occupied(pos):
                moves.append((direction, pos))
        return moves

"""
Hamiltonian Cycle Construction

Builds a closed tour that visits every cell of a width x height grid
exactly once, plus a flat lookup table from cell to position in the tour.
Following the tour guarantees:
- No self-collision
- Eventually eating all food
- Ability to fill the entire grid

Grids with both sides odd have no such tour. For those a near tour is built
that leaves out the bottom-right corner; the corner is reached by a detour
between its two neighbours on the tour.
"""

import numpy as np
from typing import List, Optional, Tuple

from snakenav.grid import Position, manhattan_distance


class CycleConstructionError(ValueError):
    """Raised when no Hamiltonian cycle exists for the requested grid"""


def build_cycle(width: int, height: int,
                skip_corner: bool = False) -> Tuple[List[Position], np.ndarray]:
    """
    Compute a Hamiltonian cycle using a column sweep.

    Pattern for an even width (4x4 shown):
    - Column 0: go down from (0,0) to (0,3)
    - Column 1: go up from (1,3) to (1,1) (stop at y=1, not y=0)
    - Column 2: go down from (2,1) to (2,3)
    - Continue this pattern...
    - Row 0: reserved for the return path going left

    When the width is odd but the height is even the same sweep runs over
    rows instead, with column 0 reserved for the return path. A grid with
    both sides odd has an odd number of cells and no Hamiltonian cycle.

    Args:
        width: Grid width
        height: Grid height
        skip_corner: On an odd x odd grid, return a cycle over every cell
            except (width-1, height-1) instead of raising

    Returns:
        (cycle, index) where cycle lists every (x, y) once and index is a
        flat int array with index[y * width + x] == position in cycle

    Raises:
        ValueError: if either side is smaller than 2
        CycleConstructionError: if both sides are odd and skip_corner is off
    """
    if width < 2 or height < 2:
        raise ValueError(f"Grid must be at least 2x2, got {width}x{height}")

    if width % 2 == 0:
        cycle = _column_sweep(width, height)
    elif height % 2 == 0:
        # Same sweep on the transposed grid
        cycle = [(x, y) for y, x in _column_sweep(height, width)]
    elif skip_corner:
        cycle = _corner_skipping_sweep(width, height)
    else:
        raise CycleConstructionError(
            f"No Hamiltonian cycle exists on a {width}x{height} grid (both sides odd)"
        )

    return cycle, build_index(cycle, width, height)


def _column_sweep(width: int, height: int) -> List[Position]:
    """Sweep for an even width; row 0 carries the path back to the start"""
    cycle = [(0, y) for y in range(height)]

    for x in range(1, width):
        if x % 2 == 1:
            # Odd columns: go up from (height-1) to (1)
            for y in range(height - 1, 0, -1):
                cycle.append((x, y))
        else:
            # Even columns: go down from (1) to (height-1)
            for y in range(1, height):
                cycle.append((x, y))

    # Return left along the top row (from the last column to column 1)
    for x in range(width - 1, 0, -1):
        cycle.append((x, 0))

    return cycle


def _corner_skipping_sweep(width: int, height: int) -> List[Position]:
    """
    Row sweep for an odd x odd grid covering all cells but the bottom-right.

    Pattern (5x5 shown, X is left out):
    - Row 0: go right from (0,0) to (4,0)
    - Rows 1..2: zig-zag over columns 1..4
    - Rows 3..4: weave up and down through columns 3..1, starting at (4,3)
    - Column 0: return up from (0,4) to (0,1)
    """
    cycle = [(x, 0) for x in range(width)]

    for y in range(1, height - 2):
        if y % 2 == 1:
            xs = range(width - 1, 0, -1)
        else:
            xs = range(1, width)
        cycle.extend((x, y) for x in xs)

    # Last two rows, skipping the corner
    cycle.append((width - 1, height - 2))
    for i, x in enumerate(range(width - 2, 0, -1)):
        if i % 2 == 0:
            cycle.extend([(x, height - 2), (x, height - 1)])
        else:
            cycle.extend([(x, height - 1), (x, height - 2)])

    cycle.extend((0, y) for y in range(height - 1, 0, -1))
    return cycle


def build_index(cycle: List[Position], width: int, height: int) -> np.ndarray:
    """Flat cell -> cycle position table; -1 marks cells missing from the cycle"""
    index = np.full(width * height, -1, dtype=np.int64)
    for i, (x, y) in enumerate(cycle):
        index[y * width + x] = i
    return index


def validate_cycle(cycle: List[Position], width: int, height: int,
                   omitted: Optional[Position] = None) -> bool:
    """
    Check the Hamiltonian cycle invariants.

    - exactly width * height cells (less the omitted one), each in bounds
      and appearing once
    - every consecutive pair (including last -> first) is 4-adjacent
    """
    expected = width * height - (1 if omitted is not None else 0)
    if len(cycle) != expected:
        return False
    if len(set(cycle)) != len(cycle):
        return False
    if omitted is not None and omitted in cycle:
        return False
    if any(not (0 <= x < width and 0 <= y < height) for x, y in cycle):
        return False
    return all(
        manhattan_distance(cycle[i], cycle[(i + 1) % len(cycle)]) == 1
        for i in range(len(cycle))
    )


class CycleIndex:
    """
    Hamiltonian cycle plus its flat lookup table for one grid size.

    Built once and replaced wholesale whenever the grid is resized. On an
    odd x odd grid the bottom-right corner is left out: `omitted` names it,
    and the corner sits between `detour_entry` and `detour_exit` (two cycle
    positions apart, both adjacent to it).
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.cycle, self.index = build_cycle(width, height, skip_corner=True)

        self.omitted: Optional[Position] = None
        self.detour_entry = -1
        self.detour_exit = -1
        if len(self.cycle) < width * height:
            self.omitted = (width - 1, height - 1)
            self.detour_entry = self.index_of((width - 1, height - 2))
            self.detour_exit = self.index_of((width - 2, height - 1))

    def __len__(self) -> int:
        return len(self.cycle)

    def matches(self, width: int, height: int) -> bool:
        return self.width == width and self.height == height

    def index_of(self, pos: Position) -> int:
        """Position in cycle, or -1 if pos is off the grid or left out"""
        x, y = pos
        if not (0 <= x < self.width and 0 <= y < self.height):
            return -1
        return int(self.index[y * self.width + x])

    def target_index(self, pos: Position) -> int:
        """Like index_of, but the omitted corner maps to its detour entry"""
        if pos == self.omitted:
            return self.detour_entry
        return self.index_of(pos)

    def cell_at(self, idx: int) -> Position:
        return self.cycle[idx % len(self.cycle)]

    def distance(self, from_idx: int, to_idx: int) -> int:
        """Forward distance along the cycle from one index to another"""
        return (to_idx - from_idx) % len(self.cycle)

"""
Shortest Path Planning using A*

Shared by both navigation agents. Finds the optimal 4-connected route
between two cells while avoiding blocked cells.
"""

from heapq import heappush, heappop
from typing import Callable, List, Optional

from snakenav.grid import Direction, Position, manhattan_distance, step


class PathPlanner:
    """
    A* pathfinding over a width x height grid

    - Uniform step cost of 1
    - Manhattan distance heuristic (admissible and consistent)
    - Ties on f broken by first insertion into the open set
    """

    def __init__(self, width: int, height: int):
        """
        Args:
            width: Number of columns
            height: Number of rows
        """
        self.width = width
        self.height = height

    def find_path(
        self,
        start: Position,
        goal: Position,
        is_blocked: Callable[[Position], bool]
    ) -> Optional[List[Position]]:
        """
        A* pathfinding algorithm

        Args:
            start: Starting cell (never checked against is_blocked)
            goal: Target cell
            is_blocked: Predicate returning True for cells that cannot be entered

        Returns:
            List of positions from start to goal inclusive, or None if no path
        """
        if start == goal:
            return [start]

        size = self.width * self.height
        g_score = [-1] * size
        came_from = [-1] * size
        order = [-1] * size  # first insertion rank into the open set
        closed = [False] * size

        start_key = self._key(start)
        g_score[start_key] = 0
        order[start_key] = 0
        inserted = 1

        # Priority queue: (f_score, insertion_rank, position)
        heap = [(manhattan_distance(start, goal), 0, start)]

        while heap:
            f_score, _, current = heappop(heap)
            current_key = self._key(current)

            # Stale entry left behind by a score update
            if closed[current_key] or f_score != g_score[current_key] + manhattan_distance(current, goal):
                continue

            if current == goal:
                return self._reconstruct_path(came_from, current)

            closed[current_key] = True

            for neighbor in self.neighbors(current):
                neighbor_key = self._key(neighbor)
                if closed[neighbor_key] or is_blocked(neighbor):
                    continue

                tentative_g = g_score[current_key] + 1
                if order[neighbor_key] == -1:
                    order[neighbor_key] = inserted
                    inserted += 1
                elif tentative_g >= g_score[neighbor_key]:
                    # Not a better path
                    continue

                came_from[neighbor_key] = current_key
                g_score[neighbor_key] = tentative_g
                heappush(heap, (
                    tentative_g + manhattan_distance(neighbor, goal),
                    order[neighbor_key],
                    neighbor
                ))

        # No path found
        return None

    def neighbors(self, pos: Position) -> List[Position]:
        """In-bounds neighbours in UP, RIGHT, DOWN, LEFT order"""
        result = []
        for direction in Direction:
            nx, ny = step(pos, direction)
            if 0 <= nx < self.width and 0 <= ny < self.height:
                result.append((nx, ny))
        return result

    def _key(self, pos: Position) -> int:
        return pos[1] * self.width + pos[0]

    def _reconstruct_path(self, came_from: List[int], current: Position) -> List[Position]:
        """Walk parent links back to the start"""
        path = [current]
        key = self._key(current)
        while came_from[key] != -1:
            key = came_from[key]
            path.append((key % self.width, key // self.width))
        path.reverse()
        return path

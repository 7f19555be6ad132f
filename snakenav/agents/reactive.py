"""
Reactive Agent using A* Algorithm

Deterministic agent that takes the shortest path to food, falling back to
a greedy Manhattan heuristic when the food is walled off.
"""

import logging
from typing import List

from snakenav.agents.base import NavigationAgent
from snakenav.grid import (
    Direction,
    GridModel,
    NavigationState,
    direction_between,
    step,
)
from snakenav.pathfinding import PathPlanner

logger = logging.getLogger(__name__)

# Order used when scanning for any survivable move
SCAN_ORDER = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


class ReactiveAgent(NavigationAgent):
    """
    A* pathfinding agent

    Plans a path to food treating every snake segment as an obstacle.
    Holds no state between ticks.
    """

    name = 'reactive'

    def determine_next_move(self, state: NavigationState) -> Direction:
        model = GridModel(state)
        head = model.head

        if state.food is not None:
            planner = PathPlanner(model.width, model.height)
            path = planner.find_path(head, state.food, model.is_body)

            if path and len(path) > 1:
                return direction_between(head, path[1])

            logger.debug("No path from %s to food at %s, using greedy fallback", head, state.food)

        return self._greedy_direction(model, state)

    def _greedy_direction(self, model: GridModel, state: NavigationState) -> Direction:
        """
        Simple direction finding as a fallback

        Tries the directions that close the larger axis gap first, then any
        direction that does not collide, then gives up and keeps going.
        """
        head = model.head
        candidates = self._preferred_directions(head, state.food) + list(SCAN_ORDER)

        for direction in candidates:
            if not model.is_occupied(step(head, direction)):
                return direction

        # All blocked, keep going straight (will die)
        logger.debug("All directions blocked at %s", head)
        return state.current_direction

    def _preferred_directions(self, head, food) -> List[Direction]:
        if food is None:
            return []

        x_diff = food[0] - head[0]
        y_diff = food[1] - head[1]

        horizontal = []
        if x_diff > 0:
            horizontal.append(Direction.RIGHT)
        elif x_diff < 0:
            horizontal.append(Direction.LEFT)

        vertical = []
        if y_diff > 0:
            vertical.append(Direction.DOWN)
        elif y_diff < 0:
            vertical.append(Direction.UP)

        if abs(x_diff) > abs(y_diff):
            return horizontal + vertical
        return vertical + horizontal

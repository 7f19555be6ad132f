"""
Cycle-Safe Agent

Agent that follows a pre-computed Hamiltonian cycle through the grid and
takes shortcuts toward the food while the board is still sparse.

Following the cycle strictly can never collide: the head only ever steps
onto cells the tail has already left, in the same cyclic order. Shortcuts
are admitted by cheap heuristics (is_virtually_safe, is_safe_to_advance)
rather than a full reachability proof, so a shortcut taken late in the
game can still trap the snake.
"""

import logging
from enum import Enum
from typing import Optional

from snakenav.agents.base import NavigationAgent
from snakenav.config import CycleSafeConfig
from snakenav.grid import (
    Direction,
    GridModel,
    NavigationState,
    Position,
    direction_between,
    manhattan_distance,
)
from snakenav.hamiltonian import CycleIndex
from snakenav.pathfinding import PathPlanner

logger = logging.getLogger(__name__)


class Mode(Enum):
    """How the last move was chosen"""
    SHORTCUT_SEEKING = 'shortcut_seeking'
    SAFE_CYCLE_FOLLOWING = 'safe_cycle_following'
    EMERGENCY = 'emergency'


class CycleSafeAgent(NavigationAgent):
    """
    Hamiltonian cycle agent with heuristic shortcuts.

    Mode is re-derived from the fill ratio on every tick:
    - fill above the safety threshold: follow the cycle strictly
    - otherwise: try shortcuts, falling back to the cycle

    The agent is only loss-proof above half fill; shortcuts taken below it can
    leave the body out of cycle order and trap the snake later.

    On grids with both sides odd the cycle leaves out one corner. Food there
    is reached by a detour from the cell before it, and a head on the corner
    rejoins the cycle two positions further on.
    """

    name = 'cycle_safe'

    def __init__(self, config: Optional[CycleSafeConfig] = None):
        """
        Args:
            config: Threshold settings, defaults to CycleSafeConfig()
        """
        self.config = config if config is not None else CycleSafeConfig()
        self.cycle: Optional[CycleIndex] = None
        self.last_mode: Optional[Mode] = None

    def reset(self, width: int, height: int):
        """Discard the current cycle and build one for the new grid"""
        logger.debug("Building Hamiltonian cycle for %dx%d grid", width, height)
        self.cycle = CycleIndex(width, height)
        if self.cycle.omitted is not None:
            logger.info("No Hamiltonian cycle on %dx%d grid, leaving out corner %s",
                        width, height, self.cycle.omitted)

    def _ensure_cycle(self, width: int, height: int) -> CycleIndex:
        if self.cycle is None or not self.cycle.matches(width, height):
            self.reset(width, height)
        return self.cycle

    def determine_next_move(self, state: NavigationState) -> Direction:
        cycle = self._ensure_cycle(state.grid_width, state.grid_height)
        model = GridModel(state)
        head = model.head

        if head == cycle.omitted:
            self.last_mode = Mode.SAFE_CYCLE_FOLLOWING
            return self._leave_detour(model)

        head_idx = cycle.index_of(head)
        food_idx = cycle.target_index(state.food) if state.food is not None else head_idx
        if head_idx == -1 or food_idx == -1:
            logger.warning("Position not in cycle (head=%s, food=%s), using emergency scan",
                           head, state.food)
            self.last_mode = Mode.EMERGENCY
            return self._emergency_direction(model)

        fill = model.fill_ratio
        if fill > self.config.safety_threshold(fill) or state.food is None:
            self.last_mode = Mode.SAFE_CYCLE_FOLLOWING
            return self.follow_cycle(state)

        self.last_mode = Mode.SHORTCUT_SEEKING
        direction = self._seek_shortcut(model, head_idx, food_idx)
        if direction is not None:
            return direction

        logger.debug("No shortcut from %s, following cycle", head)
        self.last_mode = Mode.SAFE_CYCLE_FOLLOWING
        return self.follow_cycle(state)

    def follow_cycle(self, state: NavigationState) -> Direction:
        """Direction to the head's successor in cycle order"""
        cycle = self._ensure_cycle(state.grid_width, state.grid_height)
        model = GridModel(state)
        head = model.head
        if head == cycle.omitted:
            return self._leave_detour(model)

        head_idx = cycle.index_of(head)
        if head_idx == -1:
            return self._emergency_direction(model)

        # Food on the omitted corner: step in from the detour entry
        if (state.food is not None and state.food == cycle.omitted
                and head_idx == cycle.detour_entry and not model.is_occupied(state.food)):
            return direction_between(head, state.food)

        return direction_between(head, cycle.cell_at(head_idx + 1))

    def _leave_detour(self, model: GridModel) -> Direction:
        """From the omitted corner back onto the cycle at the detour exit"""
        exit_cell = self.cycle.cell_at(self.cycle.detour_exit)
        if not model.is_occupied(exit_cell):
            return direction_between(model.head, exit_cell)
        return self._emergency_direction(model)

    def _seek_shortcut(self, model: GridModel, head_idx: int, food_idx: int) -> Optional[Direction]:
        """Try progressively more aggressive shortcuts; None if none applies"""
        cfg = self.config
        cycle = self.cycle
        n = len(cycle)
        head = model.head
        food = model.food
        fill = model.fill_ratio
        planner = PathPlanner(model.width, model.height)

        # 1. Mostly empty board: plain shortest path
        path = None
        if fill < cfg.direct_path_fill:
            path = planner.find_path(head, food, model.is_body)
            if path and len(path) > 1:
                return direction_between(head, path[1])

        # 2. Greedy neighbour that keeps us roughly in cycle order
        if fill < cfg.neighbour_search_fill:
            head_distance = manhattan_distance(head, food)
            moves = sorted(model.free_moves(), key=lambda m: manhattan_distance(m[1], food))
            for direction, pos in moves:
                if not self.is_virtually_safe(pos, head, model):
                    continue
                to_food = cycle.distance(cycle.target_index(pos), food_idx)
                if to_food < n / 2 or manhattan_distance(pos, food) < head_distance:
                    return direction

        # 3. Food is just ahead on the cycle
        if cycle.distance(head_idx, food_idx) < n * cfg.cycle_lookahead:
            next_cell = cycle.cell_at(head_idx + 1)
            if not model.is_occupied(next_cell):
                return direction_between(head, next_cell)

        # 4. Retry the shortest path, this time with a safety check
        if fill < cfg.retry_path_fill:
            if fill >= cfg.direct_path_fill:
                path = planner.find_path(head, food, model.is_body)
            if path and len(path) > 1 and self.is_virtually_safe(path[1], head, model):
                return direction_between(head, path[1])

        # 5. Score every reachable move
        best_direction = None
        best_score = None
        for direction, pos in model.free_moves():
            pos_idx = cycle.target_index(pos)
            advance = cycle.distance(head_idx, pos_idx)
            distance = manhattan_distance(pos, food)
            if self.is_safe_to_advance(pos_idx, head_idx, model):
                score = 2 * (n - advance) - 3 * distance
            else:
                score = (n - advance) - distance
            if best_score is None or score > best_score:
                best_direction, best_score = direction, score

        return best_direction

    def is_virtually_safe(self, candidate: Position, head: Position, model: GridModel) -> bool:
        """
        Heuristic check that moving the head to candidate will not trap the snake.

        Args:
            candidate: Cell the head would move to
            head: Current head cell
            model: Grid view for this tick

        Returns:
            True if the move is considered safe
        """
        cfg = self.config

        # Too short to trap itself
        if model.length < cfg.min_trap_length:
            return True

        # The tail will have moved on by the time the head arrives
        if candidate == model.tail:
            return True

        cycle = self._ensure_cycle(model.width, model.height)
        n = len(cycle)
        head_idx = cycle.target_index(head)
        candidate_idx = cycle.target_index(candidate)
        tail_idx = cycle.target_index(model.tail)

        # Moving forward in cycle order
        if cycle.distance(head_idx, candidate_idx) <= n / 2:
            return True

        # Moving backward: only with the tail close ahead
        tail_distance = cycle.distance(head_idx, tail_idx)
        if 0 < tail_distance < n / 2:
            return True

        return (cycle.distance(candidate_idx, tail_idx) < n / 2
                and model.length < cfg.backtrack_fill * model.cell_count)

    def is_safe_to_advance(self, candidate_idx: int, head_idx: int, model: GridModel) -> bool:
        """
        Check whether jumping from head_idx to candidate_idx along the cycle is safe.

        Short jumps (at most half the cycle) always are. Longer ones are allowed
        only for a short snake whose tail is further ahead than the jump.
        """
        cycle = self._ensure_cycle(model.width, model.height)
        n = len(cycle)
        advance = cycle.distance(head_idx, candidate_idx)
        if advance <= n / 2:
            return True

        if model.fill_ratio < self.config.advance_fill:
            tail_distance = cycle.distance(head_idx, cycle.target_index(model.tail))
            return tail_distance > advance

        return False

    def _emergency_direction(self, model: GridModel) -> Direction:
        """First non-colliding direction in UP, RIGHT, DOWN, LEFT order"""
        moves = model.free_moves()
        if moves:
            return moves[0][0]
        logger.debug("All directions blocked at %s", model.head)
        return self.config.default_direction

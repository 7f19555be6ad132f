"""
Single Snake Environment - Gymnasium Compatible

Headless tick driver for the navigation agents:
- Absolute action space (UP, RIGHT, DOWN, LEFT)
- Rectangular grids, resizable on reset
- Board-full detection (the snake covers every cell)
"""

import numpy as np
import gymnasium as gym
from gymnasium import spaces
from typing import Dict, List, Optional, Tuple

from snakenav.grid import Direction, NavigationState, Position, manhattan_distance, step


class SnakeEnv(gym.Env):
    """
    Single Snake Environment

    Observation:
        Multi-channel grid (H x W x 3): head, body, food

    Actions:
        4 absolute actions (0=UP, 1=RIGHT, 2=DOWN, 3=LEFT). A reversal of
        the current direction is ignored and the snake keeps going straight.

    Reward:
        - Food: +10
        - Death: -10
        - Board full: +100
        - Step penalty: -0.01

    Termination causes (info['death_cause']):
        'wall', 'self', 'board_full', or 'timeout' on truncation
    """

    def __init__(
        self,
        grid_width: int = 30,
        grid_height: int = 20,
        max_steps: int = 20000,
        reward_food: float = 10.0,
        reward_death: float = -10.0,
        reward_step: float = -0.01,
        reward_board_full: float = 100.0,
        seed: Optional[int] = None
    ):
        super().__init__()

        self.max_steps = max_steps

        # Rewards
        self.reward_food = reward_food
        self.reward_death = reward_death
        self.reward_step = reward_step
        self.reward_board_full = reward_board_full

        self.action_space = spaces.Discrete(4)
        self._resize(grid_width, grid_height)

        # Game state
        self.snake: List[Position] = []  # head at index 0
        self.direction = Direction.RIGHT
        self.food: Optional[Position] = None
        self.steps = 0
        self.score = 0
        self.done = False
        self.death_cause: Optional[str] = None

        if seed is not None:
            self.seed(seed)

    def _resize(self, grid_width: int, grid_height: int):
        if grid_width < 2 or grid_height < 2:
            raise ValueError(f"Grid must be at least 2x2, got {grid_width}x{grid_height}")
        self.grid_width = grid_width
        self.grid_height = grid_height
        self.observation_space = spaces.Box(
            low=0, high=1,
            shape=(grid_height, grid_width, 3),
            dtype=np.float32
        )

    def seed(self, seed: Optional[int] = None):
        """Set random seed for reproducibility"""
        self.np_random, seed = gym.utils.seeding.np_random(seed)
        return [seed]

    def reset(
        self,
        seed: Optional[int] = None,
        options: Optional[dict] = None
    ) -> Tuple[np.ndarray, Dict]:
        """
        Reset environment to initial state

        Options:
            grid_width, grid_height: resize the board
            snake: explicit body, head first
            food: explicit food cell
            direction: initial Direction
        """
        super().reset(seed=seed)
        options = options or {}

        if 'grid_width' in options or 'grid_height' in options:
            self._resize(
                options.get('grid_width', self.grid_width),
                options.get('grid_height', self.grid_height)
            )

        if 'snake' in options:
            self.snake = [tuple(pos) for pos in options['snake']]
            self._validate_snake(self.snake)
        else:
            # Start with a snake of length 3 in the middle of the grid
            center_x = self.grid_width // 2
            center_y = self.grid_height // 2
            self.snake = [
                (center_x, center_y),
                (center_x - 1, center_y),
                (center_x - 2, center_y)
            ]
        self.direction = Direction(options.get('direction', Direction.RIGHT))

        if options.get('food') is not None:
            self.food = tuple(options['food'])
            self._validate_food(self.food)
        else:
            self._spawn_food()

        # Reset counters
        self.steps = 0
        self.score = 0
        self.done = False
        self.death_cause = None

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Execute one step in the environment

        Returns:
            observation, reward, terminated, truncated, info
        """
        if self.done:
            raise RuntimeError("Episode is done. Call reset() to start a new episode.")

        new_direction = Direction(action)

        # Prevent 180-degree turns
        if new_direction.is_reversal_of(self.direction):
            new_direction = self.direction

        self.direction = new_direction
        new_head = step(self.snake[0], self.direction)

        terminated = False
        reward = self.reward_step

        if not self._is_within_bounds(new_head):
            terminated = True
            reward = self.reward_death
            self.death_cause = 'wall'
        # The tail moves away this tick, so only the rest of the body counts
        elif new_head in self.snake[:-1]:
            terminated = True
            reward = self.reward_death
            self.death_cause = 'self'
        else:
            self.snake.insert(0, new_head)

            if new_head == self.food:
                reward = self.reward_food
                self.score += 1
                self._spawn_food()
                if self.food is None:
                    # Grid is full (snake won!)
                    terminated = True
                    reward = self.reward_board_full
                    self.death_cause = 'board_full'
            else:
                # Remove tail if no food eaten
                self.snake.pop()

        self.steps += 1

        # Check truncation (max steps)
        truncated = not terminated and self.steps >= self.max_steps
        if truncated:
            self.death_cause = 'timeout'

        self.done = terminated or truncated

        return self._get_observation(), reward, terminated, truncated, self._get_info()

    def get_state(self) -> NavigationState:
        """Snapshot handed to the navigation agent each tick"""
        return NavigationState(
            snake=tuple(self.snake),
            food=self.food,
            grid_width=self.grid_width,
            grid_height=self.grid_height,
            current_direction=self.direction
        )

    @property
    def board_full(self) -> bool:
        return len(self.snake) >= self.grid_width * self.grid_height

    def _is_within_bounds(self, pos: Position) -> bool:
        """Check if position is within grid bounds"""
        x, y = pos
        return 0 <= x < self.grid_width and 0 <= y < self.grid_height

    def _validate_snake(self, snake: List[Position]):
        """Reject bodies that could not arise from play"""
        if not snake:
            raise ValueError("Snake must have at least one segment")
        for pos in snake:
            if not self._is_within_bounds(pos):
                raise ValueError(f"Snake segment {pos} is outside the {self.grid_width}x{self.grid_height} grid")
        if len(set(snake)) != len(snake):
            raise ValueError(f"Snake has repeated segments: {snake}")
        for a, b in zip(snake, snake[1:]):
            if manhattan_distance(a, b) != 1:
                raise ValueError(f"Snake segments {a} and {b} are not adjacent")

    def _validate_food(self, food: Position):
        if not self._is_within_bounds(food):
            raise ValueError(f"Food {food} is outside the {self.grid_width}x{self.grid_height} grid")
        if food in self.snake:
            raise ValueError(f"Food {food} lies on the snake")

    def _spawn_food(self):
        """Spawn food at random empty position"""
        occupied = set(self.snake)
        empty_cells = [
            (x, y)
            for y in range(self.grid_height)
            for x in range(self.grid_width)
            if (x, y) not in occupied
        ]

        if empty_cells:
            self.food = empty_cells[self.np_random.integers(0, len(empty_cells))]
        else:
            self.food = None

    def _get_observation(self) -> np.ndarray:
        """
        Get multi-channel grid representation:
        Channel 0: Snake head position
        Channel 1: Snake body positions
        Channel 2: Food position
        """
        grid = np.zeros((self.grid_height, self.grid_width, 3), dtype=np.float32)

        if self.snake:
            head_x, head_y = self.snake[0]
            if self._is_within_bounds((head_x, head_y)):
                grid[head_y, head_x, 0] = 1.0

        for x, y in self.snake[1:]:
            grid[y, x, 1] = 1.0

        if self.food:
            food_x, food_y = self.food
            grid[food_y, food_x, 2] = 1.0

        return grid

    def _get_info(self) -> Dict:
        """Get additional information about current state"""
        return {
            'score': self.score,
            'steps': self.steps,
            'snake_length': len(self.snake),
            'death_cause': self.death_cause
        }

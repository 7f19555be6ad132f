"""
Configuration dataclasses for the navigation agents and evaluation runs
"""

from dataclasses import dataclass, asdict

from snakenav.grid import Direction


@dataclass
class CycleSafeConfig:
    """
    Fill-ratio thresholds for the cycle-safe agent.

    Attributes:
        threshold_low: Cycle-following threshold while fill <= high_fill
        threshold_high: Cycle-following threshold once fill > high_fill
        high_fill: Fill ratio above which the stricter threshold applies
        direct_path_fill: Below this fill, trust a plain A* path to food
        neighbour_search_fill: Below this fill, try greedy neighbour shortcuts
        retry_path_fill: Below this fill, retry A* with a safety check
        cycle_lookahead: Fraction of the cycle within which food counts as "just ahead"
        min_trap_length: Snakes shorter than this cannot trap themselves
        backtrack_fill: Backward shortcuts are allowed only below this fill
        advance_fill: Long cycle jumps are allowed only below this fill
        default_direction: Returned when every move collides and the head is off-cycle
    """
    threshold_low: float = 0.7
    threshold_high: float = 0.5
    high_fill: float = 0.5
    direct_path_fill: float = 0.3
    neighbour_search_fill: float = 0.6
    retry_path_fill: float = 0.5
    cycle_lookahead: float = 1 / 3
    min_trap_length: int = 5
    backtrack_fill: float = 0.4
    advance_fill: float = 0.3
    default_direction: Direction = Direction.UP

    def __post_init__(self):
        fractions = {k: v for k, v in asdict(self).items()
                     if k not in ('min_trap_length', 'default_direction')}
        for name, value in fractions.items():
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
        if self.min_trap_length < 0:
            raise ValueError(f"min_trap_length must be non-negative, got {self.min_trap_length}")
        self.default_direction = Direction(self.default_direction)

    def safety_threshold(self, fill_ratio: float) -> float:
        """Cycle-following threshold for the given fill ratio"""
        return self.threshold_high if fill_ratio > self.high_fill else self.threshold_low


@dataclass
class EvaluationConfig:
    """Settings for a batch of evaluation episodes"""
    agent: str = 'cycle_safe'
    grid_width: int = 30
    grid_height: int = 20
    num_episodes: int = 10
    max_steps: int = 20000
    seed: int = 42

    def __post_init__(self):
        if self.grid_width < 2 or self.grid_height < 2:
            raise ValueError(f"Grid must be at least 2x2, got {self.grid_width}x{self.grid_height}")
        if self.num_episodes < 1:
            raise ValueError(f"num_episodes must be positive, got {self.num_episodes}")
        if self.max_steps < 1:
            raise ValueError(f"max_steps must be positive, got {self.max_steps}")

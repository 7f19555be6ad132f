"""
Snake Navigation Engine

This package contains the components for autonomous grid-snake navigation:
- Grid model and direction math
- A* path planning
- Hamiltonian cycle construction
- Reactive and cycle-safe navigation agents
- A headless Gymnasium environment for evaluation
"""

from snakenav.agents import CycleSafeAgent, ReactiveAgent, make_agent
from snakenav.config import CycleSafeConfig, EvaluationConfig
from snakenav.environment import SnakeEnv
from snakenav.grid import Direction, GridModel, NavigationState
from snakenav.hamiltonian import CycleConstructionError, CycleIndex, build_cycle
from snakenav.pathfinding import PathPlanner

__all__ = [
    'CycleConstructionError',
    'CycleIndex',
    'CycleSafeAgent',
    'CycleSafeConfig',
    'Direction',
    'EvaluationConfig',
    'GridModel',
    'NavigationState',
    'PathPlanner',
    'ReactiveAgent',
    'SnakeEnv',
    'build_cycle',
    'make_agent',
]

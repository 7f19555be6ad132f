"""
Navigation Agents

Deterministic, non-learning controllers that pick one direction per tick:
- ReactiveAgent: A* to food, greedy fallback
- CycleSafeAgent: Hamiltonian cycle with heuristic shortcuts
"""

from typing import Optional

from snakenav.agents.base import NavigationAgent
from snakenav.agents.cycle_safe import CycleSafeAgent, Mode
from snakenav.agents.reactive import ReactiveAgent
from snakenav.config import CycleSafeConfig

AGENTS = {
    'reactive': ReactiveAgent,
    'cycle_safe': CycleSafeAgent,
}


def make_agent(agent_type: str, config: Optional[CycleSafeConfig] = None) -> NavigationAgent:
    """
    Factory function to create navigation agents.

    Args:
        agent_type: One of 'reactive', 'cycle_safe'
        config: Threshold settings, only used by 'cycle_safe'

    Returns:
        NavigationAgent instance
    """
    if agent_type not in AGENTS:
        raise ValueError(f"Unknown agent type: {agent_type}. Choose from {list(AGENTS.keys())}")

    if agent_type == 'cycle_safe':
        return CycleSafeAgent(config)
    return AGENTS[agent_type]()


__all__ = [
    'AGENTS',
    'CycleSafeAgent',
    'Mode',
    'NavigationAgent',
    'ReactiveAgent',
    'make_agent',
]

"""
Utility functions for evaluating navigation agents
"""

import logging
import random
from typing import Optional

import numpy as np

logger = logging.getLogger(__name__)

OUTCOMES = ('wall', 'self', 'board_full', 'timeout')


class MetricsTracker:
    """
    Track evaluation metrics (scores, lengths, episode outcomes)
    """

    def __init__(self, window_size: int = 100):
        """
        Initialize metrics tracker

        Args:
            window_size: Window size for moving averages
        """
        self.window_size = window_size
        self.episode_lengths = []
        self.episode_scores = []
        self.episode_outcomes = []

    def add_episode(self, length: int, score: int, outcome: str = 'timeout'):
        """
        Record episode metrics including how it ended

        Args:
            length: Episode length in steps
            score: Food items eaten
            outcome: 'wall', 'self', 'board_full', or 'timeout'
        """
        if outcome not in OUTCOMES:
            raise ValueError(f"Unknown outcome: {outcome}. Choose from {list(OUTCOMES)}")
        self.episode_lengths.append(length)
        self.episode_scores.append(score)
        self.episode_outcomes.append(outcome)

    def get_recent_stats(self) -> dict:
        """Get statistics for recent episodes"""
        if not self.episode_scores:
            return {}

        window = min(self.window_size, len(self.episode_scores))
        recent_lengths = self.episode_lengths[-window:]
        recent_scores = self.episode_scores[-window:]

        return {
            'avg_length': float(np.mean(recent_lengths)),
            'avg_score': float(np.mean(recent_scores)),
            'std_score': float(np.std(recent_scores)),
            'max_score': max(recent_scores),
            'episodes': len(self.episode_scores)
        }

    def get_outcome_stats(self) -> dict:
        """Get counts and rates for each episode outcome"""
        total = len(self.episode_outcomes)
        stats = {}
        for outcome in OUTCOMES:
            count = self.episode_outcomes.count(outcome)
            stats[outcome] = count
            stats[f'{outcome}_rate'] = count / total if total else 0.0
        return stats

    def save_to_csv(self, filepath: str):
        """Save metrics to CSV file"""
        import csv

        with open(filepath, 'w', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(['episode', 'length', 'score', 'outcome'])

            for i, (length, score, outcome) in enumerate(
                zip(self.episode_lengths, self.episode_scores, self.episode_outcomes)
            ):
                writer.writerow([i + 1, length, score, outcome])


def set_seed(seed: int):
    """
    Set random seeds for reproducibility

    Args:
        seed: Random seed value
    """
    random.seed(seed)
    np.random.seed(seed)


def run_episode(env, agent, seed: Optional[int] = None, options: Optional[dict] = None) -> dict:
    """
    Play one episode, consulting the agent exactly once per tick.

    Args:
        env: SnakeEnv instance
        agent: NavigationAgent instance
        seed: Seed passed to env.reset
        options: Reset options passed to env.reset

    Returns:
        Final info dict from the environment
    """
    _, info = env.reset(seed=seed, options=options)
    agent.reset(env.grid_width, env.grid_height)

    terminated = truncated = False
    while not (terminated or truncated):
        action = agent.get_action(env)
        _, _, terminated, truncated, info = env.step(action)

    logger.debug("Episode finished: score=%d steps=%d cause=%s",
                 info['score'], info['steps'], info['death_cause'])
    return info

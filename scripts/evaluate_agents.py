"""
Navigation Agent Evaluation Script

Runs the reactive and cycle-safe agents on the headless environment and
prints score, length and outcome statistics for each.
"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

import argparse
import logging
import time

from snakenav.agents import AGENTS, make_agent
from snakenav.config import EvaluationConfig
from snakenav.environment import SnakeEnv
from snakenav.utils import MetricsTracker, run_episode, set_seed


def evaluate_agent(config: EvaluationConfig) -> MetricsTracker:
    """Evaluate one agent over config.num_episodes episodes"""
    set_seed(config.seed)
    env = SnakeEnv(
        grid_width=config.grid_width,
        grid_height=config.grid_height,
        max_steps=config.max_steps,
        seed=config.seed
    )
    agent = make_agent(config.agent)
    metrics = MetricsTracker(window_size=config.num_episodes)

    for episode in range(config.num_episodes):
        info = run_episode(env, agent, seed=config.seed + episode)
        metrics.add_episode(info['steps'], info['score'], info['death_cause'])
        print(f"  Episode {episode + 1}/{config.num_episodes}: "
              f"score={info['score']}, steps={info['steps']}, outcome={info['death_cause']}")

    return metrics


def main():
    parser = argparse.ArgumentParser(description='Evaluate navigation agents')
    parser.add_argument('--agents', nargs='+', default=list(AGENTS.keys()),
                        choices=list(AGENTS.keys()), help='Agents to evaluate')
    parser.add_argument('--width', type=int, default=30, help='Grid width')
    parser.add_argument('--height', type=int, default=20, help='Grid height')
    parser.add_argument('--episodes', type=int, default=10, help='Episodes per agent')
    parser.add_argument('--max-steps', type=int, default=20000, help='Max steps per episode')
    parser.add_argument('--seed', type=int, default=42, help='Random seed')
    parser.add_argument('--output-dir', type=str, default=None,
                        help='Directory for per-agent CSV files')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s %(message)s'
    )

    print("=" * 70)
    print(f"AGENT EVALUATION ({args.width}x{args.height}, {args.episodes} episodes)")
    print("=" * 70)

    results = {}
    for agent_name in args.agents:
        config = EvaluationConfig(
            agent=agent_name,
            grid_width=args.width,
            grid_height=args.height,
            num_episodes=args.episodes,
            max_steps=args.max_steps,
            seed=args.seed
        )
        print(f"\n{agent_name}:")
        start = time.time()
        metrics = evaluate_agent(config)
        elapsed = time.time() - start
        results[agent_name] = (metrics, elapsed)

        if args.output_dir:
            output_dir = Path(args.output_dir)
            output_dir.mkdir(parents=True, exist_ok=True)
            metrics.save_to_csv(str(output_dir / f'{agent_name}_metrics.csv'))

    print("\n" + "=" * 70)
    print("SUMMARY")
    print("=" * 70)
    print(f"{'Agent':<12} {'Avg Score':>10} {'Max':>6} {'Avg Steps':>10} "
          f"{'Full':>6} {'Wall':>6} {'Self':>6} {'Timeout':>8} {'Time':>8}")
    for agent_name, (metrics, elapsed) in results.items():
        stats = metrics.get_recent_stats()
        outcomes = metrics.get_outcome_stats()
        print(f"{agent_name:<12} {stats['avg_score']:>10.2f} {stats['max_score']:>6} "
              f"{stats['avg_length']:>10.1f} {outcomes['board_full']:>6} {outcomes['wall']:>6} "
              f"{outcomes['self']:>6} {outcomes['timeout']:>8} {elapsed:>7.1f}s")


if __name__ == '__main__':
    main()

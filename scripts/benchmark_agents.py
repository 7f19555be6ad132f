"""
Decision Latency Benchmark

Measures how long each agent takes per determine_next_move call across grid
sizes. Every call must fit comfortably inside one game tick.
"""

import sys
from pathlib import Path
sys.path.append(str(Path(__file__).parent.parent))

import argparse
import time

import numpy as np

from snakenav.agents import AGENTS, make_agent
from snakenav.environment import SnakeEnv
from snakenav.utils import set_seed


def benchmark_agent(agent_name: str, width: int, height: int, num_ticks: int, seed: int) -> dict:
    """Time num_ticks decisions, resetting the env whenever an episode ends"""
    set_seed(seed)
    env = SnakeEnv(grid_width=width, grid_height=height, seed=seed)
    agent = make_agent(agent_name)

    env.reset(seed=seed)
    agent.reset(width, height)

    timings = []
    episodes = 1
    for _ in range(num_ticks):
        state = env.get_state()
        start = time.perf_counter()
        direction = agent.determine_next_move(state)
        timings.append(time.perf_counter() - start)

        _, _, terminated, truncated, _ = env.step(int(direction))
        if terminated or truncated:
            env.reset(seed=seed + episodes)
            agent.reset(width, height)
            episodes += 1

    timings_ms = np.array(timings) * 1000.0
    return {
        'mean_ms': float(np.mean(timings_ms)),
        'p99_ms': float(np.percentile(timings_ms, 99)),
        'max_ms': float(np.max(timings_ms)),
        'episodes': episodes,
    }


def main():
    parser = argparse.ArgumentParser(description='Benchmark agent decision latency')
    parser.add_argument('--sizes', nargs='+', default=['10x10', '20x20', '30x20', '40x30'],
                        help='Grid sizes as WIDTHxHEIGHT')
    parser.add_argument('--ticks', type=int, default=2000, help='Decisions timed per run')
    parser.add_argument('--seed', type=int, default=67, help='Random seed')
    args = parser.parse_args()

    print("=" * 70)
    print("DECISION LATENCY BENCHMARK")
    print("=" * 70)
    print(f"{'Agent':<12} {'Grid':>8} {'Mean (ms)':>10} {'P99 (ms)':>10} {'Max (ms)':>10} {'Episodes':>9}")

    for size in args.sizes:
        width, height = (int(v) for v in size.lower().split('x'))
        for agent_name in AGENTS:
            result = benchmark_agent(agent_name, width, height, args.ticks, args.seed)
            print(f"{agent_name:<12} {size:>8} {result['mean_ms']:>10.3f} {result['p99_ms']:>10.3f} "
                  f"{result['max_ms']:>10.3f} {result['episodes']:>9}")


if __name__ == '__main__':
    main()

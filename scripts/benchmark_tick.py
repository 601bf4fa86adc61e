#!/usr/bin/env python3
"""
Tick Throughput Benchmark

Times composite grid ticks at the reference size and compares the mean
against the 35ms animation interval. Reports process memory via psutil.
"""

import sys
import os
import time
import json
import logging
import statistics

import psutil

sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

from lifefeed.core import CompositeGrid, GridConfig
from lifefeed.display import render_frame


def benchmark(config, ticks, warmup=10, include_render=False):
    """Time `ticks` ticks after `warmup` untimed ones."""
    process = psutil.Process(os.getpid())
    memory_before = process.memory_info().rss / 1024 / 1024  # MB

    grid = CompositeGrid(config)
    grid.step(warmup)

    timings = []
    for _ in range(ticks):
        start = time.perf_counter()
        snapshot = grid.tick()
        if include_render:
            render_frame(snapshot)
        timings.append((time.perf_counter() - start) * 1000)

    memory_after = process.memory_info().rss / 1024 / 1024  # MB

    return {
        "config": config.to_dict(),
        "ticks": ticks,
        "include_render": include_render,
        "mean_ms": statistics.mean(timings),
        "median_ms": statistics.median(timings),
        "max_ms": max(timings),
        "budget_ms": config.tick_interval_ms,
        "within_budget": statistics.mean(timings) < config.tick_interval_ms,
        "memory_delta_mb": memory_after - memory_before,
        "final_live_count": grid.live_count(),
    }


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Composite grid tick benchmark")
    parser.add_argument("--ticks", type=int, default=200, help="Timed ticks")
    parser.add_argument("--render", action="store_true", help="Include frame colouring in timing")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")

    args = parser.parse_args()

    results = benchmark(GridConfig.from_env(), args.ticks, include_render=args.render)

    if args.json:
        print(json.dumps(results, indent=2))
    else:
        logger.info(f"Mean tick: {results['mean_ms']:.2f}ms (median {results['median_ms']:.2f}ms, "
                    f"max {results['max_ms']:.2f}ms)")
        logger.info(f"Budget {results['budget_ms']}ms: {'PASS' if results['within_budget'] else 'FAIL'}")
        logger.info(f"Memory delta: {results['memory_delta_mb']:.1f}MB")

    sys.exit(0 if results["within_budget"] else 1)

#!/usr/bin/env python3
"""
Composite Automaton Demonstration Script

Runs the elementary automaton feeding the Game of Life board for a number
of generations, logs how the board fills up, and writes a JSON summary.
Optionally saves the final coloured frame as a numpy array.
"""

import sys
import os
import json
import logging
from pathlib import Path

import numpy as np

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

from lifefeed.core import CompositeGrid, GridConfig, InvalidArgument, RuleTable
from lifefeed.display import get_theme, render_frame

FALLBACK_RULE = 30


def resolve_rule(text):
    """Parse rule text, falling back to rule 30 on bad input."""
    try:
        return RuleTable.parse(text)
    except InvalidArgument as e:
        logger.warning(f"{e}; falling back to rule {FALLBACK_RULE}")
        return RuleTable(FALLBACK_RULE)


def run_demo(config, rule_table, ticks, log_every=25):
    """Run the composite grid and return per-generation metrics."""
    logger.info("=== COMPOSITE AUTOMATON DEMONSTRATION ===")
    logger.info(f"Config: {config}")
    logger.info(f"Rule: {rule_table.rule}")

    grid = CompositeGrid(config, rule_table=rule_table)
    live_counts = []

    for _ in range(ticks):
        snapshot = grid.tick()
        live = snapshot.live_count()
        live_counts.append(live)

        if snapshot.generation % log_every == 0 or snapshot.generation == ticks:
            logger.info(f"Generation {snapshot.generation}: board alive={live}, "
                        f"newest row alive={int(np.count_nonzero(snapshot.newest_row == 0))}")

    first_alive = next((i + 1 for i, count in enumerate(live_counts) if count > 0), None)

    results = {
        "rule": rule_table.rule,
        "config": config.to_dict(),
        "ticks": ticks,
        "final_live_count": live_counts[-1] if live_counts else 0,
        "peak_live_count": max(live_counts) if live_counts else 0,
        "first_live_generation": first_alive,
        "live_count_history": live_counts,
    }

    logger.info("\n=== FINAL METRICS ===")
    logger.info(f"Final live cells: {results['final_live_count']}")
    logger.info(f"Peak live cells: {results['peak_live_count']}")
    logger.info(f"First board life at generation: {first_alive}")

    return grid, results


def save_results(results, output_dir):
    output_dir.mkdir(parents=True, exist_ok=True)
    summary_file = output_dir / f"rule_{results['rule']}_summary.json"
    with open(summary_file, 'w') as f:
        json.dump(results, f, indent=2)
    logger.info(f"Summary saved to: {summary_file}")
    return summary_file


def save_frame(grid, theme_name, output_dir):
    image = render_frame(grid.snapshot(), get_theme(theme_name))
    frame_file = output_dir / f"rule_{grid.rule_table.rule}_frame.npy"
    np.save(frame_file, image)
    logger.info(f"Frame {image.shape} saved to: {frame_file}")
    return frame_file


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Elementary automaton feeding Conway's Game of Life")
    parser.add_argument("--rule", default=None, help="Rule number 0-255 (default: config/env)")
    parser.add_argument("--ticks", type=int, default=300, help="Generations to run")
    parser.add_argument("--rows", type=int, default=None, help="Board rows")
    parser.add_argument("--columns", type=int, default=None, help="Board columns")
    parser.add_argument("--window-depth", type=int, default=None, help="Input window depth")
    parser.add_argument("--theme", default="Lilac", help="Colour theme for --save-frame")
    parser.add_argument("--save-frame", action="store_true", help="Save final RGB frame as .npy")
    parser.add_argument("--output-dir", default="logs", help="Directory for summary and frame")

    args = parser.parse_args()

    try:
        config = GridConfig.from_env()
        overrides = {name: value for name, value in (("rows", args.rows),
                                                     ("columns", args.columns),
                                                     ("window_depth", args.window_depth))
                     if value is not None}
        if overrides:
            config = config.replace(**overrides)

        rule_table = resolve_rule(args.rule) if args.rule is not None else RuleTable(config.rule)

        grid, results = run_demo(config, rule_table, args.ticks)

        output_dir = Path(args.output_dir)
        save_results(results, output_dir)
        if args.save_frame:
            save_frame(grid, args.theme, output_dir)

    except InvalidArgument as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(2)

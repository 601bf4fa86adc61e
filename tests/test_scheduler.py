"""Tests for the background tick scheduler."""

import threading
import time

import pytest
import numpy as np
from lifefeed.core.composite_grid import CompositeGrid
from lifefeed.core.config import GridConfig
from lifefeed.core.errors import InvalidArgument
from lifefeed.scheduler import TickScheduler

INITIAL_AGE = 500


@pytest.fixture
def grid():
    return CompositeGrid(GridConfig(rows=8, columns=9, window_depth=3, initial_age=INITIAL_AGE,
                                    tick_interval_ms=1))


def wait_for(condition, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if condition():
            return True
        time.sleep(0.005)
    return False


class TestTicking:
    """The scheduler advances the grid on its own thread."""

    def test_runs_requested_number_of_ticks(self, grid):
        scheduler = TickScheduler(grid, interval_ms=1, max_ticks=5)
        scheduler.start()

        assert scheduler.wait(timeout=5)
        assert scheduler.ticks == 5
        assert grid.generation == 5
        assert not scheduler.running

    def test_callback_receives_each_snapshot(self, grid):
        generations = []
        scheduler = TickScheduler(grid, interval_ms=1, max_ticks=6,
                                  on_tick=lambda snapshot: generations.append(snapshot.generation))
        scheduler.start()
        scheduler.wait(timeout=5)

        assert generations == [1, 2, 3, 4, 5, 6]

    def test_interval_defaults_to_config(self, grid):
        scheduler = TickScheduler(grid)
        assert scheduler.interval == pytest.approx(0.001)

    def test_context_manager_stops(self, grid):
        with TickScheduler(grid, interval_ms=1) as scheduler:
            assert wait_for(lambda: grid.generation >= 3)
            assert scheduler.running

        assert not scheduler.running
        stopped_at = grid.generation
        time.sleep(0.02)
        assert grid.generation == stopped_at

    def test_start_twice(self, grid):
        scheduler = TickScheduler(grid, interval_ms=5)
        scheduler.start()
        try:
            with pytest.raises(RuntimeError, match="already running"):
                scheduler.start()
        finally:
            scheduler.stop()


class TestFailures:
    """Callback errors stop the scheduler and are kept for inspection."""

    def test_failing_callback_stops_scheduler(self, grid):
        def explode(snapshot):
            raise RuntimeError("renderer crashed")

        scheduler = TickScheduler(grid, interval_ms=1, on_tick=explode)
        scheduler.start()

        assert scheduler.wait(timeout=5)
        assert scheduler.ticks == 1
        assert isinstance(scheduler.error, RuntimeError)

    @pytest.mark.parametrize("interval", [0, -5])
    def test_invalid_interval(self, grid, interval):
        with pytest.raises(InvalidArgument, match="Tick interval"):
            TickScheduler(grid, interval_ms=interval)

    def test_invalid_tick_limit(self, grid):
        with pytest.raises(InvalidArgument, match="Tick limit"):
            TickScheduler(grid, max_ticks=0)


class TestCommandsWhileRunning:
    """Reset and rule changes apply between ticks."""

    def test_reset_and_rule_change_while_running(self, grid):
        seen = []
        lock = threading.Lock()

        def record(snapshot):
            with lock:
                seen.append(snapshot)

        with TickScheduler(grid, interval_ms=1, on_tick=record):
            assert wait_for(lambda: grid.generation >= 5)
            grid.reset()
            grid.set_rule(90)
            assert wait_for(lambda: grid.generation >= 5 and grid.rule_table.rule == 90)

        with lock:
            snapshots = list(seen)

        assert any(snapshot.rule == 90 for snapshot in snapshots)
        for snapshot in snapshots:
            assert np.all(snapshot.board[0] == INITIAL_AGE + snapshot.generation)

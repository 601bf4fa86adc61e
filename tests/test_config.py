"""Tests for grid configuration and environment overrides."""

import pytest
from lifefeed.core.config import GridConfig, DEFAULT_ROWS, DEFAULT_COLUMNS, DEFAULT_WINDOW_DEPTH
from lifefeed.core.errors import InvalidArgument


class TestDefaults:
    """Reference sizing of the animation window."""

    def test_reference_values(self):
        config = GridConfig()
        assert (config.rows, config.columns, config.window_depth) == (172, 299, 50)
        assert config.rule == 30
        assert config.initial_age == 100000
        assert config.tick_interval_ms == 35

    def test_to_dict(self):
        values = GridConfig(rows=12).to_dict()
        assert values["rows"] == 12
        assert values["columns"] == DEFAULT_COLUMNS
        assert set(values) == {"rows", "columns", "window_depth", "rule",
                               "initial_age", "tick_interval_ms"}


class TestValidation:
    """Out-of-range values are refused."""

    @pytest.mark.parametrize("kwargs,message", [
        ({"rows": 1}, "at least 2 rows"),
        ({"columns": 2}, "at least 3 columns"),
        ({"window_depth": 0}, "Window depth"),
        ({"rule": 256}, "Illegal rule number"),
        ({"rule": -1}, "Illegal rule number"),
        ({"initial_age": 0}, "Initial age"),
        ({"tick_interval_ms": 0}, "Tick interval"),
    ])
    def test_invalid_values(self, kwargs, message):
        with pytest.raises(InvalidArgument, match=message):
            GridConfig(**kwargs)

    def test_minimum_sizes_accepted(self):
        config = GridConfig(rows=2, columns=3, window_depth=1, initial_age=1)
        assert (config.rows, config.columns) == (2, 3)


class TestCopying:
    """copy and replace produce independent, validated configs."""

    def test_copy_equal(self):
        config = GridConfig(rows=20, rule=90)
        clone = config.copy()
        assert clone == config
        assert clone is not config

    def test_replace(self):
        config = GridConfig(rows=20)
        changed = config.replace(rule=110)
        assert changed.rule == 110
        assert changed.rows == 20
        assert config.rule == 30

    def test_replace_validates(self):
        with pytest.raises(InvalidArgument):
            GridConfig().replace(columns=1)

    def test_replace_unknown_field(self):
        with pytest.raises(InvalidArgument, match="Unknown configuration fields"):
            GridConfig().replace(colour="lilac")


class TestEnvironment:
    """LIFEFEED_* variables override defaults."""

    def test_empty_environment_gives_defaults(self):
        assert GridConfig.from_env({}) == GridConfig()

    def test_overrides(self):
        config = GridConfig.from_env({
            "LIFEFEED_ROWS": "40",
            "LIFEFEED_COLUMNS": " 61 ",
            "LIFEFEED_RULE": "90",
            "LIFEFEED_TICK_INTERVAL_MS": "",
            "UNRELATED": "x",
        })
        assert config.rows == 40
        assert config.columns == 61
        assert config.rule == 90
        assert config.window_depth == DEFAULT_WINDOW_DEPTH
        assert config.tick_interval_ms == 35

    def test_non_integer_value(self):
        with pytest.raises(InvalidArgument, match="LIFEFEED_RULE"):
            GridConfig.from_env({"LIFEFEED_RULE": "thirty"})

    def test_out_of_range_value(self):
        with pytest.raises(InvalidArgument, match="Illegal rule number"):
            GridConfig.from_env({"LIFEFEED_RULE": "999"})

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("LIFEFEED_ROWS", "33")
        monkeypatch.delenv("LIFEFEED_COLUMNS", raising=False)
        config = GridConfig.from_env()
        assert config.rows == 33
        assert config.columns == DEFAULT_COLUMNS
        assert DEFAULT_ROWS != 33

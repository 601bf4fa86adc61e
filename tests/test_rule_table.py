"""Tests for elementary automaton rule decoding.

Covers bit extraction for every rule number, the dead-indexed pattern
encoding, and rejection of invalid rule input.
"""

import pytest
import numpy as np
from lifefeed.core.rule_table import RuleTable
from lifefeed.core.errors import InvalidArgument


class TestRuleDecoding:
    """Test that rule numbers decode into the right outcomes."""

    def test_rule_30_outcomes(self):
        """Rule 30 (00011110) is alive for patterns 1 through 4 only."""
        table = RuleTable(30)
        expected = [False, True, True, True, True, False, False, False]
        assert list(table.outcomes) == expected

    def test_rule_0_all_dead(self):
        assert not RuleTable(0).outcomes.any()

    def test_rule_255_all_alive(self):
        assert RuleTable(255).outcomes.all()

    @pytest.mark.parametrize("rule", range(256))
    def test_every_rule_round_trips_through_bits(self, rule):
        """Reassembling the outcome bits gives back the rule number."""
        table = RuleTable(rule)
        rebuilt = sum(1 << k for k, alive in enumerate(table.outcomes) if alive)
        assert rebuilt == rule
        assert table.rule == rule

    def test_outcome_lookup(self):
        table = RuleTable(0b10000001)
        assert table.outcome(0) is True
        assert table.outcome(7) is True
        assert table.outcome(3) is False

    def test_outcome_index_out_of_range(self):
        with pytest.raises(InvalidArgument, match="out of range"):
            RuleTable(30).outcome(8)

    def test_outcomes_are_read_only(self):
        table = RuleTable(30)
        with pytest.raises(ValueError):
            table.outcomes[0] = True
        assert table.outcome(0) is False


class TestPatternIndex:
    """Test the (left, middle, right) dead-flag encoding."""

    def test_all_alive_is_pattern_zero(self):
        assert RuleTable.pattern_index(False, False, False) == 0

    def test_all_dead_is_pattern_seven(self):
        assert RuleTable.pattern_index(True, True, True) == 7

    def test_bit_positions(self):
        """Left is the high bit, right the low bit."""
        assert RuleTable.pattern_index(True, False, False) == 4
        assert RuleTable.pattern_index(False, True, False) == 2
        assert RuleTable.pattern_index(False, False, True) == 1
        assert RuleTable.pattern_index(1, 0, 1) == 5


class TestRuleValidation:
    """Test that invalid rules are refused, never clamped."""

    @pytest.mark.parametrize("rule", [-1, 256, 1000, -255])
    def test_out_of_range(self, rule):
        with pytest.raises(InvalidArgument, match="Illegal rule number"):
            RuleTable(rule)

    @pytest.mark.parametrize("rule", [30.0, "30", None, True])
    def test_non_integer(self, rule):
        with pytest.raises(InvalidArgument, match="must be an integer"):
            RuleTable(rule)

    def test_numpy_integer_accepted(self):
        assert RuleTable(np.int64(110)).rule == 110

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            RuleTable(256)


class TestRuleParsing:
    """Test parsing of user-entered rule text."""

    def test_parse_with_spaces(self):
        assert RuleTable.parse(" 110 ").rule == 110
        assert RuleTable.parse("9").rule == 9

    def test_parse_non_numeric(self):
        with pytest.raises(InvalidArgument, match="not a number"):
            RuleTable.parse("abc")

    def test_parse_negative(self):
        with pytest.raises(InvalidArgument):
            RuleTable.parse("-3")

    def test_parse_out_of_range(self):
        with pytest.raises(InvalidArgument, match="Illegal rule number"):
            RuleTable.parse("300")


class TestRuleEquality:
    """Test value semantics."""

    def test_equal_rules(self):
        assert RuleTable(90) == RuleTable(90)
        assert hash(RuleTable(90)) == hash(RuleTable(90))

    def test_different_rules(self):
        assert RuleTable(90) != RuleTable(30)
        assert RuleTable(90) != 90

    def test_repr_shows_bits(self):
        assert repr(RuleTable(30)) == "RuleTable(rule=30, bits=00011110)"

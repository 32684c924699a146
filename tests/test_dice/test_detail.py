"""Tests for detail trace rendering."""

import pytest

from gurgle.config import Language
from gurgle.dice.detail import render_dice, render_roll
from gurgle.dice.parser import parse
from gurgle.dice.roller import roll_expression
from gurgle.dice.types import Dice, DiceRoll, PostProcessor, RollResult


def _render(text, values=(), language=Language.EN, sequence=None) -> str:
    expression, checker = parse(text)
    result = roll_expression(expression, checker, rng=sequence(values), language=language)
    return result.detail_text


class TestRenderDice:
    """Tests for single dice terms."""

    def test_sum_joins_with_plus(self):
        """Test that summed dice render as (a+b+c)."""
        roll = DiceRoll(dice=Dice(3, 6), points=(4, 3, 1), value=8)
        assert render_dice(roll) == "(4+3+1)"

    @pytest.mark.parametrize(
        "pp,prefix",
        [
            (PostProcessor.AVG, "Avg"),
            (PostProcessor.MAX, "Max"),
            (PostProcessor.MIN, "Min"),
        ],
    )
    def test_aggregates_are_prefixed(self, pp, prefix):
        """Test that other aggregates name themselves."""
        roll = DiceRoll(dice=Dice(3, 6, pp), points=(4, 3, 1), value=0)
        assert render_dice(roll) == f"{prefix}(4, 3, 1)"

    def test_empty_roll(self):
        """Test that a dice without rolls renders as ()."""
        roll = DiceRoll(dice=Dice(0, 6), points=(), value=0)
        assert render_dice(roll) == "()"


class TestRenderRoll:
    """Tests for full traces."""

    def test_reference_trace(self, sequence_rng):
        """Test the trace of 3d6+2d4+1."""
        text = _render("3d6+2d4+1", [4, 3, 1, 1, 3], sequence=sequence_rng)
        assert text == "(4+3+1) + (1+3) + 1 = 13"

    def test_trace_with_failed_checker(self, sequence_rng):
        """Test the checker suffix on failure."""
        text = _render("3d6+2d4+1>15", [4, 3, 1, 1, 3], sequence=sequence_rng)
        assert text == "(4+3+1) + (1+3) + 1 = 13, target is >15, failed"

    def test_trace_with_successful_checker(self, sequence_rng):
        """Test the checker suffix on success."""
        text = _render("1d20+5>=15", [12], sequence=sequence_rng)
        assert text == "(12) + 5 = 17, target is >=15, success"

    def test_trace_in_chinese(self, sequence_rng):
        """Test verdict words in Chinese."""
        text = _render("3d6+2d4+1>15", [4, 3, 1, 1, 3], Language.ZH, sequence=sequence_rng)
        assert text == "(4+3+1) + (1+3) + 1 = 13，目标 >15，失败"

    def test_single_number_has_no_total(self, sequence_rng):
        """Test that a lone number is not followed by = value."""
        assert _render("5", sequence=sequence_rng) == "5"
        assert _render("5>3", sequence=sequence_rng) == "5, target is >3, success"

    def test_single_dice_has_total(self, sequence_rng):
        """Test that a lone dice still shows its total."""
        assert _render("1d6", [4], sequence=sequence_rng) == "(4) = 4"

    def test_post_processed_term(self, sequence_rng):
        """Test an averaged term in context."""
        text = _render("3d6avg+1", [4, 3, 1], sequence=sequence_rng)
        assert text == "Avg(4, 3, 1) + 1 = 3"

    def test_group(self, sequence_rng):
        """Test that groups render in parentheses."""
        text = _render("(1d6+2)*2", [3], sequence=sequence_rng)
        assert text == "((3) + 2) * 2 = 10"

    def test_multiply_alias_renders_as_star(self, sequence_rng):
        """Test that x renders as *."""
        assert _render("2x3", sequence=sequence_rng) == "2 * 3 = 6"

    def test_negative_number(self, sequence_rng):
        """Test that negative literals keep their sign."""
        assert _render("3--2", sequence=sequence_rng) == "3 - -2 = 5"

    def test_empty_dice_in_expression(self, sequence_rng):
        """Test that a dice with no rolls still shows in the trace."""
        assert _render("0d6+1", sequence=sequence_rng) == "() + 1 = 1"

    def test_render_without_detail_raises(self):
        """Test that rendering needs the detail tree."""
        with pytest.raises(ValueError, match="no detail"):
            render_roll(RollResult(value=3))

    def test_str_uses_trace(self, sequence_rng):
        """Test that str(result) is the trace when detail is present."""
        expression, checker = parse("1d6+1")
        result = roll_expression(expression, checker, rng=sequence_rng([2]))
        assert str(result) == "(2) + 1 = 3"

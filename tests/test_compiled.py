"""Tests for the compile-once, roll-many API."""

import os
import random
from dataclasses import FrozenInstanceError
from unittest.mock import patch

import pytest

import gurgle
from gurgle import (
    Checker,
    Compare,
    DiceEvaluationError,
    DiceLimitError,
    DiceParseError,
    Gurgle,
    Language,
    Limits,
    PostProcessor,
    compile,
    roll,
    roll_once,
)
from gurgle.dice.types import Dice


class TestCompile:
    """Tests for Gurgle.compile."""

    def test_compile_keeps_source_and_checker(self):
        """Test the compiled fields."""
        compiled = Gurgle.compile("3d6+1>=10")
        assert compiled.source == "3d6+1>=10"
        assert compiled.checker == Checker(compare=Compare.GTE, target=10)
        assert str(compiled) == "3d6+1>=10"

    def test_compile_function(self):
        """Test the module level shortcut."""
        assert compile("1d6") == Gurgle.compile("1d6")

    def test_compiled_is_immutable(self):
        """Test that a compiled expression cannot be changed."""
        compiled = Gurgle.compile("1d6")
        with pytest.raises(FrozenInstanceError):
            compiled.checker = None

    def test_dice_and_item_count(self):
        """Test the summary helpers, including grouped dice."""
        compiled = Gurgle.compile("(2d6+1)*3d4max")
        assert compiled.dice == [Dice(2, 6), Dice(3, 4, PostProcessor.MAX)]
        assert compiled.item_count == 3

    def test_invalid_syntax_raises_parse_error(self):
        """Test that syntax errors surface as DiceParseError."""
        with pytest.raises(DiceParseError):
            Gurgle.compile("3d6 extra")

    def test_explicit_limits(self):
        """Test passing limits to compile."""
        with pytest.raises(DiceLimitError):
            Gurgle.compile("3d6", Limits(max_roll_times=2))

    def test_limits_from_settings(self):
        """Test that compile reads limits from the environment."""
        with patch.dict(os.environ, {"GURGLE_LIMITS__MAX_DICE_SIDES": "20"}):
            gurgle.get_settings.cache_clear()
            Gurgle.compile("1d20")
            with pytest.raises(DiceLimitError):
                Gurgle.compile("1d100")


class TestRoll:
    """Tests for Gurgle.roll."""

    def test_roll_many_times(self, sequence_rng):
        """Test that one compiled expression rolls independently."""
        compiled = Gurgle.compile("1d6+1")
        rng = sequence_rng([1, 6])
        assert compiled.roll(rng=rng).value == 2
        assert compiled.roll(rng=rng).value == 7

    def test_roll_reference_trace(self, sequence_rng):
        """Test the detail trace through the public API."""
        result = Gurgle.compile("3d6+2d4+1").roll(rng=sequence_rng([4, 3, 1, 1, 3]))
        assert result.value == 13
        assert result.detail_text == "(4+3+1) + (1+3) + 1 = 13"

    def test_roll_with_seed(self):
        """Test reproducible rolls with a seeded source."""
        compiled = Gurgle.compile("10d20")
        assert compiled.roll(rng=random.Random(3)) == compiled.roll(rng=random.Random(3))

    def test_detail_from_settings(self):
        """Test that GURGLE_DETAIL turns off the trace."""
        with patch.dict(os.environ, {"GURGLE_DETAIL": "false"}):
            gurgle.get_settings.cache_clear()
            result = Gurgle.compile("1d1+1").roll()
        assert result.value == 2
        assert result.detail is None

    def test_explicit_detail_wins(self):
        """Test that an explicit with_detail overrides settings."""
        with patch.dict(os.environ, {"GURGLE_DETAIL": "false"}):
            gurgle.get_settings.cache_clear()
            result = Gurgle.compile("1d1+1").roll(with_detail=True)
        assert result.detail_text == "(1) + 1 = 2"

    def test_language_from_settings(self):
        """Test that GURGLE_LANGUAGE selects the verdict words."""
        with patch.dict(os.environ, {"GURGLE_LANGUAGE": "zh"}):
            gurgle.get_settings.cache_clear()
            result = Gurgle.compile("1d1>0").roll()
        assert result.language == Language.ZH
        assert result.detail_text.endswith("，成功")

    def test_evaluation_error(self):
        """Test that bad sides fail at roll time, not compile time."""
        compiled = Gurgle.compile("2d0")
        with pytest.raises(DiceEvaluationError):
            compiled.roll()


class TestShortcuts:
    """Tests for roll and roll_once."""

    def test_roll_once_returns_value(self):
        """Test that roll_once returns only the integer."""
        assert roll_once("2d1+3") == 5

    def test_roll_once_left_to_right(self):
        """Test the left-to-right fold through roll_once."""
        assert roll_once("2+3*2") == 10

    def test_roll_returns_result(self):
        """Test that roll returns the full result."""
        result = roll("1d1>0")
        assert result.value == 1
        assert result.success is True

    def test_roll_once_propagates_errors(self):
        """Test that errors reach the caller."""
        with pytest.raises(DiceParseError):
            roll_once("3d")
        with pytest.raises(DiceEvaluationError):
            roll_once("1d0")

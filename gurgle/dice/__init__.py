"""Dice expression grammar, parser, roller and detail rendering.

Usage:
    >>> from gurgle.dice import parse, roll_expression
    >>> expression, checker = parse("3d6+2d4+1>15")
    >>> result = roll_expression(expression, checker)
"""

# Types
from gurgle.dice.types import (
    Checker,
    Compare,
    Dice,
    DiceRoll,
    Expression,
    ExpressionRoll,
    Group,
    GroupRoll,
    Number,
    NumberRoll,
    Operator,
    PostProcessor,
    RollResult,
)

# Parser
from gurgle.dice.parser import parse

# Roller
from gurgle.dice.roller import (
    RandomSource,
    apply_post_processor,
    roll_dice,
    roll_expression,
)

# Detail
from gurgle.dice.detail import render_roll

__all__ = [
    # Types
    "Checker",
    "Compare",
    "Dice",
    "DiceRoll",
    "Expression",
    "ExpressionRoll",
    "Group",
    "GroupRoll",
    "Number",
    "NumberRoll",
    "Operator",
    "PostProcessor",
    "RollResult",
    # Parser
    "parse",
    # Roller
    "RandomSource",
    "apply_post_processor",
    "roll_dice",
    "roll_expression",
    # Detail
    "render_roll",
]

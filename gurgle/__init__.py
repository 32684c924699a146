"""Roll dice using TRPG-like expressions.

Usage:
    >>> from gurgle import compile, roll_once
    >>> roll_once("2d1+3")
    5
    >>> check = compile("3d6+2d4+1>15")
    >>> result = check.roll()
    >>> print(result.detail_text)  # doctest: +SKIP
    (4+3+1) + (1+3) + 1 = 13, target is >15, failed
"""

from gurgle.compiled import Gurgle, compile, roll, roll_once
from gurgle.config import Language, Limits, Settings, get_settings
from gurgle.dice.types import Checker, Compare, PostProcessor, RollResult
from gurgle.errors import (
    DiceEvaluationError,
    DiceLimitError,
    DiceParseError,
    GurgleError,
)

__version__ = "0.3.0"

__all__ = [
    # Compile & roll
    "Gurgle",
    "compile",
    "roll",
    "roll_once",
    # Results
    "RollResult",
    "Checker",
    "Compare",
    "PostProcessor",
    # Configuration
    "Language",
    "Limits",
    "Settings",
    "get_settings",
    # Errors
    "GurgleError",
    "DiceParseError",
    "DiceLimitError",
    "DiceEvaluationError",
]

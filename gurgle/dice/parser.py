"""Dice expression parser.

Parses expressions like ``3d6+2d4+1``, ``(2+3)*2``, ``4d6max x 2 >= 10``.

Grammar::

    number      := ["-"] digit+
    postprocess := "avg" | "max" | "min" | "sum"
    dice        := number ("d" | "D") number [postprocess]
    compare     := ">=" | "<=" | ">" | "<" | "=" | "=="
    checker     := compare number
    operator    := "+" | "-" | "*" | "x"
    item        := "(" expr ")" | dice | number
    expr        := item (operator item)*
    command     := expr [checker]

All operators share one precedence level and fold left to right, so
``2+3*2`` is 10. Use parentheses to group.
"""

import logging
import re

from gurgle.config import DEFAULT_LIMITS, Limits
from gurgle.dice.types import (
    Checker,
    Compare,
    Dice,
    Expression,
    Group,
    Item,
    Number,
    Operator,
    PostProcessor,
)
from gurgle.errors import DiceLimitError, DiceParseError

logger = logging.getLogger(__name__)


WHITESPACE_PATTERN = re.compile(r"[ \t]*")

# Dice must be tried before a bare number: "3d6" starts with "3"
DICE_PATTERN = re.compile(
    r"(-?\d+)[ \t]*[dD][ \t]*(-?\d+)(?:[ \t]*(avg|max|min|sum))?",
    re.IGNORECASE | re.ASCII,
)
# re.ASCII keeps \d to 0-9; int() would otherwise accept other scripts' digits
NUMBER_PATTERN = re.compile(r"-?\d+", re.ASCII)
OPERATOR_PATTERN = re.compile(r"[+\-*xX]")
COMPARE_PATTERN = re.compile(r">=|<=|==|>|<|=")

# A dice term missing its sides, e.g. "3d" or "3d+1"
_DANGLING_DICE_PATTERN = re.compile(r"-?\d+[ \t]*[dD]", re.ASCII)


class _Parser:
    """Recursive descent over one source string.

    Tracks item count and total roll times while building the tree so limit
    violations are reported as soon as they are read.
    """

    def __init__(self, text: str, limits: Limits) -> None:
        self.text = text
        self.limits = limits
        self.pos = 0
        self.item_count = 0
        self.roll_times = 0
        self.depth = 0

    # -------------------------------------------------------------------------
    # Scanning helpers
    # -------------------------------------------------------------------------

    def _skip_whitespace(self) -> None:
        self.pos = WHITESPACE_PATTERN.match(self.text, self.pos).end()

    def _match(self, pattern: re.Pattern) -> re.Match | None:
        self._skip_whitespace()
        match = pattern.match(self.text, self.pos)
        if match:
            self.pos = match.end()
        return match

    def _at_end(self) -> bool:
        self._skip_whitespace()
        return self.pos >= len(self.text)

    def _error(self, expected: str) -> DiceParseError:
        return DiceParseError.at(self.text, self.pos, expected)

    # -------------------------------------------------------------------------
    # Grammar rules
    # -------------------------------------------------------------------------

    def command(self) -> tuple[Expression, Checker | None]:
        expression = self.expr()
        checker = None
        if not self._at_end():
            if COMPARE_PATTERN.match(self.text, self.pos):
                checker = self.checker()
            else:
                raise self._error("operator or checker")
        if not self._at_end():
            raise self._error("end of input")
        return expression, checker

    def expr(self) -> Expression:
        first = self.item()
        rest: list[tuple[Operator, Item]] = []
        while True:
            op_match = self._match(OPERATOR_PATTERN)
            if not op_match:
                break
            rest.append((Operator.from_symbol(op_match.group()), self.item()))
        return Expression(first=first, rest=tuple(rest))

    def item(self) -> Item:
        self._skip_whitespace()
        if self.text.startswith("(", self.pos):
            self.pos += 1
            self._enter_group()
            inner = self.expr()
            self._skip_whitespace()
            if not self.text.startswith(")", self.pos):
                raise self._error("')'")
            self.pos += 1
            self.depth -= 1
            return Group(expression=inner)

        dice_match = self._match(DICE_PATTERN)
        if dice_match:
            return self._dice(dice_match)

        if _DANGLING_DICE_PATTERN.match(self.text, self.pos):
            # Point at the missing sides rather than the count
            self.pos = _DANGLING_DICE_PATTERN.match(self.text, self.pos).end()
            self._skip_whitespace()
            raise self._error("dice sides")

        number_match = self._match(NUMBER_PATTERN)
        if number_match:
            value = int(number_match.group())
            self._count_item()
            self._check_number(value)
            return Number(value=value)

        raise self._error("number, dice or '('")

    def checker(self) -> Checker:
        compare_match = self._match(COMPARE_PATTERN)
        target_match = self._match(NUMBER_PATTERN)
        if not target_match:
            raise self._error("checker target")
        target = int(target_match.group())
        self._check_number(target)
        return Checker(compare=Compare.from_symbol(compare_match.group()), target=target)

    def _dice(self, match: re.Match) -> Dice:
        times_str, sides_str, pp_str = match.groups()
        times = int(times_str)
        sides = int(sides_str)
        self._count_item()

        if sides > self.limits.max_dice_sides:
            raise DiceLimitError(
                f"Dice sides {sides} exceeds limit of {self.limits.max_dice_sides}",
                limit="max_dice_sides",
            )
        self.roll_times += max(times, 0)
        if self.roll_times > self.limits.max_roll_times:
            raise DiceLimitError(
                f"Total roll times {self.roll_times} exceeds limit of {self.limits.max_roll_times}",
                limit="max_roll_times",
            )

        pp = PostProcessor(pp_str.lower()) if pp_str else PostProcessor.SUM
        return Dice(times=times, sides=sides, post_processor=pp)

    # -------------------------------------------------------------------------
    # Limits
    # -------------------------------------------------------------------------

    def _count_item(self) -> None:
        self.item_count += 1
        if self.item_count > self.limits.max_item_count:
            raise DiceLimitError(
                f"Item count exceeds limit of {self.limits.max_item_count}",
                limit="max_item_count",
            )

    def _enter_group(self) -> None:
        self.depth += 1
        if self.depth > self.limits.max_depth:
            raise DiceLimitError(
                f"Parentheses nested deeper than {self.limits.max_depth}",
                limit="max_depth",
            )

    def _check_number(self, value: int) -> None:
        if abs(value) > self.limits.max_number_item_value:
            raise DiceLimitError(
                f"Number {value} exceeds limit of {self.limits.max_number_item_value}",
                limit="max_number_item_value",
            )


def parse(text: str, limits: Limits | None = None) -> tuple[Expression, Checker | None]:
    """Parse a dice command into an expression and an optional checker.

    Args:
        text: Command text (e.g., "3d6+2d4+1>15").
        limits: Compile-time limits. Defaults to ``DEFAULT_LIMITS``.

    Returns:
        Tuple of the parsed Expression and the Checker, or None if absent.

    Raises:
        DiceParseError: If the text does not match the grammar.
        DiceLimitError: If the expression exceeds a limit.

    Examples:
        >>> expression, checker = parse("1d20+5>=15")
        >>> expression.first
        Dice(times=1, sides=20, post_processor=<PostProcessor.SUM: 'sum'>)
        >>> checker
        Checker(compare=<Compare.GTE: '>='>, target=15)
    """
    if not text or not text.strip():
        raise DiceParseError("Dice expression cannot be empty", text=text or "", expected="expression")

    parser = _Parser(text, limits or DEFAULT_LIMITS)
    expression, checker = parser.command()
    logger.debug(
        f"Parsed '{text}': {parser.item_count} items, {parser.roll_times} roll times, "
        f"checker={checker}"
    )
    return expression, checker

"""Dice system type definitions.

Immutable dataclasses for the parsed syntax tree, checkers, and roll outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from gurgle.config import Language


class PostProcessor(str, Enum):
    """Aggregation applied to the points of one dice term.

    ``3d6`` sums the three dice, ``3d6max`` keeps the highest,
    ``3d6min`` the lowest and ``3d6avg`` the floored mean.
    """

    SUM = "sum"
    AVG = "avg"
    MAX = "max"
    MIN = "min"


class Operator(str, Enum):
    """Binary operator between two items."""

    ADD = "+"
    SUB = "-"
    MUL = "*"

    @classmethod
    def from_symbol(cls, symbol: str) -> Operator:
        """Map a source symbol to an operator (``x`` is multiplication)."""
        if symbol in ("x", "X"):
            return cls.MUL
        return cls(symbol)

    def apply(self, left: int, right: int) -> int:
        if self is Operator.ADD:
            return left + right
        if self is Operator.SUB:
            return left - right
        return left * right


class Compare(str, Enum):
    """Comparison used by a Checker."""

    GT = ">"
    GTE = ">="
    LT = "<"
    LTE = "<="
    EQ = "="

    @classmethod
    def from_symbol(cls, symbol: str) -> Compare:
        if symbol == "==":
            return cls.EQ
        return cls(symbol)


# =============================================================================
# Syntax tree
# =============================================================================


@dataclass(frozen=True)
class Number:
    """A constant number item."""

    value: int


@dataclass(frozen=True)
class Dice:
    """A dice term like 3d6 or 2d20max.

    Attributes:
        times: How many dice to roll. Zero or less rolls nothing.
        sides: Sides of each die. Must be positive to be rolled.
        post_processor: Aggregation of the rolled points.
    """

    times: int
    sides: int
    post_processor: PostProcessor = PostProcessor.SUM


@dataclass(frozen=True)
class Group:
    """A parenthesized sub-expression."""

    expression: Expression


Item = Union[Number, Dice, Group]


@dataclass(frozen=True)
class Expression:
    """A flat sequence of items folded strictly left to right.

    ``2+3*2`` is ``Expression(2, ((+, 3), (*, 2)))`` and evaluates to 10:
    operators share one precedence level, only parentheses group.
    """

    first: Item
    rest: tuple[tuple[Operator, Item], ...] = ()

    @property
    def items(self) -> tuple[Item, ...]:
        return (self.first,) + tuple(item for _, item in self.rest)

    @property
    def operators(self) -> tuple[Operator, ...]:
        return tuple(op for op, _ in self.rest)


@dataclass(frozen=True)
class Checker:
    """Pass/fail comparison of the final value against a target.

    ``3d6 > 10`` succeeds when the total is greater than 10.
    """

    compare: Compare
    target: int

    def check(self, value: int) -> bool:
        """Return True when ``value`` satisfies the comparison."""
        if self.compare is Compare.GT:
            return value > self.target
        if self.compare is Compare.GTE:
            return value >= self.target
        if self.compare is Compare.LT:
            return value < self.target
        if self.compare is Compare.LTE:
            return value <= self.target
        return value == self.target


# =============================================================================
# Roll outcome
# =============================================================================


@dataclass(frozen=True)
class NumberRoll:
    """A constant item as it appears in a roll."""

    value: int


@dataclass(frozen=True)
class DiceRoll:
    """Points rolled for one dice term.

    Attributes:
        dice: The term that was rolled.
        points: Individual die faces, in roll order.
        value: Aggregate after the post processor.
    """

    dice: Dice
    points: tuple[int, ...]
    value: int

    @property
    def post_processor(self) -> PostProcessor:
        return self.dice.post_processor


@dataclass(frozen=True)
class GroupRoll:
    """Roll of a parenthesized sub-expression."""

    inner: ExpressionRoll

    @property
    def value(self) -> int:
        return self.inner.value


ItemRoll = Union[NumberRoll, DiceRoll, GroupRoll]


@dataclass(frozen=True)
class ExpressionRoll:
    """Roll of a whole expression.

    Attributes:
        first: Outcome of the first item.
        rest: Operator and outcome for each following item.
        value: Final folded value.
        partials: Running total after each fold step, starting with the first item.
    """

    first: ItemRoll
    rest: tuple[tuple[Operator, ItemRoll], ...]
    value: int
    partials: tuple[int, ...] = field(default_factory=tuple)

    @property
    def is_single_number(self) -> bool:
        return not self.rest and isinstance(self.first, NumberRoll)


@dataclass(frozen=True)
class RollResult:
    """Result of rolling a compiled expression once.

    Attributes:
        value: Final integer value.
        success: Checker verdict, or None when there is no checker.
        checker: The checker that produced ``success``.
        detail: Outcome tree, present only when detail tracking was on.
        language: Language for the verdict words in ``detail_text``.
    """

    value: int
    success: bool | None = None
    checker: Checker | None = None
    detail: ExpressionRoll | None = None
    language: Language = Language.EN

    @property
    def detail_text(self) -> str | None:
        """Human readable trace, e.g. ``(4+3+1) + (1+3) + 1 = 13``."""
        if self.detail is None:
            return None
        from gurgle.dice.detail import render_roll

        return render_roll(self)

    def __str__(self) -> str:
        text = self.detail_text
        return text if text is not None else str(self.value)

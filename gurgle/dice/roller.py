"""Core dice rolling engine.

Walks a parsed Expression, rolling every dice term with an injected random
source and folding item values strictly left to right.
"""

import logging
import random
from typing import Protocol

from gurgle.config import Language
from gurgle.dice.types import (
    Checker,
    Dice,
    DiceRoll,
    Expression,
    ExpressionRoll,
    Group,
    GroupRoll,
    Item,
    ItemRoll,
    Number,
    NumberRoll,
    PostProcessor,
    RollResult,
)
from gurgle.errors import DiceEvaluationError

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything that can draw an inclusive random integer, like ``random.Random``."""

    def randint(self, a: int, b: int) -> int: ...


# Stateless, shared by every roll without an explicit source
_SYSTEM_RANDOM = random.SystemRandom()


def apply_post_processor(post_processor: PostProcessor, points: tuple[int, ...]) -> int:
    """Aggregate the points of one dice term.

    Avg rounds down. Every aggregate of an empty roll is 0.

    Examples:
        >>> apply_post_processor(PostProcessor.AVG, (4, 3, 1))
        2
        >>> apply_post_processor(PostProcessor.MAX, ())
        0
    """
    if not points:
        return 0
    if post_processor is PostProcessor.SUM:
        return sum(points)
    if post_processor is PostProcessor.AVG:
        return sum(points) // len(points)
    if post_processor is PostProcessor.MAX:
        return max(points)
    return min(points)


def roll_dice(dice: Dice, rng: RandomSource | None = None) -> DiceRoll:
    """Roll one dice term.

    Args:
        dice: The term to roll.
        rng: Random source. Defaults to the system random source.

    Returns:
        DiceRoll with ``dice.times`` points (none when times <= 0).

    Raises:
        DiceEvaluationError: If the dice has fewer than one side.
    """
    if dice.sides < 1:
        raise DiceEvaluationError(f"Dice must have at least 1 side, got {dice.sides}")

    if rng is None:
        rng = _SYSTEM_RANDOM
    points = tuple(rng.randint(1, dice.sides) for _ in range(max(dice.times, 0)))
    return DiceRoll(
        dice=dice,
        points=points,
        value=apply_post_processor(dice.post_processor, points),
    )


def _roll_item(item: Item, rng: RandomSource) -> ItemRoll:
    if isinstance(item, Number):
        return NumberRoll(value=item.value)
    if isinstance(item, Dice):
        return roll_dice(item, rng)
    if isinstance(item, Group):
        return GroupRoll(inner=_roll_expression(item.expression, rng))
    raise DiceEvaluationError(f"Unknown expression item: {item!r}")


def _roll_expression(expression: Expression, rng: RandomSource) -> ExpressionRoll:
    first = _roll_item(expression.first, rng)
    total = first.value
    partials = [total]
    rest = []
    for op, item in expression.rest:
        outcome = _roll_item(item, rng)
        total = op.apply(total, outcome.value)
        partials.append(total)
        rest.append((op, outcome))
    return ExpressionRoll(
        first=first,
        rest=tuple(rest),
        value=total,
        partials=tuple(partials),
    )


def roll_expression(
    expression: Expression,
    checker: Checker | None = None,
    rng: RandomSource | None = None,
    with_detail: bool = True,
    language: Language = Language.EN,
) -> RollResult:
    """Roll a parsed expression once.

    Args:
        expression: Parsed expression.
        checker: Optional checker applied to the final value.
        rng: Random source. Defaults to the system random source.
        with_detail: Keep the outcome tree for rendering.
        language: Language of the verdict words in the rendered detail.

    Returns:
        RollResult with the value, the verdict and, if requested, the detail.

    Raises:
        DiceEvaluationError: If a dice term cannot be rolled.

    Examples:
        >>> from gurgle.dice.parser import parse
        >>> expression, checker = parse("1d1+2>2")
        >>> roll_expression(expression, checker).success
        True
    """
    if rng is None:
        rng = _SYSTEM_RANDOM
    outcome = _roll_expression(expression, rng)
    success = checker.check(outcome.value) if checker is not None else None
    logger.debug(f"Rolled {outcome.value} (success={success})")

    return RollResult(
        value=outcome.value,
        success=success,
        checker=checker,
        detail=outcome if with_detail else None,
        language=language,
    )

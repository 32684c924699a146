"""Compiled dice commands.

Compile once, roll many times::

    >>> from gurgle import Gurgle
    >>> attack = Gurgle.compile("1d20+5>=15")
    >>> result = attack.roll()
    >>> result.success in (True, False)
    True
"""

import logging
from dataclasses import dataclass

from gurgle.config import Language, Limits, get_settings
from gurgle.dice.parser import parse
from gurgle.dice.roller import RandomSource, roll_expression
from gurgle.dice.types import Checker, Dice, Expression, Group, Number, RollResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Gurgle:
    """A parsed dice command, immutable and reusable across rolls.

    Attributes:
        source: The command text it was compiled from.
        expression: Root of the expression tree.
        checker: Trailing comparison, if any.
    """

    source: str
    expression: Expression
    checker: Checker | None = None

    @classmethod
    def compile(cls, text: str, limits: Limits | None = None) -> "Gurgle":
        """Parse ``text`` into a Gurgle.

        Args:
            text: Command text, e.g. "3d6+2d4+1>15".
            limits: Compile-time limits. Defaults to the configured limits.

        Raises:
            DiceParseError: If the text is not valid syntax.
            DiceLimitError: If the expression exceeds a limit.
        """
        if limits is None:
            limits = get_settings().limits
        expression, checker = parse(text, limits)
        logger.debug(f"Compiled '{text}'")
        return cls(source=text, expression=expression, checker=checker)

    def roll(
        self,
        rng: RandomSource | None = None,
        with_detail: bool | None = None,
        language: Language | None = None,
    ) -> RollResult:
        """Roll the command once. Every call rolls fresh dice.

        Args:
            rng: Random source, e.g. ``random.Random(42)``.
            with_detail: Keep the outcome tree. Defaults to settings.
            language: Verdict language for the detail. Defaults to settings.

        Raises:
            DiceEvaluationError: If a dice term has fewer than one side.
        """
        settings = get_settings()
        return roll_expression(
            self.expression,
            self.checker,
            rng=rng,
            with_detail=settings.detail if with_detail is None else with_detail,
            language=settings.language if language is None else language,
        )

    @property
    def dice(self) -> list[Dice]:
        """All dice terms, including those inside parentheses, in source order."""
        return [item for item in _walk(self.expression) if isinstance(item, Dice)]

    @property
    def item_count(self) -> int:
        """Number of numbers and dice terms in the expression."""
        return sum(1 for item in _walk(self.expression) if isinstance(item, (Number, Dice)))

    def __str__(self) -> str:
        return self.source


def _walk(expression: Expression):
    for item in expression.items:
        if isinstance(item, Group):
            yield from _walk(item.expression)
        else:
            yield item


def compile(text: str, limits: Limits | None = None) -> Gurgle:
    """Compile ``text``. Shortcut for ``Gurgle.compile``."""
    return Gurgle.compile(text, limits)


def roll(text: str, rng: RandomSource | None = None) -> RollResult:
    """Compile and roll ``text`` once."""
    return Gurgle.compile(text).roll(rng=rng)


def roll_once(text: str, rng: RandomSource | None = None) -> int:
    """Compile and roll ``text`` once, returning only the value.

    Examples:
        >>> roll_once("1d1+2")
        3
    """
    return Gurgle.compile(text).roll(rng=rng, with_detail=False).value

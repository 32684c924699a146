"""Render roll outcomes as a human readable trace.

Example: ``(4+3+1) + Max(1, 3) + 1 = 12, target is >15, failed``
"""

from gurgle.config import Language
from gurgle.dice.types import (
    Checker,
    DiceRoll,
    ExpressionRoll,
    GroupRoll,
    ItemRoll,
    NumberRoll,
    PostProcessor,
    RollResult,
)

# (prefix, separator) around the points of a dice term
POST_PROCESSOR_FORMATS = {
    PostProcessor.SUM: ("", "+"),
    PostProcessor.AVG: ("Avg", ", "),
    PostProcessor.MAX: ("Max", ", "),
    PostProcessor.MIN: ("Min", ", "),
}

VERDICT_WORDS = {
    Language.EN: {"target": ", target is ", "success": ", success", "failed": ", failed"},
    Language.ZH: {"target": "，目标 ", "success": "，成功", "failed": "，失败"},
}


def render_dice(roll: DiceRoll) -> str:
    """Render one dice term, e.g. ``(4+3+1)`` or ``Avg(4, 3, 1)``."""
    prefix, separator = POST_PROCESSOR_FORMATS[roll.post_processor]
    return f"{prefix}({separator.join(str(point) for point in roll.points)})"


def render_item(roll: ItemRoll) -> str:
    if isinstance(roll, DiceRoll):
        return render_dice(roll)
    if isinstance(roll, GroupRoll):
        return f"({render_expression(roll.inner)})"
    if isinstance(roll, NumberRoll):
        return str(roll.value)
    raise TypeError(f"Cannot render {roll!r}")


def render_expression(roll: ExpressionRoll) -> str:
    """Render items joined by their operators in source order."""
    parts = [render_item(roll.first)]
    for op, item in roll.rest:
        parts.append(op.value)
        parts.append(render_item(item))
    return " ".join(parts)


def render_checker(checker: Checker, success: bool, language: Language = Language.EN) -> str:
    words = VERDICT_WORDS[language]
    verdict = words["success"] if success else words["failed"]
    return f"{words['target']}{checker.compare.value}{checker.target}{verdict}"


def render_roll(result: RollResult) -> str:
    """Render a full roll result.

    Args:
        result: A RollResult that carries its detail tree.

    Returns:
        Trace text. The `` = value`` part is left out when the whole
        expression is a single number.

    Raises:
        ValueError: If the result was rolled without detail tracking.
    """
    if result.detail is None:
        raise ValueError("Roll result has no detail to render")

    text = render_expression(result.detail)
    if not result.detail.is_single_number:
        text += f" = {result.value}"
    if result.checker is not None and result.success is not None:
        text += render_checker(result.checker, result.success, result.language)
    return text

"""Errors raised while compiling or rolling dice expressions."""


class GurgleError(Exception):
    """Base class for every error raised by gurgle."""


class DiceParseError(GurgleError, ValueError):
    """Expression text does not match the dice grammar.

    Attributes:
        text: The source text that failed to parse.
        position: Zero-based offset where parsing stopped.
        expected: Name of the grammar rule that was expected there.
    """

    def __init__(self, message: str, text: str = "", position: int = 0, expected: str = "") -> None:
        super().__init__(message)
        self.text = text
        self.position = position
        self.expected = expected

    @classmethod
    def at(cls, text: str, position: int, expected: str) -> "DiceParseError":
        """Build an error pointing at ``position`` in ``text``."""
        if position >= len(text):
            found = "end of input"
        else:
            found = repr(text[position])
        return cls(
            f"Invalid dice syntax at position {position}: expected {expected}, found {found}",
            text=text,
            position=position,
            expected=expected,
        )

    def pointer(self) -> str:
        """Source line with a caret under the failing position."""
        return f"{self.text}\n{' ' * self.position}^"


class DiceLimitError(GurgleError, ValueError):
    """Expression is well-formed but exceeds a configured limit.

    Attributes:
        limit: Name of the exceeded limit (matches the ``Limits`` field).
    """

    def __init__(self, message: str, limit: str) -> None:
        super().__init__(message)
        self.limit = limit


class DiceEvaluationError(GurgleError):
    """A compiled expression cannot be rolled (e.g. a die with no sides)."""

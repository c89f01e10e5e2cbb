"""Expression-specific error types for exprcache.

ExpressionSyntaxError is what every parser capability is expected to raise
for malformed text; CachedExpressionEvaluator.resolve() lets it propagate
unchanged.
"""

from __future__ import annotations

from exprcache.constants import ERROR_EXCERPT_LENGTH
from exprcache.exceptions import ExprCacheError


class ExpressionError(ExprCacheError):
    """Base exception for all expression-related errors.

    Attributes:
        message: Human-readable error message.
        expression: The expression that caused the error (if known).
    """

    def __init__(
        self,
        message: str,
        expression: str | None = None,
    ) -> None:
        """Initialize the ExpressionError.

        Args:
            message: Human-readable error message.
            expression: The expression that caused the error.
        """
        self.expression = expression
        super().__init__(message)


class ExpressionSyntaxError(ExpressionError):
    """Exception raised when expression text cannot be parsed.

    Raised for unbalanced parentheses or brackets, unterminated strings,
    unknown characters, dangling operators and over-long expressions.

    Long expressions are quoted as an excerpt of at most
    ERROR_EXCERPT_LENGTH characters; for positioned errors the excerpt is
    centered on the error. ``expression`` always keeps the full text.

    Attributes:
        message: Formatted error message (with caret line when positioned).
        expression: The expression that failed to parse.
        position: Zero-based character offset of the error in ``expression``,
            or None when the error applies to the text as a whole.
    """

    def __init__(
        self,
        message: str,
        expression: str,
        position: int | None = None,
    ) -> None:
        """Initialize the ExpressionSyntaxError.

        Args:
            message: Human-readable error message.
            expression: The expression that failed to parse.
            position: Character position where the error occurred.
        """
        self.position = position
        if position is not None:
            excerpt, caret = _excerpt(expression, position)
            error_line = f"{excerpt}\n{' ' * caret}^"
            full_message = f"{message} at position {position}:\n{error_line}"
        else:
            excerpt, _ = _excerpt(expression, 0)
            full_message = f"{message}: {excerpt}"
        super().__init__(full_message, expression=expression)


def _excerpt(expression: str, position: int) -> tuple[str, int]:
    """Cut ``expression`` down to a window around ``position``.

    Returns:
        Tuple of (excerpt, caret column within the excerpt).
    """
    if len(expression) <= ERROR_EXCERPT_LENGTH:
        return expression, position
    latest_start = len(expression) - ERROR_EXCERPT_LENGTH
    start = max(0, min(position - ERROR_EXCERPT_LENGTH // 2, latest_start))
    end = start + ERROR_EXCERPT_LENGTH
    prefix = "..." if start > 0 else ""
    suffix = "..." if end < len(expression) else ""
    excerpt = f"{prefix}{expression[start:end]}{suffix}"
    return excerpt, len(prefix) + position - start

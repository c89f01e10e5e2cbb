"""Protocol definitions for expression parser capabilities.

These are Protocol classes, not abstract base classes, so any object with a
matching parse() method can back a CachedExpressionEvaluator without
inheriting from anything in exprcache.
"""

from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable

ParsedT_co = TypeVar("ParsedT_co", covariant=True)


@runtime_checkable
class ExpressionParserProtocol(Protocol[ParsedT_co]):
    """Protocol for parsers usable by CachedExpressionEvaluator.

    Example:
        >>> class UpperParser:
        ...     def parse(self, text: str | None) -> str:
        ...         return (text or "").upper()
        >>> isinstance(UpperParser(), ExpressionParserProtocol)
        True
    """

    def parse(self, text: str | None) -> ParsedT_co:
        """Parse expression text.

        Args:
            text: Raw expression text; None when the element declared none.

        Returns:
            Reusable parsed representation of ``text``.

        Raises:
            ExpressionSyntaxError: If the text is malformed.
        """
        ...

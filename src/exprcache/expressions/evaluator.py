"""Cached expression evaluator for exprcache.

CachedExpressionEvaluator parses expression text lazily and memoizes the
result in a cache supplied by the caller:

- Key: ExpressionKey(element_key, expression)
- Hit: the stored ParsedExpression is returned, the parser is not called
- Miss: the text is parsed, stored, and returned
- Parse failure: the error propagates and nothing is stored, so the next
  call for the same key parses again

Concurrency:
The evaluator holds no mutable state and can be shared freely. resolve()
does an unsynchronized lookup followed by a store; concurrent misses on one
key may parse it more than once and the last store wins. Callers needing
thread-safe storage pass a ThreadSafeExpressionCache or lock around
resolve().
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import Any, Final

from exprcache.exceptions import InvalidArgumentError
from exprcache.expressions.cache import ExpressionCache
from exprcache.expressions.errors import ExpressionError
from exprcache.expressions.key import ExpressionKey
from exprcache.expressions.parser import ExpressionParser, ParsedExpression
from exprcache.expressions.protocols import ExpressionParserProtocol
from exprcache.logging import get_logger

__all__ = ["CachedExpressionEvaluator"]

logger = get_logger(__name__)

_DEFAULT_PARSER: Final = object()
_MISSING: Final = object()


class CachedExpressionEvaluator:
    """Parses and caches expressions declared on program elements.

    Intended as a base for components that evaluate several kinds of
    expressions, each kind keeping its own cache.

    Attributes:
        parser: The configured parser capability (read-only).

    Example:
        ```python
        class ConditionEvaluator(CachedExpressionEvaluator):
            def __init__(self) -> None:
                super().__init__()
                self._conditions: ExpressionCache = {}

            def condition(self, method, target_class, text):
                key = ElementKey(method, target_class)
                return self.resolve(self._conditions, key, text)
        ```
    """

    def __init__(
        self,
        parser: ExpressionParserProtocol[Any] | None = _DEFAULT_PARSER,  # type: ignore[assignment]
    ) -> None:
        """Initialize the CachedExpressionEvaluator.

        Args:
            parser: Parser capability to use for the evaluator's lifetime.
                When omitted, a default ExpressionParser is created.

        Raises:
            InvalidArgumentError: If ``parser`` is None or has no callable
                ``parse`` method.
        """
        if parser is _DEFAULT_PARSER:
            parser = ExpressionParser()
        if parser is None:
            raise InvalidArgumentError("Parser must not be None", argument="parser")
        if not callable(getattr(parser, "parse", None)):
            raise InvalidArgumentError(
                f"Parser must provide a callable parse() method, "
                f"got {type(parser).__name__}",
                argument="parser",
            )
        self._parser: ExpressionParserProtocol[Any] = parser

    @property
    def parser(self) -> ExpressionParserProtocol[Any]:
        """Parser capability, for parsing outside the cached path."""
        return self._parser

    def resolve(
        self,
        cache: ExpressionCache,
        element_key: Hashable,
        expression: str | None,
    ) -> ParsedExpression:
        """Return the parsed form of ``expression``, parsing it on first use.

        Args:
            cache: Mapping to read from and populate. Owned by the caller.
            element_key: Identity of the element the expression is declared on.
            expression: Raw expression text; None is a valid, distinct slot.

        Returns:
            The cached or freshly parsed expression.

        Raises:
            ExpressionSyntaxError: If parsing fails. The cache is left untouched.
        """
        key = self._create_key(element_key, expression)
        parsed = cache.get(key, _MISSING)
        if parsed is _MISSING:
            logger.debug(
                "expression_cache_miss",
                element=element_key,
                expression=expression,
            )
            try:
                parsed = self._parser.parse(expression)
            except ExpressionError as e:
                logger.debug(
                    "expression_parse_failed",
                    element=element_key,
                    expression=expression,
                    error=e.message,
                )
                raise
            cache[key] = parsed
        return parsed  # type: ignore[return-value]

    def _create_key(
        self, element_key: Hashable, expression: str | None
    ) -> ExpressionKey:
        return ExpressionKey(element_key, expression)

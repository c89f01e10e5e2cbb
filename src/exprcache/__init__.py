"""exprcache: parse-once caching for expressions declared on program elements."""

from __future__ import annotations

from exprcache.elements import ElementKey
from exprcache.exceptions import ConfigError, ExprCacheError, InvalidArgumentError
from exprcache.expressions import (
    CachedExpressionEvaluator,
    ExpressionCache,
    ExpressionKey,
    ExpressionParser,
    ExpressionSyntaxError,
    ParsedExpression,
    ThreadSafeExpressionCache,
)

__version__ = "0.1.0"

__all__ = [
    "CachedExpressionEvaluator",
    "ConfigError",
    "ElementKey",
    "ExprCacheError",
    "ExpressionCache",
    "ExpressionKey",
    "ExpressionParser",
    "ExpressionSyntaxError",
    "InvalidArgumentError",
    "ParsedExpression",
    "ThreadSafeExpressionCache",
]

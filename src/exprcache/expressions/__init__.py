"""Cached parsing of expressions declared on program elements.

Expressions such as ``#root.name`` or ``#p0 != null`` are attached to
functions and methods through decorators. Parsing them on every invocation
is wasteful, so CachedExpressionEvaluator parses each (element, text) pair
once and reuses the result from a caller-owned cache.

Example
-------
    from exprcache.elements import ElementKey
    from exprcache.expressions import CachedExpressionEvaluator

    evaluator = CachedExpressionEvaluator()
    cache = {}
    key = ElementKey(UserService.find, UserService)

    parsed = evaluator.resolve(cache, key, "#root.name")
    assert evaluator.resolve(cache, key, "#root.name") is parsed

Module Structure
----------------
- key.py: ExpressionKey, the cache key
- evaluator.py: CachedExpressionEvaluator, lookup-or-parse
- parser.py: default ExpressionParser and ParsedExpression AST
- cache.py: ExpressionCache type and ThreadSafeExpressionCache
- protocols.py: ExpressionParserProtocol
- errors.py: ExpressionError, ExpressionSyntaxError
"""

from __future__ import annotations

from exprcache.expressions.cache import ExpressionCache, ThreadSafeExpressionCache
from exprcache.expressions.errors import ExpressionError, ExpressionSyntaxError
from exprcache.expressions.evaluator import CachedExpressionEvaluator
from exprcache.expressions.key import ExpressionKey
from exprcache.expressions.parser import ExpressionParser, ParsedExpression
from exprcache.expressions.protocols import ExpressionParserProtocol

__all__: list[str] = [
    "CachedExpressionEvaluator",
    "ExpressionCache",
    "ExpressionError",
    "ExpressionKey",
    "ExpressionParser",
    "ExpressionParserProtocol",
    "ExpressionSyntaxError",
    "ParsedExpression",
    "ThreadSafeExpressionCache",
]

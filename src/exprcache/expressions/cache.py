"""Storage for parsed expressions.

CachedExpressionEvaluator never owns its storage: every call site passes the
mapping it wants populated. Any MutableMapping works, a plain dict included.
ThreadSafeExpressionCache is provided for caches shared between threads.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator, MutableMapping
from typing import Any, TypeAlias

from exprcache.expressions.key import ExpressionKey
from exprcache.expressions.parser import ParsedExpression

__all__ = ["ExpressionCache", "ThreadSafeExpressionCache"]

#: Mapping type accepted by CachedExpressionEvaluator.resolve()
ExpressionCache: TypeAlias = MutableMapping[ExpressionKey, ParsedExpression]


class ThreadSafeExpressionCache(MutableMapping[ExpressionKey, ParsedExpression]):
    """Lock-guarded, unbounded mapping of ExpressionKey to ParsedExpression.

    Every mapping operation, including get(), setdefault(), pop() and
    update(), runs under a single lock acquisition. A resolve() call still
    performs a separate lookup and store, so two threads missing on the same
    key may both parse it; the last store wins and both results are equivalent.

    Iteration runs over a snapshot of the keys taken under the lock.
    """

    def __init__(self) -> None:
        self._entries: dict[ExpressionKey, ParsedExpression] = {}
        self._lock = threading.Lock()

    def __getitem__(self, key: ExpressionKey) -> ParsedExpression:
        with self._lock:
            return self._entries[key]

    def __setitem__(self, key: ExpressionKey, value: ParsedExpression) -> None:
        with self._lock:
            self._entries[key] = value

    def __delitem__(self, key: ExpressionKey) -> None:
        with self._lock:
            del self._entries[key]

    def __iter__(self) -> Iterator[ExpressionKey]:
        with self._lock:
            keys = list(self._entries)
        return iter(keys)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def setdefault(  # type: ignore[override]
        self, key: ExpressionKey, default: ParsedExpression
    ) -> ParsedExpression:
        with self._lock:
            return self._entries.setdefault(key, default)

    def pop(  # type: ignore[override]
        self, key: ExpressionKey, *default: ParsedExpression
    ) -> ParsedExpression:
        with self._lock:
            return self._entries.pop(key, *default)

    def update(self, *args: Any, **kwargs: Any) -> None:
        entries = dict(*args, **kwargs)
        with self._lock:
            self._entries.update(entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(entries={len(self)})"

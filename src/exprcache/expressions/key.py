"""Cache key combining an element identity with expression text."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass

from exprcache.constants import KEY_HASH_MULTIPLIER

__all__ = ["ExpressionKey"]


@dataclass(frozen=True, slots=True, eq=False)
class ExpressionKey:
    """Immutable key for one expression declared on one element.

    Two keys are equal when their element keys are equal and their
    expression texts are equal or both None. A None expression is a slot of
    its own, distinct from the empty string.

    The hash weights the expression hash so keys for the same element with
    different texts do not all share the element's hash.

    Attributes:
        element_key: Identity of the element the expression was declared on.
            Opaque; only equality and hashing are used.
        expression: Raw expression text, or None.

    Example:
        >>> ExpressionKey("find", "#p0") == ExpressionKey("find", "#p0")
        True
        >>> ExpressionKey("find", None) == ExpressionKey("find", "")
        False
    """

    element_key: Hashable
    expression: str | None

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, ExpressionKey):
            return NotImplemented
        return (
            self.element_key == other.element_key
            and self.expression == other.expression
        )

    def __hash__(self) -> int:
        text_hash = hash(self.expression) if self.expression is not None else 0
        return hash(self.element_key) + text_hash * KEY_HASH_MULTIPLIER

"""Element identity for expressions declared on callables.

An expression declared on a method may resolve differently depending on the
concrete class the method is invoked on, so the identity pairs the callable
with an optional target class.
"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from functools import total_ordering

from exprcache.constants import KEY_HASH_MULTIPLIER

__all__ = ["ElementKey"]


def _qualified_name(obj: object) -> str:
    module = getattr(obj, "__module__", None)
    qualname = getattr(obj, "__qualname__", None)
    if qualname is None:
        return repr(obj)
    return f"{module}.{qualname}" if module else qualname


@total_ordering
@dataclass(frozen=True, slots=True, eq=False)
class ElementKey:
    """Identity of a decorated element, optionally bound to a target class.

    Attributes:
        element: The function, method or other hashable element.
        target_class: Concrete class the element is invoked on, if any.

    Example:
        >>> class Repo:
        ...     def find(self, name): ...
        >>> ElementKey(Repo.find, Repo) == ElementKey(Repo.find, Repo)
        True
    """

    element: Hashable
    target_class: type | None = None

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, ElementKey):
            return NotImplemented
        return (
            self.element == other.element
            and self.target_class == other.target_class
        )

    def __hash__(self) -> int:
        class_hash = hash(self.target_class) if self.target_class is not None else 0
        return hash(self.element) + class_hash * KEY_HASH_MULTIPLIER

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ElementKey):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        text = _qualified_name(self.element)
        if self.target_class is not None:
            text += f" on {_qualified_name(self.target_class)}"
        return text

    def _sort_key(self) -> tuple[str, str]:
        element_text = _qualified_name(self.element)
        class_text = (
            _qualified_name(self.target_class) if self.target_class is not None else ""
        )
        return element_text, class_text

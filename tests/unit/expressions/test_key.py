"""Unit tests for ExpressionKey.

Covers the equality and hashing contract the caches rely on:
- equal inputs give equal keys with equal hashes
- None expression text is a slot of its own
- the expression participates in the hash
"""

from __future__ import annotations

import dataclasses

import pytest

from exprcache.elements import ElementKey
from exprcache.expressions.key import ExpressionKey


class _Service:
    def find(self, name: str) -> str:
        return name

    def save(self, name: str) -> str:
        return name


class TestExpressionKeyEquality:
    """Test suite for ExpressionKey.__eq__."""

    def test_equal_inputs_give_equal_keys(self) -> None:
        """Keys built from equal inputs are equal and hash identically."""
        first = ExpressionKey(ElementKey(_Service.find, _Service), "#root.name")
        second = ExpressionKey(ElementKey(_Service.find, _Service), "#root.name")

        assert first == second
        assert hash(first) == hash(second)

    def test_both_expressions_none_are_equal(self) -> None:
        """Two keys with None text for the same element are equal."""
        first = ExpressionKey("element", None)
        second = ExpressionKey("element", None)

        assert first == second
        assert hash(first) == hash(second)

    def test_none_differs_from_empty_string(self) -> None:
        """None and "" are distinct slots."""
        assert ExpressionKey("element", None) != ExpressionKey("element", "")
        assert ExpressionKey("element", "") != ExpressionKey("element", None)

    def test_different_expression_not_equal(self) -> None:
        """Same element, different text gives different keys."""
        assert ExpressionKey("element", "#a") != ExpressionKey("element", "#b")

    def test_different_element_not_equal(self) -> None:
        """Same text, different element gives different keys."""
        find = ExpressionKey(ElementKey(_Service.find), "#p0")
        save = ExpressionKey(ElementKey(_Service.save), "#p0")

        assert find != save

    def test_reflexive(self) -> None:
        key = ExpressionKey("element", "#p0")
        assert key == key

    def test_symmetric_and_transitive(self) -> None:
        a = ExpressionKey(("m", 1), "#x")
        b = ExpressionKey(("m", 1), "#x")
        c = ExpressionKey(("m", 1), "#x")

        assert a == b and b == a
        assert b == c and a == c

    def test_comparison_with_other_type_is_false(self) -> None:
        """Comparing with a non-key never raises."""
        key = ExpressionKey("element", "#p0")

        assert key != ("element", "#p0")
        assert key != "element"
        assert key is not None


class TestExpressionKeyHash:
    """Test suite for ExpressionKey.__hash__."""

    def test_hash_is_stable_across_calls(self) -> None:
        key = ExpressionKey("element", "#root.name")
        assert hash(key) == hash(key)

    def test_hash_with_none_expression(self) -> None:
        """None text hashes to the element hash without raising."""
        key = ExpressionKey("element", None)
        assert hash(key) == hash("element")

    def test_hash_is_not_element_passthrough(self) -> None:
        """The expression contributes to the hash."""
        key = ExpressionKey("element", "#root.name")
        assert hash(key) != hash("element")

    def test_same_element_different_texts_spread(self) -> None:
        """Keys for one element with different texts do not share a hash."""
        hashes = {hash(ExpressionKey("element", f"#p{i}")) for i in range(10)}
        assert len(hashes) > 1

    def test_usable_as_dict_key(self) -> None:
        """Equal keys address the same dict slot."""
        store = {ExpressionKey("element", "#p0"): "parsed"}

        assert store[ExpressionKey("element", "#p0")] == "parsed"
        assert ExpressionKey("element", None) not in store


class TestExpressionKeyImmutability:
    """Test suite for ExpressionKey immutability."""

    def test_fields_stored_verbatim(self) -> None:
        key = ExpressionKey("element", "  #p0  ")
        assert key.element_key == "element"
        assert key.expression == "  #p0  "

    def test_cannot_reassign_fields(self) -> None:
        key = ExpressionKey("element", "#p0")
        with pytest.raises(dataclasses.FrozenInstanceError):
            key.expression = "#p1"  # type: ignore[misc]

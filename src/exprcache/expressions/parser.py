"""Default expression parser and parsed expression models.

This module turns annotation expression text into an immutable
ParsedExpression holding a small AST. It is the parser capability that
CachedExpressionEvaluator builds when none is supplied.

Expression syntax:
- #root.name            - Variable reference with property access
- #p0, #result          - Any named variable
- name                  - Property of the root object
- #root?.owner.name     - Null-safe property access
- #root.name?.size()    - Null-safe method invocation
- #args[0], #map['k']   - Indexing
- #root.describe(1, 'x') - Method invocation
- #fn(#p0)              - Function invocation
- {1, 2, 3}             - Inline list
- 'it''s', "text", 42, 3.14, true, false, null - Literals
- a and b, a or b, not a, a && b, a || b, !a
- a == b, a != b, a < b, a <= b, a > b, a >= b
- a + b, a - b, a * b, a / b, a % b, -a
- cond ? a : b          - Ternary conditional

Implementation:
Parsing uses a Lark LALR parser over grammar.lark. Lark errors are mapped to
ExpressionSyntaxError so callers see a single error type.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

from lark import Lark, Token, Transformer, UnexpectedCharacters, UnexpectedInput
from lark.exceptions import VisitError

from exprcache.config import ParserConfig
from exprcache.constants import TEMPLATE_PREFIX, TEMPLATE_SUFFIX
from exprcache.expressions.errors import ExpressionError, ExpressionSyntaxError

__all__ = [
    "Literal",
    "VariableRef",
    "PropertyRef",
    "Indexer",
    "MethodCall",
    "FunctionCall",
    "InlineList",
    "UnaryOperation",
    "BinaryOperation",
    "Ternary",
    "Node",
    "ParsedExpression",
    "ExpressionParser",
]


@dataclass(frozen=True, slots=True)
class Literal:
    """Literal string, number, boolean or null value."""

    value: str | int | float | bool | None


@dataclass(frozen=True, slots=True)
class VariableRef:
    """Reference to a named variable (``#name``).

    ``#root`` and ``#this`` are ordinary variable names at parse time.
    """

    name: str


@dataclass(frozen=True, slots=True)
class PropertyRef:
    """Property access on a target.

    Attributes:
        target: Expression the property is read from, or None for the root
            object (bare identifiers such as ``name``).
        name: Property name.
        null_safe: True for ``?.`` access.
    """

    target: Node | None
    name: str
    null_safe: bool = False


@dataclass(frozen=True, slots=True)
class Indexer:
    """Index or key access: ``target[index]``."""

    target: Node
    index: Node


@dataclass(frozen=True, slots=True)
class MethodCall:
    """Method invocation; a None target means the root object.

    ``null_safe`` is True for ``?.`` invocation.
    """

    target: Node | None
    name: str
    arguments: tuple[Node, ...] = ()
    null_safe: bool = False


@dataclass(frozen=True, slots=True)
class FunctionCall:
    """Invocation of a registered function variable: ``#name(args)``."""

    name: str
    arguments: tuple[Node, ...] = ()


@dataclass(frozen=True, slots=True)
class InlineList:
    """Inline list literal: ``{a, b, c}``."""

    items: tuple[Node, ...] = ()


@dataclass(frozen=True, slots=True)
class UnaryOperation:
    """Unary operator applied to one operand (``not`` or ``-``)."""

    operator: str
    operand: Node


@dataclass(frozen=True, slots=True)
class BinaryOperation:
    """Binary operator; ``and``/``or`` are normalized from ``&&``/``||``."""

    operator: str
    left: Node
    right: Node


@dataclass(frozen=True, slots=True)
class Ternary:
    """Ternary conditional: ``condition ? if_true : if_false``."""

    condition: Node
    if_true: Node
    if_false: Node


Node = Union[
    Literal,
    VariableRef,
    PropertyRef,
    Indexer,
    MethodCall,
    FunctionCall,
    InlineList,
    UnaryOperation,
    BinaryOperation,
    Ternary,
]


@dataclass(frozen=True, slots=True)
class ParsedExpression:
    """Immutable result of parsing expression text.

    Instances are safe to share between threads and between every caller
    that receives them from a cache.

    Attributes:
        raw: Expression text exactly as given to the parser (None when absent).
        ast: Root AST node, or None for absent or blank text.

    Examples:
        >>> parsed = ExpressionParser().parse("#root.name")
        >>> parsed.ast
        PropertyRef(target=VariableRef(name='root'), name='name', null_safe=False)
        >>> parsed.variables
        ('root',)
    """

    raw: str | None
    ast: Node | None

    @property
    def is_empty(self) -> bool:
        """True when the text was absent or blank."""
        return self.ast is None

    @property
    def variables(self) -> tuple[str, ...]:
        """Names of ``#variables`` and ``#functions`` in first-seen order."""
        names: list[str] = []
        if self.ast is not None:
            _collect_variables(self.ast, names)
        return tuple(names)


def _collect_variables(node: Node, names: list[str]) -> None:
    if isinstance(node, (VariableRef, FunctionCall)) and node.name not in names:
        names.append(node.name)
    for child in _children(node):
        _collect_variables(child, names)


def _children(node: Node) -> tuple[Node, ...]:
    if isinstance(node, PropertyRef):
        return (node.target,) if node.target is not None else ()
    if isinstance(node, Indexer):
        return (node.target, node.index)
    if isinstance(node, MethodCall):
        target = (node.target,) if node.target is not None else ()
        return target + node.arguments
    if isinstance(node, FunctionCall):
        return node.arguments
    if isinstance(node, InlineList):
        return node.items
    if isinstance(node, UnaryOperation):
        return (node.operand,)
    if isinstance(node, BinaryOperation):
        return (node.left, node.right)
    if isinstance(node, Ternary):
        return (node.condition, node.if_true, node.if_false)
    return ()


# Load grammar from file
_GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"
_GRAMMAR = _GRAMMAR_PATH.read_text()

# Shared Lark instance; LALR parsers are reusable across threads
_lark = Lark(
    _GRAMMAR,
    parser="lalr",
    start="start",
    propagate_positions=True,
)


class _ExpressionTransformer(Transformer[Token, Node]):
    """Transform a Lark parse tree into AST node dataclasses."""

    def ternary(self, items: list[Node]) -> Ternary:
        return Ternary(condition=items[0], if_true=items[1], if_false=items[2])

    def or_op(self, items: list[Node]) -> BinaryOperation:
        return BinaryOperation(operator="or", left=items[0], right=items[1])

    def and_op(self, items: list[Node]) -> BinaryOperation:
        return BinaryOperation(operator="and", left=items[0], right=items[1])

    def not_op(self, items: list[Node]) -> UnaryOperation:
        return UnaryOperation(operator="not", operand=items[-1])

    def compare(self, items: list[Any]) -> BinaryOperation:
        left, operator, right = items
        return BinaryOperation(operator=str(operator), left=left, right=right)

    def binary_op(self, items: list[Any]) -> BinaryOperation:
        left, operator, right = items
        return BinaryOperation(operator=str(operator), left=left, right=right)

    def negative(self, items: list[Any]) -> Node:
        operand = items[-1]
        # Fold negative numeric literals
        if isinstance(operand, Literal) and type(operand.value) in (int, float):
            return Literal(-operand.value)
        return UnaryOperation(operator="-", operand=operand)

    def property(self, items: list[Any]) -> PropertyRef:
        return PropertyRef(target=items[0], name=str(items[1]))

    def safe_property(self, items: list[Any]) -> PropertyRef:
        return PropertyRef(target=items[0], name=str(items[1]), null_safe=True)

    def indexer(self, items: list[Node]) -> Indexer:
        return Indexer(target=items[0], index=items[1])

    def method_call(self, items: list[Any]) -> MethodCall:
        target, name, arguments = items
        return MethodCall(target=target, name=str(name), arguments=arguments or ())

    def safe_method_call(self, items: list[Any]) -> MethodCall:
        target, name, arguments = items
        return MethodCall(
            target=target, name=str(name), arguments=arguments or (), null_safe=True
        )

    def variable(self, items: list[Token]) -> VariableRef:
        return VariableRef(name=str(items[0])[1:])

    def function_call(self, items: list[Any]) -> FunctionCall:
        token, arguments = items
        name = str(token)[1:]
        if name in ("root", "this"):
            raise ExpressionError(f"#{name} cannot be invoked as a function")
        return FunctionCall(name=name, arguments=arguments or ())

    def root_property(self, items: list[Token]) -> PropertyRef:
        return PropertyRef(target=None, name=str(items[0]))

    def root_method_call(self, items: list[Any]) -> MethodCall:
        name, arguments = items
        return MethodCall(target=None, name=str(name), arguments=arguments or ())

    def inline_list(self, items: list[Any]) -> InlineList:
        return InlineList(items=items[0] or ())

    def arguments(self, items: list[Node]) -> tuple[Node, ...]:
        return tuple(items)

    def string(self, items: list[Token]) -> Literal:
        value = str(items[0])
        quote = value[0]
        return Literal(value[1:-1].replace(quote * 2, quote))

    def number(self, items: list[Token]) -> Literal:
        value = str(items[0])
        if "." in value:
            return Literal(float(value))
        return Literal(int(value))

    def true(self, items: list[Any]) -> Literal:
        return Literal(True)

    def false(self, items: list[Any]) -> Literal:
        return Literal(False)

    def null(self, items: list[Any]) -> Literal:
        return Literal(None)


class ExpressionParser:
    """Parser capability producing ParsedExpression objects.

    The parser holds no mutable state beyond its configuration, so a single
    instance can serve any number of evaluators and threads.

    Example:
        ```python
        parser = ExpressionParser(ParserConfig(max_expression_length=256))
        parsed = parser.parse("#root.name")
        parsed.variables  # ('root',)
        ```
    """

    def __init__(self, config: ParserConfig | None = None) -> None:
        """Initialize the ExpressionParser.

        Args:
            config: Parser settings. Defaults to ParserConfig().
        """
        self._config = config if config is not None else ParserConfig()

    @property
    def config(self) -> ParserConfig:
        """Parser settings in effect."""
        return self._config

    def parse(self, text: str | None) -> ParsedExpression:
        """Parse expression text into a ParsedExpression.

        Absent (None) and blank text produce an empty ParsedExpression rather
        than an error, so such text can still occupy its own cache slot.

        Args:
            text: Expression text, optionally wrapped in ``#{ }``.

        Returns:
            Parsed expression; ``raw`` is ``text`` unchanged.

        Raises:
            ExpressionSyntaxError: If the text is malformed or too long.
        """
        if text is None:
            return ParsedExpression(raw=None, ast=None)

        max_length = self._config.max_expression_length
        if len(text) > max_length:
            raise ExpressionSyntaxError(
                f"Expression exceeds the maximum length of {max_length} "
                f"characters ({len(text)} given)",
                expression=text,
            )

        inner, offset = self._strip_wrapper(text)
        if not inner.strip():
            return ParsedExpression(raw=text, ast=None)

        try:
            tree = _lark.parse(inner)
            ast = _ExpressionTransformer().transform(tree)
        except VisitError as e:
            if isinstance(e.orig_exc, ExpressionError):
                raise ExpressionSyntaxError(
                    e.orig_exc.message,
                    expression=text,
                    position=offset,
                ) from e.orig_exc
            raise
        except UnexpectedCharacters as e:
            char = inner[e.pos_in_stream] if e.pos_in_stream < len(inner) else ""
            raise ExpressionSyntaxError(
                f"Invalid character '{char}' in expression",
                expression=text,
                position=offset + e.pos_in_stream,
            ) from e
        except UnexpectedInput as e:
            raise ExpressionSyntaxError(
                _describe_unexpected(e),
                expression=text,
                position=offset + _error_offset(e, inner),
            ) from e

        return ParsedExpression(raw=text, ast=ast)

    def _strip_wrapper(self, text: str) -> tuple[str, int]:
        """Strip a ``#{ }`` template wrapper.

        Returns:
            Tuple of (inner text, offset of inner text within ``text``).
        """
        if not self._config.strip_template_wrapper:
            return text, 0
        stripped = text.strip()
        if stripped.startswith(TEMPLATE_PREFIX) and stripped.endswith(TEMPLATE_SUFFIX):
            offset = text.index(TEMPLATE_PREFIX) + len(TEMPLATE_PREFIX)
            return stripped[len(TEMPLATE_PREFIX) : -len(TEMPLATE_SUFFIX)], offset
        return text, 0


def _error_offset(error: UnexpectedInput, inner: str) -> int:
    """Zero-based offset of a Lark error within the parsed text."""
    pos = getattr(error, "pos_in_stream", None)
    if isinstance(pos, int) and pos >= 0:
        token = getattr(error, "token", None)
        # $END borrows the position of the last token
        if token is not None and token.type == "$END":
            return len(inner)
        return pos
    return len(inner)


def _describe_unexpected(error: UnexpectedInput) -> str:
    token = getattr(error, "token", None)
    if token is None or token.type == "$END":
        return "Unexpected end of expression"
    return f"Unexpected token '{token}' in expression"

"""
Abstract Syntax Tree (AST) node definitions for Monkey.

The parser produces these nodes, the macro expander rewrites them and the
evaluator walks them. Two families exist: statements and expressions. Every
node renders a canonical textual form through ``__str__``; that rendering is
used in error messages, in ``QUOTE(...)`` values and by ``Function.inspect``.

Quote and unquote are not separate node classes: they are ordinary
CallExpressions whose callee is the identifier ``quote`` or ``unquote``,
recognized by ``is_quote_call`` / ``is_unquote_call``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from monkey.reader.tokens import Token, TokenType


# =============================================================================
# Base Classes
# =============================================================================

@dataclass
class Node:
    """Base class for all AST nodes."""
    token: Token

    def token_literal(self) -> str:
        return self.token.literal


@dataclass
class Statement(Node):
    """Base class for all statements."""


@dataclass
class Expression(Node):
    """Base class for all expressions."""


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass
class Identifier(Expression):
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass
class IntegerLiteral(Expression):
    value: int

    def __str__(self) -> str:
        return self.token.literal


@dataclass
class BooleanLiteral(Expression):
    value: bool

    def __str__(self) -> str:
        return self.token.literal


@dataclass
class StringLiteral(Expression):
    value: str

    def __str__(self) -> str:
        return self.token.literal


@dataclass
class PrefixExpression(Expression):
    """``!x`` or ``-x``."""
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass
class InfixExpression(Expression):
    """A binary operation, e.g. ``a + b``."""
    left: Expression
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass
class IfExpression(Expression):
    condition: Expression
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None

    def __str__(self) -> str:
        out = f"if{self.condition} {self.consequence}"
        if self.alternative is not None:
            out += f"else {self.alternative}"
        return out


@dataclass
class FunctionLiteral(Expression):
    parameters: list[Identifier]
    body: BlockStatement

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"{self.token_literal()}({params}) {self.body}"


@dataclass
class MacroLiteral(Expression):
    """``macro(a, b) { ... }``; only meaningful as a top-level let value."""
    parameters: list[Identifier]
    body: BlockStatement

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"{self.token_literal()}({params}) {self.body}"


@dataclass
class CallExpression(Expression):
    function: Expression  # Identifier or FunctionLiteral (or any callee expression)
    arguments: list[Expression] = field(default_factory=list)

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


@dataclass
class ArrayLiteral(Expression):
    elements: list[Expression] = field(default_factory=list)

    def __str__(self) -> str:
        return "[" + ", ".join(str(e) for e in self.elements) + "]"


@dataclass
class IndexExpression(Expression):
    left: Expression
    index: Expression

    def __str__(self) -> str:
        return f"({self.left}[{self.index}])"


@dataclass
class HashLiteral(Expression):
    # Pairs keep source order; keys are arbitrary expressions
    pairs: list[tuple[Expression, Expression]] = field(default_factory=list)

    def __str__(self) -> str:
        return "{" + ", ".join(f"{k}:{v}" for k, v in self.pairs) + "}"


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass
class LetStatement(Statement):
    name: Identifier
    value: Expression

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = {self.value};"


@dataclass
class ReturnStatement(Statement):
    return_value: Expression

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.return_value};"


@dataclass
class ExpressionStatement(Statement):
    expression: Expression

    def __str__(self) -> str:
        return str(self.expression)


@dataclass
class BlockStatement(Statement):
    statements: list[Statement] = field(default_factory=list)

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


@dataclass
class Program(Node):
    """Ordered sequence of top-level statements."""
    statements: list[Statement] = field(default_factory=list)
    token: Token = field(default_factory=lambda: Token(TokenType.EOF, ""))

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


# =============================================================================
# Helpers
# =============================================================================

def _is_named_call(node: Node, name: str) -> bool:
    return (
        isinstance(node, CallExpression)
        and isinstance(node.function, Identifier)
        and node.function.value == name
    )


def is_quote_call(node: Node) -> bool:
    return _is_named_call(node, "quote")


def is_unquote_call(node: Node) -> bool:
    return _is_named_call(node, "unquote")

from __future__ import annotations

from monkey import EvaluatorFn, SyntaxNode
from monkey.errors import UnquoteConversionError
from monkey.reader.ast import (
    Expression,
    IntegerLiteral,
    BooleanLiteral,
    StringLiteral,
    is_unquote_call,
)
from monkey.reader.rewrite import rewrite
from monkey.reader.tokens import Token, TokenType
from monkey.types.environment import Environment
from monkey.types.objects import (
    MonkeyObject,
    Integer,
    Boolean,
    String,
    Quote,
    new_error,
)


def object_to_node(obj: MonkeyObject) -> SyntaxNode:
    """Turn an unquoted runtime value back into equivalent literal syntax."""
    match obj:
        case Quote(node=node):
            return node
        case Integer(value=value):
            return IntegerLiteral(Token(TokenType.INT, str(value)), value)
        case Boolean(value=value):
            literal = "true" if value else "false"
            return BooleanLiteral(Token(TokenType.TRUE if value else TokenType.FALSE, literal), value)
        case String(value=value):
            return StringLiteral(Token(TokenType.STRING, value), value)
    raise UnquoteConversionError(
        f"cannot convert {obj.object_type} value {obj.inspect()!r} back into syntax"
    )


def eval_unquote_calls(quoted: SyntaxNode, env: Environment, evaluate_fn: EvaluatorFn) -> SyntaxNode:
    """Replace every ``unquote(x)`` inside `quoted` with the syntax of x's value."""

    def _modifier(node: SyntaxNode) -> SyntaxNode:
        if not is_unquote_call(node) or len(node.arguments) != 1:
            return node
        return object_to_node(evaluate_fn(node.arguments[0], env))

    return rewrite(quoted, _modifier)


def quote_form(
    args: list[Expression], env: Environment, evaluate_fn: EvaluatorFn
) -> MonkeyObject:
    """quote(expr): the unevaluated syntax of expr, with unquotes resolved."""
    if len(args) != 1:
        return new_error(f"wrong number of arguments to `quote`. got={len(args)}, want=1")
    return Quote(eval_unquote_calls(args[0], env, evaluate_fn))


def unquote_form(
    args: list[Expression], env: Environment, evaluate_fn: EvaluatorFn
) -> MonkeyObject:
    return new_error("unquote not valid outside of quote")

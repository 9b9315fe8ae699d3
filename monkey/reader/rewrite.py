"""Pure, post-order rewriting of syntax trees.

``rewrite(node, fn)`` rebuilds ``node`` bottom-up: every child is rewritten
first, a fresh copy of the parent is built from the rewritten children, and
finally ``fn`` is applied to that copy. The input tree is never mutated, so a
Quote value can keep sharing a node that a later rewrite also walks.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable

from monkey.reader.ast import (
    Node,
    Program,
    BlockStatement,
    ExpressionStatement,
    LetStatement,
    ReturnStatement,
    PrefixExpression,
    InfixExpression,
    IfExpression,
    FunctionLiteral,
    MacroLiteral,
    CallExpression,
    ArrayLiteral,
    IndexExpression,
    HashLiteral,
)

ModifierFn = Callable[[Node], Node]


def rewrite(node: Node, fn: ModifierFn) -> Node:
    match node:
        case Program(statements=statements):
            node = replace(node, statements=[rewrite(s, fn) for s in statements])
        case BlockStatement(statements=statements):
            node = replace(node, statements=[rewrite(s, fn) for s in statements])
        case ExpressionStatement(expression=expression):
            node = replace(node, expression=rewrite(expression, fn))
        case LetStatement(value=value):
            node = replace(node, value=rewrite(value, fn))
        case ReturnStatement(return_value=value):
            node = replace(node, return_value=rewrite(value, fn))
        case PrefixExpression(right=right):
            node = replace(node, right=rewrite(right, fn))
        case InfixExpression(left=left, right=right):
            node = replace(node, left=rewrite(left, fn), right=rewrite(right, fn))
        case IndexExpression(left=left, index=index):
            node = replace(node, left=rewrite(left, fn), index=rewrite(index, fn))
        case IfExpression(condition=condition, consequence=consequence, alternative=alternative):
            node = replace(
                node,
                condition=rewrite(condition, fn),
                consequence=rewrite(consequence, fn),
                alternative=rewrite(alternative, fn) if alternative is not None else None,
            )
        case FunctionLiteral(parameters=parameters, body=body) | MacroLiteral(parameters=parameters, body=body):
            node = replace(
                node,
                parameters=[rewrite(p, fn) for p in parameters],
                body=rewrite(body, fn),
            )
        case CallExpression(function=function, arguments=arguments):
            node = replace(
                node,
                function=rewrite(function, fn),
                arguments=[rewrite(a, fn) for a in arguments],
            )
        case ArrayLiteral(elements=elements):
            node = replace(node, elements=[rewrite(e, fn) for e in elements])
        case HashLiteral(pairs=pairs):
            node = replace(node, pairs=[(rewrite(k, fn), rewrite(v, fn)) for k, v in pairs])
        # Leaves (identifiers and literals) have no children to rebuild.

    return fn(node)

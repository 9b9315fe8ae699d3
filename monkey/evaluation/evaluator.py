"""Core tree-walking evaluator for the Monkey interpreter.

`evaluate(node, env)` dispatches over every syntax node class. Runtime
errors are Error values, not exceptions: every composite evaluation checks
the result of each sub-evaluation and hands an Error (or, inside blocks, a
ReturnValue) straight back to its caller before doing any further work.
A node class with no case here is an interpreter bug and raises
UnhandledNodeError.
"""

from __future__ import annotations

from typing import Optional

from monkey import SyntaxNode, MonkeyValue
from monkey.errors import UnhandledNodeError
from monkey.reader.ast import (
    Program,
    BlockStatement,
    ExpressionStatement,
    LetStatement,
    ReturnStatement,
    Identifier,
    IntegerLiteral,
    BooleanLiteral,
    StringLiteral,
    PrefixExpression,
    InfixExpression,
    IfExpression,
    FunctionLiteral,
    MacroLiteral,
    CallExpression,
    ArrayLiteral,
    IndexExpression,
    HashLiteral,
    Expression,
)
from monkey.types.environment import Environment
from monkey.types.function import Function, Macro
from monkey.types.objects import (
    MonkeyObject,
    Integer,
    String,
    Array,
    Hash,
    HashPair,
    Hashable,
    ReturnValue,
    ObjectType,
    NULL,
    native_bool_to_boolean,
    is_truthy,
    is_error,
    new_error,
)
from monkey.builtin.env_builtin import lookup_builtin
from monkey.evaluation.apply import apply
from monkey.evaluation.operators import eval_prefix_expression, eval_infix_expression
from monkey.evaluation.special_forms import SPECIAL_FORMS


def evaluate(node: SyntaxNode, env: Environment) -> Optional[MonkeyValue]:
    """
    Evaluate `node` in `env`.

    Returns a value, an Error/ReturnValue signal, or None for statements that
    produce nothing (a `let`, or a program/block whose last statement is one).
    """
    match node:
        # --- Statements ---
        case Program():
            return _eval_program(node, env)
        case BlockStatement():
            return _eval_block_statement(node, env)
        case ExpressionStatement():
            return evaluate(node.expression, env)
        case ReturnStatement():
            value = _eval_value(node.return_value, env)
            if is_error(value):
                return value
            return ReturnValue(value)
        case LetStatement():
            value = _eval_value(node.value, env)
            if is_error(value):
                return value
            env.set(node.name.value, value)
            return None

        # --- Literals ---
        case IntegerLiteral():
            return Integer(node.value)
        case BooleanLiteral():
            return native_bool_to_boolean(node.value)
        case StringLiteral():
            return String(node.value)

        # --- Expressions ---
        case Identifier():
            return _eval_identifier(node, env)
        case PrefixExpression():
            right = _eval_value(node.right, env)
            if is_error(right):
                return right
            return eval_prefix_expression(node.operator, right)
        case InfixExpression():
            left = _eval_value(node.left, env)
            if is_error(left):
                return left
            right = _eval_value(node.right, env)
            if is_error(right):
                return right
            return eval_infix_expression(node.operator, left, right)
        case IfExpression():
            return _eval_if_expression(node, env)
        case FunctionLiteral():
            return Function(node.parameters, node.body, env)
        case MacroLiteral():
            # Only top-level macro definitions are expanded; anywhere else a
            # macro literal is an inert value.
            return Macro(node.parameters, node.body, env)
        case CallExpression():
            return _eval_call_expression(node, env)
        case ArrayLiteral():
            elements = _eval_expressions(node.elements, env)
            if len(elements) == 1 and is_error(elements[0]):
                return elements[0]
            return Array(elements)
        case IndexExpression():
            left = _eval_value(node.left, env)
            if is_error(left):
                return left
            index = _eval_value(node.index, env)
            if is_error(index):
                return index
            return _eval_index_expression(left, index)
        case HashLiteral():
            return _eval_hash_literal(node, env)

    raise UnhandledNodeError(f"no evaluation rule for {type(node).__name__}")


def _eval_value(node: Expression, env: Environment) -> MonkeyObject:
    """Evaluate in expression position, where "no value" means null."""
    result = evaluate(node, env)
    return result if result is not None else NULL


def _eval_program(program: Program, env: Environment) -> Optional[MonkeyValue]:
    result = None
    for statement in program.statements:
        result = evaluate(statement, env)
        if isinstance(result, ReturnValue):
            return result.value
        if is_error(result):
            return result
    return result


def _eval_block_statement(block: BlockStatement, env: Environment) -> Optional[MonkeyValue]:
    # Signals are propagated still wrapped, so an enclosing function body
    # (or the program) can tell a return from an ordinary value.
    result = None
    for statement in block.statements:
        result = evaluate(statement, env)
        if result is not None and result.object_type in (ObjectType.RETURN_VALUE, ObjectType.ERROR):
            return result
    return result


def _eval_identifier(node: Identifier, env: Environment) -> MonkeyObject:
    value, found = env.get(node.value)
    if found:
        return value
    builtin = lookup_builtin(node.value)
    if builtin is not None:
        return builtin
    return new_error(f"identifier not found: {node.value}")


def _eval_if_expression(node: IfExpression, env: Environment) -> Optional[MonkeyValue]:
    condition = _eval_value(node.condition, env)
    if is_error(condition):
        return condition
    if is_truthy(condition):
        branch = node.consequence
    elif node.alternative is not None:
        branch = node.alternative
    else:
        return NULL
    result = evaluate(branch, env)
    return result if result is not None else NULL


def _eval_expressions(expressions: list[Expression], env: Environment) -> list[MonkeyObject]:
    """Evaluate left to right; on the first Error return just that Error."""
    result: list[MonkeyObject] = []
    for expression in expressions:
        evaluated = _eval_value(expression, env)
        if is_error(evaluated):
            return [evaluated]
        result.append(evaluated)
    return result


def _eval_call_expression(node: CallExpression, env: Environment) -> MonkeyObject:
    if isinstance(node.function, Identifier) and node.function.value in SPECIAL_FORMS:
        return SPECIAL_FORMS[node.function.value](node.arguments, env, evaluate)

    function = _eval_value(node.function, env)
    if is_error(function):
        return function
    args = _eval_expressions(node.arguments, env)
    if len(args) == 1 and is_error(args[0]):
        return args[0]
    return apply(function, args, evaluate)


def _eval_index_expression(left: MonkeyObject, index: MonkeyObject) -> MonkeyObject:
    if isinstance(left, Array) and isinstance(index, Integer):
        i = index.value
        if i < 0 or i >= len(left.elements):
            return NULL
        return left.elements[i]
    if isinstance(left, Hash):
        if not isinstance(index, Hashable):
            return new_error(f"unusable as hash key: {index.object_type}")
        pair = left.pairs.get(index.hash_key())
        return pair.value if pair is not None else NULL
    return new_error(f"index operator not supported: {left.object_type}")


def _eval_hash_literal(node: HashLiteral, env: Environment) -> MonkeyObject:
    pairs: dict = {}
    for key_node, value_node in node.pairs:
        key = _eval_value(key_node, env)
        if is_error(key):
            return key
        if not isinstance(key, Hashable):
            return new_error(f"unusable as hash key: {key.object_type}")
        value = _eval_value(value_node, env)
        if is_error(value):
            return value
        pairs[key.hash_key()] = HashPair(key, value)
    return Hash(pairs)

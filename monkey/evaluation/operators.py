"""Prefix and infix operator semantics.

Integers are signed 64-bit: results of `+ - *` wrap around in two's
complement and `/` truncates toward zero. `==`/`!=` compare integers and
strings by value and everything else by identity, which is why `true`,
`false` and `null` are singletons (two structurally equal arrays are not
`==`).
"""

from __future__ import annotations

from monkey.types.objects import (
    MonkeyObject,
    Integer,
    String,
    ObjectType,
    TRUE,
    FALSE,
    NULL,
    native_bool_to_boolean,
    new_error,
)

_INT64_SIGN = 1 << 63
_INT64_WRAP = 1 << 64


def wrap_int64(value: int) -> int:
    """Wrap an arbitrary precision int into the signed 64-bit range."""
    return ((value + _INT64_SIGN) % _INT64_WRAP) - _INT64_SIGN


def truncating_div(left: int, right: int) -> int:
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


# -------------------------------
# Prefix
# -------------------------------
def eval_prefix_expression(operator: str, right: MonkeyObject) -> MonkeyObject:
    if operator == "!":
        return eval_bang_operator(right)
    if operator == "-":
        return eval_minus_prefix_operator(right)
    return new_error(f"unknown operator: {operator}{right.object_type}")


def eval_bang_operator(right: MonkeyObject) -> MonkeyObject:
    if right is TRUE:
        return FALSE
    if right is FALSE or right is NULL:
        return TRUE
    return FALSE


def eval_minus_prefix_operator(right: MonkeyObject) -> MonkeyObject:
    if not isinstance(right, Integer):
        return new_error(f"unknown operator: -{right.object_type}")
    return Integer(wrap_int64(-right.value))


# -------------------------------
# Infix
# -------------------------------
def eval_infix_expression(operator: str, left: MonkeyObject, right: MonkeyObject) -> MonkeyObject:
    if isinstance(left, Integer) and isinstance(right, Integer):
        return eval_integer_infix_expression(operator, left, right)
    if isinstance(left, String) and isinstance(right, String):
        return eval_string_infix_expression(operator, left, right)
    if operator == "==":
        return native_bool_to_boolean(left is right)
    if operator == "!=":
        return native_bool_to_boolean(left is not right)
    if left.object_type is not right.object_type:
        return new_error(f"type mismatch: {left.object_type} {operator} {right.object_type}")
    return new_error(f"unknown operator: {left.object_type} {operator} {right.object_type}")


def eval_integer_infix_expression(operator: str, left: Integer, right: Integer) -> MonkeyObject:
    lv, rv = left.value, right.value
    match operator:
        case "+":
            return Integer(wrap_int64(lv + rv))
        case "-":
            return Integer(wrap_int64(lv - rv))
        case "*":
            return Integer(wrap_int64(lv * rv))
        case "/":
            if rv == 0:
                return new_error(f"division by zero: {lv} / {rv}")
            return Integer(wrap_int64(truncating_div(lv, rv)))
        case "<":
            return native_bool_to_boolean(lv < rv)
        case ">":
            return native_bool_to_boolean(lv > rv)
        case "==":
            return native_bool_to_boolean(lv == rv)
        case "!=":
            return native_bool_to_boolean(lv != rv)
    return new_error(f"unknown operator: {ObjectType.INTEGER} {operator} {ObjectType.INTEGER}")


def eval_string_infix_expression(operator: str, left: String, right: String) -> MonkeyObject:
    match operator:
        case "+":
            return String(left.value + right.value)
        case "==":
            return native_bool_to_boolean(left.value == right.value)
        case "!=":
            return native_bool_to_boolean(left.value != right.value)
    return new_error(f"unknown operator: {ObjectType.STRING} {operator} {ObjectType.STRING}")

"""Application engine for Monkey.

Centralizes call semantics for the evaluator:
- Functions run their body in a fresh scope enclosed by the *captured*
  environment (lexical scoping), after a positional arity check.
- A ReturnValue produced by a function body is unwrapped here, so callers
  never observe the raw signal.
- Built-ins receive the evaluated argument list and their result (including
  any Error) is used as is.
"""

from __future__ import annotations

from monkey import EvaluatorFn
from monkey.types.function import Function
from monkey.types.objects import (
    MonkeyObject,
    Builtin,
    ReturnValue,
    NULL,
    new_error,
)


def apply_function(fn: Function, args: list[MonkeyObject], evaluate_fn: EvaluatorFn) -> MonkeyObject:
    """Apply a user-defined Function to already evaluated arguments."""
    if len(args) != len(fn.parameters):
        return new_error(
            f"wrong number of arguments: want={len(fn.parameters)}, got={len(args)}"
        )
    result = evaluate_fn(fn.body, fn.extend_env(args))
    return unwrap_return_value(result)


def unwrap_return_value(obj: MonkeyObject | None) -> MonkeyObject:
    if isinstance(obj, ReturnValue):
        return obj.value
    # A body ending in `let` (or an empty body) produces no value
    return obj if obj is not None else NULL


def apply(head: MonkeyObject, args: list[MonkeyObject], evaluate_fn: EvaluatorFn) -> MonkeyObject:
    """Apply either a Function or a Builtin.

    - For Function, defer to apply_function.
    - For Builtin, invoke the native callable with the argument list.
    - Otherwise, return a `not a function` error.
    """
    if isinstance(head, Function):
        return apply_function(head, args, evaluate_fn)
    if isinstance(head, Builtin):
        return head.fn(args)
    return new_error(f"not a function: {head.object_type}")

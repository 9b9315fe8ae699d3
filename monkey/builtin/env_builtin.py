"""Built-in functions for the Monkey runtime.

The table is consulted only after an identifier misses in the environment
chain, so user bindings shadow built-ins. Built-ins never mutate their
arguments: `push` and `rest` return new arrays.
"""
from __future__ import annotations

from typing import Callable, Optional

from monkey.types.objects import (
    MonkeyObject,
    Builtin,
    Integer,
    String,
    Array,
    ObjectType,
    NULL,
    new_error,
)

BUILTINS: dict[str, Builtin] = {}


def builtin(name: str, arity: Optional[int] = None) -> Callable:
    """Register `fn` under `name`, checking the argument count first."""

    def decorator(fn: Callable[..., MonkeyObject]) -> Callable[..., MonkeyObject]:
        def call(args: list[MonkeyObject]) -> MonkeyObject:
            if arity is not None and len(args) != arity:
                return new_error(
                    f"wrong number of arguments to `{name}`. got={len(args)}, want={arity}"
                )
            return fn(*args)

        BUILTINS[name] = Builtin(name, call)
        return fn

    return decorator


def lookup_builtin(name: str) -> Optional[Builtin]:
    return BUILTINS.get(name)


def _require_array(name: str, obj: MonkeyObject) -> Optional[MonkeyObject]:
    if obj.object_type is not ObjectType.ARRAY:
        return new_error(f"argument to `{name}` must be ARRAY, got {obj.object_type}")
    return None


# -------------------------------
# Sequences
# -------------------------------
@builtin("len", arity=1)
def len_(obj: MonkeyObject) -> MonkeyObject:
    """Length of a string (in characters) or of an array."""
    if isinstance(obj, String):
        return Integer(len(obj.value))
    if isinstance(obj, Array):
        return Integer(len(obj.elements))
    return new_error(f"argument to `len` not supported, got {obj.object_type}")


@builtin("first", arity=1)
def first(obj: MonkeyObject) -> MonkeyObject:
    if (err := _require_array("first", obj)) is not None:
        return err
    return obj.elements[0] if obj.elements else NULL


@builtin("last", arity=1)
def last(obj: MonkeyObject) -> MonkeyObject:
    if (err := _require_array("last", obj)) is not None:
        return err
    return obj.elements[-1] if obj.elements else NULL


@builtin("rest", arity=1)
def rest(obj: MonkeyObject) -> MonkeyObject:
    """Everything but the first element, as a new array; null when empty."""
    if (err := _require_array("rest", obj)) is not None:
        return err
    if not obj.elements:
        return NULL
    return Array(list(obj.elements[1:]))


@builtin("push", arity=2)
def push(obj: MonkeyObject, element: MonkeyObject) -> MonkeyObject:
    """New array with `element` appended; the original is left untouched."""
    if (err := _require_array("push", obj)) is not None:
        return err
    return Array([*obj.elements, element])


# -------------------------------
# Output
# -------------------------------
@builtin("puts")
def puts(*args: MonkeyObject) -> MonkeyObject:
    for arg in args:
        print(arg.inspect())
    return NULL

"""Runtime values of the Monkey language.

The set of value kinds is closed: every value reports an `ObjectType` and a
human readable `inspect()` rendering. `true`, `false` and `null` are
process-wide singletons (TRUE, FALSE, NULL) so that identity comparison is
enough for truthiness tests and for `==` on non-integer operands.

ReturnValue and Error are control-flow signals produced by the evaluator;
they ride through ordinary evaluation and are checked for at every
aggregation point.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from io import StringIO
from typing import Callable, Optional

from monkey import SyntaxNode

_UINT64_MASK = 0xFFFFFFFFFFFFFFFF
_FNV64_OFFSET = 0xCBF29CE484222325
_FNV64_PRIME = 0x100000001B3


class ObjectType(Enum):
    INTEGER = "INTEGER"
    BOOLEAN = "BOOLEAN"
    NULL = "NULL"
    RETURN_VALUE = "RETURN_VALUE"
    ERROR = "ERROR"
    FUNCTION = "FUNCTION"
    STRING = "STRING"
    BUILTIN = "BUILTIN"
    ARRAY = "ARRAY"
    HASH = "HASH"
    QUOTE = "QUOTE"
    MACRO = "MACRO"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class HashKey:
    """(kind, 64-bit hash) pair; two keys are equal iff both parts are."""
    object_type: ObjectType
    value: int


class MonkeyObject(ABC):
    __slots__ = ()
    object_type: ObjectType

    @abstractmethod
    def inspect(self) -> str: ...

    def __str__(self) -> str:
        return self.inspect()

    def __repr__(self) -> str:
        return f"<{self.object_type} {self.inspect()}>"


class Hashable(ABC):
    """Capability of deriving a stable HashKey."""
    __slots__ = ()

    @abstractmethod
    def hash_key(self) -> HashKey: ...


def fnv1a_64(data: bytes) -> int:
    h = _FNV64_OFFSET
    for byte in data:
        h ^= byte
        h = (h * _FNV64_PRIME) & _UINT64_MASK
    return h


class Integer(MonkeyObject, Hashable):
    __slots__ = ("value",)
    object_type = ObjectType.INTEGER

    def __init__(self, value: int):
        self.value = value

    def inspect(self) -> str:
        return str(self.value)

    def hash_key(self) -> HashKey:
        return HashKey(self.object_type, self.value & _UINT64_MASK)


class Boolean(MonkeyObject, Hashable):
    __slots__ = ("value",)
    object_type = ObjectType.BOOLEAN

    def __init__(self, value: bool):
        self.value = value

    def inspect(self) -> str:
        return "true" if self.value else "false"

    def hash_key(self) -> HashKey:
        return HashKey(self.object_type, 1 if self.value else 0)


class Null(MonkeyObject):
    __slots__ = ()
    object_type = ObjectType.NULL

    def inspect(self) -> str:
        return "null"


class String(MonkeyObject, Hashable):
    __slots__ = ("value",)
    object_type = ObjectType.STRING

    def __init__(self, value: str):
        self.value = value

    def inspect(self) -> str:
        return self.value

    def hash_key(self) -> HashKey:
        return HashKey(self.object_type, fnv1a_64(self.value.encode("utf-8")))


class Array(MonkeyObject):
    __slots__ = ("elements",)
    object_type = ObjectType.ARRAY

    def __init__(self, elements: list[MonkeyObject]):
        self.elements = elements

    def inspect(self) -> str:
        return "[" + ", ".join(e.inspect() for e in self.elements) + "]"


@dataclass
class HashPair:
    key: MonkeyObject
    value: MonkeyObject


class Hash(MonkeyObject):
    __slots__ = ("pairs",)
    object_type = ObjectType.HASH

    def __init__(self, pairs: Optional[dict[HashKey, HashPair]] = None):
        self.pairs: dict[HashKey, HashPair] = pairs if pairs is not None else {}

    def inspect(self) -> str:
        with StringIO() as buffer:
            buffer.write("{")
            buffer.write(", ".join(f"{p.key.inspect()}: {p.value.inspect()}" for p in self.pairs.values()))
            buffer.write("}")
            return buffer.getvalue()


class ReturnValue(MonkeyObject):
    __slots__ = ("value",)
    object_type = ObjectType.RETURN_VALUE

    def __init__(self, value: MonkeyObject):
        self.value = value

    def inspect(self) -> str:
        return self.value.inspect()


class Error(MonkeyObject):
    __slots__ = ("message",)
    object_type = ObjectType.ERROR

    def __init__(self, message: str):
        self.message = message

    def inspect(self) -> str:
        return "ERROR: " + self.message


BuiltinFunction = Callable[[list[MonkeyObject]], MonkeyObject]


class Builtin(MonkeyObject):
    __slots__ = ("name", "fn")
    object_type = ObjectType.BUILTIN

    def __init__(self, name: str, fn: BuiltinFunction):
        self.name = name
        self.fn = fn

    def inspect(self) -> str:
        return "builtin function"


class Quote(MonkeyObject):
    """Unevaluated syntax carried around as a value."""
    __slots__ = ("node",)
    object_type = ObjectType.QUOTE

    def __init__(self, node: SyntaxNode):
        self.node = node

    def inspect(self) -> str:
        return f"QUOTE({self.node})"


# -----------------------------
# Singletons and helpers
# -----------------------------
TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool_to_boolean(value: bool) -> Boolean:
    return TRUE if value else FALSE


def is_truthy(obj: MonkeyObject) -> bool:
    # Only false and null are falsy; 0, "" and [] are truthy
    return obj is not FALSE and obj is not NULL


def is_error(obj: Optional[MonkeyObject]) -> bool:
    return obj is not None and obj.object_type is ObjectType.ERROR


def new_error(message: str) -> Error:
    return Error(message)

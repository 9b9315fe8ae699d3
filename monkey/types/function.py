"""Function and macro values for Monkey."""

from __future__ import annotations

from io import StringIO

from monkey.reader.ast import BlockStatement, Identifier
from monkey.types.environment import Environment
from monkey.types.objects import MonkeyObject, ObjectType


class _Closure(MonkeyObject):
    """Parameters, body and the environment captured at definition."""

    __slots__ = ("parameters", "body", "env")
    keyword = ""

    def __init__(self, parameters: list[Identifier], body: BlockStatement, env: Environment):
        self.parameters: list[Identifier] = parameters
        self.body: BlockStatement = body
        # Captured by reference; later bindings in that scope stay visible
        self.env: Environment = env

    def inspect(self) -> str:
        with StringIO() as buffer:
            buffer.write(self.keyword)
            buffer.write("(")
            buffer.write(", ".join(str(p) for p in self.parameters))
            buffer.write(") {\n")
            buffer.write(str(self.body))
            buffer.write("\n}")
            return buffer.getvalue()

    def extend_env(self, args: list[MonkeyObject]) -> Environment:
        """
        Bind `args` positionally to the parameters in a new scope enclosed
        by the captured environment (never the caller's). Arity is checked
        by the caller.
        """
        local_env = Environment.new_enclosed(self.env)
        for param, arg in zip(self.parameters, args):
            local_env.set(param.value, arg)
        return local_env


class Function(_Closure):
    __slots__ = ()
    object_type = ObjectType.FUNCTION
    keyword = "fn"


class Macro(_Closure):
    __slots__ = ()
    object_type = ObjectType.MACRO
    keyword = "macro"

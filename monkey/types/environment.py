"""Runtime environment for Monkey.

The Environment stores bindings of names to evaluated values and supports
nested scopes via an `outer` link. Lookups walk the chain outwards; `set`
always binds in the scope it is called on, so a `let` inside a function can
shadow, but never overwrite, a binding of an enclosing scope.

Closures keep a reference to the Environment that was active where they were
defined, so two closures created in the same scope share (and see each
other's) later bindings in that scope.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from monkey import MonkeyValue


class Environment:
    """Hierarchical mapping from names to Monkey values."""

    __slots__ = ("store", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.store: dict[str, MonkeyValue] = {}
        self.outer: Environment | None = outer

    @classmethod
    def new_enclosed(cls, outer: Environment) -> Environment:
        """Fresh, empty scope chained to `outer`."""
        return cls(outer=outer)

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest environment in the chain that binds `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.store:
                return env
            env = env.outer
        return None

    def get(self, name: str) -> tuple[Optional[MonkeyValue], bool]:
        """Return ``(value, found)``; local bindings win over outer ones."""
        env = self.find(name)
        if env is None:
            return None, False
        return env.store[name], True

    def set(self, name: str, value: MonkeyValue) -> MonkeyValue:
        """Bind `name` in this scope, overwriting any local binding."""
        self.store[name] = value
        return value

    def __contains__(self, name: str) -> bool:
        return self.find(name) is not None

    def _write_vars(self, buffer: StringIO) -> None:
        buffer.write("{")
        first = True
        for k, v in self.store.items():
            if not first:
                buffer.write(", ")
            rendered = v.inspect() if hasattr(v, "inspect") else repr(v)
            buffer.write(f"{k}: {rendered}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            chain = []
            env: Optional[Environment] = self
            while env is not None:
                env_buf = StringIO()
                env._write_vars(env_buf)
                chain.append(env_buf.getvalue())
                env = env.outer
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()


def new_enclosed(outer: Environment) -> Environment:
    return Environment.new_enclosed(outer)

from __future__ import annotations

import abc
from typing import Iterable, Iterator, TYPE_CHECKING

from rinha.errors import UndefinedVariable

if TYPE_CHECKING:
    from rinha.values import Value


class Env(abc.ABC):
    """Persistent mapping from names to values.

    Extending an environment never modifies it; the new binding lives in a
    fresh entry that points back to the environment it extends. Closures can
    therefore hold on to the environment they were created in.
    """

    def extend(self, var: str, val: Value) -> Env:
        return Entry(var, val, self)

    def extend_many(self, vars: Iterable[str], vals: Iterable[Value]) -> Env:
        env = self
        for var, val in zip(vars, vals, strict=True):
            env = env.extend(var, val)
        return env

    @abc.abstractmethod
    def lookup(self, var: str) -> Value:
        pass

    @abc.abstractmethod
    def items(self) -> Iterator[tuple[str, Value]]:
        pass


class EmptyEnv(Env):
    def lookup(self, var: str) -> Value:
        raise UndefinedVariable(var)

    def items(self):
        return
        yield ()

    def __repr__(self):
        return "()"


class Entry(Env):
    __slots__ = ("var", "val", "nxt")

    def __init__(self, var: str, val: Value, nxt: Env):
        self.var = var
        self.val = val
        self.nxt = nxt

    def lookup(self, var: str) -> Value:
        env = self
        while isinstance(env, Entry):
            if env.var == var:
                return env.val
            env = env.nxt
        return env.lookup(var)

    def items(self):
        env = self
        while isinstance(env, Entry):
            yield env.var, env.val
            env = env.nxt

    def __repr__(self):
        return "".join(f"(({var} : {val!r}) .\n " for var, val in self.items()) + "()"


EMPTY = EmptyEnv()
